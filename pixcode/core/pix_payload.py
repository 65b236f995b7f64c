"""
Pix "copia e cola" (BR Code) payload builder.

A payload is a flat sequence of EMV fields ``id(2) + length(2) + value``.
Fields 26 (merchant account information) and 62 (additional data) nest
sub-fields in the same encoding. The final field 63 carries a
CRC-16/CCITT-FALSE checksum computed over everything before its value,
including its own ``6304`` header.
"""

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
import re

from pixcode.core.config import settings
from pixcode.core.crc16 import crc16_ccitt_false
from pixcode.core.pix_errors import EncodingFailure, PixEncodingError
from pixcode.core.pix_fields import EncodedField, encode_template
from pixcode.core.pix_sanitizers import (
    format_amount,
    normalize_key,
    sanitize_merchant_name,
    sanitize_reference,
)


# Field ids
PAYLOAD_FORMAT_INDICATOR = "00"
POINT_OF_INITIATION_METHOD = "01"
MERCHANT_ACCOUNT_INFORMATION = "26"
MERCHANT_CATEGORY_CODE = "52"
TRANSACTION_CURRENCY = "53"
TRANSACTION_AMOUNT = "54"
COUNTRY_CODE = "58"
MERCHANT_NAME = "59"
MERCHANT_CITY = "60"
ADDITIONAL_DATA_FIELD = "62"
CRC16 = "63"

# Sub-field ids
MAI_GUI = "00"
MAI_KEY = "01"
ADDITIONAL_DATA_REFERENCE = "05"

PAYLOAD_FORMAT_VERSION = "01"
# 12: single use payload carrying a fixed amount
SINGLE_USE_INITIATION = "12"
UNCLASSIFIED_MCC = "0000"
CRC_HEADER = f"{CRC16}04"
_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]")


@dataclass(frozen=True)
class PaymentRequest:
    amount: Decimal | int | float | str
    recipient_key: str
    merchant_name: str
    reference_id: str | None = None


def build_payload_fields(request: PaymentRequest) -> list[EncodedField]:
    """Return the ordered top level fields of the unsigned payload."""
    amount = format_amount(request.amount)

    key = normalize_key(request.recipient_key)
    if not _ALPHANUMERIC.search(key):
        raise EncodingFailure("Recipient key is empty after normalization")

    merchant_name = sanitize_merchant_name(request.merchant_name)
    if not merchant_name.strip():
        raise EncodingFailure("Merchant name is empty after sanitization")

    reference = sanitize_reference(request.reference_id, settings.PIX_DEFAULT_REFERENCE)

    return [
        EncodedField(PAYLOAD_FORMAT_INDICATOR, PAYLOAD_FORMAT_VERSION),
        EncodedField(POINT_OF_INITIATION_METHOD, SINGLE_USE_INITIATION),
        encode_template(
            MERCHANT_ACCOUNT_INFORMATION,
            EncodedField(MAI_GUI, settings.PIX_GUI),
            EncodedField(MAI_KEY, key),
        ),
        EncodedField(MERCHANT_CATEGORY_CODE, UNCLASSIFIED_MCC),
        EncodedField(TRANSACTION_CURRENCY, settings.PIX_CURRENCY_CODE),
        EncodedField(TRANSACTION_AMOUNT, amount),
        EncodedField(COUNTRY_CODE, settings.PIX_COUNTRY_CODE),
        EncodedField(MERCHANT_NAME, merchant_name),
        EncodedField(MERCHANT_CITY, settings.PIX_MERCHANT_CITY),
        encode_template(
            ADDITIONAL_DATA_FIELD,
            EncodedField(ADDITIONAL_DATA_REFERENCE, reference),
        ),
    ]


def build_unsigned_payload(request: PaymentRequest) -> str:
    return "".join(field.serialize() for field in build_payload_fields(request))


def finalize_payload(unsigned_payload: str) -> str:
    signed = f"{unsigned_payload}{CRC_HEADER}"
    return f"{signed}{crc16_ccitt_false(signed)}"


def encode_payment(request: PaymentRequest) -> str:
    try:
        return finalize_payload(build_unsigned_payload(request))
    except PixEncodingError:
        raise
    except Exception as exc:
        raise EncodingFailure(f"Could not encode Pix payload: {exc}") from exc


def _cache_key(request: PaymentRequest) -> tuple[str, ...]:
    # Inputs are reduced to what the payload is built from, so equal keys
    # always mean equal payloads. Amount validation happens here, before
    # anything is hashed.
    return (
        format_amount(request.amount),
        normalize_key(request.recipient_key),
        sanitize_merchant_name(request.merchant_name),
        sanitize_reference(request.reference_id, settings.PIX_DEFAULT_REFERENCE),
        settings.PIX_GUI,
        settings.PIX_CURRENCY_CODE,
        settings.PIX_COUNTRY_CODE,
        settings.PIX_MERCHANT_CITY,
        settings.PIX_DEFAULT_REFERENCE,
    )


@lru_cache(maxsize=settings.PIX_PAYLOAD_CACHE_SIZE)
def encode_normalized_payment(
    amount: str,
    recipient_key: str,
    merchant_name: str,
    reference_id: str,
    *settings_snapshot: str,
) -> str:
    """Cached encoder over already normalized values.

    ``settings_snapshot`` only takes part in the cache key; the payload is
    built from the settings current at call time.
    """
    return encode_payment(
        PaymentRequest(
            amount=amount,
            recipient_key=recipient_key,
            merchant_name=merchant_name,
            reference_id=reference_id,
        )
    )


def encode_payment_cached(request: PaymentRequest) -> str:
    try:
        key = _cache_key(request)
    except PixEncodingError:
        raise
    except Exception as exc:
        raise EncodingFailure(f"Could not encode Pix payload: {exc}") from exc
    return encode_normalized_payment(*key)


def build_pix_payload(
    *,
    amount: Decimal | int | float | str,
    recipient_key: str,
    merchant_name: str,
    reference_id: str | None = None,
) -> str:
    return encode_payment(
        PaymentRequest(
            amount=amount,
            recipient_key=recipient_key,
            merchant_name=merchant_name,
            reference_id=reference_id,
        )
    )


def payload_checksum(payload: str) -> str:
    return payload[-4:]


def payment_reference(record_id: str | None, prefix: str = "PAY") -> str | None:
    """Reference used by direct payments: prefix + first 8 id characters."""
    if not record_id:
        return None
    return f"{prefix}{str(record_id)[:8]}"

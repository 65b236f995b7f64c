import logging
from dataclasses import dataclass
from decimal import Decimal

from pixcode.core.pix_errors import PixEncodingError
from pixcode.core.pix_keys import KeyClassification, classify_key, format_key_display
from pixcode.core.pix_payload import (
    PaymentRequest,
    encode_payment_cached,
    payload_checksum,
)
from pixcode.core.pix_sanitizers import normalize_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixPaymentDetails:
    merchant_name: str
    amount: Decimal | int | float | str
    reference_id: str | None
    normalized_key: str
    key_type: KeyClassification
    display_key: str
    payload: str | None = None
    checksum: str | None = None
    error: str | None = None

    @property
    def qr_enabled(self) -> bool:
        return self.payload is not None


def describe_pix_payment(
    *,
    amount: Decimal | int | float | str,
    recipient_key: str,
    merchant_name: str,
    reference_id: str | None = None,
) -> PixPaymentDetails:
    """
    Build everything a payment screen shows for a Pix transfer.

    When the payload cannot be encoded the QR / copy-paste flow is disabled:
    ``payload`` stays None and ``display_key`` falls back to the raw key as
    typed, so the rest of the payment data remains usable.
    """
    normalized = normalize_key(recipient_key)
    key_type = classify_key(normalized)

    try:
        payload = encode_payment_cached(
            PaymentRequest(
                amount=amount,
                recipient_key=recipient_key,
                merchant_name=merchant_name,
                reference_id=reference_id,
            )
        )
    except PixEncodingError as exc:
        logger.warning(f"Pix payload disabled for key type {key_type.value}: {exc}")
        return PixPaymentDetails(
            merchant_name=merchant_name,
            amount=amount,
            reference_id=reference_id,
            normalized_key=normalized,
            key_type=key_type,
            display_key=(recipient_key or "").strip(),
            error=str(exc),
        )

    return PixPaymentDetails(
        merchant_name=merchant_name,
        amount=amount,
        reference_id=reference_id,
        normalized_key=normalized,
        key_type=key_type,
        display_key=format_key_display(normalized, key_type),
        payload=payload,
        checksum=payload_checksum(payload),
    )

import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from pixcode.core.pix_errors import PixEncodingError
from pixcode.core.pix_keys import classify_key, format_key_display
from pixcode.core.pix_payload import build_pix_payload, payload_checksum
from pixcode.core.pix_payment import PixPaymentDetails, describe_pix_payment
from pixcode.core.pix_sanitizers import normalize_key
from pixcode.core.security import get_current_user
from pixcode.pdf.payment_details import build_pix_payment_pdf
from pixcode.schemas.me import MeResponse
from pixcode.schemas.pix import (
    PixKeyInfo,
    PixPaymentDetailsResponse,
    PixPayloadRequest,
    PixPayloadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pix", tags=["pix"])


def _details_response(details: PixPaymentDetails) -> PixPaymentDetailsResponse:
    return PixPaymentDetailsResponse(
        merchant_name=details.merchant_name,
        amount=details.amount,
        reference_id=details.reference_id,
        normalized_key=details.normalized_key,
        key_type=details.key_type,
        key_type_label=details.key_type.label,
        display_key=details.display_key,
        qr_enabled=details.qr_enabled,
        payload=details.payload,
        checksum=details.checksum,
        error=details.error,
    )


@router.post("/payload", response_model=PixPayloadResponse)
def create_pix_payload(
    body: PixPayloadRequest,
    user: MeResponse = Depends(get_current_user),
) -> PixPayloadResponse:
    """
    Encodes a Pix "copia e cola" payload for a fixed amount.
    Encoding errors are returned as 400 so the caller can fall back
    to showing the raw key.
    """
    try:
        payload = build_pix_payload(
            amount=body.amount,
            recipient_key=body.recipient_key,
            merchant_name=body.merchant_name,
            reference_id=body.reference_id,
        )
    except PixEncodingError as e:
        logger.error(f"Failed to encode Pix payload for user {user.user_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e

    normalized = normalize_key(body.recipient_key)
    key_type = classify_key(normalized)
    return PixPayloadResponse(
        payload=payload,
        checksum=payload_checksum(payload),
        normalized_key=normalized,
        key_type=key_type,
        key_type_label=key_type.label,
        display_key=format_key_display(normalized, key_type),
    )


@router.get("/keys/inspect", response_model=PixKeyInfo)
def inspect_pix_key(
    key: str = Query(min_length=1),
    user: MeResponse = Depends(get_current_user),
) -> PixKeyInfo:
    normalized = normalize_key(key)
    key_type = classify_key(normalized)
    return PixKeyInfo(
        normalized_key=normalized,
        key_type=key_type,
        key_type_label=key_type.label,
        display_key=format_key_display(normalized, key_type),
    )


@router.post("/payment-details", response_model=PixPaymentDetailsResponse)
def get_pix_payment_details(
    body: PixPayloadRequest,
    user: MeResponse = Depends(get_current_user),
) -> PixPaymentDetailsResponse:
    details = describe_pix_payment(
        amount=body.amount,
        recipient_key=body.recipient_key,
        merchant_name=body.merchant_name,
        reference_id=body.reference_id,
    )
    return _details_response(details)


@router.post("/payment-details.pdf")
def get_pix_payment_details_pdf(
    body: PixPayloadRequest,
    user: MeResponse = Depends(get_current_user),
):
    details = describe_pix_payment(
        amount=body.amount,
        recipient_key=body.recipient_key,
        merchant_name=body.merchant_name,
        reference_id=body.reference_id,
    )
    pdf_buffer = build_pix_payment_pdf(details, title=f"Pagamento PIX - {body.merchant_name}")

    reference = re.sub(r"[^A-Za-z0-9]", "", body.reference_id or "") or "pix"
    filename = f"pagamento_{reference}.pdf"
    return StreamingResponse(
        pdf_buffer,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from pixcode.core.pix_keys import KeyClassification


class PixPayloadRequest(BaseModel):
    amount: Decimal
    recipient_key: str = Field(min_length=1)
    merchant_name: str = Field(min_length=1)
    reference_id: Optional[str] = None


class PixPayloadResponse(BaseModel):
    payload: str
    checksum: str
    normalized_key: str
    key_type: KeyClassification
    key_type_label: str
    display_key: str


class PixKeyInfo(BaseModel):
    normalized_key: str
    key_type: KeyClassification
    key_type_label: str
    display_key: str


class PixPaymentDetailsResponse(BaseModel):
    merchant_name: str
    amount: Decimal
    reference_id: Optional[str] = None
    normalized_key: str
    key_type: KeyClassification
    key_type_label: str
    display_key: str
    qr_enabled: bool
    payload: Optional[str] = None
    checksum: Optional[str] = None
    error: Optional[str] = None

import binascii

import pytest
from jose import jwt

from pixcode.core.config import settings


PAYLOAD_BODY = {
    "amount": "10.00",
    "recipient_key": "test@bank.com",
    "merchant_name": "LOJA TESTE",
    "reference_id": "ABC123",
}


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_pix_payload(client):
    response = client.post("/api/v1/pix/payload", json=PAYLOAD_BODY)
    assert response.status_code == 200

    data = response.json()
    payload = data["payload"]
    assert "540510.00" in payload
    assert "5910LOJA TESTE" in payload
    assert data["checksum"] == payload[-4:]
    assert data["checksum"] == f"{binascii.crc_hqx(payload[:-4].encode('ascii'), 0xFFFF):04X}"
    assert data["key_type"] == "email"
    assert data["key_type_label"] == "E-mail"
    assert data["display_key"] == "test@bank.com"


def test_create_pix_payload_formats_document_key(client):
    body = {**PAYLOAD_BODY, "recipient_key": "12345678901"}
    data = client.post("/api/v1/pix/payload", json=body).json()
    assert data["key_type"] == "person_document"
    assert data["display_key"] == "123.456.789-01"


@pytest.mark.parametrize("amount", ["0", "-10"])
def test_create_pix_payload_invalid_amount(client, amount):
    """Encoding errors are surfaced as 400, never as an empty payload"""
    response = client.post("/api/v1/pix/payload", json={**PAYLOAD_BODY, "amount": amount})
    assert response.status_code == 400
    assert "Amount must be at least 0.01" in response.json()["detail"]


def test_create_pix_payload_empty_key(client):
    response = client.post(
        "/api/v1/pix/payload", json={**PAYLOAD_BODY, "recipient_key": "()"}
    )
    assert response.status_code == 400
    assert "Recipient key is empty" in response.json()["detail"]


def test_create_pix_payload_validation_error(client):
    response = client.post(
        "/api/v1/pix/payload", json={"amount": "10.00", "merchant_name": "Loja"}
    )
    assert response.status_code == 422


def test_inspect_pix_key(client):
    response = client.get("/api/v1/pix/keys/inspect", params={"key": "+55 11 99999 8888"})
    assert response.status_code == 200
    assert response.json() == {
        "normalized_key": "+5511999998888",
        "key_type": "phone",
        "key_type_label": "Telefone",
        "display_key": "(11) 99999-8888",
    }


def test_payment_details_success(client):
    response = client.post("/api/v1/pix/payment-details", json=PAYLOAD_BODY)
    assert response.status_code == 200
    data = response.json()
    assert data["qr_enabled"] is True
    assert data["error"] is None
    assert data["payload"].endswith(data["checksum"])


def test_payment_details_fallback(client):
    """Invalid amount keeps the screen usable with the raw key"""
    body = {**PAYLOAD_BODY, "amount": "0", "recipient_key": "test@bank.com "}
    response = client.post("/api/v1/pix/payment-details", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["qr_enabled"] is False
    assert data["payload"] is None
    assert data["display_key"] == "test@bank.com"
    assert data["error"]


def test_payment_details_pdf(client):
    response = client.post("/api/v1/pix/payment-details.pdf", json=PAYLOAD_BODY)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="pagamento_ABC123.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_payment_details_pdf_fallback(client):
    body = {**PAYLOAD_BODY, "amount": "0", "reference_id": None}
    response = client.post("/api/v1/pix/payment-details.pdf", json=body)
    assert response.status_code == 200
    assert 'filename="pagamento_pix.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_pix_routes_require_authentication(anonymous_client):
    response = anonymous_client.post("/api/v1/pix/payload", json=PAYLOAD_BODY)
    assert response.status_code in (401, 403)


def test_pix_routes_accept_supabase_token(anonymous_client, mocker):
    mocker.patch.object(settings, "SUPABASE_JWT_SECRET", "test-secret")
    token = jwt.encode(
        {"sub": "user-1", "email": "a@b.com", "aud": "authenticated"},
        "test-secret",
        algorithm="HS256",
    )
    response = anonymous_client.post(
        "/api/v1/pix/payload",
        json=PAYLOAD_BODY,
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 200


def test_pix_routes_reject_bad_token(anonymous_client, mocker):
    mocker.patch.object(settings, "SUPABASE_JWT_SECRET", "test-secret")
    response = anonymous_client.post(
        "/api/v1/pix/payload",
        json=PAYLOAD_BODY,
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401

from decimal import Decimal

from reportlab.graphics.shapes import Drawing
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Table

from pixcode.core.pix_payment import describe_pix_payment
from pixcode.pdf.payment_details import (
    build_pix_payment_flowables,
    build_pix_payment_pdf,
    build_pix_qr_drawing,
    format_brl,
)


def test_format_brl():
    assert format_brl(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_brl(10) == "R$ 10,00"
    assert format_brl(None) == ""


def test_qr_drawing_has_requested_size():
    drawing = build_pix_qr_drawing("000201010212", size=100)
    assert isinstance(drawing, Drawing)
    assert drawing.width == 100
    assert drawing.height == 100


def test_flowables_include_qr_when_payload_available():
    details = describe_pix_payment(
        amount=Decimal("125.50"),
        recipient_key="12345678901",
        merchant_name="Acme Supplier",
        reference_id="PAY3fa85f64",
    )
    elements = build_pix_payment_flowables(details, getSampleStyleSheet())
    layout = next(el for el in elements if isinstance(el, Table))
    # Layout is a single row: text table + QR drawing
    assert isinstance(layout._cellvalues[0][1], Drawing)


def test_flowables_without_qr_on_fallback():
    details = describe_pix_payment(
        amount=-1,
        recipient_key="12345678901",
        merchant_name="Acme Supplier",
    )
    elements = build_pix_payment_flowables(details, getSampleStyleSheet())
    tables = [el for el in elements if isinstance(el, Table)]
    assert len(tables) == 1
    rows = tables[0]._cellvalues
    assert ["Chave PIX", "12345678901"] in [list(row) for row in rows]


def test_build_pix_payment_pdf():
    details = describe_pix_payment(
        amount=10,
        recipient_key="test@bank.com",
        merchant_name="Loja & Filhos <Teste>",
        reference_id="ABC123",
    )
    buffer = build_pix_payment_pdf(details, title="Pagamento <Loja & Filhos>")
    assert buffer.getvalue().startswith(b"%PDF")

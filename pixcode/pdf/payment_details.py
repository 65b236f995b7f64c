from decimal import Decimal, InvalidOperation
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.graphics.barcode import qr
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from pixcode.core.pix_payment import PixPaymentDetails


QR_SIZE = 4.6 * cm


def _clean(value: str | None) -> str:
    if value is None:
        return ""
    return str(value).strip()


def format_brl(amount: Decimal | int | float | str | None) -> str:
    """Format an amount as Brazilian currency, e.g. ``R$ 1.234,56``."""
    if amount is None:
        return ""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return _clean(str(amount))
    if not value.is_finite():
        return _clean(str(amount))
    text = f"{value:,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def _chunk(value: str, size: int = 48) -> str:
    # The copy-paste code is a single token; break it so it fits the column.
    return "<br/>".join(escape(value[i:i + size]) for i in range(0, len(value), size))


def build_pix_qr_drawing(payload: str, size: float = QR_SIZE) -> Drawing:
    qr_code = qr.QrCodeWidget(payload, barLevel="M")
    bounds = qr_code.getBounds()
    width = bounds[2] - bounds[0]
    height = bounds[3] - bounds[1]
    drawing = Drawing(size, size, transform=[size / width, 0, 0, size / height, 0, 0])
    drawing.add(qr_code)
    return drawing


def build_pix_payment_flowables(details: PixPaymentDetails, styles) -> list:
    elements = [Paragraph("<b>Pagamento via PIX</b>", styles["Heading3"])]

    text_rows = [
        ["Beneficiario", _clean(details.merchant_name)],
        ["Tipo de chave", details.key_type.label],
        ["Chave PIX", details.display_key],
        ["Valor", format_brl(details.amount)],
    ]
    if details.reference_id:
        text_rows.append(["Referencia", _clean(details.reference_id)])

    if not details.qr_enabled:
        text_table = Table(text_rows, colWidths=[4.2 * cm, 12.6 * cm])
        text_table.setStyle(_text_table_style())
        elements.append(text_table)
        elements.append(
            Paragraph(
                "<i>QR Code indisponivel. Utilize a chave PIX acima para "
                "realizar a transferencia.</i>",
                styles["Italic"],
            )
        )
        elements.append(Spacer(1, 12))
        return elements

    text_rows.append(
        ["PIX Copia e Cola", Paragraph(_chunk(details.payload), styles["Code"])]
    )
    text_table = Table(text_rows, colWidths=[3.6 * cm, 8.6 * cm])
    text_table.setStyle(_text_table_style())

    layout = Table(
        [[text_table, build_pix_qr_drawing(details.payload)]],
        colWidths=[12.2 * cm, QR_SIZE],
    )
    layout.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ]
        )
    )
    elements.append(layout)
    elements.append(Spacer(1, 12))
    return elements


def _text_table_style() -> TableStyle:
    return TableStyle(
        [
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#111827")),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]
    )


def build_pix_payment_pdf(details: PixPaymentDetails, title: str | None = None) -> BytesIO:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
    )
    styles = getSampleStyleSheet()

    elements: list = [
        Paragraph(
            f"<b>{escape(_clean(title) or 'Dados para Pagamento Direto')}</b>",
            styles["Title"],
        ),
        Spacer(1, 12),
    ]
    elements.extend(build_pix_payment_flowables(details, styles))

    doc.build(elements)
    buffer.seek(0)
    return buffer

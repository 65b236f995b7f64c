"""
Sample script for the Pix payment section.

Prints a copy-paste payload and writes a PDF with the QR code for visual
inspection with a banking app.
"""

import sys
from pathlib import Path
from decimal import Decimal

# Add project root to path
project_path = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_path))

from pixcode.core.pix_payment import describe_pix_payment
from pixcode.pdf.payment_details import build_pix_payment_pdf


def main():
    """Generate a sample Pix payment PDF."""
    output_path = project_path / "sample_pix_payment.pdf"

    details = describe_pix_payment(
        amount=Decimal("125.50"),
        recipient_key="12345678901",
        merchant_name="Condomínio São José",
        reference_id="PAY3fa85f64",
    )

    if not details.qr_enabled:
        print(f"[ERROR] Pix payload unavailable: {details.error}")
        return 1

    print("Generating sample Pix payment...")
    print(f"Key: {details.display_key} ({details.key_type.label})")
    print(f"Payload: {details.payload}")
    print(f"Output: {output_path}")

    buffer = build_pix_payment_pdf(details, title="Pagamento PIX - exemplo")
    output_path.write_bytes(buffer.getvalue())

    print(f"[SUCCESS] PDF generated successfully: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

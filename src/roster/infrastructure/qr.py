"""QR code image generation for sharing a record."""

import io

import qrcode

from roster.application.share import person_to_vcard
from roster.domain import Person


def generate_qr_bytes(data: str) -> bytes:
    """
    Generate QR code as PNG bytes for a given data string.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def person_qr_png(person: Person) -> bytes:
    return generate_qr_bytes(person_to_vcard(person))

"""QR code rendering

Functions:
    render_svg(data: str) -> str
        Encode data as a QR code and return the SVG document.

Example:
    >>> from shrinker.utils.qr import render_svg
    >>> svg = render_svg('https://sho.rt/abc123')
    >>> svg.startswith('<?xml')
    True
"""

import qrcode
import qrcode.constants
import qrcode.exceptions
import qrcode.image.svg

from shrinker.constants import Defaults
from shrinker.exceptions import QRCodeError


SVG_MEDIA_TYPE = 'image/svg+xml'


def render_svg(data: str, box_size: int = Defaults.QR_BOX_SIZE) -> str:
    """Encode a string as a QR code SVG document

    Uses the lowest error correction level, which keeps the symbol small
    for the short URLs it usually encodes.

    Args:
        data (str): content of the QR code (usually a short URL).
        box_size (int): size of a single module, in SVG units.

    Returns:
        str: standalone SVG document (with XML declaration).

    Raises:
        QRCodeError: if the data doesn't fit in a QR code.
    """
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=4,
        image_factory=qrcode.image.svg.SvgPathImage,
    )
    try:
        qr.add_data(data)
        qr.make(fit=True)
    except (qrcode.exceptions.DataOverflowError, ValueError) as e:
        raise QRCodeError(f'Unable to encode {len(data)} characters as a QR code.') from e

    image = qr.make_image()
    return image.to_string(encoding='unicode', xml_declaration=True)

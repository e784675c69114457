"""
PDF packaging for rendered flyers.

Wraps the flyer PNG in a single-page PDF whose page is exactly the image
size in points, so the image fills the page edge to edge.
"""

import io
import logging

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from flyerkit.services.image_renderer import HEIGHT, WIDTH

logger = logging.getLogger(__name__)


def package_pdf(png: bytes, width: int = WIDTH, height: int = HEIGHT) -> bytes:
    """Build a one-page PDF containing the flyer image at full bleed.

    `invariant=1` pins the creation date and document id so identical input
    produces identical bytes.
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height), invariant=1)
    c.setTitle("Flyer")

    img = ImageReader(io.BytesIO(png))
    c.drawImage(img, 0, 0, width=width, height=height, mask='auto')

    c.showPage()
    c.save()
    pdf = buffer.getvalue()
    logger.debug(f"Packaged flyer PDF ({len(pdf)} bytes)")
    return pdf

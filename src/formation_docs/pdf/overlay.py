"""Draw literal text at fixed coordinates on a template page.

Used when a template downloaded fine but none of its interactive fields could
be set.  There is no layout reflow: positions are per-form constants.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Sequence

from pypdf import PdfReader, PdfWriter
from reportlab.pdfgen import canvas

from formation_docs.exceptions import RenderFailure
from formation_docs.forms.registry import OverlayText
from formation_docs.pdf.text import sanitize_text

log = logging.getLogger(__name__)


def _overlay_page_bytes(
    width: float,
    height: float,
    instructions: Sequence[tuple[OverlayText, str]],
) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height), invariant=1)
    for item, text in instructions:
        c.setFont(item.font, item.size)
        c.setFillColorRGB(*item.color)
        c.drawString(item.x, item.y, sanitize_text(text))
    c.showPage()
    c.save()
    return buffer.getvalue()


def render_overlay(
    writer: PdfWriter,
    instructions: Sequence[tuple[OverlayText, str]],
    page_index: int = 0,
) -> int:
    """Stamp *instructions* onto page *page_index* of *writer* in place.

    Returns the number of strings drawn.

    Raises:
        RenderFailure: If a font cannot be embedded or the overlay cannot be merged.
    """
    if not instructions:
        return 0

    page = writer.pages[page_index]
    box = page.mediabox
    # Absolute template coordinates: size the overlay to reach the box's far corner.
    width, height = float(box.right), float(box.top)

    try:
        stamp = PdfReader(BytesIO(_overlay_page_bytes(width, height, instructions))).pages[0]
        page.merge_page(stamp)
    except Exception as exc:
        raise RenderFailure(f"Overlay rendering failed: {exc}") from exc

    log.info("Overlaid %d strings on page %d", len(instructions), page_index + 1)
    return len(instructions)

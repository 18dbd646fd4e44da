"""Build a filing document from scratch when no official template is available.

Layout (all pages)::

    Title (bold)                         <- top_y
                                         <- title_gap
    Label:          value                <- first row, then every line_height
    Label:          value
    ...                                  <- rows stop above min_y
    Generated on ... (last page only)    <- bottom_margin + footer_offset
    disclaimer ...

Every page repeats the header, so each page holds exactly ``rows_per_page``
single-line rows and N rows always need ``ceil(N / rows_per_page)`` pages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Sequence

from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.pdfgen import canvas

from formation_docs.core.config import PDFConfig
from formation_docs.exceptions import RenderFailure
from formation_docs.pdf.text import sanitize_text, wrap_text

log = logging.getLogger(__name__)

_PAGE_SIZES = {"letter": LETTER, "a4": A4}
_FOOTER_GRAY = Color(0.3, 0.3, 0.3)


@dataclass(frozen=True)
class PlacedRow:
    """A row assigned to a page: its label, wrapped value lines and first baseline."""

    label: str
    lines: tuple[str, ...]
    y: float


class DocumentSynthesizer:
    """Renders labeled key/value rows as a paginated PDF."""

    def __init__(self, config: PDFConfig | None = None) -> None:
        self._config = config or PDFConfig()
        self._page_size: tuple[float, float] = _PAGE_SIZES.get(self._config.page_size, LETTER)

    # ── Geometry ─────────────────────────────────────────────────────

    @property
    def page_size(self) -> tuple[float, float]:
        return self._page_size

    @property
    def top_y(self) -> float:
        return self._page_size[1] - self._config.top_margin

    @property
    def first_row_y(self) -> float:
        return self.top_y - self._config.title_gap

    @property
    def footer_y(self) -> float:
        return self._config.bottom_margin + self._config.footer_offset

    @property
    def min_y(self) -> float:
        """Lowest baseline a row may use; keeps rows clear of the footer."""
        return self.footer_y + self._config.line_height

    @property
    def rows_per_page(self) -> int:
        """Single-line rows that fit on one page."""
        span = self.first_row_y - self.min_y
        return max(1, int(span // self._config.line_height) + 1)

    @property
    def value_width(self) -> float:
        return self._page_size[0] - self._config.right_margin - self._config.value_x

    # ── Layout ───────────────────────────────────────────────────────

    def paginate(self, rows: Sequence[tuple[str, str]]) -> list[list[PlacedRow]]:
        """Assign rows to pages in order, starting a new page when y would pass ``min_y``.

        Rows with empty values are skipped.  A row that fits on one page is
        never split; a row taller than a page fills the space left on the
        current page and continues on the next ones under ``"<label> (continued)"``.
        Always returns at least one page.
        """
        cfg = self._config
        pages: list[list[PlacedRow]] = [[]]
        y = self.first_row_y

        for label, value in rows:
            if not value:
                continue
            label = sanitize_text(label)
            lines = wrap_text(sanitize_text(value), cfg.font, cfg.body_font_size, self.value_width)

            if len(lines) <= self.rows_per_page:
                bottom = y - (len(lines) - 1) * cfg.line_height
                if bottom < self.min_y and pages[-1]:
                    pages.append([])
                    y = self.first_row_y
                pages[-1].append(PlacedRow(label=label, lines=tuple(lines), y=y))
                y -= len(lines) * cfg.line_height
                continue

            heading = label
            while lines:
                room = self._slots_below(y)
                if room <= 0:
                    pages.append([])
                    y = self.first_row_y
                    room = self.rows_per_page
                chunk, lines = lines[:room], lines[room:]
                pages[-1].append(PlacedRow(label=heading, lines=tuple(chunk), y=y))
                y -= len(chunk) * cfg.line_height
                heading = f"{label} (continued)"

        return pages

    def _slots_below(self, y: float) -> int:
        """Line slots from baseline *y* down to ``min_y`` inclusive."""
        if y < self.min_y:
            return 0
        return int((y - self.min_y) // self._config.line_height) + 1

    # ── Rendering ────────────────────────────────────────────────────

    def synthesize(
        self,
        title: str,
        rows: Sequence[tuple[str, str]],
        generated_at: datetime,
    ) -> bytes:
        """Render *rows* under *title* and return PDF bytes.

        Raises:
            RenderFailure: If the PDF library fails (e.g. a font cannot be embedded).
        """
        try:
            pages = self.paginate(rows)
            data = self._render(title, pages, generated_at)
        except Exception as exc:
            raise RenderFailure(f"Synthesis failed for {title!r}: {exc}") from exc
        log.info("Synthesized %r: %d rows on %d page(s)", title, sum(len(p) for p in pages), len(pages))
        return data

    def _render(self, title: str, pages: list[list[PlacedRow]], generated_at: datetime) -> bytes:
        cfg = self._config
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=self._page_size, invariant=1 if cfg.deterministic else 0)
        c.setTitle(title)
        c.setCreator("formation-docs")

        for index, placed in enumerate(pages):
            heading = title if index == 0 else f"{title} (continued)"
            c.setFillColorRGB(0, 0, 0)
            c.setFont(cfg.bold_font, cfg.title_font_size)
            c.drawString(cfg.label_x, self.top_y, sanitize_text(heading))

            for row in placed:
                c.setFont(cfg.bold_font, cfg.body_font_size)
                c.drawString(cfg.label_x, row.y, row.label)
                c.setFont(cfg.font, cfg.body_font_size)
                for offset, line in enumerate(row.lines):
                    c.drawString(cfg.value_x, row.y - offset * cfg.line_height, line)

            if index == len(pages) - 1:
                self._draw_footer(c, generated_at)
            c.showPage()

        c.save()
        return buffer.getvalue()

    def _draw_footer(self, c: canvas.Canvas, generated_at: datetime) -> None:
        cfg = self._config
        leading = cfg.footer_font_size + 3
        width = self._page_size[0] - cfg.label_x - cfg.right_margin

        c.setFillColor(_FOOTER_GRAY)
        c.setFont(cfg.font, cfg.footer_font_size)
        y = self.footer_y
        c.drawString(cfg.label_x, y, f"Generated on {generated_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}")
        for line in wrap_text(cfg.disclaimer, cfg.font, cfg.footer_font_size, width):
            y -= leading
            c.drawString(cfg.label_x, y, line)

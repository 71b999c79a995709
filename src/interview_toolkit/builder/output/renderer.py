"""
Module: builder.output.renderer

Purpose:
    Render backend that encodes draw instructions to PDF with ReportLab.
    Pages are drawn into an in-memory canvas and written to disk on save().

Key Classes:
    - PdfCanvasBackend: RenderBackend over reportlab.pdfgen.canvas

Dependencies:
    - reportlab: PDF generation
    - builder.output.backend: RenderError

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .backend import RenderError

logger = logging.getLogger(__name__)

# Footer configuration
FOOTER_FONT = "Helvetica"
FOOTER_FONT_SIZE = 7
FOOTER_Y_PT = 15  # Inside the bottom margin


def _get_footer_text() -> str:
    """Get footer text with current version number."""
    from interview_toolkit import __version__
    return f"Generated with Interview Guide Builder v{__version__}"


class PdfCanvasBackend:
    """
    ReportLab canvas wrapped in the RenderBackend protocol.

    Args:
        title: PDF document title metadata
        show_footer: Draw a small centered version footer on every page

    Example:
        >>> backend = PdfCanvasBackend(title="Interview Guide")
        >>> backend.new_page(*A4)
        >>> backend.draw_text("Helvetica", 10, 50, 791.89, "Hello")
        >>> backend.finalize_page()
        >>> backend.save(Path("output/guide.pdf"))
    """

    def __init__(self, title: Optional[str] = None, show_footer: bool = False) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=A4)
        if title:
            self._canvas.setTitle(title)
        self._show_footer = show_footer
        self._page_open = False
        self._page_width = A4[0]
        self._page_count = 0

    @property
    def page_count(self) -> int:
        """Finalized pages."""
        return self._page_count

    def new_page(self, width: float, height: float) -> None:
        if self._page_open:
            raise RenderError("Previous page was not finalized")
        self._canvas.setPageSize((width, height))
        self._page_width = width
        self._page_open = True

    def draw_text(self, font: str, size: float, x: float, y: float, text: str) -> None:
        if not self._page_open:
            raise RenderError("draw_text called with no open page")
        self._canvas.setFont(font, size)
        self._canvas.drawString(x, y, text)

    def finalize_page(self) -> None:
        if not self._page_open:
            raise RenderError("finalize_page called with no open page")
        if self._show_footer:
            self._draw_footer()
        self._canvas.showPage()
        self._page_open = False
        self._page_count += 1

    def save(self, destination: Path) -> Path:
        """
        Encode the document and write it to `destination`.

        Raises:
            RenderError: If a page is still open or the file cannot be written
        """
        if self._page_open:
            raise RenderError("Cannot save with an open page")

        self._canvas.save()
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(self._buffer.getvalue())
        except OSError as e:
            raise RenderError(f"Failed to write PDF to {destination}: {e}") from e

        logger.info(f"Rendered {self._page_count} pages to {destination}")
        return destination

    def _draw_footer(self) -> None:
        """Draw centered footer text in the bottom margin, subtle gray."""
        footer_text = _get_footer_text()

        c = self._canvas
        c.saveState()
        c.setFont(FOOTER_FONT, FOOTER_FONT_SIZE)
        c.setFillColorRGB(0.4, 0.4, 0.4)
        text_width = c.stringWidth(footer_text, FOOTER_FONT, FOOTER_FONT_SIZE)
        c.drawString((self._page_width - text_width) / 2, FOOTER_Y_PT, footer_text)
        c.restoreState()

"""
Module: builder.layout.title

Purpose:
    Fixed layouts for the two dedicated front pages.
    The title page centers each line horizontally from per-character advance
    widths; the contents page lists sections at the left margin.

Key Functions:
    - text_width(): Width of a string from an advance-width table
    - centered_x(): Left edge for a centered string
    - standard_advance_widths(): Advance table for a PDF base font
    - layout_title_page(): Title page placements
    - layout_contents_page(): Table of contents placements

Dependencies:
    - reportlab: Standard font metrics
    - builder.layout.models: TextPlacement, TitlePageMeta, Document

Used By:
    - builder.layout.paginator: flow_document()
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Dict, List, Mapping

from reportlab.pdfbase.pdfmetrics import stringWidth

from .config import FontRole, LayoutConfig
from .models import Document, TextPlacement, TitlePageMeta
from .styles import BODY_STYLE, TITLE_STYLE

# Advance widths are in thousandths of an em
EM_UNITS = 1000
DEFAULT_ADVANCE = 500

GUIDE_TITLE = "Technical Interview Guide"
CONTENTS_TITLE = "Table of Contents"

# (size, drop below the shared anchor) per title page line
DOCUMENT_TITLE_LINE = (24, 0)
JOB_TITLE_LINE = (18, 40)
ORGANIZATION_LINE = (14, 70)
DATE_LINE = (12, 120)
QUESTION_COUNT_LINE = (12, 150)

AdvanceWidths = Mapping[str, float]
WidthsProvider = Callable[[str], AdvanceWidths]


def text_width(
    text: str,
    widths: AdvanceWidths,
    size: float,
    default_advance: float = DEFAULT_ADVANCE,
) -> float:
    """
    Rendered width of `text` at `size` points.

    Characters missing from the table use `default_advance`.

    Example:
        >>> text_width("abcdefghij", {c: 500 for c in "abcdefghij"}, 24)
        120.0
    """
    advance = sum(widths.get(char, default_advance) for char in text)
    return advance / EM_UNITS * size


def centered_x(text: str, widths: AdvanceWidths, size: float, center_x: float) -> float:
    """Left edge that centers `text` on `center_x`."""
    return center_x - text_width(text, widths, size) / 2


@lru_cache(maxsize=None)
def standard_advance_widths(font_name: str) -> Dict[str, float]:
    """
    Advance-width table for a PDF base font.

    Covers printable ASCII and Latin-1; other characters fall back to
    DEFAULT_ADVANCE in text_width().
    """
    chars = [chr(code) for code in range(32, 127)] + [chr(code) for code in range(160, 256)]
    return {char: stringWidth(char, font_name, EM_UNITS) for char in chars}


def format_generated_on(meta: TitlePageMeta) -> str:
    """Date line like "Generated on: October 18, 2026"."""
    when = meta.generated_at
    return f"Generated on: {when:%B} {when.day}, {when.year}"


def layout_title_page(
    meta: TitlePageMeta,
    config: LayoutConfig,
    widths_for: WidthsProvider = standard_advance_widths,
) -> List[TextPlacement]:
    """
    Place the title page lines.

    Every line is centered on the page and offset below one shared anchor.
    The organization line is omitted when the organization is unknown.

    Args:
        meta: Title page data
        config: Layout configuration
        widths_for: Font name -> advance-width table

    Returns:
        Placements in drawing order
    """
    bold = config.font_for(FontRole.TITLE)
    normal = config.font_for(FontRole.NORMAL)

    lines = [
        (GUIDE_TITLE, bold, DOCUMENT_TITLE_LINE),
        (meta.job_title, bold, JOB_TITLE_LINE),
    ]
    if meta.organization:
        lines.append((f"at {meta.organization}", normal, ORGANIZATION_LINE))
    lines.append((format_generated_on(meta), normal, DATE_LINE))
    lines.append((
        f"Contains {meta.question_count} interview questions and answers",
        normal,
        QUESTION_COUNT_LINE,
    ))

    placements = []
    for text, font, (size, drop) in lines:
        x = centered_x(text, widths_for(font), size, config.center_x)
        placements.append(TextPlacement(font, size, x, config.title_anchor - drop, text))
    return placements


def layout_contents_page(document: Document, config: LayoutConfig) -> List[TextPlacement]:
    """
    Place the table of contents.

    Heading at the top margin, then one body line per section.
    """
    y = config.top
    placements = [
        TextPlacement(config.font_for(TITLE_STYLE.role), TITLE_STYLE.size, config.margin, y, CONTENTS_TITLE)
    ]
    y -= TITLE_STYLE.line_height * 2

    body_font = config.font_for(BODY_STYLE.role)
    for entry in document.toc_entries():
        placements.append(TextPlacement(body_font, BODY_STYLE.size, config.margin, y, entry))
        y -= BODY_STYLE.line_height
    return placements

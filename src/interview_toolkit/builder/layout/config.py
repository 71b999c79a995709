"""
Module: builder.layout.config

Purpose:
    Configuration for the page flow engine.
    Defines page dimensions, the margin, base fonts per font role and the
    title page anchor. One immutable value threaded into the style resolver,
    the title layout and the flow engine.

Key Classes:
    - LayoutConfig: Immutable layout configuration
    - FontRole: Logical font families used by the style table

Dependencies:
    - dataclasses (std)
    - reportlab: A4 page size constant

Used By:
    - builder.layout.styles: Font role -> base font
    - builder.layout.paginator: Cursor bounds
    - builder.layout.title: Title and contents pages
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from reportlab.lib.pagesizes import A4


# Standard A4 portrait in PDF points
DEFAULT_PAGE_WIDTH_PT, DEFAULT_PAGE_HEIGHT_PT = A4
DEFAULT_MARGIN_PT = 50


class FontRole(str, Enum):
    """Logical font families referenced by the style table."""

    TITLE = "title"
    HEADING = "heading"
    NORMAL = "normal"
    MONOSPACE = "monospace"


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        margin: Top, bottom and side margin in points
        title_font: Base font for FontRole.TITLE
        heading_font: Base font for FontRole.HEADING
        normal_font: Base font for FontRole.NORMAL
        monospace_font: Base font for FontRole.MONOSPACE
        title_anchor_drop: Distance from page top to the title page anchor

    Example:
        >>> config = LayoutConfig(page_height=800, margin=50)
        >>> config.top, config.available_height
        (750, 700)
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_PT
    page_height: float = DEFAULT_PAGE_HEIGHT_PT

    # Margin (all four sides)
    margin: float = DEFAULT_MARGIN_PT

    # Fonts (PDF standard 14)
    title_font: str = "Helvetica-Bold"
    heading_font: str = "Helvetica-Bold"
    normal_font: str = "Helvetica"
    monospace_font: str = "Courier"

    # Title page
    title_anchor_drop: float = 200

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.page_width - 2 * self.margin <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")
        if not (0 < self.title_anchor_drop < self.page_height):
            raise ValueError(f"title_anchor_drop out of range: {self.title_anchor_drop}")

    @property
    def top(self) -> float:
        """Cursor position on a freshly opened page (H - M)."""
        return self.page_height - self.margin

    @property
    def bottom(self) -> float:
        """Lowest cursor position a line may be drawn at."""
        return self.margin

    @property
    def available_height(self) -> float:
        """Writable vertical span (H - 2M)."""
        return self.page_height - 2 * self.margin

    @property
    def center_x(self) -> float:
        """Horizontal page center used by the title page."""
        return self.page_width / 2

    @property
    def title_anchor(self) -> float:
        """Shared vertical anchor for the title page lines."""
        return self.page_height - self.title_anchor_drop

    def font_for(self, role: FontRole) -> str:
        """Resolve a font role to its configured base font."""
        fonts = {
            FontRole.TITLE: self.title_font,
            FontRole.HEADING: self.heading_font,
            FontRole.NORMAL: self.normal_font,
            FontRole.MONOSPACE: self.monospace_font,
        }
        return fonts[role]

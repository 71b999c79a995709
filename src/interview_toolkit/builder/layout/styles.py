"""
Module: builder.layout.styles

Purpose:
    Style resolution for guide lines.
    Maps a block kind (or a narrative line's leading marker) to font role,
    point size, line height and left indent using a fixed table.

Key Functions:
    - block_for_line(): Markdown-like prefix rule ("# ", "## ", "### ", "- ")

Key Classes:
    - TextStyle: Font role, size, line height, indent
    - StyledLine: Text ready to draw with its style
    - StyleResolver: Block -> StyledLine, font role -> base font

Dependencies:
    - builder.layout.config: LayoutConfig, FontRole
    - builder.layout.models: Block variants

Used By:
    - builder.layout.composer: Narrative line classification
    - builder.layout.paginator: Styling every emitted line
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import FontRole, LayoutConfig
from .models import Block, Bullet, Heading, Paragraph, QAEntry


@dataclass(frozen=True)
class TextStyle:
    """
    Resolved style for one line.

    Attributes:
        role: Logical font family
        size: Point size
        line_height: Cursor advance after the line
        indent: Left indent added to the page margin
    """

    role: FontRole
    size: float
    line_height: float
    indent: float = 0


# Fixed style table
TITLE_STYLE = TextStyle(FontRole.TITLE, 18, 22)
HEADING_STYLE = TextStyle(FontRole.HEADING, 14, 18)
SUBHEADING_STYLE = TextStyle(FontRole.HEADING, 12, 14)
BULLET_STYLE = TextStyle(FontRole.NORMAL, 10, 14, indent=20)
BODY_STYLE = TextStyle(FontRole.NORMAL, 10, 14)
BLANK_STYLE = TextStyle(FontRole.NORMAL, 10, 7)
QUESTION_STYLE = TextStyle(FontRole.HEADING, 10, 21)
CODE_STYLE = TextStyle(FontRole.MONOSPACE, 8, 10, indent=20)
PROSE_STYLE = TextStyle(FontRole.NORMAL, 10, 14, indent=10)
SUBCATEGORY_STYLE = TextStyle(FontRole.HEADING, 12, 14)
ANSWER_MARKER_STYLE = BODY_STYLE

HEADING_STYLES = {1: TITLE_STYLE, 2: HEADING_STYLE, 3: SUBHEADING_STYLE}

# Checked in order, literal prefix match
HEADING_MARKERS = (("# ", 1), ("## ", 2), ("### ", 3))
BULLET_MARKER = "- "
BULLET_GLYPH = "• "

QUESTION_PREFIX = "Q: "
ANSWER_MARKER = "A:"


@dataclass(frozen=True)
class StyledLine:
    """
    Text ready for placement.

    Empty text means no draw call; the cursor still advances.
    """

    text: str
    style: TextStyle

    @property
    def draws(self) -> bool:
        return bool(self.text)


def block_for_line(line: str) -> Block:
    """
    Classify one narrative line by its leading marker.

    Args:
        line: Raw line from a narrative blob

    Returns:
        Heading, Bullet or Paragraph with the marker stripped.
        Whitespace-only lines become an empty Paragraph.

    Example:
        >>> block_for_line("## Key Skills")
        Heading(level=2, text='Key Skills')
        >>> block_for_line("- Java")
        Bullet(text='Java')
    """
    if not line.strip():
        return Paragraph("")
    for marker, level in HEADING_MARKERS:
        if line.startswith(marker):
            return Heading(level, line[len(marker):])
    if line.startswith(BULLET_MARKER):
        return Bullet(line[len(BULLET_MARKER):])
    return Paragraph(line)


class StyleResolver:
    """
    Resolves blocks and answer lines to StyledLines.

    Example:
        >>> resolver = StyleResolver(LayoutConfig())
        >>> line = resolver.resolve_line("## Key Skills")
        >>> line.text, line.style is HEADING_STYLE
        ('Key Skills', True)
    """

    def __init__(self, config: LayoutConfig) -> None:
        self._config = config

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def font_name(self, style: TextStyle) -> str:
        return self._config.font_for(style.role)

    def x_for(self, style: TextStyle) -> float:
        return self._config.margin + style.indent

    def resolve(self, block: Block) -> StyledLine:
        """
        Resolve a single-line block.

        Raises:
            TypeError: For QAEntry (multi-line, flowed by the engine) or
                unknown block types
        """
        if isinstance(block, Heading):
            return StyledLine(block.text, HEADING_STYLES[block.level])
        if isinstance(block, Bullet):
            return StyledLine(BULLET_GLYPH + block.text, BULLET_STYLE)
        if isinstance(block, Paragraph):
            if block.is_blank:
                return StyledLine("", BLANK_STYLE)
            return StyledLine(block.text, BODY_STYLE)
        if isinstance(block, QAEntry):
            raise TypeError("QAEntry spans several lines and has no single style")
        raise TypeError(f"Unsupported block: {block!r}")

    def resolve_line(self, line: str) -> StyledLine:
        """Apply the prefix rule and resolve in one step."""
        return self.resolve(block_for_line(line))

    def section_heading(self, title: str) -> StyledLine:
        return StyledLine(title, TITLE_STYLE)

    def subcategory(self, label: str) -> StyledLine:
        return StyledLine(label, SUBCATEGORY_STYLE)

    def question(self, text: str) -> StyledLine:
        return StyledLine(QUESTION_PREFIX + text, QUESTION_STYLE)

    def answer_marker(self) -> StyledLine:
        return StyledLine(ANSWER_MARKER, ANSWER_MARKER_STYLE)

    def answer_line(self, text: str, is_code: bool) -> StyledLine:
        return StyledLine(text, CODE_STYLE if is_code else PROSE_STYLE)

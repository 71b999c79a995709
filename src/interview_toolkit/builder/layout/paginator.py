"""
Module: builder.layout.paginator

Purpose:
    Flow blocks onto fixed-size pages.
    Tracks a vertical cursor on the open page, styles every line, sends draw
    instructions to the render backend and opens a new page when the cursor
    crosses the bottom margin.

Key Functions:
    - flow_document(): Main entry point (title page, contents page, sections)

Key Classes:
    - PageFlowEngine: Cursor and page state machine

Algorithm:
    States are "no page open" and "page open with cursor y".
    1. start_section: open a page unless the heading plus one blank line
       fits in the space left; draw; y -= 2 * line_height
    2. emit_line: if y < margin, finalize and open a page; draw; y -= line_height
    3. emit_qa_entry: always open a page first, except for the first entry of
       a section, which shares the page its section heading opened
    4. Every section starts on its own page; the last page is finalized even
       when flowing fails part way

Dependencies:
    - builder.layout.config: LayoutConfig
    - builder.layout.styles: StyleResolver
    - builder.layout.classifier: Answer line classification
    - builder.layout.title: Front page layouts
    - builder.output.backend: RenderBackend interface

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from .classifier import classify_answer
from .config import LayoutConfig
from .models import (
    Block,
    Bullet,
    Document,
    Heading,
    LayoutResult,
    PagePlan,
    Paragraph,
    QAEntry,
    Section,
    TextPlacement,
    TitlePageMeta,
)
from .styles import StyledLine, StyleResolver
from .title import WidthsProvider, layout_contents_page, layout_title_page, standard_advance_widths

if TYPE_CHECKING:
    from interview_toolkit.builder.output.backend import RenderBackend

logger = logging.getLogger(__name__)


class PageFlowEngine:
    """
    Single-threaded page/cursor state machine.

    Owns only the transient cursor and the current page; never the
    Document. One engine flows one document into one backend.

    Example:
        >>> engine = PageFlowEngine(RecordingBackend(), LayoutConfig())
        >>> engine.start_section("Core Java Questions")
        >>> engine.emit_qa_entry(entry, shares_heading_page=True)
        >>> result = engine.finish()
    """

    def __init__(
        self,
        backend: RenderBackend,
        config: LayoutConfig,
        resolver: Optional[StyleResolver] = None,
    ) -> None:
        self._backend = backend
        self._config = config
        self._resolver = resolver or StyleResolver(config)
        self._y: Optional[float] = None
        self._pages: List[PagePlan] = []
        self._current: List[TextPlacement] = []
        self._warnings: List[str] = []

    # ─────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────

    @property
    def page_open(self) -> bool:
        return self._y is not None

    @property
    def cursor(self) -> Optional[float]:
        """Current y, or None when no page is open."""
        return self._y

    @property
    def page_count(self) -> int:
        """Pages opened so far, including the open one."""
        return len(self._pages) + (1 if self.page_open else 0)

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)

    def open_page(self) -> None:
        """Finalize the open page (if any) and start a fresh one at y = H - M."""
        self.close_page()
        self._backend.new_page(self._config.page_width, self._config.page_height)
        self._current = []
        self._y = self._config.top

    def close_page(self) -> None:
        """Finalize the open page. No-op when no page is open."""
        if not self.page_open:
            return
        self._backend.finalize_page()
        self._pages.append(PagePlan(index=len(self._pages), placements=tuple(self._current)))
        self._current = []
        self._y = None

    def fits(self, height: float) -> bool:
        """Whether `height` fits between the cursor and the bottom margin."""
        return self.page_open and self._y - self._config.bottom >= height

    # ─────────────────────────────────────────────────────────────────────
    # Drawing
    # ─────────────────────────────────────────────────────────────────────

    def _draw(self, line: StyledLine, x: float, y: float) -> None:
        placement = TextPlacement(
            font=self._resolver.font_name(line.style),
            size=line.style.size,
            x=x,
            y=y,
            text=line.text,
        )
        self._backend.draw_text(placement.font, placement.size, placement.x, placement.y, placement.text)
        self._current.append(placement)

    def start_section(self, title: str) -> None:
        """
        Draw a section heading followed by one blank line of spacing.

        Opens a page when none is open or the heading plus spacing does not
        fit in the space left.
        """
        line = self._resolver.section_heading(title)
        advance = line.style.line_height * 2
        if not self.fits(advance):
            self.open_page()
        self._draw(line, self._resolver.x_for(line.style), self._y)
        self._y -= advance

    def emit_line(self, line: StyledLine) -> None:
        """
        Draw one styled line at the cursor.

        Overflow is checked before drawing only: once the cursor has crossed
        the bottom margin the line moves to a new page. Blank lines advance
        the cursor without a draw call.
        """
        if not self.page_open:
            self.open_page()
        elif self._y < self._config.bottom:
            logger.debug(f"Cursor {self._y:.1f} below margin, opening page {self.page_count + 1}")
            self.open_page()
        if line.draws:
            self._draw(line, self._resolver.x_for(line.style), self._y)
        self._y -= line.style.line_height

    def emit_qa_entry(self, entry: QAEntry, shares_heading_page: bool = False) -> None:
        """
        Draw one question: subcategory, question, "A:" marker, answer lines.

        Args:
            entry: Entry to draw
            shares_heading_page: Continue on the page just opened by the
                section heading instead of forcing a new page
        """
        if not (shares_heading_page and self.page_open):
            self.open_page()
        first_page = self.page_count

        if entry.subcategory:
            self.emit_line(self._resolver.subcategory(entry.subcategory))
        if entry.question:
            self.emit_line(self._resolver.question(entry.question))
        else:
            self._warn(f"Question text missing (subcategory={entry.subcategory!r}); drawing answer only")
        self.emit_line(self._resolver.answer_marker())
        for text, is_code in classify_answer(entry):
            self.emit_line(self._resolver.answer_line(text, is_code))

        spanned = self.page_count - first_page + 1
        if spanned > 1:
            logger.debug(f"Question {entry.question!r} continues over {spanned} pages")

    def emit_block(self, block: Block, shares_heading_page: bool = False) -> None:
        """Dispatch one block to the matching emit operation."""
        if isinstance(block, QAEntry):
            self.emit_qa_entry(block, shares_heading_page=shares_heading_page)
        elif isinstance(block, (Heading, Paragraph, Bullet)):
            self.emit_line(self._resolver.resolve(block))
        else:
            raise TypeError(f"Unsupported block: {block!r}")

    def emit_fixed_page(self, placements: Sequence[TextPlacement]) -> None:
        """Draw a dedicated page from precomputed placements, then finalize it."""
        self.open_page()
        for placement in placements:
            self._backend.draw_text(placement.font, placement.size, placement.x, placement.y, placement.text)
            self._current.append(placement)
        self.close_page()

    def flow_section(self, section: Section) -> None:
        """
        Flow one section, starting on its own page.

        A section with no blocks and no heading produces nothing.
        """
        if section.is_empty and not section.show_heading:
            logger.debug(f"Skipping empty section {section.title!r}")
            return

        self.close_page()
        if section.show_heading:
            self.start_section(section.title)

        for index, block in enumerate(section.blocks):
            self.emit_block(block, shares_heading_page=section.show_heading and index == 0)

    def finish(self) -> LayoutResult:
        """Finalize the open page and return the layout record."""
        self.close_page()
        return LayoutResult(pages=tuple(self._pages), warnings=list(self._warnings))

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self._warnings.append(message)


def flow_document(
    document: Document,
    meta: TitlePageMeta,
    backend: RenderBackend,
    config: LayoutConfig,
    *,
    widths_for: WidthsProvider = standard_advance_widths,
) -> LayoutResult:
    """
    Lay out a complete guide.

    Page order: title page, contents page, then every non-empty section in
    document order. The last page is always finalized, even if flowing a
    block raises.

    Args:
        document: Fully built guide content
        meta: Title page data
        backend: Render backend receiving draw instructions
        config: Layout configuration
        widths_for: Font name -> advance-width table for the title page

    Returns:
        LayoutResult mirroring everything sent to the backend

    Example:
        >>> result = flow_document(document, meta, RecordingBackend(), LayoutConfig())
        >>> result.page_count
        5
    """
    engine = PageFlowEngine(backend, config)

    engine.emit_fixed_page(layout_title_page(meta, config, widths_for))
    engine.emit_fixed_page(layout_contents_page(document, config))

    try:
        for section in document.sections:
            engine.flow_section(section)
    finally:
        engine.close_page()

    result = engine.finish()
    logger.info(f"Flowed {document.question_count} questions onto {result.page_count} pages")
    return result

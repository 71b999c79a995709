"""
Module: builder.layout.models

Purpose:
    Data models for guide layout.
    The Block union (Heading, Paragraph, Bullet, QAEntry), the Section and
    Document that hold blocks, title page metadata, and the placement/page
    records produced by the flow engine.

Key Classes:
    - Heading, Paragraph, Bullet, QAEntry: Block variants
    - Section, Document: Ordered, immutable guide content
    - TitlePageMeta: Data for the title page only
    - TextPlacement: One draw instruction
    - PagePlan: Placements on one page
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.composer: Creates Documents
    - builder.layout.paginator: Consumes Blocks, creates PagePlans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union


# ─────────────────────────────────────────────────────────────────────────────
# Blocks
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Heading:
    """
    Heading line.

    Attributes:
        level: 1 = document title, 2 = section heading, 3 = subheading
        text: Heading text without the leading marker
    """

    level: int
    text: str

    def __post_init__(self) -> None:
        if not (1 <= self.level <= 3):
            raise ValueError(f"heading level must be 1-3: {self.level}")


@dataclass(frozen=True)
class Paragraph:
    """Single pre-split line of prose. Empty text is a blank line."""

    text: str

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class Bullet:
    """Bulleted line, text without the "- " marker."""

    text: str


@dataclass(frozen=True)
class QAEntry:
    """
    One interview question.

    Attributes:
        subcategory: Optional label drawn above the question
        question: Question text, None for malformed records
        answer_lines: Answer split on line boundaries, fence lines removed
        has_code_example: Whether answer lines are candidates for code styling
    """

    subcategory: Optional[str]
    question: Optional[str]
    answer_lines: tuple[str, ...] = ()
    has_code_example: bool = False


Block = Union[Heading, Paragraph, Bullet, QAEntry]


# ─────────────────────────────────────────────────────────────────────────────
# Document
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Section:
    """
    Named group of blocks, rendered as one guide chapter.

    Attributes:
        title: Section title, also used for the contents page
        blocks: Ordered blocks
        show_heading: Whether the flow engine draws `title` as a heading
    """

    title: str
    blocks: tuple[Block, ...] = ()
    show_heading: bool = False

    @property
    def is_empty(self) -> bool:
        return len(self.blocks) == 0

    @property
    def question_count(self) -> int:
        return sum(1 for block in self.blocks if isinstance(block, QAEntry))


@dataclass(frozen=True)
class Document:
    """
    Complete guide content (immutable, built before layout begins).

    Example:
        >>> doc = Document(sections=(Section("Introduction"),))
        >>> doc.toc_entries()
        ['1. Introduction']
    """

    sections: tuple[Section, ...] = ()

    @property
    def question_count(self) -> int:
        return sum(section.question_count for section in self.sections)

    def toc_entries(self) -> list[str]:
        """Numbered contents lines, one per section in order."""
        return [
            f"{number}. {section.title}"
            for number, section in enumerate(self.sections, start=1)
        ]


@dataclass(frozen=True)
class TitlePageMeta:
    """
    Title page data.

    Attributes:
        job_title: Job title line
        organization: Organization, None when unknown
        generated_at: Generation timestamp
        question_count: Total questions in the guide
    """

    job_title: str
    organization: Optional[str]
    generated_at: datetime
    question_count: int


# ─────────────────────────────────────────────────────────────────────────────
# Layout output
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TextPlacement:
    """
    One draw instruction in PDF coordinates (origin bottom-left).

    Example:
        >>> TextPlacement("Helvetica", 10, 50, 791.89, "A:").as_tuple()
        ('Helvetica', 10, 50, 791.89, 'A:')
    """

    font: str
    size: float
    x: float
    y: float
    text: str

    def as_tuple(self) -> tuple[str, float, float, float, str]:
        return (self.font, self.size, self.x, self.y, self.text)


@dataclass(frozen=True)
class PagePlan:
    """
    Everything drawn on a single page.

    Attributes:
        index: Page number (0-indexed)
        placements: Draw instructions in order
    """

    index: int
    placements: tuple[TextPlacement, ...]

    @property
    def placement_count(self) -> int:
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        return len(self.placements) == 0

    def texts(self) -> list[str]:
        return [placement.text for placement in self.placements]


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of PagePlans in output order
        warnings: Data-quality and overflow warnings

    Example:
        >>> result = LayoutResult(pages=(page1, page2))
        >>> result.page_count
        2
    """

    pages: tuple[PagePlan, ...]
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        return sum(page.placement_count for page in self.pages)

    def instructions(self) -> list[tuple[int, str, float, float, float, str]]:
        """Flat (page, font, size, x, y, text) list, used to compare layouts."""
        return [
            (page.index, *placement.as_tuple())
            for page in self.pages
            for placement in page.placements
        ]

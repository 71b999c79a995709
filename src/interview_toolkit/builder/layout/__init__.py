"""
Module: builder.layout

Purpose:
    Page layout for interview guides.
    Converts normalized guide content into blocks, styles each line and flows
    the blocks onto fixed-size pages.

Key Functions:
    - compose_guide(): Build the Document
    - flow_document(): Lay the Document out page by page

Key Classes:
    - LayoutConfig: Configuration for page layout
    - StyleResolver: Block -> styled line
    - PageFlowEngine: Cursor/page state machine
    - Document, Section, Heading, Paragraph, Bullet, QAEntry: Block model
    - LayoutResult, PagePlan, TextPlacement: Layout output

Dependencies:
    - reportlab: Page size and font metrics
    - interview_toolkit.core.models: JobDescription, InterviewQuestion

Used By:
    - builder.controller: Main build controller
"""

from .config import LayoutConfig, FontRole
from .models import (
    Heading,
    Paragraph,
    Bullet,
    QAEntry,
    Block,
    Section,
    Document,
    TitlePageMeta,
    TextPlacement,
    PagePlan,
    LayoutResult,
)
from .styles import StyleResolver, StyledLine, TextStyle, block_for_line
from .classifier import is_code_line, classify_answer
from .composer import compose_guide, build_title_meta
from .title import layout_title_page, layout_contents_page, text_width, centered_x
from .paginator import PageFlowEngine, flow_document

__all__ = [
    # Config
    "LayoutConfig",
    "FontRole",
    # Models
    "Heading",
    "Paragraph",
    "Bullet",
    "QAEntry",
    "Block",
    "Section",
    "Document",
    "TitlePageMeta",
    "TextPlacement",
    "PagePlan",
    "LayoutResult",
    # Styles
    "StyleResolver",
    "StyledLine",
    "TextStyle",
    "block_for_line",
    "is_code_line",
    "classify_answer",
    # Functions
    "compose_guide",
    "build_title_meta",
    "layout_title_page",
    "layout_contents_page",
    "text_width",
    "centered_x",
    "PageFlowEngine",
    "flow_document",
]

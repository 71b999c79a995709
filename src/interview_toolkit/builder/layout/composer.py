"""
Module: builder.layout.composer

Purpose:
    Compose the ordered Document from normalized guide content.
    Narrative blobs become one block per line; each question category becomes
    a "<category> Questions" section holding one QAEntry per question.

Key Functions:
    - compose_guide(): Main entry point for the block model
    - compose_qa_entry(): Question record -> QAEntry
    - narrative_section(): Narrative blob -> Section
    - build_title_meta(): Title page metadata

Dependencies:
    - interview_toolkit.core.models: JobDescription, InterviewQuestion
    - builder.layout.styles: Prefix rule
    - builder.layout.classifier: Fence removal

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from interview_toolkit.core.models import InterviewQuestion, JobDescription, QuestionMap

from .classifier import strip_fences
from .models import Document, QAEntry, Section, TitlePageMeta
from .styles import block_for_line

logger = logging.getLogger(__name__)

INTRODUCTION_TITLE = "Introduction"
FINAL_TIPS_TITLE = "Final Tips & Resources"
CATEGORY_SECTION_SUFFIX = " Questions"


def split_lines(text: Optional[str]) -> List[str]:
    """
    Split text on line boundaries, dropping trailing empty lines.

    Example:
        >>> split_lines("# Title\\n\\nBody\\n")
        ['# Title', '', 'Body']
    """
    if not text:
        return []
    lines = text.replace("\r\n", "\n").split("\n")
    while lines and not lines[-1]:
        lines.pop()
    return lines


def narrative_section(title: str, text: Optional[str]) -> Section:
    """
    Build a headingless section from a markdown-like blob.

    A missing or empty blob yields a section with zero blocks, which the
    flow engine skips.
    """
    blocks = tuple(block_for_line(line) for line in split_lines(text))
    return Section(title=title, blocks=blocks, show_heading=False)


def compose_qa_entry(question: InterviewQuestion) -> QAEntry:
    """
    Convert a question record to a QAEntry.

    Fence lines are removed from the answer. Missing fields stay missing;
    the flow engine renders whatever is present.
    """
    return QAEntry(
        subcategory=question.subcategory or None,
        question=question.question,
        answer_lines=strip_fences(split_lines(question.answer)),
        has_code_example=question.has_code_example,
    )


def compose_category(category: str, questions: Sequence[InterviewQuestion]) -> Section:
    """Build the "<category> Questions" section, one entry per question."""
    return Section(
        title=f"{category}{CATEGORY_SECTION_SUFFIX}",
        blocks=tuple(compose_qa_entry(q) for q in questions),
        show_heading=True,
    )


def compose_guide(
    questions: QuestionMap,
    introduction: Optional[str],
    final_tips: Optional[str],
) -> Document:
    """
    Compose the full guide Document.

    Section order: Introduction, one section per category in mapping order,
    Final Tips & Resources. Nothing is re-sorted.

    Args:
        questions: Ordered category -> questions mapping
        introduction: Introduction blob (may be empty)
        final_tips: Final tips blob (may be empty)

    Returns:
        Immutable Document

    Example:
        >>> doc = compose_guide({"Core Java": [q1, q2]}, "", "")
        >>> doc.toc_entries()
        ['1. Introduction', '2. Core Java Questions', '3. Final Tips & Resources']
    """
    sections = [narrative_section(INTRODUCTION_TITLE, introduction)]
    for category, items in questions.items():
        sections.append(compose_category(category, items))
        logger.debug(f"Composed {len(items)} entries for {category!r}")
    sections.append(narrative_section(FINAL_TIPS_TITLE, final_tips))

    document = Document(sections=tuple(sections))
    logger.info(
        f"Composed guide with {len(document.sections)} sections "
        f"and {document.question_count} questions"
    )
    return document


def build_title_meta(
    job: JobDescription,
    document: Document,
    generated_at: Optional[datetime] = None,
) -> TitlePageMeta:
    """Collect title page data; the placeholder organization is dropped."""
    return TitlePageMeta(
        job_title=job.title,
        organization=job.company if job.has_known_company else None,
        generated_at=generated_at or datetime.now(),
        question_count=document.question_count,
    )

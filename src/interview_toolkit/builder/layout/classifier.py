"""
Module: builder.layout.classifier

Purpose:
    Decide, per answer line, whether it is source code or prose.
    Line-local heuristic with no memory of earlier lines; false positives
    ("This explains public fields.") are accepted.

Key Functions:
    - is_fence(): Fence marker detection
    - strip_fences(): Drop fence lines
    - is_code_line(): Single-line decision
    - classify_answer(): (line, is_code) pairs for a QAEntry

Dependencies:
    - builder.layout.models: QAEntry

Used By:
    - builder.layout.composer: Fence removal when building QAEntry
    - builder.layout.paginator: Answer line styling
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from interview_toolkit.core.models.questions import FENCE_MARKER

from .models import QAEntry

CODE_INDENT = "    "
CODE_MARKERS = ("public ", "private ", "class ", "interface ", "enum ")


def is_fence(line: str) -> bool:
    """True for a code fence delimiter line (after trimming)."""
    return line.strip().startswith(FENCE_MARKER)


def strip_fences(lines: Iterable[str]) -> tuple[str, ...]:
    """Remove fence delimiter lines, keeping order."""
    return tuple(line for line in lines if not is_fence(line))


def is_code_line(line: str, has_code_example: bool) -> bool:
    """
    Classify one answer line.

    Args:
        line: Untrimmed answer line
        has_code_example: Whether the question carries a code example

    Returns:
        True when the line should be drawn as code

    Example:
        >>> is_code_line("    int x = 5;", True)
        True
        >>> is_code_line("This explains public fields.", False)
        False
    """
    if not has_code_example:
        return False
    if line.startswith(CODE_INDENT):
        return True
    return any(marker in line for marker in CODE_MARKERS)


def classify_answer(entry: QAEntry) -> List[Tuple[str, bool]]:
    """
    Classify every drawable answer line of an entry.

    Fence lines are skipped here too, so entries built by hand behave the
    same as composed ones.
    """
    return [
        (line, is_code_line(line, entry.has_code_example))
        for line in entry.answer_lines
        if not is_fence(line)
    ]

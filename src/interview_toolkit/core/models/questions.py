"""
Module: questions

Purpose:
    Provides the InterviewQuestion dataclass and the QuestionMap alias - the
    contract between the question supply and the guide builder.

Key Functions:
    - extract_code_example(): Pull the first fenced code excerpt from an answer
    - total_question_count(): Count questions across categories

Key Classes:
    - InterviewQuestion: One question/answer record

Dependencies:
    - dataclasses (std)

Used By:
    - questions.catalog, questions.generator: Produce questions
    - builder.layout.composer: Converts questions to QAEntry blocks
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

FENCE_MARKER = "```"


@dataclass(frozen=True)
class InterviewQuestion:
    """
    Interview question with its answer (immutable).

    Question and answer are Optional: the generator occasionally returns
    partial records, and the layout renders whatever is present.

    Attributes:
        category: Category name like "Core Java"
        subcategory: Optional label like "Collections"
        question: Question text
        answer: Multi-line answer text, may contain fenced code
        code_example: Code excerpt when the answer carries one
        difficulty: 1-5 scale

    Example:
        >>> q = InterviewQuestion("Core Java", "OOP", "What is OOP?", "...")
        >>> q.has_code_example
        False
    """

    category: str
    subcategory: Optional[str]
    question: Optional[str]
    answer: Optional[str]
    code_example: Optional[str] = None
    difficulty: int = 3

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not (1 <= self.difficulty <= 5):
            raise ValueError(f"difficulty must be 1-5: {self.difficulty}")

    @property
    def has_code_example(self) -> bool:
        return bool(self.code_example)

    @classmethod
    def with_detected_code(
        cls,
        category: str,
        subcategory: Optional[str],
        question: Optional[str],
        answer: Optional[str],
        difficulty: int = 3,
    ) -> InterviewQuestion:
        """Build a question whose code_example is taken from the answer's fences."""
        return cls(
            category=category,
            subcategory=subcategory,
            question=question,
            answer=answer,
            code_example=extract_code_example(answer),
            difficulty=difficulty,
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        d = {
            "category": self.category,
            "subcategory": self.subcategory,
            "question": self.question,
            "answer": self.answer,
            "difficulty": self.difficulty,
        }
        if self.code_example:
            d["code_example"] = self.code_example
        return d

    @classmethod
    def from_dict(cls, data: dict) -> InterviewQuestion:
        """Deserialize from dictionary."""
        return cls(
            category=data["category"],
            subcategory=data.get("subcategory"),
            question=data.get("question"),
            answer=data.get("answer"),
            code_example=data.get("code_example"),
            difficulty=data.get("difficulty", 3),
        )

    def __repr__(self) -> str:
        return (
            f"InterviewQuestion(category={self.category!r}, "
            f"subcategory={self.subcategory!r}, question={self.question!r})"
        )


# Category name -> ordered questions. Dict insertion order is display order.
QuestionMap = Dict[str, List[InterviewQuestion]]


def extract_code_example(answer: Optional[str]) -> Optional[str]:
    """
    Return the body of the first fenced code block in an answer.

    Args:
        answer: Answer text, possibly None

    Returns:
        Code between the first pair of fence lines, or None

    Example:
        >>> extract_code_example("Intro\\n```java\\nint x;\\n```")
        'int x;'
    """
    if not answer:
        return None

    inside = False
    collected: List[str] = []
    for line in answer.split("\n"):
        if line.strip().startswith(FENCE_MARKER):
            if inside:
                break
            inside = True
            continue
        if inside:
            collected.append(line)

    code = "\n".join(collected).strip("\n")
    return code or None


def total_question_count(questions: QuestionMap) -> int:
    """Count questions across all categories."""
    return sum(len(items) for items in questions.values())

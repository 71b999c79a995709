"""
Module: job

Purpose:
    Provides the JobDescription dataclass - the normalized record produced by
    the job description parsers and consumed by the question supply and the
    guide builder.

Key Classes:
    - JobDescription: Title, organization, skills, responsibilities,
      technologies

Dependencies:
    - dataclasses (std)

Used By:
    - sources.parser: Builds JobDescription from files
    - questions.supply: Category selection
    - builder.narrative: Introduction text
    - builder.layout.composer: Title page metadata
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


UNKNOWN_COMPANY = "Unknown Company"
DEFAULT_JOB_TITLE = "Java Developer"


@dataclass(frozen=True)
class JobDescription:
    """
    Normalized job description (immutable).

    Attributes:
        title: Job title like "Senior Java Developer"
        company: Hiring organization, None or UNKNOWN_COMPANY when unknown
        skills: Required skills in document order
        responsibilities: Responsibilities in document order
        technologies: Technologies in document order
        description: Raw source text

    Example:
        >>> jd = JobDescription(title="Java Developer", skills=("Spring",))
        >>> jd.has_known_company
        False
    """

    title: str
    company: Optional[str] = None
    skills: tuple[str, ...] = ()
    responsibilities: tuple[str, ...] = ()
    technologies: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        """Validate job description on construction."""
        if not self.title or not self.title.strip():
            raise ValueError("title must be non-empty")

    @property
    def has_known_company(self) -> bool:
        """True when the organization is present and not the placeholder."""
        return bool(self.company) and self.company != UNKNOWN_COMPANY

    @property
    def all_skills(self) -> tuple[str, ...]:
        """Skills followed by technologies, in order."""
        return self.skills + self.technologies

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {
            "title": self.title,
            "company": self.company,
            "skills": list(self.skills),
            "responsibilities": list(self.responsibilities),
            "technologies": list(self.technologies),
        }

    def __repr__(self) -> str:
        return (
            f"JobDescription({self.title!r}, company={self.company!r}, "
            f"skills={len(self.skills)}, technologies={len(self.technologies)})"
        )

"""
Core Models Package

| Model | Produced by | Consumed by |
|-------|-------------|-------------|
| `JobDescription` | `sources` parsers | question supply, narrative, title page |
| `InterviewQuestion` | catalog / AI generator | block model builder |
| `QuestionMap` | question supply | block model builder |
"""

from .job import JobDescription, UNKNOWN_COMPANY, DEFAULT_JOB_TITLE
from .questions import (
    InterviewQuestion,
    QuestionMap,
    extract_code_example,
    total_question_count,
)

__all__ = [
    "JobDescription",
    "UNKNOWN_COMPANY",
    "DEFAULT_JOB_TITLE",
    "InterviewQuestion",
    "QuestionMap",
    "extract_code_example",
    "total_question_count",
]

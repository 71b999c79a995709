"""
Interview Toolkit Core Package

Shared, immutable data models passed between the content sources, the
question supply and the guide builder.

All models are frozen dataclasses:
1. No accidental mutation while a guide is being built
2. Safe to hand across the question generator's worker threads
3. A built Document never changes during layout
"""

from .models import JobDescription, InterviewQuestion, QuestionMap, UNKNOWN_COMPANY

__all__ = [
    "JobDescription",
    "InterviewQuestion",
    "QuestionMap",
    "UNKNOWN_COMPANY",
]

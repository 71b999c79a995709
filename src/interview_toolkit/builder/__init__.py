"""
Module: builder

Purpose:
    Guide building pipeline: narrative text, block composition, page flow
    and PDF output, orchestrated by build_guide().

Key Functions:
    - build_guide(): Main entry point for guide generation

Key Classes:
    - GuideConfig: Configuration for building
    - BuildResult: Build outcome
    - BuildError: Exception for build failures

Dependencies:
    - reportlab: PDF generation
    - interview_toolkit.core.models: Job description and question models

Used By:
    - interview_toolkit.__main__: CLI
"""

from .config import GuideConfig, DEFAULT_JOB_DESCRIPTION
from .controller import build_guide, BuildResult, BuildError
from .narrative import introduction_text, final_tips_text

__all__ = [
    # Config
    "GuideConfig",
    "DEFAULT_JOB_DESCRIPTION",
    # Narrative
    "introduction_text",
    "final_tips_text",
    # Controller
    "build_guide",
    "BuildResult",
    "BuildError",
]

"""
Module: builder.config

Purpose:
    Configuration dataclass for the guide building pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - GuideConfig: Main configuration for building a guide

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main build controller
    - interview_toolkit.__main__: CLI
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from interview_toolkit.builder.layout.config import LayoutConfig
from interview_toolkit.questions.generator import GeneratorConfig

DEFAULT_JOB_DESCRIPTION = Path(__file__).resolve().parent.parent / "data" / "default_jd.txt"


@dataclass(frozen=True)
class GuideConfig:
    """
    Configuration for building an interview guide (immutable).

    Attributes:
        job_description_path: .txt, .json or .yaml job description; a missing
            file falls back to the bundled default description
        additional_skills: Comma-separated extra skills for category
            selection
        use_ai: Try networked generation before the catalog
        generator: Generator endpoint and limits
        seed: Random seed for catalog sampling, None for a fresh draw
        output_dir: Directory receiving the guide and metadata
        write_metadata: Also write build_metadata.json
        dry_run: Record draw instructions as JSON instead of a PDF
        show_footer: Draw the version footer on every page
        layout: Page geometry and fonts

    Example:
        >>> config = GuideConfig(
        ...     job_description_path=Path("jd.txt"),
        ...     additional_skills="Kafka, Redis",
        ...     output_dir=Path("output"),
        ... )
    """

    job_description_path: Optional[Path] = None
    additional_skills: Optional[str] = None

    # Question source
    use_ai: bool = False
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    seed: Optional[int] = None

    # Output
    output_dir: Path = Path("output")
    write_metadata: bool = True
    dry_run: bool = False
    show_footer: bool = False

    # Layout
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative: {self.seed}")
        if self.job_description_path is not None and not isinstance(self.job_description_path, Path):
            object.__setattr__(self, "job_description_path", Path(self.job_description_path))
        if not isinstance(self.output_dir, Path):
            object.__setattr__(self, "output_dir", Path(self.output_dir))

    @property
    def resolved_job_description(self) -> Path:
        """The configured job description, or the bundled default when missing."""
        if self.job_description_path is not None and self.job_description_path.exists():
            return self.job_description_path
        return DEFAULT_JOB_DESCRIPTION

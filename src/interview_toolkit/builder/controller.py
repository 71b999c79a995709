"""
Module: builder.controller

Purpose:
    Orchestrate the complete guide building pipeline.
    Parse → Supply questions → Compose → Flow → Render

Key Functions:
    - build_guide(): Main entry point for building a guide

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - interview_toolkit.sources: Job description parsing
    - interview_toolkit.questions: Question supply
    - builder.layout: Composition and pagination
    - builder.output: PDF rendering

Used By:
    - interview_toolkit.__main__: CLI
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from interview_toolkit.core.models import JobDescription, QuestionMap, total_question_count
from interview_toolkit.questions import (
    CatalogError,
    OllamaQuestionGenerator,
    QuestionCatalog,
    QuestionSupply,
)
from interview_toolkit.sources import ParseError, parse_job_description

from .config import GuideConfig
from .layout import LayoutResult, build_title_meta, compose_guide, flow_document
from .layout.title import GUIDE_TITLE
from .narrative import final_tips_text, introduction_text
from .output import PdfCanvasBackend, RecordingBackend, RenderError

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "interview_guide_"
METADATA_FILENAME = "build_metadata.json"


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        output_path: Generated PDF (or JSON instruction record on dry runs)
        job: Parsed job description
        question_count: Questions in the guide
        categories: Category names in display order
        page_count: Number of pages generated
        source: "generator" or "catalog"
        metadata: Build metadata dictionary
        metadata_path: build_metadata.json, when written
        warnings: Any warnings during build

    Example:
        >>> result = build_guide(config)
        >>> print(f"Generated {result.page_count} pages with {result.question_count} questions")
    """
    output_path: Path
    job: JobDescription
    question_count: int
    categories: tuple[str, ...]
    page_count: int
    source: str
    metadata: dict
    metadata_path: Optional[Path]
    warnings: tuple[str, ...]


def build_guide(config: GuideConfig, *, generated_at: Optional[datetime] = None) -> BuildResult:
    """
    Build an interview guide from start to finish.

    Pipeline:
    1. Parse the job description (bundled default when the file is missing)
    2. Supply questions (generator first when enabled, else catalog)
    3. Compose the block model
    4. Flow blocks onto pages through the render backend
    5. Save interview_guide_<yyyyMMdd_HHmmss>.pdf
    6. (Optional) Write build_metadata.json

    Args:
        config: Build configuration
        generated_at: Build timestamp, defaults to now

    Returns:
        BuildResult with paths and metadata

    Raises:
        BuildError: If any step fails

    Example:
        >>> config = GuideConfig(
        ...     job_description_path=Path("jd.txt"),
        ...     output_dir=Path("output"),
        ...     seed=7,
        ... )
        >>> result = build_guide(config)
        >>> print(f"Generated {result.page_count} pages")
    """
    warnings: List[str] = []
    start_time = time.perf_counter()
    generated_at = generated_at or datetime.now()

    # 1. Parse job description
    jd_path = config.resolved_job_description
    if config.job_description_path is not None and jd_path != config.job_description_path:
        message = f"Job description {config.job_description_path} not found, using default"
        logger.warning(message)
        warnings.append(message)

    try:
        job = parse_job_description(jd_path)
    except ParseError as e:
        raise BuildError(f"Failed to parse job description: {e}") from e

    logger.info(f"Starting build for {job.title!r}")

    # 2. Supply questions
    supply = _make_supply(config)
    try:
        questions = supply.questions_for(job, config.additional_skills)
    finally:
        if supply.generator is not None:
            supply.generator.close()

    if total_question_count(questions) == 0:
        message = "No questions available for this job description; building narrative pages only"
        logger.warning(message)
        warnings.append(message)
    logger.info(f"Using {total_question_count(questions)} questions from the {supply.last_source}")

    # 3. Compose
    document = compose_guide(questions, introduction_text(job), final_tips_text())
    meta = build_title_meta(job, document, generated_at)

    # 4. Flow onto pages
    if config.dry_run:
        backend = RecordingBackend()
        suffix = ".json"
    else:
        backend = PdfCanvasBackend(title=f"{GUIDE_TITLE} - {job.title}", show_footer=config.show_footer)
        suffix = ".pdf"

    try:
        layout = flow_document(document, meta, backend, config.layout)
    except RenderError as e:
        raise BuildError(f"Failed to lay out guide: {e}") from e
    warnings.extend(layout.warnings)
    logger.info(f"Paginated onto {layout.page_count} pages")

    # 5. Save
    output_path = config.output_dir / f"{OUTPUT_PREFIX}{generated_at:%Y%m%d_%H%M%S}{suffix}"
    try:
        backend.save(output_path)
    except RenderError as e:
        raise BuildError(f"Failed to save guide: {e}") from e
    logger.info(f"Rendered guide: {output_path}")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Guide generation completed in {elapsed:.2f}s")

    # 6. Metadata
    metadata = _build_metadata(config, job, questions, layout, supply.last_source, generated_at, warnings)
    metadata_path = None
    if config.write_metadata:
        metadata_path = _write_metadata(config.output_dir, metadata)
        logger.info(f"Wrote build metadata to {metadata_path}")

    return BuildResult(
        output_path=output_path,
        job=job,
        question_count=total_question_count(questions),
        categories=tuple(questions),
        page_count=layout.page_count,
        source=supply.last_source,
        metadata=metadata,
        metadata_path=metadata_path,
        warnings=tuple(warnings),
    )


def _make_supply(config: GuideConfig) -> QuestionSupply:
    try:
        catalog = QuestionCatalog(seed=config.seed)
    except CatalogError as e:
        raise BuildError(f"Failed to load question bank: {e}") from e

    generator = OllamaQuestionGenerator(config.generator) if config.use_ai else None
    return QuestionSupply(catalog, generator, minimum_yield=config.generator.minimum_yield)


def _build_metadata(
    config: GuideConfig,
    job: JobDescription,
    questions: QuestionMap,
    layout: LayoutResult,
    source: str,
    generated_at: datetime,
    warnings: List[str],
) -> dict:
    """
    Build metadata dictionary for a generated guide.

    Example:
        >>> metadata = _build_metadata(config, job, questions, layout, "catalog", now, [])
        >>> metadata["question_count"]
        100
    """
    from interview_toolkit import __version__

    return {
        "generated_at": generated_at.isoformat(),
        "builder_version": __version__,
        "job": job.to_dict(),
        "additional_skills": config.additional_skills,
        "source": source,
        "seed": config.seed,
        "question_count": total_question_count(questions),
        "page_count": layout.page_count,
        "categories": {category: len(items) for category, items in questions.items()},
        "warnings": list(warnings),
    }


def _write_metadata(output_dir: Path, metadata: dict) -> Path:
    """
    Write metadata JSON file to output directory.

    Raises:
        BuildError: If writing fails
    """
    metadata_path = output_dir / METADATA_FILENAME

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(metadata_path, "w") as f:
            json.dump(metadata, f, indent=2)
    except OSError as e:
        raise BuildError(f"Failed to write metadata: {e}") from e
    return metadata_path

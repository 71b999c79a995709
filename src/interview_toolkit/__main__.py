"""
Command line entry point.

    python -m interview_toolkit jd.txt --skills "Kafka, Redis" --output-dir output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from interview_toolkit import __version__
from interview_toolkit.builder import BuildError, GuideConfig, build_guide
from interview_toolkit.questions import GeneratorConfig

logger = logging.getLogger("interview_toolkit")


def _build_parser() -> argparse.ArgumentParser:
    defaults = GeneratorConfig()
    parser = argparse.ArgumentParser(
        prog="interview_toolkit",
        description="Generate a technical interview guide PDF from a job description",
    )
    parser.add_argument(
        "job_description",
        nargs="?",
        type=Path,
        help="Job description file (.txt, .json, .yaml); defaults to a bundled sample",
    )
    parser.add_argument("--skills", default=None, help="Additional comma-separated skills")
    parser.add_argument(
        "--ai",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Generate questions with a local Ollama model before using the catalog",
    )
    parser.add_argument("--output-dir", type=Path, default=Path("output"), help="Output directory")
    parser.add_argument("--ollama-url", default=defaults.base_url, help="Ollama server URL")
    parser.add_argument("--model", default=defaults.model, help="Ollama model tag")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for catalog sampling")
    parser.add_argument("--no-metadata", action="store_true", help="Skip build_metadata.json")
    parser.add_argument("--dry-run", action="store_true", help="Write draw instructions as JSON")
    parser.add_argument("--footer", action="store_true", help="Draw a version footer on every page")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = GuideConfig(
            job_description_path=args.job_description,
            additional_skills=args.skills,
            use_ai=args.ai,
            generator=GeneratorConfig(base_url=args.ollama_url, model=args.model),
            seed=args.seed,
            output_dir=args.output_dir,
            write_metadata=not args.no_metadata,
            dry_run=args.dry_run,
            show_footer=args.footer,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    try:
        result = build_guide(config)
    except BuildError as e:
        logger.error(f"Build failed: {e}")
        return 1

    print(f"Interview guide generated: {result.output_path.resolve()}")
    print(f"{result.question_count} questions on {result.page_count} pages")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Module: questions.supply

Purpose:
    Choose where a guide's questions come from. Networked generation is
    tried first when enabled; the offline catalog is used when generation
    is disabled, fails, or yields too few questions.

Key Classes:
    - QuestionSupply: Generator-then-catalog selection

Dependencies:
    - questions.catalog: QuestionCatalog
    - questions.generator: OllamaQuestionGenerator

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
from typing import Optional

from interview_toolkit.core.models import JobDescription, QuestionMap, total_question_count

from .catalog import MINIMUM_TOTAL, QuestionCatalog
from .generator import GenerationError, OllamaQuestionGenerator

logger = logging.getLogger(__name__)


class QuestionSupply:
    """
    Question source selection.

    Args:
        catalog: Offline catalog, always available
        generator: Networked generator, None to disable generation
        minimum_yield: Fewest generated questions accepted

    Example:
        >>> supply = QuestionSupply(QuestionCatalog(seed=1))
        >>> questions = supply.questions_for(job, "Kafka, Redis")
    """

    def __init__(
        self,
        catalog: QuestionCatalog,
        generator: Optional[OllamaQuestionGenerator] = None,
        minimum_yield: int = MINIMUM_TOTAL,
    ) -> None:
        self.catalog = catalog
        self.generator = generator
        self.minimum_yield = minimum_yield
        self.last_source: Optional[str] = None

    def questions_for(
        self,
        job: JobDescription,
        additional_skills: Optional[str] = None,
    ) -> QuestionMap:
        """
        Questions for a job description, by category in display order.

        Additional skills only influence the catalog; generation works from
        the job description alone.
        """
        if self.generator is not None:
            generated = self._try_generate(job)
            if generated is not None:
                self.last_source = "generator"
                return generated

        self.last_source = "catalog"
        return self.catalog.questions_for(job, additional_skills)

    def _try_generate(self, job: JobDescription) -> Optional[QuestionMap]:
        try:
            generated = self.generator.generate(job)
        except GenerationError as e:
            logger.warning(f"Error generating questions: {e}. Falling back to catalog.")
            return None

        total = total_question_count(generated)
        if total >= self.minimum_yield:
            logger.info(f"Generated {total} questions")
            return generated

        logger.warning(
            f"Generator produced only {total} questions "
            f"(minimum {self.minimum_yield}). Falling back to catalog."
        )
        return None

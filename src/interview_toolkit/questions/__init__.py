"""
Module: questions

Purpose:
    Question sources for interview guides: the offline catalog, the
    Ollama-backed generator and the supply that chooses between them.

Key Classes:
    - QuestionCatalog: Curated + templated questions
    - OllamaQuestionGenerator: Networked generation
    - QuestionSupply: Source selection

Used By:
    - builder.controller: Main build controller
"""

from .catalog import (
    CATEGORY_RULES,
    MINIMUM_TOTAL,
    CatalogError,
    CategoryRule,
    QuestionCatalog,
    load_question_bank,
    split_skills,
)
from .generator import (
    GenerationError,
    GeneratorConfig,
    OllamaQuestionGenerator,
    parse_generated_questions,
)
from .supply import QuestionSupply

__all__ = [
    "CATEGORY_RULES",
    "MINIMUM_TOTAL",
    "CatalogError",
    "CategoryRule",
    "QuestionCatalog",
    "load_question_bank",
    "split_skills",
    "GenerationError",
    "GeneratorConfig",
    "OllamaQuestionGenerator",
    "parse_generated_questions",
    "QuestionSupply",
]

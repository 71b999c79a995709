"""
Tests for question source selection.
"""

import pytest

from interview_toolkit.core.models import InterviewQuestion
from interview_toolkit.questions import GenerationError, QuestionCatalog, QuestionSupply


class StubGenerator:
    """Generator double returning a fixed map or raising."""

    def __init__(self, result=None, error=None):
        self.result = result or {}
        self.error = error
        self.calls = 0

    def generate(self, job):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def generated(count):
    return {"Core Java": [InterviewQuestion("Core Java", "OOP", f"Q{i}", "A") for i in range(count)]}


@pytest.fixture
def catalog():
    return QuestionCatalog(seed=5)


class TestQuestionSupply:

    def test_supply_when_no_generator_then_catalog(self, catalog, sample_job):
        supply = QuestionSupply(catalog)

        result = supply.questions_for(sample_job)

        assert supply.last_source == "catalog"
        assert sum(len(v) for v in result.values()) >= 100

    def test_supply_when_generator_yields_enough_then_used(self, catalog, sample_job):
        # Arrange
        stub = StubGenerator(result=generated(100))
        supply = QuestionSupply(catalog, generator=stub)

        # Act
        result = supply.questions_for(sample_job)

        # Assert
        assert supply.last_source == "generator"
        assert result is stub.result

    def test_supply_when_generator_short_then_catalog(self, catalog, sample_job):
        supply = QuestionSupply(catalog, generator=StubGenerator(result=generated(99)))

        result = supply.questions_for(sample_job)

        assert supply.last_source == "catalog"
        assert len(result) > 1

    def test_supply_when_generator_raises_then_catalog(self, catalog, sample_job, caplog):
        stub = StubGenerator(error=GenerationError("unreachable"))
        supply = QuestionSupply(catalog, generator=stub)

        supply.questions_for(sample_job)

        assert stub.calls == 1
        assert supply.last_source == "catalog"
        assert "Falling back to catalog" in caplog.text

    def test_supply_when_custom_minimum_then_respected(self, catalog, sample_job):
        supply = QuestionSupply(catalog, generator=StubGenerator(result=generated(10)), minimum_yield=10)

        supply.questions_for(sample_job)

        assert supply.last_source == "generator"

    def test_supply_when_additional_skills_then_passed_to_catalog(self, catalog, sample_job):
        supply = QuestionSupply(catalog)

        result = supply.questions_for(sample_job, additional_skills="REST")

        assert "REST API & Microservices" in result

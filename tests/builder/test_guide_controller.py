"""
Tests for the build controller.

Dry runs record draw instructions as JSON so most tests never touch
ReportLab; one test renders a real PDF.
"""

import json

import pytest

from interview_toolkit.builder import BuildError, GuideConfig, build_guide
from interview_toolkit.builder import controller
from interview_toolkit.core.models import InterviewQuestion
from interview_toolkit.questions import GeneratorConfig, QuestionCatalog


@pytest.fixture
def dry_config(tmp_path):
    return GuideConfig(output_dir=tmp_path / "out", dry_run=True, seed=7)


class StubGenerator:
    """Stands in for OllamaQuestionGenerator inside the controller."""

    instances = []

    def __init__(self, config):
        self.config = config
        self.closed = False
        StubGenerator.instances.append(self)

    def generate(self, job):
        return {
            "Core Java": [
                InterviewQuestion("Core Java", "OOP", f"Generated {i}?", "Answer") for i in range(100)
            ]
        }

    def close(self):
        self.closed = True


class EmptyGenerator(StubGenerator):
    """Generator that answers every category with nothing."""

    def generate(self, job):
        return {}


class TestBuildGuide:

    def test_build_when_dry_run_then_json_record_and_metadata(self, dry_config, generated_at):
        # Act
        result = build_guide(dry_config, generated_at=generated_at)

        # Assert
        assert result.output_path == dry_config.output_dir / "interview_guide_20261018_093015.json"
        assert result.output_path.exists()
        assert result.metadata_path == dry_config.output_dir / "build_metadata.json"
        assert result.source == "catalog"
        assert result.question_count >= 100

        recorded = json.loads(result.output_path.read_text())
        assert len(recorded["pages"]) == result.page_count

    def test_build_when_done_then_every_question_has_page(self, dry_config, generated_at):
        result = build_guide(dry_config, generated_at=generated_at)

        # Title, contents, introduction, one page per question, final tips
        assert result.page_count >= result.question_count + 4

    def test_build_when_metadata_then_counts_match(self, dry_config, generated_at):
        # Act
        result = build_guide(dry_config, generated_at=generated_at)
        metadata = json.loads(result.metadata_path.read_text())

        # Assert
        assert metadata["generated_at"] == "2026-10-18T09:30:15"
        assert metadata["question_count"] == result.question_count
        assert sum(metadata["categories"].values()) == result.question_count
        assert list(metadata["categories"]) == list(result.categories)
        assert metadata["page_count"] == result.page_count
        assert metadata["seed"] == 7
        assert metadata["job"]["title"] == "Senior Java Developer"

    def test_build_when_same_seed_twice_then_identical_output(self, tmp_path, generated_at):
        # Arrange
        first = GuideConfig(output_dir=tmp_path / "a", dry_run=True, seed=11)
        second = GuideConfig(output_dir=tmp_path / "b", dry_run=True, seed=11)

        # Act
        a = build_guide(first, generated_at=generated_at)
        b = build_guide(second, generated_at=generated_at)

        # Assert
        assert a.output_path.read_text() == b.output_path.read_text()

    def test_build_when_no_metadata_then_not_written(self, tmp_path, generated_at):
        config = GuideConfig(output_dir=tmp_path, dry_run=True, write_metadata=False)

        result = build_guide(config, generated_at=generated_at)

        assert result.metadata_path is None
        assert not (tmp_path / "build_metadata.json").exists()

    def test_build_when_job_description_missing_then_default_with_warning(self, tmp_path, generated_at):
        config = GuideConfig(job_description_path=tmp_path / "missing.txt", output_dir=tmp_path, dry_run=True)

        result = build_guide(config, generated_at=generated_at)

        assert result.job.title == "Senior Java Developer"
        assert any("not found, using default" in w for w in result.warnings)

    def test_build_when_job_description_given_then_parsed(self, write_file, tmp_path, generated_at):
        # Arrange
        path = write_file("jd.json", json.dumps({
            "title": "Platform Engineer",
            "company": "Globex",
            "skills": ["Java"],
            "technologies": ["AWS"],
        }))
        config = GuideConfig(job_description_path=path, output_dir=tmp_path / "out", dry_run=True)

        # Act
        result = build_guide(config, generated_at=generated_at)

        # Assert
        assert result.job.company == "Globex"
        assert "Cloud & Containerization" in result.categories
        recorded = json.loads(result.output_path.read_text())
        title_texts = [p[4] for p in recorded["pages"][0]["placements"]]
        assert "at Globex" in title_texts

    def test_build_when_additional_skills_then_category_added(self, write_file, tmp_path, generated_at):
        path = write_file("jd.txt", "Job Title: Java Developer\n")
        config = GuideConfig(
            job_description_path=path,
            additional_skills="Kafka, REST",
            output_dir=tmp_path / "out",
            dry_run=True,
        )

        result = build_guide(config, generated_at=generated_at)

        assert "REST API & Microservices" in result.categories

    def test_build_when_unsupported_extension_then_build_error(self, write_file, tmp_path):
        path = write_file("jd.pdf", "binary")
        config = GuideConfig(job_description_path=path, output_dir=tmp_path, dry_run=True)

        with pytest.raises(BuildError, match="parse job description"):
            build_guide(config)

    def test_build_when_invalid_json_then_build_error(self, write_file, tmp_path):
        path = write_file("jd.json", "{oops")
        config = GuideConfig(job_description_path=path, output_dir=tmp_path, dry_run=True)

        with pytest.raises(BuildError):
            build_guide(config)

    def test_build_when_catalog_empty_then_narrative_only_guide(self, dry_config, generated_at, monkeypatch):
        monkeypatch.setattr(QuestionCatalog, "questions_for", lambda self, job, skills=None: {})

        result = build_guide(dry_config, generated_at=generated_at)

        assert result.question_count == 0
        assert any("No questions available" in w for w in result.warnings)

    def test_build_when_generator_returns_nothing_then_guide_still_built(
        self, tmp_path, generated_at, monkeypatch
    ):
        # Arrange
        monkeypatch.setattr(controller, "OllamaQuestionGenerator", EmptyGenerator)
        config = GuideConfig(
            use_ai=True,
            generator=GeneratorConfig(minimum_yield=0),
            output_dir=tmp_path,
            dry_run=True,
        )

        # Act
        result = build_guide(config, generated_at=generated_at)

        # Assert
        assert result.source == "generator"
        assert result.categories == ()
        assert result.output_path.exists()
        recorded = json.loads(result.output_path.read_text())
        first_texts = [page["placements"][0][4] for page in recorded["pages"]]
        assert first_texts[:3] == [
            "Technical Interview Guide",
            "Table of Contents",
            "Technical Interview Guide for Senior Java Developer",
        ]
        assert "Final Tips & Resources" in first_texts
        metadata = json.loads(result.metadata_path.read_text())
        assert any("No questions available" in w for w in metadata["warnings"])

    def test_build_when_output_dir_unwritable_then_build_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        config = GuideConfig(output_dir=blocker / "out", dry_run=True)

        with pytest.raises(BuildError, match="save guide"):
            build_guide(config)

    def test_build_when_ai_enabled_then_generator_used_and_closed(self, tmp_path, generated_at, monkeypatch):
        # Arrange
        StubGenerator.instances.clear()
        monkeypatch.setattr(controller, "OllamaQuestionGenerator", StubGenerator)
        config = GuideConfig(use_ai=True, output_dir=tmp_path, dry_run=True)

        # Act
        result = build_guide(config, generated_at=generated_at)

        # Assert
        assert result.source == "generator"
        assert result.categories == ("Core Java",)
        assert result.question_count == 100
        assert StubGenerator.instances[0].closed is True

    def test_build_when_pdf_then_file_written(self, tmp_path, generated_at):
        config = GuideConfig(output_dir=tmp_path, seed=1)

        result = build_guide(config, generated_at=generated_at)

        assert result.output_path.name == "interview_guide_20261018_093015.pdf"
        assert result.output_path.read_bytes().startswith(b"%PDF")

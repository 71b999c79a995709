import pytest
import sys
from datetime import datetime
from pathlib import Path

# Add src to sys.path so we can import interview_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from interview_toolkit.builder.layout import LayoutConfig  # noqa: E402
from interview_toolkit.core.models import InterviewQuestion, JobDescription  # noqa: E402


# Common test fixtures
@pytest.fixture
def layout_config():
    """Default A4 layout with a 50pt margin."""
    return LayoutConfig()


@pytest.fixture
def generated_at():
    """Fixed build timestamp."""
    return datetime(2026, 10, 18, 9, 30, 15)


@pytest.fixture
def sample_job():
    """Job description with a known organization."""
    return JobDescription(
        title="Senior Java Developer",
        company="Acme Corp",
        skills=("Java 17", "Spring Boot", "PostgreSQL"),
        responsibilities=("Build services",),
        technologies=("Java", "Spring Boot", "Docker"),
    )


@pytest.fixture
def make_question():
    """Factory for InterviewQuestion records."""
    def _create(
        question: str = "What is a HashMap?",
        answer: str = "A hash table backed map.",
        category: str = "Core Java",
        subcategory: str = "Collections",
    ):
        return InterviewQuestion.with_detected_code(category, subcategory, question, answer)
    return _create


@pytest.fixture
def write_file(tmp_path: Path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write

"""
Tests for Document composition.
"""

from datetime import datetime

from interview_toolkit.builder.layout import (
    Bullet,
    Heading,
    Paragraph,
    QAEntry,
    build_title_meta,
    compose_guide,
)
from interview_toolkit.builder.layout.composer import compose_qa_entry, narrative_section, split_lines
from interview_toolkit.core.models import InterviewQuestion, JobDescription, UNKNOWN_COMPANY


class TestSplitLines:

    def test_split_when_crlf_then_normalized(self):
        assert split_lines("a\r\nb") == ["a", "b"]

    def test_split_when_trailing_newlines_then_dropped(self):
        assert split_lines("a\n\nb\n\n") == ["a", "", "b"]

    def test_split_when_empty_or_none_then_empty(self):
        assert split_lines("") == []
        assert split_lines(None) == []


class TestNarrativeSection:

    def test_narrative_when_markdown_then_one_block_per_line(self):
        # Act
        section = narrative_section("Introduction", "# Title\n\n## About\n- Java\nText")

        # Assert
        assert section.show_heading is False
        assert section.blocks == (
            Heading(1, "Title"),
            Paragraph(""),
            Heading(2, "About"),
            Bullet("Java"),
            Paragraph("Text"),
        )

    def test_narrative_when_empty_then_empty_section(self):
        assert narrative_section("Introduction", "").is_empty


class TestComposeQAEntry:

    def test_compose_when_fenced_answer_then_fences_removed(self):
        q = InterviewQuestion.with_detected_code(
            "Core Java", "Streams", "How?", "Example:\n```java\n    x();\n```"
        )

        entry = compose_qa_entry(q)

        assert entry.answer_lines == ("Example:", "    x();")
        assert entry.has_code_example is True

    def test_compose_when_blank_subcategory_then_none(self):
        q = InterviewQuestion("Core Java", "", "Q?", "A.")

        assert compose_qa_entry(q).subcategory is None

    def test_compose_when_answer_missing_then_no_lines(self):
        q = InterviewQuestion("Core Java", "OOP", "Q?", None)

        assert compose_qa_entry(q).answer_lines == ()


class TestComposeGuide:

    def test_compose_when_categories_then_order_preserved(self, make_question):
        # Arrange
        questions = {
            "Spring & Spring Boot": [make_question("S1")],
            "Core Java": [make_question("J1"), make_question("J2")],
        }

        # Act
        doc = compose_guide(questions, "# Intro", "# Tips")

        # Assert
        assert [s.title for s in doc.sections] == [
            "Introduction",
            "Spring & Spring Boot Questions",
            "Core Java Questions",
            "Final Tips & Resources",
        ]
        assert doc.sections[1].show_heading is True
        assert doc.question_count == 3
        assert all(isinstance(b, QAEntry) for b in doc.sections[2].blocks)

    def test_compose_when_narrative_empty_then_still_listed(self, make_question):
        doc = compose_guide({"Core Java": [make_question()]}, "", None)

        assert doc.toc_entries() == [
            "1. Introduction",
            "2. Core Java Questions",
            "3. Final Tips & Resources",
        ]
        assert doc.sections[0].is_empty
        assert doc.sections[-1].is_empty


class TestBuildTitleMeta:

    def test_meta_when_known_company_then_kept(self, sample_job, make_question):
        doc = compose_guide({"Core Java": [make_question()]}, "", "")
        when = datetime(2026, 10, 18)

        meta = build_title_meta(sample_job, doc, when)

        assert meta.organization == "Acme Corp"
        assert meta.job_title == "Senior Java Developer"
        assert meta.question_count == 1
        assert meta.generated_at == when

    def test_meta_when_placeholder_company_then_dropped(self):
        job = JobDescription(title="Dev", company=UNKNOWN_COMPANY)
        doc = compose_guide({}, "", "")

        assert build_title_meta(job, doc).organization is None

"""
Unit tests for the page flow engine.

Covers the overflow rule, page-per-question behavior, blank line spacing,
malformed entries, idempotence and the fixed page structure of a guide.
"""

import math
import pytest
from datetime import datetime

from interview_toolkit.builder.layout import (
    Document,
    LayoutConfig,
    PageFlowEngine,
    Paragraph,
    QAEntry,
    Section,
    StyleResolver,
    TitlePageMeta,
    flow_document,
)
from interview_toolkit.builder.output import RecordingBackend, RenderError


def fixed_widths(_font):
    return {}


@pytest.fixture
def small_config():
    """Page with 140pt of writable height: 11 body lines per page."""
    return LayoutConfig(page_width=300, page_height=240, margin=50)


@pytest.fixture
def meta():
    return TitlePageMeta("Java Developer", None, datetime(2026, 10, 18), 3)


def make_entry(question="Q", answer=("Answer",), subcategory="Sub", code=False):
    return QAEntry(subcategory, question, tuple(answer), has_code_example=code)


def category_document(entries, intro=(), tips=()):
    return Document(sections=(
        Section("Introduction", tuple(intro)),
        Section("Core Java Questions", tuple(entries), show_heading=True),
        Section("Final Tips & Resources", tuple(tips)),
    ))


class TestEmitLineOverflow:
    """Tests for the y < margin overflow rule."""

    @pytest.mark.parametrize("n_lines", [1, 10, 11, 12, 22, 23, 50])
    def test_page_count_when_n_plain_lines_then_follows_overflow_rule(self, small_config, n_lines):
        # Arrange
        backend = RecordingBackend()
        engine = PageFlowEngine(backend, small_config)
        resolver = StyleResolver(small_config)
        # A line is drawn while y >= margin, so a page holds floor(140 / 14) + 1 lines.
        # That is one more than ceil(n * lh / available_height) pages would imply: the
        # last line of a page sits exactly on the bottom margin. Keep the +1; the
        # overflow check runs before drawing, not after.
        per_page = math.floor(small_config.available_height / 14) + 1

        # Act
        for i in range(n_lines):
            engine.emit_line(resolver.resolve_line(f"Line {i}"))
        result = engine.finish()

        # Assert
        assert per_page == 11
        assert result.page_count == math.ceil(n_lines / per_page)
        assert backend.page_count == result.page_count

    def test_emit_when_cursor_below_margin_then_next_line_at_top(self, small_config):
        backend = RecordingBackend()
        engine = PageFlowEngine(backend, small_config)
        resolver = StyleResolver(small_config)

        for i in range(12):
            engine.emit_line(resolver.resolve_line(f"Line {i}"))
        result = engine.finish()

        first, second = result.pages
        assert first.placements[-1].y == pytest.approx(small_config.bottom)
        assert second.placements[0].y == pytest.approx(small_config.top)
        assert second.texts() == ["Line 11"]

    def test_emit_when_blank_then_advances_without_draw(self, small_config):
        # Arrange
        backend = RecordingBackend()
        engine = PageFlowEngine(backend, small_config)
        resolver = StyleResolver(small_config)

        # Act
        engine.emit_line(resolver.resolve_line("Before"))
        engine.emit_line(resolver.resolve_line(""))
        engine.emit_line(resolver.resolve_line("After"))
        result = engine.finish()

        # Assert
        before, after = result.pages[0].placements
        assert before.y - after.y == pytest.approx(14 + 7)

    def test_emit_when_no_page_open_then_opens_one(self, small_config):
        engine = PageFlowEngine(RecordingBackend(), small_config)

        engine.emit_line(StyleResolver(small_config).resolve_line("x"))

        assert engine.page_open
        assert engine.cursor == pytest.approx(small_config.top - 14)


class TestStartSection:

    def test_start_when_no_page_then_opens_and_advances_two_lines(self, layout_config):
        engine = PageFlowEngine(RecordingBackend(), layout_config)

        engine.start_section("Core Java Questions")

        assert engine.page_count == 1
        assert engine.cursor == pytest.approx(layout_config.top - 44)

    def test_start_when_space_too_small_then_new_page(self, small_config):
        # Arrange
        engine = PageFlowEngine(RecordingBackend(), small_config)
        resolver = StyleResolver(small_config)
        for i in range(8):
            engine.emit_line(resolver.resolve_line(f"Line {i}"))
        # y = 190 - 8 * 14 = 78; 78 - 50 < 44

        # Act
        engine.start_section("Heading")

        # Assert
        assert engine.page_count == 2
        assert engine.cursor == pytest.approx(small_config.top - 44)

    def test_start_when_space_fits_then_same_page(self, small_config):
        engine = PageFlowEngine(RecordingBackend(), small_config)
        engine.emit_line(StyleResolver(small_config).resolve_line("Line"))

        engine.start_section("Heading")

        assert engine.page_count == 1


class TestEmitQAEntry:
    """Tests for page-per-question behavior."""

    def test_entries_when_not_first_then_start_fresh_page_at_top(self, layout_config, meta):
        # Arrange
        doc = category_document([make_entry("One"), make_entry("Two"), make_entry("Three")])

        # Act
        result = flow_document(doc, meta, RecordingBackend(), layout_config, widths_for=fixed_widths)

        # Assert
        question_pages = result.pages[2:]
        assert len(question_pages) == 3
        for page in question_pages[1:]:
            first = page.placements[0]
            assert first.text == "Sub"
            assert first.y == pytest.approx(layout_config.top)

    def test_entry_when_first_in_section_then_shares_heading_page(self, layout_config, meta):
        doc = category_document([make_entry("One")])

        result = flow_document(doc, meta, RecordingBackend(), layout_config, widths_for=fixed_widths)

        page = result.pages[2]
        assert page.texts()[:3] == ["Core Java Questions", "Sub", "Q: One"]
        assert page.placements[1].y == pytest.approx(layout_config.top - 44)

    def test_entry_when_space_remains_then_still_new_page(self, layout_config):
        # Arrange
        engine = PageFlowEngine(RecordingBackend(), layout_config)
        engine.emit_qa_entry(make_entry("One"))

        # Act
        engine.emit_qa_entry(make_entry("Two"))
        result = engine.finish()

        # Assert
        assert result.page_count == 2
        assert result.pages[1].placements[0].y == pytest.approx(layout_config.top)

    def test_entry_when_drawn_then_order_and_spacing(self, layout_config):
        # Arrange
        engine = PageFlowEngine(RecordingBackend(), layout_config)
        entry = make_entry("Explain streams", ["Prose line", "    code();"], code=True)

        # Act
        engine.emit_qa_entry(entry)
        page = engine.finish().pages[0]

        # Assert
        sub, question, marker, prose, code = page.placements
        assert [p.text for p in page.placements] == [
            "Sub", "Q: Explain streams", "A:", "Prose line", "    code();",
        ]
        assert sub.y - question.y == pytest.approx(14)
        assert question.y - marker.y == pytest.approx(21)
        assert marker.y - prose.y == pytest.approx(14)
        assert (prose.font, prose.x) == ("Helvetica", 60)
        assert (code.font, code.size, code.x) == ("Courier", 8, 70)

    def test_entry_when_question_missing_then_warns_and_draws_rest(self, layout_config):
        engine = PageFlowEngine(RecordingBackend(), layout_config)

        engine.emit_qa_entry(make_entry(question=None))
        result = engine.finish()

        assert result.pages[0].texts() == ["Sub", "A:", "Answer"]
        assert len(result.warnings) == 1
        assert "Question text missing" in result.warnings[0]

    def test_entry_when_no_subcategory_then_question_first(self, layout_config):
        engine = PageFlowEngine(RecordingBackend(), layout_config)

        engine.emit_qa_entry(make_entry(subcategory=None))

        assert engine.finish().pages[0].texts()[0] == "Q: Q"

    def test_entry_when_blank_answer_line_then_prose_height_no_draw(self, layout_config):
        engine = PageFlowEngine(RecordingBackend(), layout_config)

        engine.emit_qa_entry(make_entry(answer=["Above", "", "Below"]))
        placements = engine.finish().pages[0].placements

        above, below = placements[-2:]
        assert above.y - below.y == pytest.approx(28)

    def test_entry_when_answer_overflows_then_continues_on_next_page(self, small_config):
        # Arrange
        engine = PageFlowEngine(RecordingBackend(), small_config)
        answer = [f"Line {i}" for i in range(15)]

        # Act
        engine.emit_qa_entry(make_entry(answer=answer))
        result = engine.finish()

        # Assert
        assert result.page_count == 2
        assert result.pages[1].placements[0].y == pytest.approx(small_config.top)
        drawn = [t for page in result.pages for t in page.texts()]
        assert drawn[-15:] == answer


class TestFlowDocument:
    """Tests for complete documents."""

    def test_flow_when_one_category_three_entries_then_five_pages(self, layout_config, meta):
        # Arrange
        doc = category_document([make_entry("One"), make_entry("Two"), make_entry("Three")])
        backend = RecordingBackend()

        # Act
        result = flow_document(doc, meta, backend, layout_config, widths_for=fixed_widths)

        # Assert
        assert result.page_count == 5
        assert backend.page_count == 5
        assert result.pages[0].texts()[0] == "Technical Interview Guide"
        assert result.pages[1].texts() == [
            "Table of Contents",
            "1. Introduction",
            "2. Core Java Questions",
            "3. Final Tips & Resources",
        ]
        assert "Q: One" in result.pages[2].texts()
        assert "Q: Two" in result.pages[3].texts()
        assert "Q: Three" in result.pages[4].texts()

    def test_flow_when_narrative_present_then_each_section_own_page(self, layout_config, meta):
        doc = category_document(
            [make_entry("One")],
            intro=[Paragraph("Intro text")],
            tips=[Paragraph("Tips text")],
        )

        result = flow_document(doc, meta, RecordingBackend(), layout_config, widths_for=fixed_widths)

        assert [page.texts()[0] for page in result.pages[2:]] == [
            "Intro text",
            "Core Java Questions",
            "Tips text",
        ]
        assert result.pages[2].placements[0].y == pytest.approx(layout_config.top)

    def test_flow_when_same_document_twice_then_identical_instructions(self, layout_config, meta):
        # Arrange
        doc = category_document(
            [make_entry("One", ["a", "    b();"], code=True), make_entry("Two")],
            intro=[Paragraph("Intro")],
        )
        first, second = RecordingBackend(), RecordingBackend()

        # Act
        flow_document(doc, meta, first, layout_config, widths_for=fixed_widths)
        flow_document(doc, meta, second, layout_config, widths_for=fixed_widths)

        # Assert
        assert first.instructions == second.instructions
        assert len(first.instructions) > 0

    def test_flow_when_result_then_mirrors_backend(self, layout_config, meta):
        doc = category_document([make_entry("One")])
        backend = RecordingBackend()

        result = flow_document(doc, meta, backend, layout_config, widths_for=fixed_widths)

        assert [i[1:] for i in result.instructions()] == backend.instructions

    def test_flow_when_backend_fails_then_page_still_finalized(self, layout_config, meta):
        # Arrange
        class FailingBackend(RecordingBackend):
            def draw_text(self, font, size, x, y, text):
                if text == "Q: boom":
                    raise RenderError("disk full")
                super().draw_text(font, size, x, y, text)

        backend = FailingBackend()
        doc = category_document([make_entry("fine"), make_entry("boom")])

        # Act
        with pytest.raises(RenderError):
            flow_document(doc, meta, backend, layout_config, widths_for=fixed_widths)

        # Assert
        assert backend.page_count == 4
        backend.new_page(1, 1)  # No page left open

"""
Tests for flow building.
"""

import json

import pytest

from marriage_quiz.errors import QuestionDataError
from marriage_quiz.quiz.flow import (
    build_flow,
    build_flow_from_questions,
    build_flow_from_data,
    group_questions_by_category,
)
from marriage_quiz.quiz.questions import QUESTION_SECTIONS, MOCK_QUESTIONS, default_flow, load_flow
from marriage_quiz.quiz.schema import Section, TextQuestion, question_from_dict


def text_question(qid, category=None):
    return TextQuestion(id=qid, prompt=f"Question {qid}", category=category)


class TestBuildFlow:
    """Tests for build_flow with explicit sections."""

    @pytest.fixture
    def sections(self):
        return [
            Section(id="a", title="A", description="first",
                    questions=(text_question("a1"), text_question("a2"), text_question("a3"))),
            Section(id="b", title="B", questions=(text_question("b1"),)),
            Section(id="c", title="C", questions=(text_question("c1"), text_question("c2"))),
        ]

    def test_every_question_once_in_order(self, sections):
        """Test sections and their questions keep their order."""
        flow = build_flow(sections)

        assert [item.id for item in flow] == ["a1", "a2", "a3", "b1", "c1", "c2"]

    def test_order_and_total_in_section(self, sections):
        """Test each section's questions are numbered 1..n of n."""
        flow = build_flow(sections)

        for section in sections:
            items = [item for item in flow if item.section_id == section.id]
            assert [item.order_in_section for item in items] == list(range(1, len(section) + 1))
            assert all(item.total_in_section == len(section) for item in items)

    def test_section_metadata(self, sections):
        """Test section title and description are attached."""
        first = build_flow(sections)[0]

        assert first.section_title == "A"
        assert first.section_description == "first"
        assert first.section_progress == "1/3"

    def test_deterministic(self, sections):
        """Test identical input gives identical output."""
        assert build_flow(sections) == build_flow(sections)

    def test_empty(self):
        """Test no sections gives an empty flow."""
        assert build_flow([]) == []

    def test_duplicate_ids_rejected(self):
        """Test a question id can't appear twice in a flow."""
        sections = [
            Section(id="a", title="A", questions=(text_question("x"),)),
            Section(id="b", title="B", questions=(text_question("x"),)),
        ]

        with pytest.raises(QuestionDataError):
            build_flow(sections)


class TestGroupByCategory:
    """Tests for deriving sections from categories."""

    def test_first_seen_order(self):
        """Test categories keep first-occurrence order, not sorted order."""
        questions = [
            text_question(1, "재정"),
            text_question(2, "가족"),
            text_question(3, "재정"),
            text_question(4, "생활습관"),
            text_question(5, "가족"),
        ]
        sections = group_questions_by_category(questions)

        assert [s.id for s in sections] == ["재정", "가족", "생활습관"]
        assert [q.id for q in sections[0].questions] == [1, 3]
        assert [q.id for q in sections[1].questions] == [2, 5]

    def test_flow_from_questions(self):
        """Test flat questions become a contiguous flow per category."""
        questions = [question_from_dict(q) for q in MOCK_QUESTIONS]
        flow = build_flow_from_questions(questions)

        assert [item.id for item in flow] == [1, 2, 3, 5, 4]
        family = [item for item in flow if item.section_id == "가족"]
        assert [(i.order_in_section, i.total_in_section) for i in family] == [(1, 2), (2, 2)]
        assert family[0].section_title == "가족"
        assert family[0].section_description == ""

    def test_missing_category(self):
        """Test questions without a category share one section."""
        sections = group_questions_by_category([text_question(1), text_question(2)])

        assert len(sections) == 1
        assert sections[0].id == ""


class TestBuildFlowFromData:
    """Tests for accepting either data shape."""

    def test_sections_shape(self):
        """Test nested sections are detected."""
        flow = build_flow_from_data(QUESTION_SECTIONS)

        assert flow[0].section_id == "finance"
        assert len(flow) == sum(len(s["questions"]) for s in QUESTION_SECTIONS)

    def test_flat_shape(self):
        """Test flat categorised questions are detected."""
        flow = build_flow_from_data(MOCK_QUESTIONS)

        assert flow[0].section_id == "재정"
        assert len(flow) == len(MOCK_QUESTIONS)

    def test_wrapped_shapes(self):
        """Test dicts wrapping either shape."""
        assert len(build_flow_from_data({"sections": QUESTION_SECTIONS})) == len(default_flow())
        assert len(build_flow_from_data({"questions": MOCK_QUESTIONS})) == len(MOCK_QUESTIONS)

    def test_empty_list(self):
        """Test an empty list gives an empty flow."""
        assert build_flow_from_data([]) == []

    def test_invalid_shape(self):
        """Test non-list data is rejected."""
        with pytest.raises(QuestionDataError):
            build_flow_from_data("questions")
        with pytest.raises(QuestionDataError):
            build_flow_from_data({"items": []})


class TestLoadFlow:
    """Tests for loading question files."""

    def test_default(self):
        """Test no path loads the built-in set."""
        assert load_flow() == default_flow()

    def test_from_file(self, tmp_path):
        """Test a JSON file in flat shape."""
        path = tmp_path / "questions.json"
        path.write_text(json.dumps(MOCK_QUESTIONS, ensure_ascii=False), encoding="utf-8")

        flow = load_flow(path)
        assert len(flow) == len(MOCK_QUESTIONS)

    def test_bad_file(self, tmp_path):
        """Test unreadable files raise QuestionDataError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(QuestionDataError):
            load_flow(path)
        with pytest.raises(QuestionDataError):
            load_flow(tmp_path / "missing.json")

"""
Flow builder

Flattens sections (declared, or derived from each question's category)
into the single ordered sequence the navigator walks through.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from ..errors import QuestionDataError
from .schema import (
    Question,
    QuestionId,
    QuestionKind,
    Section,
    question_from_dict,
    validate_unique_ids,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlowItem:
    """A question together with its place inside its section."""
    question: Question
    section_id: str
    section_title: str
    section_description: str
    order_in_section: int  # 1-based
    total_in_section: int

    @property
    def id(self) -> QuestionId:
        return self.question.id

    @property
    def kind(self) -> QuestionKind:
        return self.question.kind

    @property
    def prompt(self) -> str:
        return self.question.prompt

    @property
    def section_progress(self) -> str:
        """Position inside the section as "k/total"."""
        return f"{self.order_in_section}/{self.total_in_section}"

    def to_dict(self) -> dict:
        result = self.question.to_dict()
        result.update({
            "sectionId": self.section_id,
            "sectionTitle": self.section_title,
            "sectionDescription": self.section_description,
            "orderInSection": self.order_in_section,
            "totalInSection": self.total_in_section,
        })
        return result


def build_flow(sections: Iterable[Section]) -> list[FlowItem]:
    """
    Flatten sections into one ordered flow.

    Section order and the order of questions inside each section are kept.

    Args:
        sections: Sections in display order

    Returns:
        One FlowItem per question

    Raises:
        QuestionDataError: If a question id appears more than once
    """
    flow: list[FlowItem] = []
    for section in sections:
        total = len(section.questions)
        for index, question in enumerate(section.questions):
            flow.append(FlowItem(
                question=question,
                section_id=section.id,
                section_title=section.title,
                section_description=section.description,
                order_in_section=index + 1,
                total_in_section=total,
            ))

    validate_unique_ids([item.question for item in flow])
    logger.debug(f"Built flow with {len(flow)} questions")
    return flow


def group_questions_by_category(questions: Iterable[Question]) -> list[Section]:
    """
    Derive sections from each question's category.

    Categories come out in the order they are first seen, not sorted.
    Questions without a category share the "" section.
    """
    category_order: list[str] = []
    grouped: dict[str, list[Question]] = {}

    for question in questions:
        category = question.category or ""
        if category not in grouped:
            grouped[category] = []
            category_order.append(category)
        grouped[category].append(question)

    return [
        Section(id=category, title=category, questions=tuple(grouped[category]))
        for category in category_order
    ]


def build_flow_from_questions(questions: Iterable[Question]) -> list[FlowItem]:
    """Build a flow from a flat, categorised question list."""
    return build_flow(group_questions_by_category(questions))


def build_flow_from_data(data: Any) -> list[FlowItem]:
    """
    Build a flow from raw question data in either supported shape.

    Args:
        data: A list of section dicts (each with ``questions``), a list of
            flat question dicts carrying ``category``, or a dict with a
            ``sections`` or ``questions`` key wrapping one of those

    Returns:
        Ordered flow

    Raises:
        QuestionDataError: If the data matches neither shape
    """
    if isinstance(data, dict):
        if "sections" in data:
            data = data["sections"]
        elif "questions" in data:
            data = data["questions"]
        else:
            raise QuestionDataError("Question data needs a 'sections' or 'questions' key")

    if not isinstance(data, list):
        raise QuestionDataError(f"Question data must be a list, got {type(data).__name__}")

    if not data:
        return []

    if _is_section_list(data):
        return build_flow(Section.from_dict(s) for s in data)

    return build_flow_from_questions(question_from_dict(q) for q in data)


def _is_section_list(data: list) -> bool:
    first = data[0]
    return isinstance(first, dict) and "questions" in first

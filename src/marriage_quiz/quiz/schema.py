"""
Quiz schema and data structures

Defines the question variants (single choice and free text) and the
sections that group them. Questions are authored once and never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
import json

from ..errors import QuestionDataError


QuestionId = Union[str, int]


class QuestionKind(str, Enum):
    """Types of quiz questions."""
    SINGLE_CHOICE = "single-choice"
    FREE_TEXT = "free-text"


# Spellings used by older question files
KIND_ALIASES = {
    "single-choice": QuestionKind.SINGLE_CHOICE,
    "single": QuestionKind.SINGLE_CHOICE,
    "choice": QuestionKind.SINGLE_CHOICE,
    "free-text": QuestionKind.FREE_TEXT,
    "text": QuestionKind.FREE_TEXT,
    "essay": QuestionKind.FREE_TEXT,
}


@dataclass(frozen=True)
class ChoiceOption:
    """An option for single choice questions."""
    value: str
    label: str

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label}

    @classmethod
    def from_dict(cls, data: Union[dict, str]) -> "ChoiceOption":
        # A bare string is both the stored value and the label
        if isinstance(data, str):
            return cls(value=data, label=data)
        if not isinstance(data, dict):
            raise QuestionDataError(f"Option must be a string or an object, got {type(data).__name__}")
        value = data.get("value")
        if not isinstance(value, str):
            raise QuestionDataError(f"Option needs a string 'value': {data!r}")
        label = data.get("label", value)
        if not isinstance(label, str):
            raise QuestionDataError(f"Option label must be a string: {data!r}")
        return cls(value=value, label=label)


@dataclass(frozen=True)
class ChoiceQuestion:
    """A question answered by picking one option."""
    id: QuestionId
    prompt: str
    options: tuple[ChoiceOption, ...]
    description: str = ""
    correct_answer: Optional[str] = None
    category: Optional[str] = None

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.SINGLE_CHOICE

    @property
    def option_values(self) -> list[str]:
        return [o.value for o in self.options]

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "type": self.kind.value,
            "prompt": self.prompt,
            "description": self.description,
            "options": [o.to_dict() for o in self.options],
        }
        if self.correct_answer is not None:
            result["correctAnswer"] = self.correct_answer
        if self.category is not None:
            result["category"] = self.category
        return result


@dataclass(frozen=True)
class TextQuestion:
    """A question answered in free text, scored by keyword coverage."""
    id: QuestionId
    prompt: str
    description: str = ""
    guidance: str = ""
    keywords: tuple[str, ...] = field(default_factory=tuple)
    category: Optional[str] = None

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.FREE_TEXT

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "type": self.kind.value,
            "prompt": self.prompt,
            "description": self.description,
            "guidance": self.guidance,
            "keywords": list(self.keywords),
        }
        if self.category is not None:
            result["category"] = self.category
        return result


Question = Union[ChoiceQuestion, TextQuestion]


@dataclass(frozen=True)
class Section:
    """
    A named, ordered group of questions.

    The question order is fixed when the section is built.
    """
    id: str
    title: str
    questions: tuple[Question, ...]
    description: str = ""

    def __len__(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Section":
        try:
            section_id = data["id"]
        except KeyError:
            raise QuestionDataError(f"Section is missing 'id': {data!r}")
        questions = tuple(question_from_dict(q) for q in data.get("questions", []))
        return cls(
            id=section_id,
            title=data.get("title", section_id),
            description=data.get("description", ""),
            questions=questions,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def question_from_dict(data: dict) -> Question:
    """
    Build a question from its dict form.

    Args:
        data: Question dict. ``type`` picks the variant; ``question`` is
            accepted in place of ``prompt``.

    Returns:
        ChoiceQuestion or TextQuestion

    Raises:
        QuestionDataError: If the dict does not describe a valid question
    """
    if not isinstance(data, dict):
        raise QuestionDataError(f"Question must be an object, got {type(data).__name__}")
    if "id" not in data:
        raise QuestionDataError(f"Question is missing 'id': {data!r}")
    question_id = data["id"]

    raw_kind = data.get("type", data.get("kind"))
    kind = KIND_ALIASES.get(str(raw_kind).lower()) if raw_kind is not None else None
    if kind is None:
        raise QuestionDataError(f"Question {question_id!r} has unknown type: {raw_kind!r}")

    prompt = data.get("prompt", data.get("question"))
    if prompt is None:
        raise QuestionDataError(f"Question {question_id!r} is missing a prompt")

    description = data.get("description", "")
    category = data.get("category")

    if kind == QuestionKind.SINGLE_CHOICE:
        options = tuple(ChoiceOption.from_dict(o) for o in data.get("options") or [])
        if not options:
            raise QuestionDataError(f"Choice question {question_id!r} has no options")
        correct = data.get("correctAnswer", data.get("correct_answer"))
        if correct is not None and correct not in [o.value for o in options]:
            raise QuestionDataError(
                f"Choice question {question_id!r} answer {correct!r} is not one of its options"
            )
        return ChoiceQuestion(
            id=question_id,
            prompt=prompt,
            description=description,
            options=options,
            correct_answer=correct,
            category=category,
        )

    keywords = data.get("keywords") or []
    if not isinstance(keywords, list):
        raise QuestionDataError(f"Text question {question_id!r} keywords must be a list")
    bad = [k for k in keywords if not isinstance(k, str)]
    if bad:
        raise QuestionDataError(f"Text question {question_id!r} has non-text keywords: {bad!r}")
    return TextQuestion(
        id=question_id,
        prompt=prompt,
        description=description,
        guidance=data.get("guidance", ""),
        keywords=tuple(keywords),
        category=category,
    )


def validate_unique_ids(questions: list[Question]) -> None:
    """Raise QuestionDataError if two questions share an id."""
    seen = set()
    for question in questions:
        if question.id in seen:
            raise QuestionDataError(f"Duplicate question id: {question.id!r}")
        seen.add(question.id)

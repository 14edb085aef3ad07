"""
Answer evaluation

Choice questions are checked for an exact match with the agreed answer.
Free text answers are scored by keyword coverage: every keyword present
is correct, some present is partial, none present is incorrect.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .schema import ChoiceQuestion, Question, QuestionKind, TextQuestion


class ResultStatus(str, Enum):
    """Outcome of checking an answer."""
    CORRECT = "correct"
    PARTIAL = "partial"
    INCORRECT = "incorrect"


MISSING_ANSWER_MESSAGE = "답변을 입력하거나 선택해 주세요."
CHOICE_CORRECT_MESSAGE = "합의한 방식과 일치합니다."
CHOICE_INCORRECT_MESSAGE = "다시 이야기해 보세요. 서로의 상황에 맞는 선택인지 점검하세요."
TEXT_CORRECT_MESSAGE = "핵심 요소를 모두 담았습니다."
TEXT_PARTIAL_TEMPLATE = '좋아요. "{missing}"에 대한 합의도 추가해 주세요.'
TEXT_INCORRECT_MESSAGE = "조율 기준과 분담 방식이 보이지 않아요. 조금 더 구체적으로 작성해 주세요."

STATUS_LABELS = {
    ResultStatus.CORRECT: "정답",
    ResultStatus.PARTIAL: "보완 필요",
    ResultStatus.INCORRECT: "확인 필요",
}


@dataclass(frozen=True)
class EvaluationResult:
    """Result of checking one answer."""
    status: ResultStatus
    message: str
    missing_keywords: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_correct(self) -> bool:
        return self.status == ResultStatus.CORRECT

    @property
    def label(self) -> str:
        return status_label(self.status)

    def to_dict(self) -> dict:
        result = {"status": self.status.value, "message": self.message}
        if self.missing_keywords:
            result["missing_keywords"] = list(self.missing_keywords)
        return result


def status_label(status: ResultStatus) -> str:
    """Short display label for a result status."""
    return STATUS_LABELS[status]


def evaluate_answer(question: Question, raw_answer: Optional[str]) -> EvaluationResult:
    """
    Check an answer against a question.

    Never raises: every (question, answer) pair maps to a result.

    Args:
        question: The question being answered
        raw_answer: Answer as entered or selected (None counts as empty)

    Returns:
        EvaluationResult
    """
    answer = raw_answer or ""
    if not answer.strip():
        return EvaluationResult(ResultStatus.INCORRECT, MISSING_ANSWER_MESSAGE)

    if question.kind == QuestionKind.SINGLE_CHOICE:
        return _evaluate_choice(question, answer)
    return _evaluate_text(question, answer)


def _evaluate_choice(question: ChoiceQuestion, answer: str) -> EvaluationResult:
    # Exact, case-sensitive comparison against the stored option value
    if answer == question.correct_answer:
        return EvaluationResult(ResultStatus.CORRECT, CHOICE_CORRECT_MESSAGE)
    return EvaluationResult(ResultStatus.INCORRECT, CHOICE_INCORRECT_MESSAGE)


def _evaluate_text(question: TextQuestion, answer: str) -> EvaluationResult:
    normalized = answer.lower()
    missing = tuple(k for k in question.keywords if k.lower() not in normalized)
    matched_count = len(question.keywords) - len(missing)

    # No keywords at all means any answer is enough
    if not missing:
        return EvaluationResult(ResultStatus.CORRECT, TEXT_CORRECT_MESSAGE)

    if matched_count > 0:
        return EvaluationResult(
            ResultStatus.PARTIAL,
            TEXT_PARTIAL_TEMPLATE.format(missing=", ".join(missing)),
            missing_keywords=missing,
        )

    return EvaluationResult(ResultStatus.INCORRECT, TEXT_INCORRECT_MESSAGE)

"""
Quiz navigator

The state machine that walks the flow one question at a time. It owns the
current position, the answers given so far and the results of any answer
checks. Invalid moves (past the end, before the start) are silent no-ops.

Advance policy is explicit per navigator:

- AdvancePolicy.REQUIRE_ANSWER: next() is refused until the current
  question has a non-blank answer, and a notice is shown instead.
- AdvancePolicy.FREE: next() always moves; only check() needs an answer.
"""

import logging
from enum import Enum
from typing import Optional

from .config import config
from .notice import NoticeBoard
from .quiz.evaluator import EvaluationResult, ResultStatus, evaluate_answer
from .quiz.flow import FlowItem
from .quiz.schema import QuestionId

logger = logging.getLogger(__name__)

ANSWER_REQUIRED_NOTICE = "답변을 입력해야 다음으로 이동할 수 있어요."


class AdvancePolicy(str, Enum):
    """Whether moving forward needs an answer."""
    REQUIRE_ANSWER = "require_answer"
    FREE = "free"


def is_answered(value: Optional[str]) -> bool:
    """An answer counts only when something other than whitespace was given."""
    return bool(value and value.strip())


class QuizNavigator:
    """
    Position, answers and check results for one quiz session.

    Answers are keyed by question id. A missing key and an empty string
    are both "unanswered".
    """

    def __init__(
        self,
        flow: list[FlowItem],
        policy: Optional[AdvancePolicy] = None,
        notices: Optional[NoticeBoard] = None,
    ):
        """
        Initialize navigator.

        Args:
            flow: Ordered questions, built once per session
            policy: Advance policy (defaults to config)
            notices: Where refusal notices go (a new board if None)
        """
        self.flow = list(flow)
        self.policy = AdvancePolicy(policy or config.quiz.advance_policy)
        self.notices = notices or NoticeBoard()
        self.position = 0
        self.answers: dict[QuestionId, str] = {}
        self.results: dict[QuestionId, EvaluationResult] = {}

    # -------------------------------------------------------------------------
    # Current question
    # -------------------------------------------------------------------------

    @property
    def current(self) -> Optional[FlowItem]:
        """Current item, or None when the flow is empty."""
        if 0 <= self.position < len(self.flow):
            return self.flow[self.position]
        return None

    @property
    def is_first(self) -> bool:
        return self.position <= 0

    @property
    def is_last(self) -> bool:
        return self.position == len(self.flow) - 1

    def answer_for(self, question_id: QuestionId) -> str:
        return self.answers.get(question_id, "")

    def result_for(self, question_id: QuestionId) -> Optional[EvaluationResult]:
        return self.results.get(question_id)

    def has_answer(self, question_id: Optional[QuestionId] = None) -> bool:
        """Whether a question (the current one by default) is answered."""
        if question_id is None:
            item = self.current
            if item is None:
                return False
            question_id = item.id
        return is_answered(self.answers.get(question_id))

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def set_answer(self, question_id: QuestionId, value: str) -> None:
        """Store an answer and drop any earlier check result for it."""
        self.answers[question_id] = value
        self.results.pop(question_id, None)

    def check_answer(self) -> Optional[EvaluationResult]:
        """Evaluate the current answer and keep the result."""
        item = self.current
        if item is None:
            return None
        result = evaluate_answer(item.question, self.answers.get(item.id, ""))
        self.results[item.id] = result
        logger.debug(f"Checked {item.id!r}: {result.status.value}")
        return result

    def advance(self) -> bool:
        """
        Move to the next question.

        Returns:
            True if the position changed
        """
        if self.current is None or self.is_last:
            return False
        if self.policy == AdvancePolicy.REQUIRE_ANSWER and not self.has_answer():
            self.notices.show(ANSWER_REQUIRED_NOTICE)
            return False
        self.position += 1
        logger.debug(f"Advanced to {self.position}")
        return True

    def retreat(self) -> bool:
        """
        Move to the previous question. Never blocked by answers.

        Returns:
            True if the position changed
        """
        if self.is_first:
            return False
        self.position -= 1
        logger.debug(f"Retreated to {self.position}")
        return True

    def jump_to_start(self) -> None:
        self.position = 0

    def reset(self) -> None:
        """Clear answers and results and return to the first question."""
        self.answers.clear()
        self.results.clear()
        self.position = 0
        logger.debug("Navigator reset")

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    @property
    def answered_count(self) -> int:
        return sum(1 for item in self.flow if self.has_answer(item.id))

    @property
    def correct_count(self) -> int:
        return sum(
            1 for item in self.flow
            if self.results.get(item.id) is not None
            and self.results[item.id].status == ResultStatus.CORRECT
        )

    @property
    def is_complete(self) -> bool:
        """Every question in a non-empty flow has an answer."""
        return len(self.flow) > 0 and self.answered_count == len(self.flow)

    @property
    def section_progress(self) -> str:
        """Position inside the current section as "k/total"."""
        item = self.current
        return item.section_progress if item else "0/0"

    @property
    def section_answered_count(self) -> int:
        """Answered questions in the current section."""
        item = self.current
        if item is None:
            return 0
        return sum(
            1 for other in self.flow
            if other.section_id == item.section_id and self.has_answer(other.id)
        )

    @property
    def overall_progress(self) -> str:
        """Position in the whole flow as "n/total"."""
        if not self.flow:
            return "0/0"
        return f"{self.position + 1}/{len(self.flow)}"

    def snapshot(self) -> dict:
        """Plain-dict view of the session state."""
        item = self.current
        return {
            "position": self.position,
            "current_id": item.id if item else None,
            "policy": self.policy.value,
            "answers": dict(self.answers),
            "results": {qid: r.to_dict() for qid, r in self.results.items()},
            "section_progress": self.section_progress,
            "overall_progress": self.overall_progress,
            "answered_count": self.answered_count,
            "correct_count": self.correct_count,
            "total": len(self.flow),
            "is_complete": self.is_complete,
        }

"""
marriage-quiz: a sequential quiz for couples preparing to marry.

Walks two people through sectioned questions, checks their answers by
exact choice or keyword coverage, and remembers whether they finished.
"""

__version__ = "0.1.0"

from .config import config
from .errors import QuizError, QuestionDataError, StorageError
from .navigator import QuizNavigator, AdvancePolicy
from .notice import NoticeBoard
from .participation import ParticipationTracker
from .session import QuizSession, QuizView, Screen
from .quiz import (
    FlowItem,
    ResultStatus,
    EvaluationResult,
    evaluate_answer,
    build_flow,
    build_flow_from_questions,
    build_flow_from_data,
    load_flow,
)

__all__ = [
    # Config
    "config",
    # Errors
    "QuizError",
    "QuestionDataError",
    "StorageError",
    # Flow and evaluation
    "FlowItem",
    "ResultStatus",
    "EvaluationResult",
    "evaluate_answer",
    "build_flow",
    "build_flow_from_questions",
    "build_flow_from_data",
    "load_flow",
    # State
    "QuizNavigator",
    "AdvancePolicy",
    "NoticeBoard",
    "ParticipationTracker",
    "QuizSession",
    "QuizView",
    "Screen",
]

"""
Quiz content for marriage-quiz

Question model, flow building and answer evaluation.
"""

from .schema import (
    QuestionKind,
    ChoiceOption,
    ChoiceQuestion,
    TextQuestion,
    Question,
    Section,
    question_from_dict,
)
from .flow import (
    FlowItem,
    build_flow,
    build_flow_from_questions,
    build_flow_from_data,
    group_questions_by_category,
)
from .evaluator import ResultStatus, EvaluationResult, evaluate_answer, status_label
from .questions import QUESTION_SECTIONS, MOCK_QUESTIONS, default_flow, load_flow

__all__ = [
    # Schema
    "QuestionKind",
    "ChoiceOption",
    "ChoiceQuestion",
    "TextQuestion",
    "Question",
    "Section",
    "question_from_dict",
    # Flow
    "FlowItem",
    "build_flow",
    "build_flow_from_questions",
    "build_flow_from_data",
    "group_questions_by_category",
    # Evaluation
    "ResultStatus",
    "EvaluationResult",
    "evaluate_answer",
    "status_label",
    # Built-in data
    "QUESTION_SECTIONS",
    "MOCK_QUESTIONS",
    "default_flow",
    "load_flow",
]

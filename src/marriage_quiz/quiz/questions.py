"""
Built-in question sets

QUESTION_SECTIONS uses the nested sections shape; MOCK_QUESTIONS uses the
flat shape where each question carries its category. load_flow() reads
either shape from a JSON file.
"""

import json
from pathlib import Path
from typing import Optional, Union

from ..errors import QuestionDataError
from .flow import FlowItem, build_flow_from_data


# =============================================================================
# SECTIONED QUESTIONS
# =============================================================================

QUESTION_SECTIONS = [
    {
        "id": "finance",
        "title": "재정",
        "description": "돈을 모으고 쓰는 방식을 함께 정리해요.",
        "questions": [
            {
                "id": "finance-account",
                "type": "single",
                "prompt": "생활비 통장은 어떻게 관리할까요?",
                "description": "두 사람이 합의한 방식을 골라 주세요.",
                "options": ["공동 통장 하나로 관리", "각자 관리 후 비율대로 분담", "한 사람이 전담"],
                "correctAnswer": "공동 통장 하나로 관리",
            },
            {
                "id": "finance-saving",
                "type": "text",
                "prompt": "저축 목표는 어떻게 정할까요?",
                "description": "목표 금액과 점검 주기를 함께 적어 보세요.",
                "guidance": "목표, 기간, 점검 방법이 드러나면 좋아요.",
                "keywords": ["목표", "기간", "점검"],
            },
        ],
    },
    {
        "id": "family",
        "title": "가족",
        "description": "양가와의 관계를 어떻게 이어갈지 이야기해요.",
        "questions": [
            {
                "id": "family-holiday",
                "type": "text",
                "prompt": "명절에는 양가를 어떻게 방문할까요?",
                "description": "방문 순서와 머무는 기간, 준비 분담을 정해 보세요.",
                "guidance": "번갈아 방문하는지, 기간은 얼마인지, 준비는 어떻게 나누는지 적어 주세요.",
                "keywords": ["번갈아", "기간", "분담"],
            },
            {
                "id": "family-contact",
                "type": "single",
                "prompt": "양가 부모님께 연락은 얼마나 자주 드릴까요?",
                "description": "서로 부담되지 않는 주기를 골라 주세요.",
                "options": ["매주", "격주", "한 달에 한 번"],
                "correctAnswer": "매주",
            },
        ],
    },
    {
        "id": "lifestyle",
        "title": "생활습관",
        "description": "함께 사는 공간의 규칙을 맞춰 봐요.",
        "questions": [
            {
                "id": "lifestyle-chores",
                "type": "text",
                "prompt": "집안일은 어떻게 나눌까요?",
                "description": "요일이나 항목 기준으로 나눠도 좋아요.",
                "guidance": "청소, 빨래, 요리 중 누가 무엇을 맡는지 적어 주세요.",
                "keywords": ["청소", "빨래", "요리"],
            },
            {
                "id": "lifestyle-free",
                "type": "text",
                "prompt": "서로에게 꼭 지켜 주었으면 하는 생활 습관이 있나요?",
                "description": "자유롭게 적어 주세요.",
                "guidance": "정답은 없어요. 솔직하게 적어 주세요.",
                "keywords": [],
            },
        ],
    },
]


# =============================================================================
# FLAT QUESTIONS (category per question)
# =============================================================================

MOCK_QUESTIONS = [
    {
        "id": 1,
        "type": "choice",
        "category": "재정",
        "question": "결혼 자금은 어떻게 마련할까요?",
        "options": [
            {"value": "together", "label": "둘이 함께 모은 돈으로"},
            {"value": "support", "label": "양가 지원을 일부 받아서"},
            {"value": "loan", "label": "대출을 활용해서"},
        ],
    },
    {
        "id": 2,
        "type": "essay",
        "category": "재정",
        "question": "큰 지출은 어떤 기준으로 함께 결정할까요?",
        "keywords": ["금액", "상의"],
    },
    {
        "id": 3,
        "type": "essay",
        "category": "가족",
        "question": "명절에는 양가를 어떻게 방문할까요?",
        "keywords": ["번갈아", "기간", "분담"],
    },
    {
        "id": 4,
        "type": "choice",
        "category": "생활습관",
        "question": "주말은 주로 어떻게 보내고 싶나요?",
        "options": [
            {"value": "home", "label": "집에서 쉬면서"},
            {"value": "outside", "label": "밖에서 활동하면서"},
        ],
    },
    {
        "id": 5,
        "type": "essay",
        "category": "가족",
        "question": "아이 계획에 대해 어떻게 생각하나요?",
    },
]


def default_flow() -> list[FlowItem]:
    """Flow of the built-in sectioned question set."""
    return build_flow_from_data(QUESTION_SECTIONS)


def load_flow(path: Optional[Union[str, Path]] = None) -> list[FlowItem]:
    """
    Load a flow from a JSON question file.

    Args:
        path: JSON file in either shape. None loads the built-in sections.

    Returns:
        Ordered flow

    Raises:
        QuestionDataError: If the file can't be read or isn't valid question data
    """
    if path is None:
        return default_flow()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise QuestionDataError(f"Could not load questions from {path}: {e}") from e

    return build_flow_from_data(data)

"""
marriage-quiz configuration

Quiz policy, notice timing and participation storage settings live here.
Environment variables override defaults for deployment flexibility.
"""

import os
from dataclasses import dataclass, field
from typing import Literal


@dataclass
class QuizConfig:
    """Quiz flow behavior"""
    # "require_answer": next is refused until the current question is answered
    # "free": next always moves, only the answer check needs an answer
    advance_policy: Literal["require_answer", "free"] = os.getenv("QUIZ_ADVANCE_POLICY", "require_answer")
    notice_seconds: float = float(os.getenv("QUIZ_NOTICE_SECONDS", "2.2"))


@dataclass
class StorageConfig:
    """Where the participation flag is kept"""
    backend: Literal["file", "memory", "null"] = os.getenv("QUIZ_STORAGE", "file")
    path: str = os.getenv("QUIZ_STORAGE_PATH", os.path.join("~", ".marriage_quiz", "storage.json"))
    participation_key: str = os.getenv("QUIZ_PARTICIPATION_KEY", "marriage-quiz-participated")

    def get_path(self) -> str:
        """Storage path with the user directory expanded."""
        return os.path.expanduser(self.path)


@dataclass
class Config:
    """Master config, import this"""
    quiz: QuizConfig = field(default_factory=QuizConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def test_mode(cls) -> "Config":
        """For tests: in-memory flag, notices dismissed immediately"""
        cfg = cls()
        cfg.storage.backend = "memory"
        cfg.quiz.notice_seconds = 0.0
        return cfg


# Singleton
config = Config()

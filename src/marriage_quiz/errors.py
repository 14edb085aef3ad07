"""
Exceptions shared across marriage-quiz.
"""


class QuizError(Exception):
    """Base exception for quiz errors."""
    pass


class QuestionDataError(QuizError):
    """Question data is malformed (raised when loading, never per answer)."""
    pass


class StorageError(QuizError):
    """Flag storage backend failed to read or write."""
    pass

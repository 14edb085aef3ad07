"""
Quiz session

Ties the navigator to the participation tracker and to the host's screen
routing:

1. Intro screen: start (only before participating) or retake
2. Quiz screen: answer, check, move between questions
3. Completion: once every question is answered the flag is set, once

Routing itself belongs to the host; the session only asks for a screen.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from .config import config
from .navigator import AdvancePolicy, QuizNavigator
from .notice import NoticeBoard
from .participation import ParticipationTracker
from .quiz.evaluator import EvaluationResult
from .quiz.flow import FlowItem
from .quiz.questions import default_flow
from .storage import FlagStorage, get_storage

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    """Screens the host can route to."""
    INTRO = "intro"
    QUIZ = "quiz"


class QuizView(str, Enum):
    """What the quiz screen should show."""
    QUESTION = "question"
    ALREADY_PARTICIPATED = "already_participated"
    EMPTY = "empty"


class QuizSession:
    """
    One user's run through the quiz.

    The navigator owns position and answers; the tracker owns the durable
    flag. The session moves between them and reports screen changes through
    ``navigate``.
    """

    def __init__(
        self,
        flow: Optional[list[FlowItem]] = None,
        tracker: Optional[ParticipationTracker] = None,
        navigate: Optional[Callable[[Screen], None]] = None,
        policy: Optional[AdvancePolicy] = None,
        notices: Optional[NoticeBoard] = None,
    ):
        """
        Initialize session.

        Args:
            flow: Ordered questions (defaults to the built-in set)
            tracker: Participation tracker (defaults to configured storage)
            navigate: Host callback for screen changes
            policy: Advance policy (defaults to config)
            notices: Notice board shared with the navigator
        """
        self.navigator = QuizNavigator(
            default_flow() if flow is None else flow,
            policy=policy,
            notices=notices,
        )
        self.tracker = tracker or ParticipationTracker(default_storage())
        self._navigate = navigate
        self.screen = Screen.INTRO

    @property
    def flow(self) -> list[FlowItem]:
        return self.navigator.flow

    @property
    def notices(self) -> NoticeBoard:
        return self.navigator.notices

    @property
    def has_participated(self) -> bool:
        return self.tracker.has_participated

    @property
    def view(self) -> QuizView:
        if self.tracker.has_participated:
            return QuizView.ALREADY_PARTICIPATED
        if self.navigator.current is None:
            return QuizView.EMPTY
        return QuizView.QUESTION

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def _go(self, screen: Screen):
        self.screen = screen
        logger.debug(f"Navigate to {screen.value}")
        if self._navigate is not None:
            self._navigate(screen)

    def start(self) -> bool:
        """
        Enter the quiz from the intro screen.

        Returns:
            False if the user already participated (retake instead)
        """
        if self.tracker.has_participated:
            return False
        self._go(Screen.QUIZ)
        return True

    def retake(self) -> None:
        """Forget participation and answers, then start again."""
        self.tracker.reset()
        self.navigator.reset()
        self._go(Screen.QUIZ)

    def go_to_intro(self) -> None:
        self._go(Screen.INTRO)

    # -------------------------------------------------------------------------
    # Quiz actions
    # -------------------------------------------------------------------------

    def answer(self, value: str) -> None:
        """Answer the current question."""
        item = self.navigator.current
        if item is None:
            return
        self.set_answer(item.id, value)

    def set_answer(self, question_id, value: str) -> None:
        self.navigator.set_answer(question_id, value)
        self._check_completion()

    def check(self) -> Optional[EvaluationResult]:
        return self.navigator.check_answer()

    def next(self) -> bool:
        return self.navigator.advance()

    def previous(self) -> bool:
        return self.navigator.retreat()

    def reset(self) -> None:
        """Clear answers and position. Participation is left alone."""
        self.navigator.reset()

    def close(self) -> None:
        """Cancel pending timers."""
        self.notices.close()

    def _check_completion(self):
        if self.navigator.is_complete and not self.tracker.has_participated:
            logger.info("All questions answered, marking participation")
            self.tracker.mark()


def default_storage() -> FlagStorage:
    """Storage backend chosen by config."""
    return get_storage(config.storage.backend, path=config.storage.get_path())

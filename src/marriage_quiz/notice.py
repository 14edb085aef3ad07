"""
Transient notices

A notice (e.g. "answer first") disappears on its own after a short delay.
Showing a new notice cancels the pending dismissal of the previous one, so
the last notice always wins and nothing is queued.
"""

import threading
from typing import Callable, Optional, Protocol

from .config import config


class TimerToken(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        ...


Scheduler = Callable[[float, Callable[[], None]], TimerToken]


def thread_scheduler(delay: float, callback: Callable[[], None]) -> TimerToken:
    """Run callback after delay seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class NoticeBoard:
    """Holds at most one transient message."""

    def __init__(self, scheduler: Optional[Scheduler] = None, duration: Optional[float] = None):
        """
        Initialize notice board.

        Args:
            scheduler: Schedules dismissals (defaults to a timer thread)
            duration: Seconds a notice stays up (defaults to config)
        """
        self.scheduler = scheduler or thread_scheduler
        self.duration = config.quiz.notice_seconds if duration is None else duration
        self._message: Optional[str] = None
        self._token: Optional[TimerToken] = None
        self._lock = threading.RLock()
        self.shown_count = 0

    @property
    def message(self) -> Optional[str]:
        return self._message

    def show(self, message: str, duration: Optional[float] = None) -> None:
        """Show a message, replacing the current one and its timer."""
        delay = self.duration if duration is None else duration
        with self._lock:
            self._cancel_pending()
            self._message = message
            self.shown_count += 1
            token_box: list[TimerToken] = []

            def expire():
                with self._lock:
                    # A newer notice owns the board now
                    if token_box and self._token is token_box[0]:
                        self._message = None
                        self._token = None

            token_box.append(self.scheduler(delay, expire))
            self._token = token_box[0]

    def dismiss(self) -> None:
        """Remove the message now."""
        with self._lock:
            self._cancel_pending()
            self._message = None

    def close(self) -> None:
        """Cancel any pending dismissal timer (message is kept)."""
        with self._lock:
            self._cancel_pending()

    def _cancel_pending(self):
        if self._token is not None:
            self._token.cancel()
            self._token = None

"""
Participation tracking

Remembers whether this user has already completed the whole quiz. The flag
is a single "true" value under a fixed key; storage failures are logged and
treated as "not participated", never raised to the caller.
"""

import logging
from typing import Optional

from .config import config
from .storage.base import FlagStorage, StorageError

logger = logging.getLogger(__name__)

FLAG_VALUE = "true"


class ParticipationTracker:
    """
    Durable "already participated" flag over an injected storage.

    ``has_participated`` is the in-session view. It starts from ``read()``
    and follows mark()/reset() even when the storage write fails.
    """

    def __init__(self, storage: FlagStorage, key: Optional[str] = None):
        """
        Initialize tracker.

        Args:
            storage: Backend holding the flag
            key: Storage key (defaults to config)
        """
        self.storage = storage
        self.key = key or config.storage.participation_key
        self._participated = self.read()

    @property
    def has_participated(self) -> bool:
        return self._participated

    def read(self) -> bool:
        """Read the durable flag. False when absent or unreadable."""
        try:
            return self.storage.get(self.key) == FLAG_VALUE
        except StorageError as e:
            logger.warning(f"Could not read participation flag: {e}")
            return False

    def mark(self) -> None:
        """Set the flag. Safe to call repeatedly."""
        self._participated = True
        try:
            self.storage.set(self.key, FLAG_VALUE)
        except StorageError as e:
            logger.warning(f"Could not save participation flag: {e}")
            return
        logger.debug(f"Marked participation under {self.key!r}")

    def reset(self) -> None:
        """Clear the flag. Safe to call repeatedly."""
        self._participated = False
        try:
            self.storage.remove(self.key)
        except StorageError as e:
            logger.warning(f"Could not clear participation flag: {e}")
            return
        logger.debug(f"Cleared participation under {self.key!r}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(storage={self.storage!r}, key={self.key!r})"

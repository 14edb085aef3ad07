"""
Base protocol for flag storage

A small key-value capability holding string values, scoped to the
current user or device. The participation tracker is the only writer.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..errors import StorageError

__all__ = ["FlagStorage", "StorageError"]


class FlagStorage(ABC):
    """
    Abstract base class for durable key-value storage.

    Backends raise StorageError when the underlying medium fails.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name (e.g., 'file', 'memory')."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Returns:
            Stored string, or None when the key is absent

        Raises:
            StorageError: If the backend can't be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

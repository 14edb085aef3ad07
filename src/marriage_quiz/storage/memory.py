"""
In-memory storage for tests and throwaway sessions

Nothing survives the process. NullStorage stands in for a context with
no storage at all.
"""

from typing import Optional

from .base import FlagStorage, StorageError


class MemoryStorage(FlagStorage):
    """
    Dict-backed storage.

    Every set/remove is recorded in ``writes`` so tests can count them.
    Set ``fail`` to make every call raise StorageError.
    """

    def __init__(self, initial: Optional[dict] = None, fail: bool = False):
        self.values: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str, Optional[str]]] = []
        self.fail = fail

    @property
    def name(self) -> str:
        return "memory"

    def _check(self):
        if self.fail:
            raise StorageError("Simulated storage failure")

    def get(self, key: str) -> Optional[str]:
        self._check()
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self.values[key] = value
        self.writes.append(("set", key, value))

    def remove(self, key: str) -> None:
        self._check()
        self.values.pop(key, None)
        self.writes.append(("remove", key, None))

    def write_count(self, op: Optional[str] = None) -> int:
        """Number of writes, optionally only of one kind ('set' or 'remove')."""
        if op is None:
            return len(self.writes)
        return sum(1 for w in self.writes if w[0] == op)


class NullStorage(FlagStorage):
    """Storage for contexts without any: reads are absent, writes vanish."""

    @property
    def name(self) -> str:
        return "null"

    def get(self, key: str) -> Optional[str]:
        return None

    def set(self, key: str, value: str) -> None:
        pass

    def remove(self, key: str) -> None:
        pass

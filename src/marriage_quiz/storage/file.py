"""
JSON file storage

Keeps all keys in one small JSON object on disk, so the participation
flag survives between runs on the same machine.
"""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from .base import FlagStorage, StorageError

logger = logging.getLogger(__name__)


class JsonFileStorage(FlagStorage):
    """
    Durable storage backed by a JSON file.

    A missing file reads as empty. Unreadable or corrupt files raise
    StorageError.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    @property
    def name(self) -> str:
        return "file"

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def _save(self, data: dict) -> None:
        tmp = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Write next to the target, then swap in atomically
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
            tmp = None
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}") from e
        finally:
            # Left over only when the write or the swap failed
            if tmp is not None:
                with contextlib.suppress(OSError):
                    os.remove(tmp)
        logger.debug(f"Saved {len(data)} keys to {self.path}")

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._save(data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={str(self.path)!r})"

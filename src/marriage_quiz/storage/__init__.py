"""
Flag storage backends for marriage-quiz

Backends: JSON file (durable), memory (tests), null (no storage available)
"""

from typing import Optional

from .base import FlagStorage, StorageError
from .file import JsonFileStorage
from .memory import MemoryStorage, NullStorage

__all__ = [
    "FlagStorage",
    "StorageError",
    "JsonFileStorage",
    "MemoryStorage",
    "NullStorage",
    "get_storage",
]


def get_storage(name: str, path: Optional[str] = None, **kwargs) -> FlagStorage:
    """
    Factory function to get a storage backend by name.

    Args:
        name: Backend name ('file', 'memory', 'null')
        path: File path for the 'file' backend
        **kwargs: Backend-specific options

    Returns:
        Configured FlagStorage instance

    Raises:
        ValueError: If backend name is unknown or the file backend has no path
    """
    if name == "file":
        if not path:
            raise ValueError("The 'file' storage backend needs a path")
        return JsonFileStorage(path, **kwargs)

    backends = {
        "memory": MemoryStorage,
        "null": NullStorage,
    }

    if name not in backends:
        raise ValueError(f"Unknown storage: {name}. Valid options: {['file'] + list(backends.keys())}")

    return backends[name](**kwargs)

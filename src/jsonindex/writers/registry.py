"""Index writer registry.

Add new writers without changing the driver by registering a factory here.
A factory receives the StorageManager used to resolve output paths and returns
a fresh, unopened writer; every configured writer gets its own instance.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional
from .base import IndexWriter
from .json_writer import JsonIndexWriter
from ..storage.manager import StorageManager

WriterFactory = Callable[[StorageManager], IndexWriter]

_WRITERS: Dict[str, WriterFactory] = {
    "json": JsonIndexWriter,
}


def register_index_writer(name: str, factory: WriterFactory) -> None:
    """Register a new writer type dynamically.

    Allows adding writers at runtime without modifying this file.
    """
    if name in _WRITERS:
        raise ValueError(f"Index writer '{name}' already registered")
    _WRITERS[name] = factory


def unregister_index_writer(name: str) -> None:
    _WRITERS.pop(name, None)


def list_index_writers() -> List[str]:
    """List all registered writer types."""
    return list(_WRITERS.keys())


def get_index_writer(name: str, storage: Optional[StorageManager] = None) -> IndexWriter:
    """Create a writer of type `name`."""
    if name not in _WRITERS:
        raise KeyError(
            f"Unknown index writer: {name}. "
            f"Available: {list(_WRITERS)}. "
            f"Register with register_index_writer()"
        )
    return _WRITERS[name](storage or StorageManager())

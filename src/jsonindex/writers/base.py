"""Index writer interface.

An index writer receives documents from the indexing pipeline and persists
them somewhere. The driving pipeline calls:

    open(name) -> open_params(params) -> {write | update | delete | commit}* -> close()

Writers are plain classes; they are looked up by type name in
`jsonindex.writers.registry`.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Mapping, Tuple
from ..document import IndexDocument

# option name -> (description, current value)
WriterDescription = Dict[str, Tuple[str, Any]]


class WriterState(str, Enum):
    UNOPENED = "unopened"
    NAMED = "named"
    OPEN = "open"
    CLOSED = "closed"
    # a write failed part-way; only close() is accepted
    FAILED = "failed"


class WriterStateError(RuntimeError):
    """Raised when a writer operation is called in the wrong lifecycle state."""


class IndexWriter(ABC):
    """Base interface for all index writers."""
    name: str

    @abstractmethod
    def open(self, name: str) -> None:
        """Record the output name. Must not touch storage."""
        raise NotImplementedError

    @abstractmethod
    def open_params(self, params: Mapping[str, Any]) -> None:
        """Open storage using the writer's configuration options."""
        raise NotImplementedError

    @abstractmethod
    def write(self, doc: IndexDocument) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, doc: IndexDocument) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> WriterDescription:
        """Return {option: (description, current value)} for documentation."""
        raise NotImplementedError

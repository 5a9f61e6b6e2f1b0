"""Index writers."""

from .base import IndexWriter, WriterState, WriterStateError
from .json_writer import JsonIndexWriter
from .params import IndexWriterParams
from .registry import get_index_writer, list_index_writers, register_index_writer

__all__ = [
    "IndexWriter",
    "WriterState",
    "WriterStateError",
    "JsonIndexWriter",
    "IndexWriterParams",
    "get_index_writer",
    "list_index_writers",
    "register_index_writer",
]

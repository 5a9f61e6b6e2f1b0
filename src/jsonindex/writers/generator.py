"""Streaming JSON emitter for line-delimited output.

The generator writes top-level ("root") JSON values to a binary stream and
puts `root_separator` between consecutive root values, never before the first
or after the last. With the default "\\n" separator the stream is JSON Lines.

Values are emitted compactly (no spaces after ":" or ","), UTF-8 encoded, with
non-ASCII characters written literally.
"""

from __future__ import annotations
import json
import math
from typing import Any, BinaryIO, Optional

_ENCODER = json.JSONEncoder(ensure_ascii=False, separators=(",", ":"), allow_nan=False)


class JsonLinesGenerator:
    def __init__(self, stream: BinaryIO, root_separator: str = "\n", encoding: str = "utf-8"):
        self._stream: Optional[BinaryIO] = stream
        self.root_separator = root_separator
        self.encoding = encoding
        self.roots_written = 0

    @property
    def closed(self) -> bool:
        return self._stream is None

    def _out(self) -> BinaryIO:
        if self._stream is None:
            raise ValueError("JsonLinesGenerator is closed")
        return self._stream

    def write_raw(self, text: str) -> None:
        self._out().write(text.encode(self.encoding))

    def start_root(self) -> None:
        """Mark the beginning of a new root value, writing the separator if needed."""
        if self.roots_written:
            self.write_raw(self.root_separator)
        self.roots_written += 1

    def write_string(self, value: str) -> None:
        self.write_raw(_ENCODER.encode(value))

    def write_number(self, value: float) -> None:
        if not math.isfinite(value):
            raise ValueError(f"Cannot write non-finite number as JSON: {value!r}")
        self.write_raw(repr(float(value)))

    def write_value(self, obj: Any) -> None:
        """Write any JSON-serializable value at the current position."""
        self.write_raw(_ENCODER.encode(obj))

    def write_root(self, obj: Any) -> None:
        """Write a complete JSON-serializable object as one root value."""
        self.start_root()
        self.write_value(obj)

    def flush(self) -> None:
        self._out().flush()

    def close(self) -> None:
        """Flush and detach from the stream. The stream itself stays open."""
        if self._stream is None:
            return
        self._stream.flush()
        self._stream = None

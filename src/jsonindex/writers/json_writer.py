"""JSON Lines index writer.

Writes every document as one line of JSON to `<outpath>/<name>`:

    {"fields":{"title":["A title"],"tstamp":["2024-01-01T00:00:00"]},"weight":1.0}

Field values are always arrays of strings; dates and datetimes are written in
ISO-8601 form. Deletion is not supported and updates are written as new lines.
An existing output file is replaced when the writer is opened.
"""

from __future__ import annotations
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, BinaryIO, Mapping, Optional
from .base import IndexWriter, WriterDescription, WriterState, WriterStateError
from .generator import JsonLinesGenerator
from ..document import IndexDocument, format_field_value
from ..storage.manager import StorageManager

logger = logging.getLogger(__name__)

JSON_OUTPATH = "outpath"
DEFAULT_OUTPATH = "jsonindexwriter"
DEFAULT_FILENAME = "index.jsonl"


@dataclass
class _Output:
    """Resources owned by an open writer."""
    path: str
    stream: BinaryIO
    generator: JsonLinesGenerator


class JsonIndexWriter(IndexWriter):
    name = "json"

    def __init__(self, storage: Optional[StorageManager] = None):
        self.storage = storage or StorageManager()
        self.filename = DEFAULT_FILENAME
        self.output_dir = DEFAULT_OUTPATH
        self.state = WriterState.UNOPENED
        self._output: Optional[_Output] = None

    @property
    def output_path(self) -> Optional[str]:
        return self._output.path if self._output else None

    def open(self, name: str) -> None:
        if self.state not in (WriterState.UNOPENED, WriterState.NAMED):
            raise WriterStateError(f"Cannot set output name in state {self.state.value}")
        self.filename = name
        self.state = WriterState.NAMED

    def open_params(self, params: Mapping[str, Any]) -> None:
        if self.state not in (WriterState.UNOPENED, WriterState.NAMED):
            raise WriterStateError(f"Cannot open writer in state {self.state.value}")

        self.output_dir = str(params.get(JSON_OUTPATH) or self.output_dir)
        logger.info(f"Writing output to {self.output_dir}")
        backend, out_dir = self.storage.backend_for(self.output_dir)
        out_file = backend.join(out_dir, self.filename)

        if not backend.exists(out_dir):
            backend.makedirs(out_dir)
        if backend.exists(out_file):
            logger.warning(f"Removing existing output path {out_file}")
            backend.delete(out_file, recursive=True)

        # the name may carry its own subdirectories
        backend.makedirs(backend.dirname(out_file))
        stream = backend.create(out_file)
        generator = JsonLinesGenerator(stream, root_separator="\n")
        self._output = _Output(path=out_file, stream=stream, generator=generator)
        self.state = WriterState.OPEN

    def _require_open(self, op: str) -> _Output:
        if self.state is not WriterState.OPEN or self._output is None:
            raise WriterStateError(f"Cannot {op}: writer is {self.state.value}")
        return self._output

    def write(self, doc: IndexDocument) -> None:
        gen = self._require_open("write").generator
        weight = doc.weight
        if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
            raise TypeError(f"Document weight must be a number, got {type(weight).__name__}")
        if not math.isfinite(weight):
            raise ValueError(f"Document weight must be finite, got {weight!r}")
        # Format every value before the first byte so a rejected document leaves no trace
        fields = [(name, [format_field_value(v) for v in f.values]) for name, f in doc]

        try:
            gen.start_root()
            gen.write_raw('{"fields":{')
            for i, (field_name, values) in enumerate(fields):
                if i:
                    gen.write_raw(",")
                gen.write_string(field_name)
                gen.write_raw(":")
                gen.write_value(values)
            gen.write_raw('},"weight":')
            gen.write_number(weight)
            gen.write_raw("}")
        except Exception:
            self.state = WriterState.FAILED
            raise

    def update(self, doc: IndexDocument) -> None:
        self.write(doc)

    def delete(self, key: str) -> None:
        # Deletion of documents is not supported.
        logger.debug(f"Ignoring delete for {key}")

    def commit(self) -> None:
        # Nothing to commit; close() flushes.
        return

    def close(self) -> None:
        if self.state is WriterState.FAILED and self._output is not None:
            logger.warning(f"Closing failed JSON index {self._output.path}; last line may be incomplete")
        elif self.state is not WriterState.OPEN or self._output is None:
            raise WriterStateError(f"Cannot close: writer is {self.state.value}")
        out = self._output
        try:
            out.generator.close()
        finally:
            out.stream.close()
            self.state = WriterState.CLOSED
        logger.info(f"Finished JSON index in {out.path}")

    def describe(self) -> WriterDescription:
        return {
            JSON_OUTPATH: (
                f"Output path / directory, default: {DEFAULT_OUTPATH}. ",
                self.output_dir,
            ),
        }

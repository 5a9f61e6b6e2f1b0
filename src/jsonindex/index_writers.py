"""Drive several configured index writers as one.

IndexWriters mirrors the single-writer lifecycle and fans every call out to the
configured writers in configuration order. Each writer receives its own
params from the `writers` section of the configuration.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple
from .config import WriterConfig, load_writer_configs, load_yaml
from .document import IndexDocument
from .storage.manager import StorageManager
from .writers.base import IndexWriter, WriterDescription
from .writers.registry import get_index_writer

logger = logging.getLogger(__name__)


class IndexWriters:
    def __init__(self, configs: List[WriterConfig], storage: Optional[StorageManager] = None):
        self.storage = storage or StorageManager()
        self._writers: List[Tuple[WriterConfig, IndexWriter]] = [
            (cfg, get_index_writer(cfg.type, storage=self.storage)) for cfg in configs
        ]
        if not self._writers:
            logger.warning("No index writers configured")

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "IndexWriters":
        storage = StorageManager(cfg.get("storage") or {})
        return cls(load_writer_configs(cfg), storage=storage)

    @classmethod
    def from_yaml(cls, path: str) -> "IndexWriters":
        return cls.from_config(load_yaml(path))

    @property
    def writer_ids(self) -> List[str]:
        return [cfg.id for cfg, _ in self._writers]

    def get(self, writer_id: str) -> IndexWriter:
        for cfg, writer in self._writers:
            if cfg.id == writer_id:
                return writer
        raise KeyError(f"Unknown writer id: {writer_id}")

    def open(self, name: str) -> None:
        for _, writer in self._writers:
            writer.open(name)

    def open_params(self) -> None:
        """Open every writer; on failure, close the ones already opened and re-raise."""
        opened: List[Tuple[WriterConfig, IndexWriter]] = []
        try:
            for cfg, writer in self._writers:
                logger.info(f"Opening index writer {cfg.id} ({cfg.type})")
                writer.open_params(cfg.params)
                opened.append((cfg, writer))
        except Exception:
            for cfg, writer in opened:
                try:
                    writer.close()
                except Exception as exc:
                    logger.error(f"Failed to close index writer {cfg.id}: {exc}")
            raise

    def write(self, doc: IndexDocument) -> None:
        for _, writer in self._writers:
            writer.write(doc)

    def update(self, doc: IndexDocument) -> None:
        for _, writer in self._writers:
            writer.update(doc)

    def delete(self, key: str) -> None:
        for _, writer in self._writers:
            writer.delete(key)

    def commit(self) -> None:
        for _, writer in self._writers:
            writer.commit()

    def close(self) -> None:
        """Close every writer; re-raise the first failure once all were tried."""
        first_error: Optional[BaseException] = None
        for cfg, writer in self._writers:
            try:
                writer.close()
            except Exception as exc:
                logger.error(f"Failed to close index writer {cfg.id}: {exc}")
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def describe(self) -> Dict[str, WriterDescription]:
        return {cfg.id: writer.describe() for cfg, writer in self._writers}

    def describe_text(self) -> str:
        """Human-readable table of every writer's options."""
        lines: List[str] = []
        for writer_id, props in self.describe().items():
            lines.append(writer_id)
            rows = [(key, desc.strip(), "" if value is None else str(value)) for key, (desc, value) in props.items()]
            if not rows:
                lines.append("  (no options)")
                continue
            w_key = max(len("option"), *(len(r[0]) for r in rows))
            w_desc = max(len("description"), *(len(r[1]) for r in rows))
            lines.append(f"  {'option'.ljust(w_key)}  {'description'.ljust(w_desc)}  value")
            for key, desc, value in rows:
                lines.append(f"  {key.ljust(w_key)}  {desc.ljust(w_desc)}  {value}")
        return "\n".join(lines)

"""Writer configuration loader.

Writers are configured in YAML:

    storage:
      type: local
      s3: {region: eu-west-1}
    writers:
      - id: indexer_json_1
        type: json
        params:
          outpath: jsonindexwriter

Keeping configuration in YAML allows versioned, reviewable settings across runs.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List
import yaml
from .writers.params import IndexWriterParams


@dataclass
class WriterConfig:
    id: str
    type: str
    params: IndexWriterParams = field(default_factory=IndexWriterParams)


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_writer_configs(cfg: Dict[str, Any]) -> List[WriterConfig]:
    """Parse the `writers` section into WriterConfig entries, in file order."""
    entries = cfg.get("writers") or []
    if not isinstance(entries, list):
        raise ValueError("'writers' must be a list")
    configs: List[WriterConfig] = []
    seen = set()
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Writer entry #{idx} must be a mapping")
        writer_id = entry.get("id")
        writer_type = entry.get("type")
        if not writer_id or not writer_type:
            raise ValueError(f"Writer entry #{idx} requires 'id' and 'type'")
        if writer_id in seen:
            raise ValueError(f"Duplicate writer id: {writer_id}")
        seen.add(writer_id)
        params = entry.get("params") or {}
        if not isinstance(params, dict):
            raise ValueError(f"Writer '{writer_id}' params must be a mapping")
        configs.append(WriterConfig(id=str(writer_id), type=str(writer_type), params=IndexWriterParams(params)))
    return configs

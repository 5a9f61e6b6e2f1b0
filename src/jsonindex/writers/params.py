from __future__ import annotations
from typing import Any, Dict, Iterator, List, Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class IndexWriterParams(Mapping[str, Any]):
    """Option set handed to IndexWriter.open_params().

    Values loaded from YAML keep their types; the typed getters also accept
    the string forms used in environment variables and CLI overrides.
    """

    def __init__(self, params: Optional[Mapping[str, Any]] = None):
        self._params: Dict[str, Any] = dict(params or {})

    def __getitem__(self, key: str) -> Any:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"IndexWriterParams({self._params!r})"

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._params.get(key)
        return default if value is None else str(value)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._params.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Parameter '{key}' must be an integer, got {value!r}") from exc

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._params.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"Parameter '{key}' must be a boolean, got {value!r}")

    def get_list(self, key: str, default: Optional[List[str]] = None) -> List[str]:
        """List value; a comma-separated string is split and stripped."""
        value = self._params.get(key)
        if value is None:
            return list(default or [])
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return [str(v) for v in value]

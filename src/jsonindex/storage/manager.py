"""Storage manager for resolving the backend that owns a path.

Supports:
- a default backend from the global `storage` configuration
- `s3://bucket/key` paths, resolved to an S3 backend for that bucket
- caching of resolved backends for the lifetime of the manager
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
from .base import StorageBackend, LocalStorageBackend, get_storage_backend

S3_SCHEME = "s3://"


class StorageManager:
    """Resolves storage backends for output paths."""

    def __init__(self, global_storage_config: Optional[Dict[str, Any]] = None):
        self.global_config = global_storage_config or {}
        self._backends: Dict[str, StorageBackend] = {}

        # Initialize default backend
        if self.global_config:
            self._default_backend = get_storage_backend(self.global_config)
        else:
            self._default_backend = LocalStorageBackend()

    @property
    def default_backend(self) -> StorageBackend:
        return self._default_backend

    def backend_for(self, path: str) -> Tuple[StorageBackend, str]:
        """Return the backend for `path` and the path as that backend sees it.

        `s3://bucket/some/dir` resolves to an S3 backend for `bucket` and the
        key `some/dir`. Options shared by all buckets (region, endpoint, keys)
        come from the `s3` section of the storage config.
        """
        if path.startswith(S3_SCHEME):
            bucket, _, key = path[len(S3_SCHEME):].partition("/")
            if not bucket:
                raise ValueError(f"S3 path has no bucket: {path}")
            return self._s3_backend(bucket), key.strip("/")
        return self._default_backend, path

    def _s3_backend(self, bucket: str) -> StorageBackend:
        cache_key = f"s3_{bucket}"
        if cache_key in self._backends:
            return self._backends[cache_key]
        config = dict(self.global_config.get("s3") or {})
        config.update({"type": "s3", "bucket": bucket, "prefix": ""})
        backend = get_storage_backend(config)
        self._backends[cache_key] = backend
        return backend

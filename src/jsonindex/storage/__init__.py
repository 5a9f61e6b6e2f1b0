"""Storage abstraction layer."""

from .base import (
    StorageBackend,
    LocalStorageBackend,
    S3StorageBackend,
    S3WriteStream,
    get_storage_backend,
)
from .manager import StorageManager

__all__ = [
    "StorageBackend",
    "LocalStorageBackend",
    "S3StorageBackend",
    "S3WriteStream",
    "get_storage_backend",
    "StorageManager",
]

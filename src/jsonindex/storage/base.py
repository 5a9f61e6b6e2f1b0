from __future__ import annotations
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Iterator, Optional


class StorageBackend(ABC):
    """Storage abstraction for filesystems and cloud buckets."""

    @abstractmethod
    def join(self, *parts: str) -> str:
        raise NotImplementedError()

    @abstractmethod
    def dirname(self, path: str) -> str:
        raise NotImplementedError()

    @abstractmethod
    def exists(self, path: str) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def makedirs(self, path: str, exist_ok: bool = True) -> None:
        raise NotImplementedError()

    @abstractmethod
    def delete(self, path: str, recursive: bool = True) -> None:
        raise NotImplementedError()

    @abstractmethod
    def create(self, path: str) -> BinaryIO:
        """Open a fresh writable binary stream at `path`, truncating any content."""
        raise NotImplementedError()


class LocalStorageBackend(StorageBackend):
    """Filesystem-backed storage backend."""

    def join(self, *parts: str) -> str:
        return os.path.join(*parts) if parts else ""

    def dirname(self, path: str) -> str:
        return os.path.dirname(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def makedirs(self, path: str, exist_ok: bool = True) -> None:
        if not path:
            return
        os.makedirs(path, exist_ok=exist_ok)

    def delete(self, path: str, recursive: bool = True) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            if recursive:
                shutil.rmtree(path)
            else:
                os.rmdir(path)
        else:
            os.remove(path)

    def create(self, path: str) -> BinaryIO:
        return open(path, "wb")


class S3WriteStream:
    """Write stream for a single S3 object.

    Bytes are spooled to memory and then to a temporary file once they exceed
    `max_size`; the object is uploaded when the stream is closed. Nothing is
    visible in the bucket before close().
    """

    def __init__(self, s3_client: Any, bucket: str, key: str, max_size: int = 8 * 1024 * 1024):
        self.s3_client = s3_client
        self.bucket = bucket
        self.key = key
        self._buffer = tempfile.SpooledTemporaryFile(max_size=max_size, mode="w+b")

    @property
    def closed(self) -> bool:
        return self._buffer.closed

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:
        return self._buffer.write(data)

    def flush(self) -> None:
        self._buffer.flush()

    def tell(self) -> int:
        return self._buffer.tell()

    def close(self) -> None:
        if self._buffer.closed:
            return
        try:
            self._buffer.seek(0)
            self.s3_client.upload_fileobj(self._buffer, self.bucket, self.key)
        finally:
            self._buffer.close()

    def __enter__(self) -> "S3WriteStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class S3StorageBackend(StorageBackend):
    """S3 backend. Directories are logical: a path "exists" if it is an object
    or a prefix of at least one object."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        aws_session_token: Optional[str] = None,
        spool_max_size: int = 8 * 1024 * 1024,
    ):
        try:
            import boto3
        except ImportError as exc:
            raise ImportError("boto3 required for S3 storage backend (pip install 'jsonindex[s3]')") from exc

        client_kwargs: Dict[str, Any] = {}
        if region:
            client_kwargs["region_name"] = region
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        if aws_access_key_id:
            client_kwargs["aws_access_key_id"] = aws_access_key_id
        if aws_secret_access_key:
            client_kwargs["aws_secret_access_key"] = aws_secret_access_key
        if aws_session_token:
            client_kwargs["aws_session_token"] = aws_session_token

        self.bucket = bucket
        self.prefix = prefix.rstrip("/").lstrip("/")
        self.spool_max_size = spool_max_size
        self.s3_client = boto3.client("s3", **client_kwargs)

    def _normalize_path(self, path: str) -> str:
        key = path.replace("\\", "/").lstrip("/")
        if self.prefix and not (key == self.prefix or key.startswith(f"{self.prefix}/")):
            key = f"{self.prefix}/{key}"
        return key.strip("/")

    def _iter_keys(self, key_prefix: str) -> Iterator[str]:
        paginator = self.s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=key_prefix):
            for obj in page.get("Contents", []):
                yield obj["Key"]

    def join(self, *parts: str) -> str:
        clean_parts = [p.strip("/") for p in parts if p]
        return "/".join(clean_parts)

    def dirname(self, path: str) -> str:
        return path.replace("\\", "/").rstrip("/").rpartition("/")[0]

    def exists(self, path: str) -> bool:
        if not path:
            return False
        from botocore.exceptions import ClientError

        key = self._normalize_path(path)
        try:
            self.s3_client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code not in ("404", "NoSuchKey", "NotFound"):
                raise
        # Logical directory
        response = self.s3_client.list_objects_v2(Bucket=self.bucket, Prefix=f"{key}/", MaxKeys=1)
        return response.get("KeyCount", len(response.get("Contents", []))) > 0

    def makedirs(self, path: str, exist_ok: bool = True) -> None:
        # S3 is flat; directories are logical. No action required.
        return

    def delete(self, path: str, recursive: bool = True) -> None:
        key = self._normalize_path(path)
        keys = [key]
        if recursive:
            keys.extend(self._iter_keys(f"{key}/"))
        # delete_objects accepts at most 1000 keys per request
        for start in range(0, len(keys), 1000):
            batch = keys[start:start + 1000]
            self.s3_client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": k} for k in batch], "Quiet": True},
            )

    def create(self, path: str) -> BinaryIO:
        key = self._normalize_path(path)
        return S3WriteStream(self.s3_client, self.bucket, key, max_size=self.spool_max_size)


def get_storage_backend(storage_config: Optional[Dict[str, Any]]) -> StorageBackend:
    """Create a storage backend from configuration."""
    if not storage_config:
        return LocalStorageBackend()
    storage_type = storage_config.get("type", "local").lower()
    if storage_type == "local":
        return LocalStorageBackend()
    if storage_type == "s3":
        bucket = storage_config.get("bucket")
        if not bucket:
            raise ValueError("S3 storage requires a 'bucket' value")
        return S3StorageBackend(
            bucket=bucket,
            prefix=storage_config.get("prefix", ""),
            region=storage_config.get("region"),
            endpoint_url=storage_config.get("endpoint_url"),
            aws_access_key_id=storage_config.get("aws_access_key_id"),
            aws_secret_access_key=storage_config.get("aws_secret_access_key"),
            aws_session_token=storage_config.get("aws_session_token"),
            spool_max_size=int(storage_config.get("spool_max_size", 8 * 1024 * 1024)),
        )
    raise ValueError(f"Unknown storage type: {storage_type}")

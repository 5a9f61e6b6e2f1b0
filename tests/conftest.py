from __future__ import annotations

from typing import Any, Dict, List

import boto3
import pytest
from botocore.exceptions import ClientError


class FakeS3Client:
    """In-memory stand-in for the subset of the boto3 S3 client we use."""

    def __init__(self) -> None:
        self.buckets: Dict[str, Dict[str, bytes]] = {}
        self.uploads: List[str] = []

    def _bucket(self, name: str) -> Dict[str, bytes]:
        return self.buckets.setdefault(name, {})

    def head_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        objects = self._bucket(Bucket)
        if Key not in objects:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        return {"ContentLength": len(objects[Key])}

    def list_objects_v2(self, Bucket: str, Prefix: str = "", MaxKeys: int = 1000) -> Dict[str, Any]:
        keys = sorted(k for k in self._bucket(Bucket) if k.startswith(Prefix))[:MaxKeys]
        return {"KeyCount": len(keys), "Contents": [{"Key": k} for k in keys]}

    def get_paginator(self, operation: str) -> "FakePaginator":
        assert operation == "list_objects_v2"
        return FakePaginator(self)

    def delete_objects(self, Bucket: str, Delete: Dict[str, Any]) -> Dict[str, Any]:
        objects = self._bucket(Bucket)
        for obj in Delete["Objects"]:
            objects.pop(obj["Key"], None)
        return {}

    def upload_fileobj(self, fileobj: Any, Bucket: str, Key: str) -> None:
        self._bucket(Bucket)[Key] = fileobj.read()
        self.uploads.append(Key)


class FakePaginator:
    def __init__(self, client: FakeS3Client) -> None:
        self.client = client

    def paginate(self, Bucket: str, Prefix: str = ""):
        yield self.client.list_objects_v2(Bucket=Bucket, Prefix=Prefix)


@pytest.fixture
def fake_s3(monkeypatch: pytest.MonkeyPatch) -> FakeS3Client:
    client = FakeS3Client()
    monkeypatch.setattr(boto3, "client", lambda service, **kwargs: client)
    return client

import json

import pytest

from jsonindex.document import IndexDocument
from jsonindex.storage import S3StorageBackend, StorageManager
from jsonindex.writers.json_writer import JsonIndexWriter


def test_s3_stream_uploads_on_close(fake_s3) -> None:
    backend = S3StorageBackend(bucket="bkt", prefix="base")

    stream = backend.create("out/docs.jsonl")
    stream.write(b"line")
    assert fake_s3.buckets.get("bkt", {}) == {}

    stream.close()
    stream.close()

    assert fake_s3.buckets["bkt"] == {"base/out/docs.jsonl": b"line"}
    assert fake_s3.uploads == ["base/out/docs.jsonl"]


def test_s3_exists_for_objects_and_logical_directories(fake_s3) -> None:
    fake_s3.buckets["bkt"] = {"dir/sub/file.jsonl": b"x"}
    backend = S3StorageBackend(bucket="bkt")

    assert backend.exists("dir/sub/file.jsonl")
    assert backend.exists("dir")
    assert not backend.exists("di")
    assert not backend.exists("")


def test_s3_delete_is_recursive(fake_s3) -> None:
    fake_s3.buckets["bkt"] = {
        "out/docs.jsonl": b"a",
        "out/docs.jsonl/part-0": b"b",
        "out/other.jsonl": b"c",
    }
    backend = S3StorageBackend(bucket="bkt")

    backend.delete("out/docs.jsonl")

    assert fake_s3.buckets["bkt"] == {"out/other.jsonl": b"c"}


def test_s3_exists_propagates_unexpected_errors(fake_s3, monkeypatch: pytest.MonkeyPatch) -> None:
    from botocore.exceptions import ClientError

    def denied(**kwargs):
        raise ClientError({"Error": {"Code": "403", "Message": "Forbidden"}}, "HeadObject")

    monkeypatch.setattr(fake_s3, "head_object", denied)
    backend = S3StorageBackend(bucket="bkt")

    with pytest.raises(ClientError):
        backend.exists("anything")


def test_manager_caches_s3_backend_per_bucket(fake_s3) -> None:
    manager = StorageManager({"type": "local", "s3": {"region": "eu-west-1"}})

    backend, key = manager.backend_for("s3://bkt/out/dir/")
    again, _ = manager.backend_for("s3://bkt/other")
    other, _ = manager.backend_for("s3://second/x")

    assert isinstance(backend, S3StorageBackend)
    assert key == "out/dir"
    assert again is backend
    assert other is not backend
    assert other.bucket == "second"


def test_json_writer_on_s3_replaces_existing_object(fake_s3) -> None:
    fake_s3.buckets["bkt"] = {"index/docs.jsonl": b'{"stale":true}'}
    writer = JsonIndexWriter()
    writer.open("docs.jsonl")
    writer.open_params({"outpath": "s3://bkt/index"})

    assert "index/docs.jsonl" not in fake_s3.buckets["bkt"]

    writer.write(IndexDocument.from_dict({"id": "1"}))
    writer.write(IndexDocument.from_dict({"id": "2"}, weight=0.5))
    writer.close()

    lines = fake_s3.buckets["bkt"]["index/docs.jsonl"].decode("utf-8").split("\n")
    assert [json.loads(line) for line in lines] == [
        {"fields": {"id": ["1"]}, "weight": 1.0},
        {"fields": {"id": ["2"]}, "weight": 0.5},
    ]
    assert writer.output_path == "index/docs.jsonl"


def test_s3_prefix_matches_whole_path_segments(fake_s3) -> None:
    backend = S3StorageBackend(bucket="bkt", prefix="data")

    for path in ("database/docs.jsonl", "data/docs.jsonl", "data"):
        with backend.create(path) as stream:
            stream.write(b"x")

    assert sorted(fake_s3.buckets["bkt"]) == ["data", "data/database/docs.jsonl", "data/docs.jsonl"]

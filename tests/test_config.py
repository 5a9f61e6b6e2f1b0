from pathlib import Path

import pytest

from jsonindex.config import load_writer_configs, load_yaml
from jsonindex.writers.params import IndexWriterParams


def test_load_yaml_empty_file_is_empty_dict(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_yaml(str(path)) == {}


def test_load_writer_configs_keeps_order_and_params() -> None:
    cfg = {
        "writers": [
            {"id": "json_a", "type": "json", "params": {"outpath": "a"}},
            {"id": "json_b", "type": "json"},
        ]
    }

    configs = load_writer_configs(cfg)

    assert [c.id for c in configs] == ["json_a", "json_b"]
    assert configs[0].params.get("outpath") == "a"
    assert dict(configs[1].params) == {}


@pytest.mark.parametrize(
    "cfg, message",
    [
        ({"writers": {"id": "x"}}, "must be a list"),
        ({"writers": ["json"]}, "must be a mapping"),
        ({"writers": [{"id": "x"}]}, "requires 'id' and 'type'"),
        ({"writers": [{"id": "x", "type": "json"}, {"id": "x", "type": "json"}]}, "Duplicate writer id"),
        ({"writers": [{"id": "x", "type": "json", "params": ["outpath"]}]}, "params must be a mapping"),
    ],
)
def test_load_writer_configs_rejects_invalid_entries(cfg, message) -> None:
    with pytest.raises(ValueError, match=message):
        load_writer_configs(cfg)


def test_params_typed_getters() -> None:
    params = IndexWriterParams(
        {"outpath": "out", "batch": "12", "enabled": "yes", "fields": "a, b,,c", "ids": [1, 2]}
    )

    assert params.get("outpath", "default") == "out"
    assert params.get("missing", "default") == "default"
    assert params.get_str("batch") == "12"
    assert params.get_int("batch") == 12
    assert params.get_int("missing", 5) == 5
    assert params.get_bool("enabled") is True
    assert params.get_bool("missing", True) is True
    assert params.get_list("fields") == ["a", "b", "c"]
    assert params.get_list("ids") == ["1", "2"]
    assert len(params) == 5


def test_params_typed_getters_reject_bad_values() -> None:
    params = IndexWriterParams({"batch": "many", "enabled": "maybe"})

    with pytest.raises(ValueError, match="integer"):
        params.get_int("batch")
    with pytest.raises(ValueError, match="boolean"):
        params.get_bool("enabled")

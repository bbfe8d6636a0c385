from __future__ import annotations

import json
from pathlib import Path

import pytest

from fwdetect.config import DetectOptions, ToolConfig, find_tool_config, load_tool_config
from fwdetect.constants import FALLBACK_EXTENSIONS


def test_defaults_without_config_file(tmp_path: Path) -> None:
    cfg = find_tool_config(tmp_path)
    assert cfg.catalog_path() is None
    assert cfg.to_options() == DetectOptions()


def test_project_config_overrides(tmp_path: Path) -> None:
    (tmp_path / ".fwdetect.json").write_text(
        json.dumps(
            {
                "min_confidence": 55,
                "max_files_scanned": 3,
                "extensions": ["py", ".GO", ""],
                "ignore_dirs": ["third_party"],
                "catalog": "sigs/custom.yaml",
                "jobs": 2,
            }
        ),
        encoding="utf-8",
    )
    cfg = find_tool_config(tmp_path)
    assert cfg.extensions == [".py", ".GO"]
    assert cfg.catalog_path() == tmp_path / "sigs" / "custom.yaml"

    opts = cfg.to_options()
    assert opts.min_confidence == 55
    assert opts.max_files_scanned == 3
    assert opts.ignore_dirs == frozenset({"third_party"})
    assert opts.jobs == 2
    assert opts.replace(min_confidence=90, jobs=None).min_confidence == 90


def test_to_json_from_json(tmp_path: Path) -> None:
    cfg = ToolConfig(min_confidence=10, catalog="x.json")
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps(cfg.to_json()), encoding="utf-8")
    loaded = load_tool_config(p)
    assert loaded.min_confidence == 10
    assert loaded.extensions == list(FALLBACK_EXTENSIONS)
    assert loaded.catalog_path() == tmp_path / "x.json"


def test_config_must_be_object(tmp_path: Path) -> None:
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_tool_config(p)


@pytest.mark.parametrize(
    "raw",
    [
        {"extensions": "py"},
        {"ignore_dirs": "build"},
        {"verbose": "false"},
        {"verbose": 0},
    ],
)
def test_rejects_wrongly_typed_values(raw: dict) -> None:
    with pytest.raises(ValueError):
        ToolConfig.from_json(raw)


def test_null_ignore_dirs_means_none(tmp_path: Path) -> None:
    cfg = ToolConfig.from_json({"ignore_dirs": None, "verbose": False})
    assert cfg.ignore_dirs == []
    assert cfg.verbose is False

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fwdetect.detect import fs
from fwdetect.errors import FileReadError


def test_try_read_bounded_missing_and_binary(tmp_path: Path) -> None:
    assert fs.try_read_bounded(tmp_path / "missing.txt") is None
    blob = tmp_path / "blob.bin"
    blob.write_bytes(b"\x89PNG\x00\x00")
    assert fs.try_read_bounded(blob) is None
    with pytest.raises(FileReadError, match="binary content"):
        fs.read_bounded(blob)


def test_try_read_bounded_directory_is_not_an_error(tmp_path: Path) -> None:
    assert fs.try_read_bounded(tmp_path) is None


def test_read_bounded_truncates_and_replaces(tmp_path: Path) -> None:
    p = tmp_path / "latin.txt"
    p.write_bytes(b"caf\xe9 " + b"y" * 100)
    text = fs.read_bounded(p, max_bytes=10)
    assert len(text) == 10
    assert text.startswith("caf� ")


def test_list_files_is_sorted_and_skips_ignored(tmp_path: Path) -> None:
    for rel in ["b.py", "a.py", "z/c.js", "node_modules/x.js", "readme.md"]:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("", encoding="utf-8")
    found = [fs.rel(p, tmp_path) for p in fs.list_files(tmp_path, [".py", ".js"], {"node_modules"})]
    assert found == ["a.py", "b.py", "z/c.js"]


def test_sample_files_caps_each_extension(tmp_path: Path) -> None:
    for i in range(4):
        (tmp_path / f"m{i}.py").write_text("", encoding="utf-8")
        (tmp_path / f"m{i}.go").write_text("", encoding="utf-8")
    sample = fs.sample_files(tmp_path, [".py", ".go"], per_extension=2)
    assert [p.name for p in sample] == ["m0.go", "m0.py", "m1.go", "m1.py"]
    assert fs.sample_files(tmp_path, [".py"], per_extension=0) == []


def test_find_markers_literal_and_glob(tmp_path: Path) -> None:
    (tmp_path / "a.csproj").write_text("", encoding="utf-8")
    (tmp_path / "b.csproj").write_text("", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    assert fs.find_markers(tmp_path, "a.csproj") == [tmp_path / "a.csproj"]
    assert fs.find_markers(tmp_path, "sub") == []
    assert [p.name for p in fs.find_markers(tmp_path, "*.csproj")] == ["a.csproj", "b.csproj"]
    assert [p.name for p in fs.find_markers(tmp_path, "*.csproj", limit=1)] == ["a.csproj"]


needs_fifo = pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="no named pipes")


@needs_fifo
def test_read_bounded_refuses_fifo(tmp_path: Path) -> None:
    pipe = tmp_path / "pipe.json"
    os.mkfifo(pipe)
    with pytest.raises(FileReadError, match="not a regular file"):
        fs.read_bounded(pipe)
    assert fs.try_read_bounded(pipe) is None


@needs_fifo
def test_list_files_skips_fifo(tmp_path: Path) -> None:
    (tmp_path / "main.py").write_text("", encoding="utf-8")
    os.mkfifo(tmp_path / "pipe.json")
    found = [p.name for p in fs.list_files(tmp_path, [".py", ".json"])]
    assert found == ["main.py"]


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores file modes"
)
def test_try_read_bounded_permission_denied(tmp_path: Path) -> None:
    p = tmp_path / "secret.py"
    p.write_text("import flask", encoding="utf-8")
    p.chmod(0)
    try:
        assert fs.try_read_bounded(p) is None
        with pytest.raises(FileReadError):
            fs.read_bounded(p)
    finally:
        p.chmod(0o644)

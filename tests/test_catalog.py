from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from fwdetect import MalformedSignatureError, SignatureCatalog
from fwdetect.catalog import validate_entries
from fwdetect.model import Category, FrameworkSignature
from fwdetect.signatures import BUILTIN_SIGNATURES


CATALOGS = Path(__file__).parent / "fixtures" / "catalogs"


def test_builtin_catalog_is_ordered_and_unique() -> None:
    catalog = SignatureCatalog.builtin()
    names = catalog.names()
    assert len(names) == len(set(names))
    assert len(catalog) >= 40
    assert catalog.all() == BUILTIN_SIGNATURES
    assert names[0] == "Next.js"
    assert {s.category for s in catalog} >= {
        Category.FRONTEND,
        Category.BACKEND,
        Category.MOBILE,
        Category.DESKTOP,
        Category.GAME,
        Category.BUILD_TOOL,
        Category.RUNTIME,
        Category.TESTING,
        Category.AIML,
        Category.WEB3,
    }


def test_builtin_entries_pass_validation() -> None:
    entries = SignatureCatalog.builtin().to_json()["signatures"]
    assert validate_entries(entries) == []


def test_signatures_are_immutable() -> None:
    sig = SignatureCatalog.builtin().get("Flutter")
    assert sig is not None
    with pytest.raises(dataclasses.FrozenInstanceError):
        sig.priority = 0  # type: ignore[misc]


def test_load_yaml_catalog_with_version() -> None:
    catalog = SignatureCatalog.from_file(CATALOGS / "minimal.yaml")
    assert catalog.version == 3
    assert catalog.names() == ["Widget", "Gadget"]
    widget = catalog.get("Widget")
    assert widget == FrameworkSignature(
        name="Widget",
        category=Category.FRONTEND,
        marker_files=("widget.config.js",),
        content_files=("package.json",),
        content_patterns=('"widget":',),
        priority=5,
    )
    assert catalog.get("Gadget").priority == 0


def test_load_json_list_catalog() -> None:
    catalog = SignatureCatalog.from_file(CATALOGS / "list.json")
    assert catalog.version == 1
    assert catalog.names() == ["Gadget"]


def test_broken_catalog_fails_whole_load() -> None:
    with pytest.raises(MalformedSignatureError) as exc:
        SignatureCatalog.from_file(CATALOGS / "broken.yaml")
    problems = exc.value.problems
    assert "entry 1 (Widget): unknown category 'Spaceship'" in problems
    assert "entry 1 (Widget): duplicate of entry 0" in problems
    assert "entry 2 (Gizmo): unknown keys regex" in problems
    assert "entry 2 (Gizmo): 'priority' must be an integer" in problems
    assert str(CATALOGS / "broken.yaml") in str(exc.value)


@pytest.mark.parametrize(
    "entries, expected",
    [
        ([], "catalog has no signatures"),
        ({"name": "x"}, "signatures must be a list"),
        (["Next.js"], "entry 0: expected a mapping"),
        ([{"name": "", "content_patterns": ["x"]}], "'name' must be a non-empty string"),
        ([{"name": "A"}], "needs at least one of 'marker_files' or 'content_patterns'"),
        ([{"name": "A", "marker_files": "a.json"}], "'marker_files' must be a list"),
        ([{"name": "A", "marker_files": ["../up.json"]}], "must be relative to the project root"),
        (
            [{"name": "A", "marker_files": ["a"], "content_files": ["b"]}],
            "'content_files' without 'content_patterns' can never match",
        ),
    ],
)
def test_from_entries_rejects(entries, expected: str) -> None:
    with pytest.raises(MalformedSignatureError) as exc:
        SignatureCatalog.from_entries(entries)
    assert any(expected in p for p in exc.value.problems)


def test_unparsable_file(tmp_path: Path) -> None:
    p = tmp_path / "sigs.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(MalformedSignatureError, match="cannot parse catalog"):
        SignatureCatalog.from_file(p)


def test_unsupported_suffix(tmp_path: Path) -> None:
    p = tmp_path / "sigs.toml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(MalformedSignatureError, match="unsupported catalog format"):
        SignatureCatalog.from_file(p)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MalformedSignatureError, match="cannot read catalog"):
        SignatureCatalog.from_file(tmp_path / "absent.yaml")


def test_mapping_without_signatures(tmp_path: Path) -> None:
    p = tmp_path / "sigs.json"
    p.write_text(json.dumps({"version": 2}), encoding="utf-8")
    with pytest.raises(MalformedSignatureError, match="missing 'signatures' list"):
        SignatureCatalog.from_file(p)


def test_duplicate_names_rejected_at_construction() -> None:
    sig = FrameworkSignature(name="A", category=Category.UNKNOWN, marker_files=("a",))
    with pytest.raises(MalformedSignatureError):
        SignatureCatalog([sig, sig])


def test_to_json_reloads_to_same_catalog(tmp_path: Path) -> None:
    p = tmp_path / "builtin.json"
    p.write_text(json.dumps(SignatureCatalog.builtin().to_json()), encoding="utf-8")
    assert SignatureCatalog.from_file(p).all() == SignatureCatalog.builtin().all()

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from .model import Category, FrameworkSignature
from .errors import MalformedSignatureError
from .signatures import BUILTIN_SIGNATURES, CATALOG_VERSION

logger = logging.getLogger(__name__)


ENTRY_KEYS = {
    "name",
    "category",
    "marker_files",
    "content_files",
    "content_patterns",
    "priority",
}
LIST_KEYS = ("marker_files", "content_files", "content_patterns")


class SignatureCatalog:
    """Immutable, ordered collection of framework signatures."""

    def __init__(
        self,
        signatures: tuple[FrameworkSignature, ...] | list[FrameworkSignature],
        version: int = CATALOG_VERSION,
    ) -> None:
        sigs = tuple(signatures)
        seen: set[str] = set()
        dupes: list[str] = []
        for s in sigs:
            if s.name in seen:
                dupes.append(f"duplicate signature name {s.name!r}")
            seen.add(s.name)
        if dupes:
            raise MalformedSignatureError(dupes)
        self._signatures = sigs
        self._by_name = {s.name: s for s in sigs}
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    def all(self) -> tuple[FrameworkSignature, ...]:
        return self._signatures

    def names(self) -> list[str]:
        return [s.name for s in self._signatures]

    def get(self, name: str) -> FrameworkSignature | None:
        return self._by_name.get(name)

    def __iter__(self) -> Iterator[FrameworkSignature]:
        return iter(self._signatures)

    def __len__(self) -> int:
        return len(self._signatures)

    def __repr__(self) -> str:
        return f"SignatureCatalog(version={self._version}, signatures={len(self)})"

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self._version,
            "signatures": [s.to_json() for s in self._signatures],
        }

    @staticmethod
    def builtin() -> "SignatureCatalog":
        return _builtin_catalog()

    @staticmethod
    def from_entries(
        entries: Any, version: int = CATALOG_VERSION, source: str = ""
    ) -> "SignatureCatalog":
        problems = validate_entries(entries)
        if problems:
            raise MalformedSignatureError(problems, source=source)
        return SignatureCatalog([_signature_from_entry(e) for e in entries], version=version)

    @staticmethod
    def from_file(path: Path) -> "SignatureCatalog":
        data = load_catalog_data(path)
        version, entries = split_catalog_data(data, source=str(path))
        catalog = SignatureCatalog.from_entries(entries, version=version, source=str(path))
        logger.info("loaded %d signatures from %s", len(catalog), path)
        return catalog


@lru_cache(maxsize=1)
def _builtin_catalog() -> SignatureCatalog:
    return SignatureCatalog(BUILTIN_SIGNATURES, version=CATALOG_VERSION)


def load_catalog_data(path: Path) -> Any:
    src = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedSignatureError([f"cannot read catalog: {e}"], source=src) from e

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(text)
        if suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise MalformedSignatureError([f"cannot parse catalog: {e}"], source=src) from e
    raise MalformedSignatureError(
        [f"unsupported catalog format {suffix or '(none)'!r}; use .yaml, .yml or .json"],
        source=src,
    )


def split_catalog_data(data: Any, source: str = "") -> tuple[int, Any]:
    """Accept either a bare list of entries or {version, signatures}."""
    if isinstance(data, list):
        return CATALOG_VERSION, data
    if isinstance(data, Mapping):
        version = data.get("version", CATALOG_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            raise MalformedSignatureError([f"version must be an integer, got {version!r}"], source=source)
        if "signatures" not in data:
            raise MalformedSignatureError(["missing 'signatures' list"], source=source)
        return version, data["signatures"]
    raise MalformedSignatureError(
        [f"catalog must be a list or a mapping, got {type(data).__name__}"], source=source
    )


def _entry_label(index: int, entry: Any) -> str:
    if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
        return f"entry {index} ({entry['name']})"
    return f"entry {index}"


def validate_entry(index: int, entry: Any) -> list[str]:
    label = _entry_label(index, entry)
    if not isinstance(entry, Mapping):
        return [f"{label}: expected a mapping, got {type(entry).__name__}"]

    problems: list[str] = []
    unknown = sorted(str(k) for k in entry if k not in ENTRY_KEYS)
    if unknown:
        problems.append(f"{label}: unknown keys {', '.join(unknown)}")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        problems.append(f"{label}: 'name' must be a non-empty string")

    category = entry.get("category", Category.UNKNOWN.value)
    if not isinstance(category, str) or category not in {c.value for c in Category}:
        problems.append(f"{label}: unknown category {category!r}")

    for key in LIST_KEYS:
        value = entry.get(key, [])
        if not isinstance(value, list):
            problems.append(f"{label}: '{key}' must be a list")
            continue
        for item in value:
            if not isinstance(item, str) or not item:
                problems.append(f"{label}: '{key}' items must be non-empty strings")
                break
            if key != "content_patterns" and (item.startswith("/") or ".." in Path(item).parts):
                problems.append(f"{label}: '{key}' entry {item!r} must be relative to the project root")
                break

    priority = entry.get("priority", 0)
    if not isinstance(priority, int) or isinstance(priority, bool):
        problems.append(f"{label}: 'priority' must be an integer")

    if not entry.get("marker_files") and not entry.get("content_patterns"):
        problems.append(f"{label}: needs at least one of 'marker_files' or 'content_patterns'")
    if entry.get("content_files") and not entry.get("content_patterns"):
        problems.append(f"{label}: 'content_files' without 'content_patterns' can never match")
    return problems


def validate_entries(entries: Any) -> list[str]:
    if not isinstance(entries, list):
        return [f"signatures must be a list, got {type(entries).__name__}"]
    if not entries:
        return ["catalog has no signatures"]

    problems: list[str] = []
    seen: dict[str, int] = {}
    for i, entry in enumerate(entries):
        problems.extend(validate_entry(i, entry))
        if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
            name = entry["name"]
            if name in seen:
                problems.append(f"entry {i} ({name}): duplicate of entry {seen[name]}")
            else:
                seen[name] = i
    return problems


def _signature_from_entry(entry: Mapping[str, Any]) -> FrameworkSignature:
    return FrameworkSignature(
        name=entry["name"],
        category=Category(entry.get("category", Category.UNKNOWN.value)),
        marker_files=tuple(entry.get("marker_files", []) or []),
        content_files=tuple(entry.get("content_files", []) or []),
        content_patterns=tuple(entry.get("content_patterns", []) or []),
        priority=int(entry.get("priority", 0)),
    )

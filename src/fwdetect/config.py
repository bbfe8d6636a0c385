from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import (
    CONFIG_FILENAME,
    DEFAULT_MAX_FILES_SCANNED,
    DEFAULT_MAX_READ_BYTES,
    DEFAULT_MIN_CONFIDENCE,
    FALLBACK_EXTENSIONS,
    IGNORED_DIRS,
    MAX_CONFIDENCE,
)
from .io_utils import read_json


@dataclass(frozen=True)
class DetectOptions:
    min_confidence: int = DEFAULT_MIN_CONFIDENCE
    max_files_scanned: int = DEFAULT_MAX_FILES_SCANNED
    verbose: bool = True
    max_read_bytes: int = DEFAULT_MAX_READ_BYTES
    extensions: tuple[str, ...] = FALLBACK_EXTENSIONS
    ignore_dirs: frozenset[str] = IGNORED_DIRS
    jobs: int = 1
    cancel: threading.Event | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.min_confidence <= MAX_CONFIDENCE:
            raise ValueError(
                f"min_confidence must be between 0 and {MAX_CONFIDENCE}, got {self.min_confidence}"
            )
        if self.max_files_scanned < 0:
            raise ValueError("max_files_scanned must not be negative")
        if self.max_read_bytes <= 0:
            raise ValueError("max_read_bytes must be positive")
        if self.jobs < 1:
            raise ValueError("jobs must be at least 1")

    def replace(self, **changes: Any) -> "DetectOptions":
        # Drop unset CLI overrides.
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes)


def _string_list(d: dict[str, Any], key: str, default: list[str]) -> list[Any]:
    value = d.get(key, default)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


@dataclass
class ToolConfig:
    version: int = 1

    min_confidence: int = DEFAULT_MIN_CONFIDENCE
    max_files_scanned: int = DEFAULT_MAX_FILES_SCANNED
    max_read_bytes: int = DEFAULT_MAX_READ_BYTES
    verbose: bool = True
    jobs: int = 1

    extensions: list[str] = field(default_factory=lambda: list(FALLBACK_EXTENSIONS))
    ignore_dirs: list[str] = field(default_factory=lambda: sorted(IGNORED_DIRS))

    # External signature file, relative to the config file.
    catalog: str = ""

    # Directory the config was loaded from; not serialized.
    base_dir: Path | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "min_confidence": self.min_confidence,
            "max_files_scanned": self.max_files_scanned,
            "max_read_bytes": self.max_read_bytes,
            "verbose": self.verbose,
            "jobs": self.jobs,
            "extensions": list(self.extensions),
            "ignore_dirs": list(self.ignore_dirs),
            "catalog": self.catalog,
        }

    @staticmethod
    def from_json(d: dict[str, Any]) -> "ToolConfig":
        if not isinstance(d, dict):
            raise ValueError(f"config must be a JSON object, got {type(d).__name__}")
        cfg = ToolConfig()
        cfg.version = int(d.get("version", 1))
        cfg.min_confidence = int(d.get("min_confidence", cfg.min_confidence))
        cfg.max_files_scanned = int(d.get("max_files_scanned", cfg.max_files_scanned))
        cfg.max_read_bytes = int(d.get("max_read_bytes", cfg.max_read_bytes))
        verbose = d.get("verbose", cfg.verbose)
        if not isinstance(verbose, bool):
            raise ValueError(f"'verbose' must be true or false, got {verbose!r}")
        cfg.verbose = verbose
        cfg.jobs = int(d.get("jobs", cfg.jobs))

        exts = _string_list(d, "extensions", cfg.extensions) or cfg.extensions
        # Accept "py" as well as ".py".
        cfg.extensions = [
            x if x.startswith(".") else f".{x}" for x in (str(e).strip() for e in exts) if x
        ]
        cfg.ignore_dirs = [str(x) for x in _string_list(d, "ignore_dirs", cfg.ignore_dirs)]
        cfg.catalog = str(d.get("catalog", "") or "")
        return cfg

    def catalog_path(self) -> Path | None:
        if not self.catalog:
            return None
        p = Path(self.catalog)
        if not p.is_absolute() and self.base_dir is not None:
            p = self.base_dir / p
        return p

    def to_options(self) -> DetectOptions:
        return DetectOptions(
            min_confidence=self.min_confidence,
            max_files_scanned=self.max_files_scanned,
            verbose=self.verbose,
            max_read_bytes=self.max_read_bytes,
            extensions=tuple(self.extensions),
            ignore_dirs=frozenset(self.ignore_dirs),
            jobs=self.jobs,
        )


def load_tool_config(path: Path) -> ToolConfig:
    """Load an explicit config file. Errors propagate to the caller."""
    cfg = ToolConfig.from_json(read_json(path))
    cfg.base_dir = path.parent
    return cfg


def find_tool_config(root: Path) -> ToolConfig:
    """Config from `<root>/.fwdetect.json` when present, defaults otherwise."""
    p = root / CONFIG_FILENAME
    if p.is_file():
        return load_tool_config(p)
    return ToolConfig()

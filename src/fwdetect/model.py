from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .constants import (
    EXIT_BELOW_THRESHOLD,
    EXIT_NO_RESULTS,
    EXIT_PRIMARY_FOUND,
    MAX_CONFIDENCE,
)


class Category(str, Enum):
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    MOBILE = "Mobile"
    DESKTOP = "Desktop"
    GAME = "Game"
    BUILD_TOOL = "BuildTool"
    RUNTIME = "Runtime"
    TESTING = "Testing"
    AIML = "AIML"
    WEB3 = "Web3"
    UNKNOWN = "Unknown"


CATEGORY_LABELS: dict[Category, str] = {
    Category.FRONTEND: "Frontend",
    Category.BACKEND: "Backend",
    Category.MOBILE: "Mobile",
    Category.DESKTOP: "Desktop",
    Category.GAME: "Game engine",
    Category.BUILD_TOOL: "Build tool",
    Category.RUNTIME: "Runtime",
    Category.TESTING: "Testing",
    Category.AIML: "AI/ML",
    Category.WEB3: "Web3",
    Category.UNKNOWN: "Unknown",
}


class EvidenceKind(str, Enum):
    FILE_MATCH = "FileMatch"
    PATTERN_MATCH = "PatternMatch"


@dataclass(frozen=True)
class FrameworkSignature:
    name: str
    category: Category
    marker_files: tuple[str, ...] = ()
    content_patterns: tuple[str, ...] = ()
    # Searched in the scoped pass, but presence alone scores nothing.
    content_files: tuple[str, ...] = ()
    priority: int = 0

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category.value,
            "marker_files": list(self.marker_files),
            "content_files": list(self.content_files),
            "content_patterns": list(self.content_patterns),
            "priority": self.priority,
        }


@dataclass(frozen=True)
class DetectionEvidence:
    kind: EvidenceKind
    description: str
    weight: int
    path: str = ""


@dataclass(frozen=True)
class DetectionResult:
    name: str
    category: Category
    raw_score: int
    priority: int
    order: int
    evidence: tuple[DetectionEvidence, ...] = ()
    evidence_count: int = 0

    @property
    def confidence(self) -> int:
        return max(0, min(MAX_CONFIDENCE, self.raw_score))

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category.value,
            "confidence": self.confidence,
            "raw_score": self.raw_score,
            "priority": self.priority,
            "evidence_count": self.evidence_count,
            "evidence": [e.description for e in self.evidence],
        }


@dataclass(frozen=True)
class DetectionReport:
    root: Path
    min_confidence: int
    results: tuple[DetectionResult, ...] = field(default_factory=tuple)

    @property
    def primary(self) -> DetectionResult | None:
        if self.results and self.results[0].confidence >= self.min_confidence:
            return self.results[0]
        return None

    def by_category(self) -> dict[Category, list[DetectionResult]]:
        grouped: dict[Category, list[DetectionResult]] = {}
        for r in self.results:
            grouped.setdefault(r.category, []).append(r)
        return grouped

    def exit_code(self) -> int:
        if not self.results:
            return EXIT_NO_RESULTS
        if self.primary is None:
            return EXIT_BELOW_THRESHOLD
        return EXIT_PRIMARY_FOUND

    def to_json(self) -> dict[str, Any]:
        primary = self.primary
        return {
            "root": str(self.root),
            "min_confidence": self.min_confidence,
            "primary": primary.name if primary else None,
            "results": [r.to_json() for r in self.results],
        }

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from ..catalog import SignatureCatalog
from ..config import DetectOptions
from ..constants import (
    FALLBACK_PATTERN_WEIGHT,
    MARKER_FILE_WEIGHT,
    SCOPED_PATTERN_WEIGHT,
)
from ..errors import DetectionCancelled, InvalidPathError
from ..model import (
    DetectionEvidence,
    DetectionReport,
    DetectionResult,
    EvidenceKind,
    FrameworkSignature,
)
from . import fs
from .ranking import rank_results

logger = logging.getLogger(__name__)


class _ScanContext:
    """Per-run state shared read-only by every signature."""

    def __init__(self, root: Path, options: DetectOptions) -> None:
        self.root = root
        self.options = options
        self.sample = fs.sample_files(
            root,
            options.extensions,
            options.max_files_scanned,
            options.ignore_dirs,
        )
        self._texts: dict[Path, str | None] = {}
        self._lock = threading.Lock()

    def read(self, path: Path) -> str | None:
        with self._lock:
            if path in self._texts:
                return self._texts[path]
        text = fs.try_read_bounded(path, self.options.max_read_bytes)
        with self._lock:
            self._texts.setdefault(path, text)
        return text

    def rel(self, path: Path) -> str:
        return fs.rel(path, self.root)


def _check_root(root: Path) -> Path:
    try:
        if not root.exists():
            raise InvalidPathError(root, "does not exist")
        if not root.is_dir():
            raise InvalidPathError(root, "not a directory")
        if not os.access(root, os.R_OK | os.X_OK):
            raise InvalidPathError(root, "not readable")
        return root.resolve()
    except OSError as e:
        raise InvalidPathError(root, e.strerror or type(e).__name__) from e


def score_signature(
    sig: FrameworkSignature, order: int, ctx: _ScanContext
) -> DetectionResult | None:
    opts = ctx.options
    evidence: list[DetectionEvidence] = []

    # Marker pass
    scoped: list[Path] = []
    markers_found = 0
    for marker in sig.marker_files:
        found = fs.find_markers(ctx.root, marker, limit=max(opts.max_files_scanned, 1))
        if not found:
            continue
        markers_found += 1
        first = ctx.rel(found[0])
        evidence.append(
            DetectionEvidence(
                kind=EvidenceKind.FILE_MATCH,
                description=f"File: {first}",
                weight=MARKER_FILE_WEIGHT,
                path=first,
            )
        )
        scoped.extend(found)

    for name in sig.content_files:
        scoped.extend(fs.find_markers(ctx.root, name, limit=max(opts.max_files_scanned, 1)))

    # Scoped content pass
    seen: set[Path] = set()
    for path in scoped:
        if path in seen:
            continue
        seen.add(path)
        text = ctx.read(path)
        if text is None:
            continue
        rel = ctx.rel(path)
        for pattern in sig.content_patterns:
            if pattern in text:
                evidence.append(
                    DetectionEvidence(
                        kind=EvidenceKind.PATTERN_MATCH,
                        description=f"Pattern: {pattern} in {rel}",
                        weight=SCOPED_PATTERN_WEIGHT,
                        path=rel,
                    )
                )

    # Fallback pass: only without any marker, one match per file.
    if markers_found == 0 and sig.content_patterns:
        for path in ctx.sample:
            if path in seen:
                continue
            text = ctx.read(path)
            if text is None:
                continue
            for pattern in sig.content_patterns:
                if pattern in text:
                    rel = ctx.rel(path)
                    evidence.append(
                        DetectionEvidence(
                            kind=EvidenceKind.PATTERN_MATCH,
                            description=f"Pattern: {pattern} in {rel} (fallback)",
                            weight=FALLBACK_PATTERN_WEIGHT,
                            path=rel,
                        )
                    )
                    break

    raw_score = sum(e.weight for e in evidence)
    if raw_score <= 0:
        return None
    logger.debug("%s: raw score %d from %d evidence", sig.name, raw_score, len(evidence))
    return DetectionResult(
        name=sig.name,
        category=sig.category,
        raw_score=raw_score,
        priority=sig.priority,
        order=order,
        evidence=tuple(evidence) if opts.verbose else (),
        evidence_count=len(evidence),
    )


class Detector:
    def __init__(
        self,
        catalog: SignatureCatalog | None = None,
        options: DetectOptions | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else SignatureCatalog.builtin()
        self.options = options if options is not None else DetectOptions()

    def detect(self, root: Path | str, options: DetectOptions | None = None) -> DetectionReport:
        opts = options if options is not None else self.options
        root = _check_root(Path(root))
        ctx = _ScanContext(root, opts)
        logger.debug(
            "scanning %s: %d signatures, %d sampled files",
            root,
            len(self.catalog),
            len(ctx.sample),
        )

        if opts.jobs > 1:
            found = self._score_parallel(ctx, opts)
        else:
            found = []
            for order, sig in enumerate(self.catalog.all()):
                _raise_if_cancelled(opts.cancel)
                found.append(score_signature(sig, order, ctx))

        report = DetectionReport(
            root=root,
            min_confidence=opts.min_confidence,
            results=rank_results(r for r in found if r is not None),
        )
        primary = report.primary
        logger.info(
            "%s: %d results, primary %s",
            root,
            len(report.results),
            primary.name if primary else "none",
        )
        return report

    def _score_parallel(
        self, ctx: _ScanContext, opts: DetectOptions
    ) -> list[DetectionResult | None]:
        def work(order: int, sig: FrameworkSignature) -> DetectionResult | None:
            _raise_if_cancelled(opts.cancel)
            return score_signature(sig, order, ctx)

        pool = ThreadPoolExecutor(max_workers=opts.jobs, thread_name_prefix="fwdetect")
        try:
            futures = [pool.submit(work, i, s) for i, s in enumerate(self.catalog.all())]
            # Catalog order, whatever order the workers finish in.
            return [f.result() for f in futures]
        except BaseException:
            pool.shutdown(wait=True, cancel_futures=True)
            raise
        finally:
            pool.shutdown(wait=True)


def _raise_if_cancelled(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise DetectionCancelled("detection cancelled")


def detect_repo(
    root: Path | str,
    catalog: SignatureCatalog | None = None,
    options: DetectOptions | None = None,
    **overrides: Any,
) -> DetectionReport:
    opts = (options if options is not None else DetectOptions()).replace(**overrides)
    return Detector(catalog, opts).detect(root)

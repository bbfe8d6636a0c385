from __future__ import annotations

from collections.abc import Iterable

from ..model import DetectionResult


def rank_key(r: DetectionResult) -> tuple[int, int, int]:
    return (-r.confidence, -r.priority, r.order)


def rank_results(results: Iterable[DetectionResult]) -> tuple[DetectionResult, ...]:
    """Confidence desc, then priority desc, then catalog declaration order.

    `order` makes the key total, so the outcome does not depend on the order
    results were discovered in.
    """
    return tuple(sorted(results, key=rank_key))

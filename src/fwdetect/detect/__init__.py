from __future__ import annotations

from .detect import Detector, detect_repo, score_signature

__all__ = ["Detector", "detect_repo", "score_signature"]

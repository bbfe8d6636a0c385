from __future__ import annotations

__version__ = "0.1.0"

from .catalog import SignatureCatalog
from .config import DetectOptions
from .detect import Detector, detect_repo
from .model import (
    Category,
    DetectionEvidence,
    DetectionReport,
    DetectionResult,
    EvidenceKind,
    FrameworkSignature,
)
from .errors import (
    DetectionCancelled,
    FileReadError,
    FwdetectError,
    InvalidPathError,
    MalformedSignatureError,
)

__all__ = [
    "Category",
    "DetectOptions",
    "DetectionCancelled",
    "DetectionEvidence",
    "DetectionReport",
    "DetectionResult",
    "Detector",
    "EvidenceKind",
    "FileReadError",
    "FrameworkSignature",
    "FwdetectError",
    "InvalidPathError",
    "MalformedSignatureError",
    "SignatureCatalog",
    "__version__",
    "detect_repo",
]

from __future__ import annotations

from pathlib import Path


class FwdetectError(Exception):
    """Base class for errors raised by fwdetect."""


class InvalidPathError(FwdetectError):
    def __init__(self, path: Path | str, reason: str = "not a directory") -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class FileReadError(FwdetectError):
    """A single file could not be used as evidence. Never leaves the detector."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class MalformedSignatureError(FwdetectError):
    def __init__(self, problems: list[str], source: str = "") -> None:
        self.problems = list(problems)
        self.source = source
        where = f"{source}: " if source else ""
        super().__init__(where + "; ".join(self.problems))


class DetectionCancelled(FwdetectError):
    pass

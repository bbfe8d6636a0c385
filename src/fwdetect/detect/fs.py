from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..constants import DEFAULT_MAX_READ_BYTES, GLOB_CHARS
from ..errors import FileReadError

logger = logging.getLogger(__name__)

# Opening a FIFO without a writer blocks unless O_NONBLOCK is set.
_READ_FLAGS = os.O_RDONLY | getattr(os, "O_NONBLOCK", 0) | getattr(os, "O_BINARY", 0)


def exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def read_bounded(path: Path, max_bytes: int = DEFAULT_MAX_READ_BYTES) -> str:
    try:
        fd = os.open(path, _READ_FLAGS)
    except OSError as e:
        raise FileReadError(path, e.strerror or type(e).__name__) from e
    try:
        if not stat.S_ISREG(os.fstat(fd).st_mode):
            raise FileReadError(path, "not a regular file")
        with os.fdopen(fd, "rb", closefd=False) as f:
            data = f.read(max_bytes)
    except OSError as e:
        raise FileReadError(path, e.strerror or type(e).__name__) from e
    finally:
        os.close(fd)
    if b"\x00" in data:
        raise FileReadError(path, "binary content")
    return data.decode("utf-8", errors="replace")


def try_read_bounded(path: Path, max_bytes: int = DEFAULT_MAX_READ_BYTES) -> str | None:
    """Read at most `max_bytes` of `path` as text, or None if it is not usable."""
    try:
        return read_bounded(path, max_bytes)
    except FileReadError as e:
        logger.debug("skipping %s", e)
        return None


def is_glob(pattern: str) -> bool:
    return any(c in pattern for c in GLOB_CHARS)


def find_markers(root: Path, pattern: str, limit: int | None = None) -> list[Path]:
    if not is_glob(pattern):
        p = root / pattern
        return [p] if exists(p) else []
    try:
        found = sorted(p for p in root.glob(pattern) if exists(p))
    except (OSError, ValueError) as e:
        logger.debug("marker glob %r failed under %s: %s", pattern, root, e)
        return []
    if limit is not None:
        found = found[:limit]
    return found


def list_files(
    root: Path,
    extensions: Iterable[str],
    ignore_dirs: Iterable[str] = (),
) -> Iterator[Path]:
    exts = {e.lower() for e in extensions}
    skip = set(ignore_dirs)

    def on_error(e: OSError) -> None:
        logger.debug("cannot list %s: %s", e.filename, e.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            if os.path.splitext(name)[1].lower() not in exts:
                continue
            full = os.path.join(dirpath, name)
            # Regular files only: FIFOs, sockets and device nodes are skipped.
            if os.path.isfile(full):
                yield Path(full)


def sample_files(
    root: Path,
    extensions: Iterable[str],
    per_extension: int,
    ignore_dirs: Iterable[str] = (),
) -> list[Path]:
    exts = [e.lower() for e in extensions]
    counts = {e: 0 for e in exts}
    out: list[Path] = []
    if per_extension <= 0:
        return out
    for p in list_files(root, exts, ignore_dirs):
        ext = p.suffix.lower()
        if counts[ext] >= per_extension:
            if all(n >= per_extension for n in counts.values()):
                break
            continue
        counts[ext] += 1
        out.append(p)
    return out


def rel(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root)).replace("\\", "/")
    except ValueError:
        return str(path).replace("\\", "/")

from __future__ import annotations

CONFIG_FILENAME = ".fwdetect.json"

# Score contributions per piece of evidence.
MARKER_FILE_WEIGHT = 30
SCOPED_PATTERN_WEIGHT = 20
FALLBACK_PATTERN_WEIGHT = 15

MAX_CONFIDENCE = 100

DEFAULT_MIN_CONFIDENCE = 70
DEFAULT_MAX_FILES_SCANNED = 10
DEFAULT_MAX_READ_BYTES = 256 * 1024

FALLBACK_EXTENSIONS = (
    ".js",
    ".ts",
    ".jsx",
    ".tsx",
    ".json",
    ".py",
    ".go",
    ".rs",
    ".cs",
    ".java",
    ".php",
    ".rb",
)

IGNORED_DIRS = frozenset(
    {
        ".git",
        "node_modules",
        ".venv",
        "venv",
        "__pycache__",
        "dist",
        "build",
        ".next",
        "target",
        "vendor",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
    }
)

GLOB_CHARS = ("*", "?", "[")

# CLI exit codes.
EXIT_PRIMARY_FOUND = 0
EXIT_BELOW_THRESHOLD = 1
EXIT_NO_RESULTS = 2
EXIT_INVALID_PATH = 3
EXIT_BAD_CATALOG = 4

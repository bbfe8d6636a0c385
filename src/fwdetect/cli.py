from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .catalog import (
    SignatureCatalog,
    load_catalog_data,
    split_catalog_data,
    validate_entries,
)
from .config import ToolConfig, find_tool_config, load_tool_config
from .constants import EXIT_BAD_CATALOG, EXIT_INVALID_PATH, MAX_CONFIDENCE
from .detect import Detector
from .errors import InvalidPathError, MalformedSignatureError
from .io_utils import write_json_atomic
from .model import CATEGORY_LABELS, DetectionReport, DetectionResult


app = typer.Typer(
    add_completion=False,
    help="Detect which frameworks a project uses from marker files and content patterns",
    invoke_without_command=True,
    no_args_is_help=True,
)

console = Console(stderr=False)
err_console = Console(stderr=True)


@app.callback()
def _root(
    version: bool = typer.Option(
        False, "--version", help="Print version and exit", is_eager=True
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="DEBUG|INFO|WARNING|ERROR (logs go to stderr)"
    ),
) -> None:
    if version:
        console.print(__version__)
        raise typer.Exit(code=0)
    level = getattr(logging, log_level.strip().upper(), None)
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level {log_level!r}", param_hint="--log-level")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def _fail(code: int, message: str) -> typer.Exit:
    err_console.print(f"ERROR: {escape(message)}")
    return typer.Exit(code=code)


def _load_config(target: Path, config: Path | None) -> ToolConfig:
    try:
        return load_tool_config(config) if config else find_tool_config(target)
    except (OSError, TypeError, ValueError) as e:
        where = config or target
        raise _fail(EXIT_BAD_CATALOG, f"invalid config {where}: {e}")


def _load_catalog(path: Path | None) -> SignatureCatalog:
    if path is None:
        return SignatureCatalog.builtin()
    try:
        return SignatureCatalog.from_file(path)
    except MalformedSignatureError as e:
        for p in e.problems:
            err_console.print(f"- {escape(p)}")
        raise _fail(EXIT_BAD_CATALOG, f"malformed signature catalog {path}")


def _evidence_cell(r: DetectionResult) -> str:
    if not r.evidence:
        return f"{r.evidence_count} item(s)"
    return "\n".join(escape(e.description) for e in r.evidence)


def _results_table(title: str, rows: list[tuple[int, DetectionResult]]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Framework", style="bold")
    table.add_column("Category")
    table.add_column("Confidence", justify="right")
    table.add_column("Priority", justify="right")
    table.add_column("Evidence")
    for i, r in rows:
        table.add_row(
            str(i),
            escape(r.name),
            CATEGORY_LABELS[r.category],
            str(r.confidence),
            str(r.priority),
            _evidence_cell(r),
        )
    return table


def _print_report(report: DetectionReport, by_category: bool) -> None:
    console.print(f"root: {escape(str(report.root))}")
    if not report.results:
        console.print("results: (none)")
    elif by_category:
        rank = {id(r): i for i, r in enumerate(report.results, start=1)}
        for category, results in report.by_category().items():
            rows = [(rank[id(r)], r) for r in results]
            console.print(_results_table(CATEGORY_LABELS[category], rows))
    else:
        rows = list(enumerate(report.results, start=1))
        console.print(_results_table("fwdetect", rows))

    primary = report.primary
    if primary is not None:
        console.print(f"primary: {escape(primary.name)} ({primary.confidence})")
    elif report.results:
        top = report.results[0]
        console.print(
            f"primary: none (top {escape(top.name)} at {top.confidence} "
            f"< threshold {report.min_confidence})"
        )
    else:
        console.print("primary: none")


@app.command()
def detect(
    path: Path = typer.Argument(Path("."), help="Project root to scan"),
    min_confidence: int | None = typer.Option(
        None,
        "--min-confidence",
        min=0,
        max=MAX_CONFIDENCE,
        help="Confidence needed for a primary framework (default 70)",
    ),
    max_files: int | None = typer.Option(
        None, "--max-files", min=0, help="Fallback scan budget per file extension (default 10)"
    ),
    json_out: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    brief: bool = typer.Option(
        False, "--brief", help="Keep evidence counts only, not the evidence trail"
    ),
    jobs: int | None = typer.Option(
        None, "--jobs", min=1, help="Worker threads used across signatures"
    ),
    catalog: Path | None = typer.Option(
        None, "--catalog", help="Signature file (.yaml/.yml/.json) replacing the built-in table"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Config file (default: <path>/.fwdetect.json when present)"
    ),
    by_category: bool = typer.Option(
        False, "--by-category", help="Group text output by category"
    ),
    output: Path | None = typer.Option(
        None, "--output", help="Also write the JSON report to this file"
    ),
):
    """Detect frameworks. Exit 0: primary found, 1: below threshold, 2: nothing, 3: bad path, 4: bad catalog, config or output."""
    cfg = _load_config(path, config)
    try:
        opts = cfg.to_options().replace(
            min_confidence=min_confidence,
            max_files_scanned=max_files,
            jobs=jobs,
            verbose=False if brief else None,
        )
    except ValueError as e:
        raise _fail(EXIT_BAD_CATALOG, f"invalid config: {e}")
    sigs = _load_catalog(catalog if catalog is not None else cfg.catalog_path())

    try:
        report = Detector(sigs, opts).detect(path)
    except InvalidPathError as e:
        raise _fail(EXIT_INVALID_PATH, str(e))

    payload = report.to_json()
    if output is not None:
        try:
            write_json_atomic(output, payload)
        except OSError as e:
            raise _fail(EXIT_BAD_CATALOG, f"cannot write {output}: {e.strerror or e}")
    if json_out:
        sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    else:
        _print_report(report, by_category=by_category)
    raise typer.Exit(code=report.exit_code())


@app.command()
def signatures(
    catalog: Path | None = typer.Option(
        None, "--catalog", help="Signature file to list instead of the built-in table"
    ),
    json_out: bool = typer.Option(False, "--json", help="Print the catalog as JSON"),
):
    """List known framework signatures in declaration order."""
    sigs = _load_catalog(catalog)
    if json_out:
        sys.stdout.write(json.dumps(sigs.to_json(), indent=2) + "\n")
        raise typer.Exit(code=0)

    table = Table(title=f"signatures (v{sigs.version}, {len(sigs)})")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Priority", justify="right")
    table.add_column("Marker files")
    table.add_column("Content patterns")
    for s in sigs:
        table.add_row(
            escape(s.name),
            CATEGORY_LABELS[s.category],
            str(s.priority),
            escape(", ".join(s.marker_files)) or "-",
            escape(", ".join(s.content_patterns)) or "-",
        )
    console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Signature file (.yaml/.yml/.json)"),
):
    """Check a signature file and report every problem found."""
    try:
        _, entries = split_catalog_data(load_catalog_data(file), source=str(file))
    except MalformedSignatureError as e:
        problems = e.problems
    else:
        problems = validate_entries(entries)

    if problems:
        for p in problems:
            err_console.print(f"- {escape(p)}")
        raise _fail(EXIT_BAD_CATALOG, f"{len(problems)} problem(s) in {file}")
    console.print(f"ok ({len(entries)} signatures): {escape(str(file))}")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, prog_name="fwdetect")


if __name__ == "__main__":
    main(sys.argv[1:])

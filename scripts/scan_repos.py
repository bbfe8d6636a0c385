from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import os
from pathlib import Path
from typing import Any

from fwdetect import DetectOptions, FwdetectError, SignatureCatalog, detect_repo
from fwdetect.constants import IGNORED_DIRS


def is_git_repo(p: Path) -> bool:
    # Supports normal .git directory and worktrees/submodules where .git can be a file.
    g = p / ".git"
    return g.is_dir() or g.is_file()


def iter_git_repos(roots: list[Path], max_depth: int) -> list[Path]:
    repos: list[Path] = []

    def walk(root: Path, depth: int) -> None:
        if depth < 0:
            return
        try:
            entries = sorted(root.iterdir())
        except OSError:
            return
        for e in entries:
            if not e.is_dir() or e.name in IGNORED_DIRS:
                continue
            if is_git_repo(e):
                repos.append(e)
                continue
            walk(e, depth - 1)

    for r in roots:
        if is_git_repo(r):
            repos.append(r)
        else:
            walk(r, max_depth)

    # De-dup + stable sort.
    return sorted({p.resolve() for p in repos})


def run_repo(repo: Path, catalog: SignatureCatalog, options: DetectOptions) -> dict[str, Any]:
    row: dict[str, Any] = {
        "repo": str(repo),
        "primary": None,
        "top": [],
        "errors": [],
    }
    try:
        report = detect_repo(repo, catalog=catalog, options=options)
        row["primary"] = report.primary.name if report.primary else None
        row["top"] = [
            {"name": r.name, "category": r.category.value, "confidence": r.confidence}
            for r in report.results[:5]
        ]
    except FwdetectError as e:
        row["errors"].append(f"{type(e).__name__}: {e}")
    return row


def render_md(report: dict[str, Any]) -> str:
    lines: list[str] = []
    lines.append("# fwdetect scan")
    lines.append("")
    lines.append(f"Scanned at: `{report['meta']['timestamp']}`")
    lines.append(f"Roots: {', '.join('`' + r + '`' for r in report['meta']['roots'])}")
    lines.append(f"Min confidence: {report['meta']['min_confidence']}")
    lines.append("")

    rows = report["repos"]
    failed = sum(1 for r in rows if r["errors"])
    with_primary = sum(1 for r in rows if r["primary"])

    lines.append(f"- Total repos: **{len(rows)}**")
    lines.append(f"- With a primary framework: **{with_primary}**")
    lines.append(f"- Failed scans: **{failed}**")
    lines.append("")

    lines.append("| repo | primary | top results | errors |")
    lines.append("|---|---|---|---|")
    for r in rows:
        top = ", ".join(f"{t['name']} ({t['confidence']})" for t in r["top"])
        lines.append(
            "| "
            + " | ".join(
                [
                    f"`{r['repo']}`",
                    r["primary"] or "-",
                    top or "-",
                    "; ".join(r["errors"]),
                ]
            )
            + " |"
        )
    return "\n".join(lines) + "\n"


def main() -> None:
    ap = argparse.ArgumentParser(description="Run framework detection across many git repos")
    ap.add_argument("--root", action="append", required=True, help="Root directory to scan (repeatable)")
    ap.add_argument("--max-depth", type=int, default=2, help="Max directory depth under roots")
    ap.add_argument("--min-confidence", type=int, default=70, help="Threshold for the primary framework")
    ap.add_argument("--catalog", default="", help="Signature file replacing the built-in table")
    ap.add_argument("--out", default="", help="Write markdown report to this path (default: /tmp/...)")
    ap.add_argument("--json-out", default="", help="Write json report to this path (default: /tmp/...)")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, args.log_level),
    )

    roots = [Path(os.path.expanduser(r)).resolve() for r in args.root]
    ts = dt.datetime.now().strftime("%Y%m%d-%H%M%S")
    md_out = Path(args.out) if args.out else Path(f"/tmp/fwdetect-scan-{ts}.md")
    js_out = Path(args.json_out) if args.json_out else Path(f"/tmp/fwdetect-scan-{ts}.json")

    catalog = SignatureCatalog.from_file(Path(args.catalog)) if args.catalog else SignatureCatalog.builtin()
    options = DetectOptions(min_confidence=args.min_confidence)

    repos = iter_git_repos(roots, max_depth=args.max_depth)
    data = {
        "meta": {
            "timestamp": dt.datetime.now().isoformat(timespec="seconds"),
            "roots": [str(r) for r in roots],
            "max_depth": args.max_depth,
            "min_confidence": args.min_confidence,
        },
        "repos": [run_repo(r, catalog, options) for r in repos],
    }

    js_out.write_text(json.dumps(data, indent=2), encoding="utf-8")
    md_out.write_text(render_md(data), encoding="utf-8")

    print(str(md_out))
    print(str(js_out))


if __name__ == "__main__":
    main()

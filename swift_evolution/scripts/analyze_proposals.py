#!/usr/bin/env python3
"""CLI entrypoint for the Swift Evolution proposal analyzer."""
from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, cast

from swift_evolution.proposal_analyzer import parser, renderer
from swift_evolution.proposal_analyzer.models import ProposalRecord

DEFAULT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_TARGET = DEFAULT_ROOT / "proposals"


class AnalyzerPaths:
    def __init__(self, root: Path, target: Path, index_dir: Path | None = None) -> None:
        self.root = root
        self.target = target
        self.index_dir = (index_dir or target / "_index").resolve()
        self.proposals_path = self.index_dir / "proposals.jsonl"
        self.scan_report_path = self.index_dir / "scan_report.json"
        self.summary_path = self.index_dir / "SUMMARY.md"

logger = logging.getLogger("swift_evolution.proposal_analyzer.cli")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def resolve_root(path: str | None) -> Path:
    if path:
        return Path(path).expanduser().resolve()
    return DEFAULT_ROOT


def resolve_target(root: Path, target: str | None) -> Path:
    if target:
        resolved = Path(target).expanduser().resolve()
    elif root == DEFAULT_ROOT:
        resolved = DEFAULT_TARGET
    else:
        resolved = root / "proposals"
    if not resolved.exists():
        raise SystemExit(f"Target directory not found: {resolved}")
    return resolved


def resolve_paths(args: argparse.Namespace) -> AnalyzerPaths:
    root = resolve_root(args.root)
    target = resolve_target(root, args.target)
    index_dir = Path(args.index_dir).expanduser() if args.index_dir else None
    return AnalyzerPaths(root, target, index_dir)


def scan(args: argparse.Namespace, paths: AnalyzerPaths) -> tuple[
    list[ProposalRecord], dict[str, parser.FileScanResult]
]:
    base_path = paths.root if paths.target.is_relative_to(paths.root) else paths.target
    return parser.scan_directory(
        paths.target,
        base_path,
        line_budget=getattr(args, "header_lines", None),
        workers=getattr(args, "workers", None),
        exclude=[paths.index_dir],
    )


def command_scan(args: argparse.Namespace) -> None:
    paths = resolve_paths(args)
    logger.info("Scanning %s", paths.target)
    records, files = scan(args, paths)
    failed = [result for result in files.values() if result.status == "error"]
    if failed and not args.keep_going:
        for result in failed:
            logger.error("%s", result.error)
        raise SystemExit(1)
    timestamp = renderer.now_iso()
    write_jsonl(paths.proposals_path, [record.to_dict() for record in records])
    write_scan_report(paths, files, timestamp)
    logger.info(
        "Parsed %d proposals from %d files (%d failed)",
        len(records),
        len(files),
        len(failed),
    )


def command_render(args: argparse.Namespace) -> None:
    paths = resolve_paths(args)
    if not paths.proposals_path.exists():
        raise SystemExit("No scan output found. Run 'scan' first.")
    records = [ProposalRecord.from_dict(item) for item in read_jsonl(paths.proposals_path)]
    content = renderer.render_summary(parser.sort_records(records), paths.summary_path)
    logger.info("Summary written to %s (%d characters)", paths.summary_path, len(content))


def command_check(args: argparse.Namespace) -> None:
    paths = resolve_paths(args)
    _, files = scan(args, paths)
    previous = load_scan_report(paths).get("files", {})
    statuses = [
        (file_path, result.status, result.se_number or "-")
        for file_path, result in files.items()
    ]
    missing = [path for path in previous if path not in files]
    print_status_table(statuses, missing, files)


def write_jsonl(path: Path, items: Iterable[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        for item in items:
            fh.write(json.dumps(item, ensure_ascii=False))
            fh.write("\n")


def read_jsonl(path: Path) -> Iterable[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            if line.strip():
                yield json.loads(line)


def write_scan_report(
    paths: AnalyzerPaths, files: Mapping[str, parser.FileScanResult], timestamp: str
) -> None:
    if paths.target.is_relative_to(paths.root):
        target_path = str(paths.target.relative_to(paths.root))
    else:
        target_path = str(paths.target)
    report = {
        "timestamp": timestamp,
        "target": target_path,
        "files": {file: data.to_dict() for file, data in files.items()},
        "counts": {
            "files": len(files),
            "parsed": sum(1 for result in files.values() if result.status == "ok"),
            "errors": sum(1 for result in files.values() if result.status == "error"),
        },
    }
    paths.scan_report_path.parent.mkdir(parents=True, exist_ok=True)
    with paths.scan_report_path.open("w", encoding="utf-8") as fh:
        json.dump(report, fh, indent=2)


def load_scan_report(paths: AnalyzerPaths) -> dict[str, Any]:
    if not paths.scan_report_path.exists():
        return {}
    with paths.scan_report_path.open("r", encoding="utf-8") as fh:
        return cast(dict[str, Any], json.load(fh))


def print_status_table(
    statuses: list[tuple[str, str, str]],
    missing: list[str],
    files: Mapping[str, parser.FileScanResult],
) -> None:
    print("File".ljust(70), "Status".ljust(8), "Proposal")
    print("-" * 90)
    for file_path, status, se_number in sorted(statuses):
        print(file_path.ljust(70), status.ljust(8), se_number)
    for missing_path in missing:
        print(missing_path.ljust(70), "missing".ljust(8), "-")
    errors = [result for result in files.values() if result.error]
    if errors:
        print("\nErrors:")
        for result in sorted(errors, key=lambda entry: entry.file):
            print(f"- {result.error}")


def add_parse_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--header-lines",
        type=int,
        help="Number of leading lines scanned for header fields (overrides ANALYZER_HEADER_LINES)",
    )
    subparser.add_argument(
        "--workers",
        type=int,
        help="Parse documents with this many threads (overrides ANALYZER_WORKERS)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(description="Analyze Swift Evolution proposals")
    parser_obj.add_argument("--root", help="Repository root (defaults to script location)")
    parser_obj.add_argument("--target", help="Directory holding the proposal documents")
    parser_obj.add_argument("--index-dir", help="Output directory (defaults to <target>/_index)")
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser_obj.add_subparsers(dest="command")

    scan_parser = subparsers.add_parser("scan", help="Parse proposals and write the index")
    add_parse_options(scan_parser)
    scan_parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Skip documents that fail to parse instead of aborting",
    )
    scan_parser.set_defaults(func=command_scan)

    render_parser = subparsers.add_parser("render", help="Render Markdown summary")
    render_parser.set_defaults(func=command_render)

    check_parser = subparsers.add_parser("check", help="Dry-run parse status check")
    add_parse_options(check_parser)
    check_parser.set_defaults(func=command_check)

    return parser_obj


def main(argv: list[str] | None = None) -> None:
    parser_obj = build_parser()
    args = parser_obj.parse_args(argv)
    if not getattr(args, "command", None):
        parser_obj.print_help()
        return
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()

"""Assemble proposal records from documents and directories."""
from __future__ import annotations

import logging
import os
import re
import warnings
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from hashlib import sha256
from pathlib import Path

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .errors import MissingAuthorsWarning, ProposalParseError
from .extractor import (
    extract_authors,
    extract_identifier,
    extract_status_text,
    extract_title,
)
from .models import ProposalRecord
from .resolver import resolve_status
from .scanner import DEFAULT_LINE_BUDGET, scan_header
from .wordcount import word_count

logger = logging.getLogger(__name__)

HEADER_LINES_ENV = "ANALYZER_HEADER_LINES"
WORKERS_ENV = "ANALYZER_WORKERS"

TEXT_EXTENSIONS = {".md", ".markdown", ".txt"}
HTML_EXTENSIONS = {".html", ".htm"}
SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS | HTML_EXTENSIONS

PLAYGROUND_PAGE_SUFFIX = ".xcplaygroundpage"
PLAYGROUND_PAGE_FILE = "Contents.swift"
PLAYGROUND_OPEN = "/*:"
PLAYGROUND_CLOSE = "*/"

PROPOSAL_LINK_RE = re.compile(r"^\* Proposal:\s*\[SE-\d{4}\]\(([^)\s]+)\)", re.MULTILINE)


@dataclass
class ParseOutcome:
    """Tagged result of parsing one document: a record or an error."""

    file_name: str
    record: ProposalRecord | None = None
    error: ProposalParseError | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass
class FileScanResult:
    """Metadata captured while scanning a single proposal file."""

    file: str
    sha256: str
    mtime: int
    status: str = "ok"
    error: str | None = None
    se_number: str | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "sha256": self.sha256,
            "mtime": self.mtime,
            "status": self.status,
            "error": self.error,
            "se_number": self.se_number,
            "warnings": list(self.warnings),
        }


def _resolve_positive_int(value: int | None, env_name: str, default: int | None) -> int | None:
    if value is not None:
        return max(value, 1)
    env_value = os.environ.get(env_name)
    if env_value:
        try:
            return max(int(env_value), 1)
        except ValueError:
            logger.debug("Invalid %s value: %s", env_name, env_value)
    return default


def resolve_line_budget(value: int | None) -> int:
    resolved = _resolve_positive_int(value, HEADER_LINES_ENV, DEFAULT_LINE_BUDGET)
    assert resolved is not None
    return resolved


def resolve_workers(value: int | None) -> int | None:
    return _resolve_positive_int(value, WORKERS_ENV, None)


def build_record(
    text: str,
    file_name: str,
    *,
    line_budget: int = DEFAULT_LINE_BUDGET,
) -> tuple[ProposalRecord, list[str]]:
    """Parse ``text`` into a record plus any non-fatal notes."""
    notes: list[str] = []
    try:
        header = scan_header(text, line_budget, file_name=file_name)
        assert header.proposal_line is not None
        assert header.status_line is not None
        se_number = extract_identifier(header.proposal_line)
        status_text = extract_status_text(header.status_line)
        status = resolve_status(status_text, line=header.status_line)
    except ProposalParseError as exc:
        exc.with_file(file_name)
        raise
    authors = extract_authors(header.author_line, header.multiple_authors)
    if header.author_line is None:
        notes.append(f"{file_name}: no author line within the first {line_budget} lines")
    elif not authors:
        notes.append(f"{file_name}: author line names no authors: {header.author_line!r}")
    record = ProposalRecord(
        title=extract_title(header.title_line),
        se_number=se_number,
        authors=tuple(authors),
        status=status,
        file_name=file_name,
        word_count=word_count(text),
    )
    return record, notes


def parse_proposal(
    text: str,
    file_name: str,
    *,
    line_budget: int = DEFAULT_LINE_BUDGET,
) -> ProposalRecord:
    """Parse a single proposal, raising :class:`ProposalParseError` on failure.

    A missing author line, or one that names nobody, is reported through
    :class:`MissingAuthorsWarning` and yields an empty author tuple.
    """
    record, notes = build_record(text, file_name, line_budget=line_budget)
    for note in notes:
        logger.warning(note)
        warnings.warn(note, MissingAuthorsWarning, stacklevel=2)
    return record


def parse_document(
    file_name: str,
    text: str,
    *,
    line_budget: int = DEFAULT_LINE_BUDGET,
) -> ParseOutcome:
    try:
        record, notes = build_record(text, file_name, line_budget=line_budget)
    except ProposalParseError as exc:
        logger.error("Failed to parse %s", exc)
        return ParseOutcome(file_name=file_name, error=exc)
    for note in notes:
        logger.warning(note)
    return ParseOutcome(file_name=file_name, record=record, warnings=notes)


def parse_documents(
    documents: Iterable[tuple[str, str]],
    *,
    line_budget: int = DEFAULT_LINE_BUDGET,
    workers: int | None = None,
) -> list[ParseOutcome]:
    """Parse ``(file_name, text)`` pairs, keeping input order in the result."""
    pending = list(documents)

    def worker(document: tuple[str, str]) -> ParseOutcome:
        file_name, text = document
        return parse_document(file_name, text, line_budget=line_budget)

    if not workers or workers <= 1 or len(pending) <= 1:
        return [worker(document) for document in pending]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(worker, pending))


def sort_records(records: Iterable[ProposalRecord]) -> list[ProposalRecord]:
    return sorted(records, key=lambda record: record.number)


def parse_proposals(
    documents: Iterable[tuple[str, str]],
    *,
    strict: bool = True,
    line_budget: int = DEFAULT_LINE_BUDGET,
    workers: int | None = None,
) -> list[ProposalRecord]:
    """Parse a batch of documents and return records sorted by proposal number.

    With ``strict`` the first failed document (in input order) is raised once
    every document has been parsed; otherwise failures are logged and skipped.
    """
    outcomes = parse_documents(documents, line_budget=line_budget, workers=workers)
    records: list[ProposalRecord] = []
    for outcome in outcomes:
        if outcome.error is not None:
            if strict:
                raise outcome.error
            logger.warning("Skipping %s: %s", outcome.file_name, outcome.error)
            continue
        assert outcome.record is not None
        records.append(outcome.record)
    return sort_records(records)


def is_playground_page(path: Path) -> bool:
    return path.name == PLAYGROUND_PAGE_FILE and path.parent.suffix == PLAYGROUND_PAGE_SUFFIX


def iter_supported_files(root: Path, exclude: Iterable[Path] = ()) -> Iterator[Path]:
    """Yield proposal files under ``root``, skipping ``_index`` and ``exclude`` dirs."""
    excluded = [path.resolve() for path in exclude]
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if any(part == "_index" for part in path.parts):
            continue
        if any(path.resolve().is_relative_to(skipped) for skipped in excluded):
            continue
        if path.suffix.lower() in SUPPORTED_EXTENSIONS or is_playground_page(path):
            yield path


def strip_playground_markup(text: str) -> str:
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if lines and lines[0].strip() == PLAYGROUND_OPEN:
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if lines and lines[-1].strip() == PLAYGROUND_CLOSE:
        lines.pop()
    return "\n".join(lines)


def render_inline(element: Tag) -> str:
    parts: list[str] = []
    for child in element.children:
        if isinstance(child, Tag):
            if child.name == "a":
                href = child.get("href") or ""
                parts.append(f"[{child.get_text(' ', strip=True)}]({href})")
            else:
                parts.append(render_inline(child))
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            parts.append(str(child))
    return " ".join("".join(parts).split())


def html_to_header_text(text: str) -> str:
    """Rebuild Markdown-style header lines from an HTML proposal page."""
    soup = BeautifulSoup(text, "lxml")
    lines: list[str] = []
    heading = soup.find("h1")
    if isinstance(heading, Tag):
        lines.append(f"# {heading.get_text(' ', strip=True)}")
        header_list = heading.find_next("ul")
    else:
        header_list = soup.find("ul")
    if isinstance(header_list, Tag):
        lines.append("")
        for item in header_list.find_all("li", recursive=False):
            lines.append(f"* {render_inline(item)}")
        lines.append("")
        for sibling in header_list.find_next_siblings():
            lines.append(sibling.get_text(" ", strip=True))
    return "\n".join(lines)


def read_document(path: Path) -> tuple[str, str]:
    """Read ``path`` and return the proposal file name and Markdown text."""
    text = path.read_text(encoding="utf-8", errors="ignore")
    if is_playground_page(path):
        text = strip_playground_markup(text)
        link = PROPOSAL_LINK_RE.search(text)
        file_name = link.group(1) if link else f"{path.parent.stem}.md"
        return file_name, text
    if path.suffix.lower() in HTML_EXTENSIONS:
        return path.name, html_to_header_text(text)
    return path.name, text


def scan_directory(
    target_dir: Path,
    base_path: Path,
    *,
    line_budget: int | None = None,
    workers: int | None = None,
    exclude: Iterable[Path] = (),
) -> tuple[list[ProposalRecord], dict[str, FileScanResult]]:
    """Parse every supported file under ``target_dir``, skipping ``exclude`` dirs.

    Failures are recorded in the returned scan results rather than raised so
    the caller can decide whether a partial batch is acceptable.
    """
    resolved_budget = resolve_line_budget(line_budget)
    resolved_workers = resolve_workers(workers)
    files: dict[str, FileScanResult] = {}
    documents: list[tuple[str, str]] = []
    rel_paths: list[str] = []
    for file_path in iter_supported_files(target_dir, exclude):
        rel_file = str(file_path.relative_to(base_path).as_posix())
        try:
            raw_bytes = file_path.read_bytes()
            mtime = int(file_path.stat().st_mtime)
            file_name, text = read_document(file_path)
        except OSError as exc:
            logger.error("Failed to read %s: %s", file_path, exc)
            files[rel_file] = FileScanResult(
                file=rel_file,
                sha256="",
                mtime=0,
                status="error",
                error=str(exc),
            )
            continue
        files[rel_file] = FileScanResult(
            file=rel_file,
            sha256=sha256(raw_bytes).hexdigest(),
            mtime=mtime,
        )
        documents.append((file_name, text))
        rel_paths.append(rel_file)
    outcomes = parse_documents(documents, line_budget=resolved_budget, workers=resolved_workers)
    records: list[ProposalRecord] = []
    for rel_file, outcome in zip(rel_paths, outcomes, strict=True):
        result = files[rel_file]
        result.warnings = list(outcome.warnings)
        if outcome.error is not None:
            result.status = "error"
            result.error = str(outcome.error)
            continue
        assert outcome.record is not None
        result.se_number = outcome.record.se_number
        records.append(outcome.record)
    return sort_records(records), files

"""Rendering utilities for the proposal summary."""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from .models import ProposalRecord, Status


def now_iso() -> str:
    return datetime.now(UTC).replace(microsecond=0).isoformat()


def status_counts(records: Iterable[ProposalRecord]) -> Counter[Status]:
    return Counter(record.status for record in records)


def author_counts(records: Iterable[ProposalRecord]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for record in records:
        for author in dict.fromkeys(record.authors):
            counts[author] += 1
    return counts


def render_summary(
    records: Sequence[ProposalRecord],
    output_path: Path | None = None,
    *,
    timestamp: str | None = None,
) -> str:
    built_at = timestamp or now_iso()
    lines = ["# Swift Evolution Proposals", "", f"_Last build: {built_at}_", ""]
    lines.append(f"**Total proposals:** {len(records)}")
    lines.append("")
    counts = status_counts(records)
    if counts:
        ordered = [status for status in Status.all_items() if counts.get(status)]
        status_summary = ", ".join(f"{status} ({counts[status]})" for status in ordered)
        lines.append(f"**By status:** {status_summary}")
        accepted = sum(counts[status] for status in Status.all_accepted())
        lines.append("")
        lines.append(f"**Accepted or implemented:** {accepted} of {len(records)}")
        lines.append("")
    authors = author_counts(records)
    if authors:
        top_authors = authors.most_common(20)
        author_text = ", ".join(f"{name} ({count})" for name, count in top_authors)
        lines.append("**Top authors:** " + author_text)
        lines.append("")
    if records:
        average = sum(record.word_count for record in records) / len(records)
        lines.append(f"**Average word count:** {average:.0f}")
        lines.append("")
    lines.append("## Proposals")
    lines.append("")
    lines.append("| Proposal | Title | Author(s) | Status | Words |")
    lines.append("| --- | --- | --- | --- | --- |")
    for record in records:
        lines.append(format_record_row(record))
    lines.append("")
    content = "\n".join(lines)
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    return content


def format_record_row(record: ProposalRecord) -> str:
    link = f"[{record.se_number}]({record.github_url})"
    authors = format_list(record.authors)
    return (
        f"| {link} | {escape_cell(record.title)} | {authors} | "
        f"{escape_cell(str(record.status))} | {record.word_count} |"
    )


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def format_list(values: Iterable[str], separator: str = ", ") -> str:
    results = []
    for value in values:
        if not value:
            continue
        results.append(escape_cell(value))
    return separator.join(results)

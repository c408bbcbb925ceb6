"""Locate the labeled header lines at the top of a proposal."""
from __future__ import annotations

from dataclasses import dataclass

from .errors import StructuralError

DEFAULT_LINE_BUDGET = 10

PROPOSAL_LABEL = "* Proposal:"
AUTHOR_LABEL = "* Author:"
AUTHORS_LABEL = "* Authors:"
# The trailing space keeps "* Status:" apart from bare "Status" mentions.
STATUS_LABEL = "* Status: "

# Tested in order against every line; a later line with the same label
# replaces an earlier one.
LABEL_RULES: tuple[tuple[str, str], ...] = (
    (PROPOSAL_LABEL, "proposal_line"),
    (AUTHOR_LABEL, "single_author_line"),
    (AUTHORS_LABEL, "multiple_author_line"),
    (STATUS_LABEL, "status_line"),
)


@dataclass
class HeaderLines:
    """Raw header lines picked out of a document, before any extraction."""

    title_line: str = ""
    proposal_line: str | None = None
    single_author_line: str | None = None
    multiple_author_line: str | None = None
    status_line: str | None = None

    @property
    def author_line(self) -> str | None:
        return self.single_author_line or self.multiple_author_line

    @property
    def multiple_authors(self) -> bool:
        return self.single_author_line is None


def header_lines(text: str, line_budget: int = DEFAULT_LINE_BUDGET) -> list[str]:
    if line_budget <= 0:
        return []
    return text.splitlines()[:line_budget]


def classify_lines(lines: list[str]) -> HeaderLines:
    header = HeaderLines()
    title_found = False
    for line in lines:
        if not title_found and line.strip():
            header.title_line = line.strip()
            title_found = True
        for label, attribute in LABEL_RULES:
            if line.startswith(label):
                setattr(header, attribute, line)
    return header


def scan_header(
    text: str,
    line_budget: int = DEFAULT_LINE_BUDGET,
    file_name: str | None = None,
) -> HeaderLines:
    """Scan the first ``line_budget`` lines of ``text`` for header fields.

    Raises :class:`StructuralError` when the proposal or status line is
    missing from the window. A missing author line is left as ``None``.
    """
    lines = header_lines(text, line_budget)
    header = classify_lines(lines)
    if header.status_line is None:
        raise StructuralError(
            f"no status line within the first {line_budget} lines", file_name=file_name
        )
    if header.proposal_line is None:
        raise StructuralError(
            f"no proposal line within the first {line_budget} lines", file_name=file_name
        )
    return header

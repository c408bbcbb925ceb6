"""Turn isolated header lines into typed values."""
from __future__ import annotations

import re
import string

from .errors import MalformedIdentifierError
from .scanner import AUTHOR_LABEL, AUTHORS_LABEL, PROPOSAL_LABEL, STATUS_LABEL

IDENTIFIER_RE = re.compile(r"SE-\d{4}")
BRACKET_RE = re.compile(r"\[([^\]]*)\]")
AUTHOR_SPLIT_RE = re.compile(r"[\[\]]")
TITLE_TRIM_CHARS = string.whitespace + "#"
STATUS_TRIM_CHARS = string.whitespace + "*"


def strip_label(line: str, label: str) -> str:
    """Remove ``label`` from the start of ``line``.

    Trailing whitespace on the label is ignored so that
    ``"* Status:"`` and ``"* Status: "`` strip the same way.
    """
    label = label.rstrip()
    if line.startswith(label):
        return line[len(label):]
    return line


def extract_title(line: str) -> str:
    return line.strip(TITLE_TRIM_CHARS)


def extract_identifier(line: str) -> str:
    """Return the ``SE-NNNN`` identifier of a ``* Proposal:`` line.

    For ``* Proposal: [SE-0068](0068-universal-self.md)`` the bracketed token
    is the same text a fixed slice at offset 13, length 7 would return.
    Lines without brackets fall back to the first identifier-shaped token.
    """
    remainder = strip_label(line, PROPOSAL_LABEL)
    match = BRACKET_RE.search(remainder)
    if match:
        candidate = match.group(1).strip()
    else:
        token = IDENTIFIER_RE.search(remainder)
        candidate = token.group(0) if token else remainder.strip()
    if not IDENTIFIER_RE.fullmatch(candidate):
        raise MalformedIdentifierError("malformed proposal identifier", line=line)
    return candidate


def identifier_digits(se_number: str) -> str:
    return se_number[len("SE-"):]


def identifier_number(se_number: str) -> int:
    return int(identifier_digits(se_number))


def author_name(component: str) -> str:
    parts = AUTHOR_SPLIT_RE.split(component)
    if len(parts) > 1:
        return parts[1].strip()
    return parts[0].strip()


def extract_authors(line: str | None, multiple: bool) -> list[str]:
    if line is None:
        return []
    remainder = strip_label(line, AUTHORS_LABEL if multiple else AUTHOR_LABEL)
    names = []
    for component in remainder.split(","):
        if not component.strip():
            continue
        names.append(author_name(component))
    return names


def extract_status_text(line: str) -> str:
    return strip_label(line, STATUS_LABEL).strip(STATUS_TRIM_CHARS)

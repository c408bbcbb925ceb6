"""Swift Evolution proposal analyzer package."""
from __future__ import annotations

from pathlib import Path

from . import errors, extractor, models, parser, renderer, resolver, scanner, wordcount
from .errors import (
    MalformedIdentifierError,
    MissingAuthorsWarning,
    ProposalParseError,
    StructuralError,
    UnrecognizedStatusError,
    UnrecognizedVersionError,
)
from .models import ProposalRecord, Status, StatusKind, SwiftVersion
from .parser import parse_proposal, parse_proposals

__all__ = [
    "errors",
    "extractor",
    "models",
    "parser",
    "renderer",
    "resolver",
    "scanner",
    "wordcount",
    "MalformedIdentifierError",
    "MissingAuthorsWarning",
    "ProposalParseError",
    "ProposalRecord",
    "Status",
    "StatusKind",
    "StructuralError",
    "SwiftVersion",
    "UnrecognizedStatusError",
    "UnrecognizedVersionError",
    "parse_proposal",
    "parse_proposals",
    "load_proposals",
]


def load_proposals(directory: Path, *, strict: bool = True) -> list[ProposalRecord]:
    """Convenience wrapper parsing every proposal file in ``directory``."""
    documents = [parser.read_document(path) for path in parser.iter_supported_files(directory)]
    return parser.parse_proposals(documents, strict=strict)

"""Errors raised while parsing proposal headers."""
from __future__ import annotations


class ProposalParseError(ValueError):
    """A proposal document could not be turned into a record."""

    def __init__(self, message: str, *, line: str | None = None, file_name: str | None = None) -> None:
        self.message = message
        self.line = line
        self.file_name = file_name
        super().__init__(message)

    def with_file(self, file_name: str) -> ProposalParseError:
        if self.file_name is None:
            self.file_name = file_name
        return self

    def __str__(self) -> str:
        text = self.message
        if self.line is not None:
            text = f"{text}: {self.line!r}"
        if self.file_name:
            text = f"{self.file_name}: {text}"
        return text


class StructuralError(ProposalParseError):
    """A required header line is missing from the scanned window."""


class UnrecognizedStatusError(ProposalParseError):
    """The status line matches none of the known status phrases."""


class UnrecognizedVersionError(ProposalParseError):
    """An implemented status names no known Swift version."""


class MalformedIdentifierError(ProposalParseError):
    """The proposal line does not carry an ``SE-NNNN`` identifier."""


class MissingAuthorsWarning(UserWarning):
    """No author line was found; the record gets an empty author list."""

"""Value types describing a parsed proposal."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

GITHUB_BASE_URL = "https://github.com/apple/swift-evolution/blob/master/proposals"
SE_NUMBER_RE = re.compile(r"SE-\d{4}")


class SwiftVersion(StrEnum):
    V2_2 = "2.2"
    V2_3 = "2.3"
    V3_0 = "3.0"
    V3_0_1 = "3.0.1"
    V3_1 = "3.1"


class StatusKind(StrEnum):
    IN_REVIEW = "in_review"
    AWAITING_REVIEW = "awaiting_review"
    ACCEPTED = "accepted"
    IMPLEMENTED = "implemented"
    DEFERRED = "deferred"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


_STATUS_LABELS = {
    StatusKind.IN_REVIEW: "In review",
    StatusKind.AWAITING_REVIEW: "Awaiting review",
    StatusKind.ACCEPTED: "Accepted (awaiting implementation)",
    StatusKind.DEFERRED: "Deferred",
    StatusKind.REJECTED: "Rejected",
    StatusKind.WITHDRAWN: "Withdrawn",
}


@dataclass(frozen=True)
class Status:
    """Review status of a proposal.

    Only ``IMPLEMENTED`` carries a version. Equality and hashing are
    structural, so two implemented statuses compare equal only when they
    name the same Swift version.
    """

    kind: StatusKind
    version: SwiftVersion | None = None

    def __post_init__(self) -> None:
        if self.kind is StatusKind.IMPLEMENTED and self.version is None:
            raise ValueError("implemented status requires a Swift version")
        if self.kind is not StatusKind.IMPLEMENTED and self.version is not None:
            raise ValueError(f"{self.kind} status cannot carry a version")

    @classmethod
    def implemented(cls, version: SwiftVersion) -> Status:
        return cls(StatusKind.IMPLEMENTED, version)

    @classmethod
    def all_implemented(cls) -> tuple[Status, ...]:
        return tuple(cls.implemented(version) for version in SwiftVersion)

    @classmethod
    def all_accepted(cls) -> tuple[Status, ...]:
        return (cls(StatusKind.ACCEPTED), *cls.all_implemented())

    @classmethod
    def all_items(cls) -> tuple[Status, ...]:
        return (
            cls(StatusKind.IN_REVIEW),
            cls(StatusKind.AWAITING_REVIEW),
            cls(StatusKind.ACCEPTED),
            *cls.all_implemented(),
            cls(StatusKind.DEFERRED),
            cls(StatusKind.REJECTED),
            cls(StatusKind.WITHDRAWN),
        )

    @property
    def is_accepted(self) -> bool:
        return self.kind in {StatusKind.ACCEPTED, StatusKind.IMPLEMENTED}

    def to_dict(self) -> dict[str, str | None]:
        return {
            "kind": str(self.kind),
            "version": str(self.version) if self.version else None,
        }

    def __str__(self) -> str:
        if self.kind is StatusKind.IMPLEMENTED:
            return f"Implemented ({self.version})"
        return _STATUS_LABELS[self.kind]


IN_REVIEW = Status(StatusKind.IN_REVIEW)
AWAITING_REVIEW = Status(StatusKind.AWAITING_REVIEW)
ACCEPTED = Status(StatusKind.ACCEPTED)
DEFERRED = Status(StatusKind.DEFERRED)
REJECTED = Status(StatusKind.REJECTED)
WITHDRAWN = Status(StatusKind.WITHDRAWN)


def github_url(file_name: str) -> str:
    return f"{GITHUB_BASE_URL}/{file_name}"


@dataclass(frozen=True)
class ProposalRecord:
    """Structured metadata extracted from a single proposal document."""

    title: str
    se_number: str
    authors: tuple[str, ...]
    status: Status
    file_name: str
    word_count: int

    def __post_init__(self) -> None:
        if not SE_NUMBER_RE.fullmatch(self.se_number):
            raise ValueError(f"malformed proposal identifier: {self.se_number!r}")
        if self.word_count < 0:
            raise ValueError(f"word count cannot be negative: {self.word_count}")

    @property
    def sort_key(self) -> str:
        return self.se_number[3:]

    @property
    def number(self) -> int:
        return int(self.sort_key)

    @property
    def github_url(self) -> str:
        return github_url(self.file_name)

    def describe(self) -> str:
        return (
            f"{self.se_number}: {self.title}\n"
            f"Author(s): {', '.join(self.authors)}\n"
            f"Status: {self.status}\n"
            f"Filename: {self.file_name}\n"
            f"Word count: {self.word_count}\n"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "se_number": self.se_number,
            "authors": list(self.authors),
            "status": self.status.to_dict(),
            "file_name": self.file_name,
            "word_count": self.word_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> ProposalRecord:
        status_data = data["status"]
        assert isinstance(status_data, dict)
        version = status_data.get("version")
        status = Status(
            StatusKind(status_data["kind"]),
            SwiftVersion(version) if version else None,
        )
        authors = data.get("authors") or []
        assert isinstance(authors, list)
        return cls(
            title=str(data["title"]),
            se_number=str(data["se_number"]),
            authors=tuple(str(author) for author in authors),
            status=status,
            file_name=str(data["file_name"]),
            word_count=int(str(data.get("word_count", 0))),
        )

    def __str__(self) -> str:
        return self.describe()

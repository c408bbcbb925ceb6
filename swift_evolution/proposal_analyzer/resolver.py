"""Rule tables mapping free-text status remainders onto closed enums."""
from __future__ import annotations

from typing import TypeVar

from .errors import UnrecognizedStatusError, UnrecognizedVersionError
from .models import StatusKind, Status, SwiftVersion

T = TypeVar("T")

# First match wins. "Accepted" is tested before "Implemented" so a line such
# as "Accepted, later Implemented (Swift 3.0)" resolves to ACCEPTED.
STATUS_RULES: tuple[tuple[str, StatusKind], ...] = (
    ("Active Review", StatusKind.IN_REVIEW),
    ("Awaiting Review", StatusKind.AWAITING_REVIEW),
    ("Accepted", StatusKind.ACCEPTED),
    ("Implemented", StatusKind.IMPLEMENTED),
    ("Deferred", StatusKind.DEFERRED),
    ("Rejected", StatusKind.REJECTED),
    ("Withdrawn", StatusKind.WITHDRAWN),
)

# Longer tokens precede the prefixes they share ("Swift 3.0.1" before
# "Swift 3.0" before "Swift 3").
VERSION_RULES: tuple[tuple[str, SwiftVersion], ...] = (
    ("Swift 2.2", SwiftVersion.V2_2),
    ("Swift 2.3", SwiftVersion.V2_3),
    ("Swift 3.1", SwiftVersion.V3_1),
    ("Swift 3.0.1", SwiftVersion.V3_0_1),
    ("Swift 3.0", SwiftVersion.V3_0),
    ("Swift 3", SwiftVersion.V3_0),
)


def contains(text: str, phrase: str) -> bool:
    return phrase.casefold() in text.casefold()


def match_rule(text: str, rules: tuple[tuple[str, T], ...]) -> T | None:
    for phrase, result in rules:
        if contains(text, phrase):
            return result
    return None


def resolve_version(text: str) -> SwiftVersion:
    version = match_rule(text, VERSION_RULES)
    if version is None:
        raise UnrecognizedVersionError("unknown Swift version", line=text)
    return version


def resolve_status(text: str, line: str | None = None) -> Status:
    """Resolve a status remainder to a :class:`Status`.

    ``line`` is the raw status line and is reported when nothing matches;
    it defaults to ``text``.
    """
    kind = match_rule(text, STATUS_RULES)
    if kind is None:
        raise UnrecognizedStatusError("unknown status", line=line if line is not None else text)
    if kind is StatusKind.IMPLEMENTED:
        return Status.implemented(resolve_version(text))
    return Status(kind)

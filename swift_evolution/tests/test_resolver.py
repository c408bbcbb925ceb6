from __future__ import annotations

import pytest

from swift_evolution.proposal_analyzer import resolver
from swift_evolution.proposal_analyzer.errors import (
    UnrecognizedStatusError,
    UnrecognizedVersionError,
)
from swift_evolution.proposal_analyzer.models import (
    ACCEPTED,
    AWAITING_REVIEW,
    DEFERRED,
    IN_REVIEW,
    REJECTED,
    WITHDRAWN,
    Status,
    SwiftVersion,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Active Review (May 2...May 9)", IN_REVIEW),
        ("under active review", IN_REVIEW),
        ("Awaiting Review", AWAITING_REVIEW),
        ("Accepted with revisions", ACCEPTED),
        ("Implemented (Swift 2.2)", Status.implemented(SwiftVersion.V2_2)),
        ("Implemented in Swift 2.3", Status.implemented(SwiftVersion.V2_3)),
        ("Implemented (Swift 3)", Status.implemented(SwiftVersion.V3_0)),
        ("implemented (swift 3.1)", Status.implemented(SwiftVersion.V3_1)),
        ("Deferred", DEFERRED),
        ("Rejected", REJECTED),
        ("Withdrawn by author", WITHDRAWN),
    ],
)
def test_resolve_status(text: str, expected: Status) -> None:
    assert resolver.resolve_status(text) == expected


def test_accepted_wins_over_implemented() -> None:
    assert resolver.resolve_status("Accepted, later Implemented (Swift 3.0)") == ACCEPTED


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Swift 3.0.1", SwiftVersion.V3_0_1),
        ("Swift 3.0", SwiftVersion.V3_0),
        ("Swift 3", SwiftVersion.V3_0),
        ("SWIFT 2.2", SwiftVersion.V2_2),
    ],
)
def test_resolve_version_most_specific_first(text: str, expected: SwiftVersion) -> None:
    assert resolver.resolve_version(text) is expected


def test_implemented_versions_are_distinct() -> None:
    patch = resolver.resolve_status("Implemented (Swift 3.0.1)")
    assert patch == Status.implemented(SwiftVersion.V3_0_1)
    assert patch != Status.implemented(SwiftVersion.V3_0)


def test_unknown_version_raises() -> None:
    with pytest.raises(UnrecognizedVersionError) as excinfo:
        resolver.resolve_status("Implemented (Swift 4)")
    assert excinfo.value.line == "Implemented (Swift 4)"


def test_unknown_status_names_line() -> None:
    line = "* Status: **Pending Design Review**"
    with pytest.raises(UnrecognizedStatusError) as excinfo:
        resolver.resolve_status("Pending Design Review", line=line)
    assert excinfo.value.line == line
    assert "Pending Design Review" in str(excinfo.value)


def test_rule_tables_order() -> None:
    phrases = [phrase for phrase, _ in resolver.STATUS_RULES]
    assert phrases.index("Accepted") < phrases.index("Implemented")
    versions = [phrase for phrase, _ in resolver.VERSION_RULES]
    assert versions.index("Swift 3.0.1") < versions.index("Swift 3.0") < versions.index("Swift 3")


def test_match_rule_returns_none_without_match() -> None:
    assert resolver.match_rule("nothing", resolver.STATUS_RULES) is None

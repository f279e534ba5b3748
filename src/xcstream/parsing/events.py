# src/xcstream/parsing/events.py

"""
Classifies a single line of XCTest output into at most one event.
"""

from enum import Enum, auto

from attrs import define, field

from xcstream.parsing.dialects import TestDialect


class EventKind(Enum):
    """Kinds of line recognised in XCTest output, in matching priority order."""

    STARTED = auto()
    FINISHED = auto()
    ERROR = auto()
    SKIPPED = auto()
    SUITE_STARTED = auto()
    SUITE_PASSED = auto()
    SUITE_FAILED = auto()
    UNMATCHED = auto()  # Program output or a failure message continuation.


class TestOutcome(Enum):
    """Result printed on a test finished line."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@define(frozen=True, slots=True)
class ParsedLine:
    """
    A line of output along with what was captured from it.

    Only the fields relevant to ``kind`` are populated.
    """

    kind: EventKind
    line: str
    # Qualified "<suite>/<method>" name for test events.
    test_name: str | None = field(default=None)
    # Class (Darwin: "Target.Class") owning the test.
    suite_name: str | None = field(default=None)
    outcome: TestOutcome | None = field(default=None)
    duration: float | None = field(default=None)
    file: str | None = field(default=None)
    line_number: int | None = field(default=None)
    message: str | None = field(default=None)


def _parse_duration(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def classify_line(line: str, dialect: TestDialect) -> ParsedLine:
    """
    Matches a line against the dialect's patterns; the first match wins.

    Test start and finish are tried first, then error and skip markers, then
    suite markers. Lines matching nothing are returned as UNMATCHED.
    """
    if match := dialect.started.match(line):
        return ParsedLine(
            kind=EventKind.STARTED,
            line=line,
            test_name=f"{match[1]}/{match[2]}",
            suite_name=match[1],
        )
    if match := dialect.finished.match(line):
        return ParsedLine(
            kind=EventKind.FINISHED,
            line=line,
            test_name=f"{match[1]}/{match[2]}",
            suite_name=match[1],
            outcome=TestOutcome(match[3]),
            duration=_parse_duration(match[4]),
        )
    if match := dialect.error.match(line):
        return ParsedLine(
            kind=EventKind.ERROR,
            line=line,
            test_name=f"{match[3]}/{match[4]}",
            suite_name=match[3],
            file=match[1],
            line_number=int(match[2]),
            message=match[5],
        )
    if match := dialect.skipped.match(line):
        return ParsedLine(
            kind=EventKind.SKIPPED,
            line=line,
            test_name=f"{match[3]}/{match[4]}",
            suite_name=match[3],
            file=match[1],
            line_number=int(match[2]),
        )
    if match := dialect.started_suite.match(line):
        return ParsedLine(kind=EventKind.SUITE_STARTED, line=line, suite_name=match[1])
    if match := dialect.passed_suite.match(line):
        return ParsedLine(kind=EventKind.SUITE_PASSED, line=line, suite_name=match[1])
    if match := dialect.failed_suite.match(line):
        return ParsedLine(kind=EventKind.SUITE_FAILED, line=line, suite_name=match[1])
    return ParsedLine(kind=EventKind.UNMATCHED, line=line)

# 🔼⚙️

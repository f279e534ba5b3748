#
# src/xcstream/parsing/protocols.py
#
"""
Defines the protocols and value types shared by the XCTest output parsers.
"""
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

from attrs import define

if TYPE_CHECKING:
    from xcstream.parsing.dialects import TestDialect
    from xcstream.parsing.session import ParseSession

# Returned by get_test_item_index when a name cannot be resolved.
UNKNOWN_TEST_INDEX = -1


@define(frozen=True, slots=True)
class SourceLocation:
    """A position in a source file, with a 1-based line number as reported by XCTest."""
    file: str
    line: int
    column: int = 0


@define(frozen=True, slots=True)
class TestIssueDiff:
    """The two printed values compared by a failed equality or identity assertion."""
    actual: str
    expected: str


@define(frozen=True, slots=True)
class Duration:
    """Elapsed test time in seconds, as printed on the test finished line."""
    seconds: float


@define(frozen=True, slots=True)
class Timestamp:
    """Absolute completion time in seconds since the epoch."""
    epoch_seconds: float


Timing: TypeAlias = Duration | Timestamp


@runtime_checkable
class TestRunState(Protocol):
    """
    Consumer of the events recognised in test output.

    Implementations own the test tree. Every method receiving an index must
    tolerate UNKNOWN_TEST_INDEX, since tests may appear in the output before
    they are known to the run.
    """

    def get_test_item_index(self, name: str, file_hint: str | None = None) -> int:
        """
        Resolves a qualified test name to an index.

        Args:
            name: The qualified test name, e.g. "MyTests.MyTests/testPass".
            file_hint: Source file reported alongside the test, if any. Used to
                disambiguate names that lack a target.

        Returns:
            The test index, or UNKNOWN_TEST_INDEX.
        """
        ...

    def started(self, index: int) -> None: ...

    def completed(self, index: int, timing: Timing) -> None: ...

    def skipped(self, index: int) -> None: ...

    def record_issue(
        self,
        index: int,
        message: str,
        is_known: bool = False,
        location: SourceLocation | None = None,
        diff: TestIssueDiff | None = None,
    ) -> None:
        """
        Records a failure detail against a test.

        Args:
            index: The test index.
            message: The full, possibly multi-line, failure message.
            is_known: Whether the issue is an expected failure. Passed through untouched.
            location: Where the failure was reported, if known.
            diff: Actual and expected values, when the message carried a comparison.
        """
        ...

    def started_suite(self, name: str) -> None: ...

    def passed_suite(self, name: str) -> None: ...

    def failed_suite(self, name: str) -> None: ...

    def record_output(self, index: int | None, line: str) -> None:
        """Appends one raw output line to a test's log, or to the run log when index is None."""
        ...


@runtime_checkable
class OutputParser(Protocol):
    """
    Protocol for a parser that turns chunks of test output into TestRunState calls.
    """
    dialect: "TestDialect"

    def parse_result(self, output: str, session: "ParseSession", run_state: TestRunState) -> None:
        """
        Parses one chunk of output.

        Args:
            output: The chunk, with arbitrary boundaries.
            session: Buffering state carried between chunks of the same run.
            run_state: The consumer of recognised events.
        """
        ...

# 🔼⚙️

#
# src/xcstream/parsing/parallel.py
#
"""
Parsing of XCTest output produced by ``swift test --parallel``.

In parallel mode the authoritative pass/fail results and timings come from the
xUnit report written when the run ends. The console output is still parsed,
but only to capture failure messages and locations, which the report lacks.
"""
import re

import structlog
from attrs import define

from xcstream.exceptions import ConfigurationError
from xcstream.parsing.dialects import TestDialect
from xcstream.parsing.protocols import (
    OutputParser,
    SourceLocation,
    TestIssueDiff,
    TestRunState,
    Timing,
)
from xcstream.parsing.session import ParseSession
from xcstream.parsing.xctest_parser import XCTestOutputParser
from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("parsing.parallel")

_VERSION_PATTERN = re.compile(r"^\s*(\d+)\.(\d+)(?:\.(\d+))?")


@define(frozen=True, slots=True, order=True)
class ToolchainVersion:
    """A Swift toolchain version, ordered by (major, minor, patch)."""
    major: int
    minor: int
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> "ToolchainVersion":
        """
        Parses "6.0", "5.10.1" or a version string with a suffix such as "5.9-dev".

        Raises:
            ConfigurationError: If the text does not start with a version number.
        """
        match = _VERSION_PATTERN.match(text)
        if match is None:
            raise ConfigurationError(f"Invalid toolchain version: '{text}'")
        return cls(int(match[1]), int(match[2]), int(match[3] or 0))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


# From 5.7 up to (not including) 6.0, parallel runs print results without newlines.
UNDELIMITED_OUTPUT_VERSIONS = (ToolchainVersion(5, 7, 0), ToolchainVersion(6, 0, 0))


def emits_delimited_parallel_output(version: ToolchainVersion | None) -> bool:
    """Whether the toolchain prints line-delimited XCTest output when run with --parallel."""
    if version is None:
        return True
    lower, upper = UNDELIMITED_OUTPUT_VERSIONS
    return not (lower <= version < upper)


class ParallelTestRunStateProxy(TestRunState):
    """
    Forwards failure details to a TestRunState and drops lifecycle events.

    Start, completion, skip and suite results are reported by the xUnit
    report instead. Output is not forwarded either: workers interleave their
    output, so it cannot be attributed to a test.
    """

    def __init__(self, run_state: TestRunState):
        self._run_state = run_state

    def get_test_item_index(self, name: str, file_hint: str | None = None) -> int:
        return self._run_state.get_test_item_index(name, file_hint)

    def record_issue(
        self,
        index: int,
        message: str,
        is_known: bool = False,
        location: SourceLocation | None = None,
        diff: TestIssueDiff | None = None,
    ) -> None:
        self._run_state.record_issue(index, message, is_known, location, diff)

    def started(self, index: int) -> None:
        pass

    def completed(self, index: int, timing: Timing) -> None:
        pass

    def skipped(self, index: int) -> None:
        pass

    def started_suite(self, name: str) -> None:
        pass

    def passed_suite(self, name: str) -> None:
        pass

    def failed_suite(self, name: str) -> None:
        pass

    def record_output(self, index: int | None, line: str) -> None:
        pass


class ParallelXCTestOutputParser(OutputParser):
    """
    Wraps XCTestOutputParser for output from parallel test runs.
    """

    def __init__(
        self,
        toolchain_version: ToolchainVersion | None = None,
        dialect: TestDialect | None = None,
    ):
        self.toolchain_version = toolchain_version
        self._parser = XCTestOutputParser(dialect)
        self._log = log.bind(
            toolchain_version=str(toolchain_version) if toolchain_version else None,
            dialect=self._parser.dialect.name,
        )

    @property
    def dialect(self) -> TestDialect:
        return self._parser.dialect

    def parse_result(self, output: str, session: ParseSession, run_state: TestRunState) -> None:
        """
        Parses a chunk, recording only failure details.

        Output from toolchains that print parallel results without line breaks
        is ignored: there is no reliable way to tell where one event ends.
        """
        if not emits_delimited_parallel_output(self.toolchain_version):
            self._log.debug("Skipping undelimited parallel output", chunk_len=len(output))
            return
        # The proxy is stateless; buffered state stays in the shared session.
        self._parser.parse_result(output, session, ParallelTestRunStateProxy(run_state))

# 🔼⚙️

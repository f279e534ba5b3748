# src/xcstream/parsing/session.py
#
"""
Buffering state carried between successive calls to an output parser.
"""

import structlog
from attrs import field, mutable

from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("parsing.session")


@mutable(slots=True)
class FailedTest:
    """
    The failure message currently being captured for a test.

    Error lines may be followed by any number of continuation lines, so the
    message stays open until a later event finalizes it.
    """

    test_index: int = field()
    message: str = field()
    file: str = field()
    line_number: int = field()
    complete: bool = field(default=False)

    def append(self, line: str) -> None:
        self.message += f"\n{line}"


@mutable(slots=True)
class ParseSession:
    """
    Cross-call parser state for a single test run.

    One session is created per test process and handed to every parse call
    for that process, in delivery order. Parsers keep no state of their own,
    so a wrapping parser and the parser it wraps can share one session.
    """

    # Unterminated trailing line of the previous chunk.
    excess: str | None = field(default=None)
    # Suite owning the tests currently running, taken from the test name.
    active_suite: str | None = field(default=None)
    # Lines seen after a suite started but before its owner was known.
    pending_suite_output: list[str] | None = field(default=None)
    failed_test: FailedTest | None = field(default=None)

    def buffer_suite_line(self, line: str) -> None:
        if self.pending_suite_output is None:
            self.pending_suite_output = []
        self.pending_suite_output.append(line)

    def take_pending_suite_output(self) -> list[str]:
        """Returns the buffered suite lines and empties the buffer."""
        pending = self.pending_suite_output or []
        self.pending_suite_output = []
        return pending

    def open_failure(self, test_index: int, message: str, file: str, line_number: int) -> None:
        self.failed_test = FailedTest(
            test_index=test_index,
            message=message,
            file=file,
            line_number=line_number,
        )

    def clear_failure(self) -> None:
        self.failed_test = None

    @property
    def open_failure_record(self) -> FailedTest | None:
        """The failure record still accepting continuation lines, if any."""
        if self.failed_test is not None and not self.failed_test.complete:
            return self.failed_test
        return None

    def reset(self) -> None:
        """Discards all buffered state, e.g. before reusing the session for a new run."""
        if self.failed_test is not None and not self.failed_test.complete:
            log.debug(
                "Abandoning unfinished failure record",
                test_index=self.failed_test.test_index,
                file=self.failed_test.file,
                line_number=self.failed_test.line_number,
            )
        self.excess = None
        self.active_suite = None
        self.pending_suite_output = None
        self.failed_test = None

# 🔼⚙️

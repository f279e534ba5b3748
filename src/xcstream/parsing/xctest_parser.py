#
# src/xcstream/parsing/xctest_parser.py
#
"""
Incremental parser for the console output of an XCTest run.
"""
from collections.abc import Callable

import structlog

from xcstream.parsing.diff import extract_diff
from xcstream.parsing.dialects import TestDialect, dialect_for_platform
from xcstream.parsing.events import EventKind, ParsedLine, TestOutcome, classify_line
from xcstream.parsing.lines import OUTPUT_LINE_TERMINATOR, split_lines
from xcstream.parsing.protocols import (
    Duration,
    OutputParser,
    SourceLocation,
    TestRunState,
)
from xcstream.parsing.session import FailedTest, ParseSession
from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("parsing.xctest")

# Issue message used when a test fails without printing an error line.
DEFAULT_FAILURE_MESSAGE = "Failed"


class XCTestOutputParser(OutputParser):
    """
    Turns chunks of XCTest console output into TestRunState calls.

    The parser itself is stateless: everything that must survive between
    chunks lives in the ParseSession passed to each call. Lines that are not
    XCTest markers are recorded verbatim as output of the running test, or
    of the run as a whole when no test is running.
    """

    def __init__(self, dialect: TestDialect | None = None):
        self.dialect = dialect or dialect_for_platform()
        self._handlers: dict[EventKind, Callable[[ParsedLine, ParseSession, TestRunState], None]] = {
            EventKind.STARTED: self._start_test,
            EventKind.FINISHED: self._finish_test,
            EventKind.ERROR: self._start_error_message,
            EventKind.SKIPPED: self._skip_test,
            EventKind.SUITE_STARTED: self._start_suite,
            EventKind.SUITE_PASSED: self._pass_suite,
            EventKind.SUITE_FAILED: self._fail_suite,
            EventKind.UNMATCHED: self._continue_error_message,
        }

    def parse_result(self, output: str, session: ParseSession, run_state: TestRunState) -> None:
        """
        Parses one chunk of output from ``swift test`` or an ``.xctest`` bundle.

        Args:
            output: The chunk. It need not end on a line boundary.
            session: State shared with earlier and later chunks of the same run.
            run_state: Receives the recognised events and all output lines.
        """
        for line in split_lines(output, session):
            event = classify_line(line, self.dialect)
            self._handlers[event.kind](event, session, run_state)

    # --- Test events ---

    def _start_test(self, event: ParsedLine, session: ParseSession, run_state: TestRunState) -> None:
        # Darwin names carry the target, so "Target.Class" is the suite item's name.
        session.active_suite = event.suite_name
        # Resolved first so the suite item precedes its first test.
        suite_index = (
            run_state.get_test_item_index(event.suite_name) if session.pending_suite_output else None
        )

        test_index = run_state.get_test_item_index(event.test_name)
        log.debug("Test started", test=event.test_name, index=test_index)
        run_state.started(test_index)
        session.clear_failure()
        if suite_index is not None:
            self._flush_pending_suite_output(session, run_state, suite_index)
        self._append_output(test_index, event.line, run_state)

    def _finish_test(self, event: ParsedLine, session: ParseSession, run_state: TestRunState) -> None:
        test_index = run_state.get_test_item_index(event.test_name)
        log.debug(
            "Test finished",
            test=event.test_name,
            index=test_index,
            outcome=event.outcome.value,
            duration=event.duration,
        )
        if event.outcome is TestOutcome.FAILED:
            if session.failed_test is not None:
                self._record_failure(test_index, session.failed_test, run_state)
            else:
                run_state.record_issue(test_index, DEFAULT_FAILURE_MESSAGE)
            run_state.completed(test_index, Duration(event.duration))
        elif event.outcome is TestOutcome.SKIPPED:
            run_state.skipped(test_index)
        else:
            run_state.completed(test_index, Duration(event.duration))
        session.clear_failure()
        self._append_output(test_index, event.line, run_state)

    def _skip_test(self, event: ParsedLine, session: ParseSession, run_state: TestRunState) -> None:
        test_index = run_state.get_test_item_index(event.test_name, event.file)
        log.debug("Test skipped", test=event.test_name, index=test_index)
        run_state.skipped(test_index)
        self._append_output(test_index, event.line, run_state)

    # --- Failure messages ---

    def _start_error_message(
        self, event: ParsedLine, session: ParseSession, run_state: TestRunState
    ) -> None:
        # Linux output omits the target, so the file helps pick the right test.
        test_index = run_state.get_test_item_index(event.test_name, event.file)
        if (previous := session.open_failure_record) is not None:
            self._record_failure(previous.test_index, previous, run_state)

        log.debug(
            "Capturing failure message",
            test=event.test_name,
            index=test_index,
            file=event.file,
            line_number=event.line_number,
        )
        session.open_failure(test_index, event.message, event.file, event.line_number)
        self._append_output(test_index, event.line, run_state)

    def _continue_error_message(
        self, event: ParsedLine, session: ParseSession, run_state: TestRunState
    ) -> None:
        failed_test = session.open_failure_record
        if failed_test is None:
            self._append_output(None, event.line, run_state)
            return
        failed_test.append(event.line)
        self._append_output(failed_test.test_index, event.line, run_state)

    def _record_failure(self, test_index: int, failed_test: FailedTest, run_state: TestRunState) -> None:
        diff = extract_diff(failed_test.message)
        location = SourceLocation(file=failed_test.file, line=failed_test.line_number)
        log.debug(
            "Recording issue",
            index=test_index,
            file=failed_test.file,
            line_number=failed_test.line_number,
            has_diff=diff is not None,
        )
        run_state.record_issue(test_index, failed_test.message, False, location, diff)
        failed_test.complete = True

    # --- Suite events ---

    def _start_suite(self, event: ParsedLine, session: ParseSession, run_state: TestRunState) -> None:
        # The suite item cannot be resolved from this line: its name lacks the
        # target on Darwin and suites nest. Hold the line until a test reveals it.
        session.buffer_suite_line(event.line)
        log.debug("Suite started", suite=event.suite_name)
        run_state.started_suite(event.suite_name)

    def _pass_suite(self, event: ParsedLine, session: ParseSession, run_state: TestRunState) -> None:
        self._complete_suite(event, session, run_state, run_state.passed_suite)

    def _fail_suite(self, event: ParsedLine, session: ParseSession, run_state: TestRunState) -> None:
        self._complete_suite(event, session, run_state, run_state.failed_suite)

    def _complete_suite(
        self,
        event: ParsedLine,
        session: ParseSession,
        run_state: TestRunState,
        notify: Callable[[str], None],
    ) -> None:
        suite = session.active_suite
        if suite is not None:
            log.debug("Suite completed", suite=suite, result=event.kind.name)
            notify(suite)
        suite_index = run_state.get_test_item_index(suite) if suite is not None else None
        # Empty suites end without a test having flushed their buffered lines.
        self._flush_pending_suite_output(session, run_state, suite_index)
        session.active_suite = None
        self._append_output(suite_index, event.line, run_state)

    def _flush_pending_suite_output(
        self, session: ParseSession, run_state: TestRunState, suite_index: int | None
    ) -> None:
        """
        Records buffered suite output.

        Only the last buffered line (the start marker of the innermost suite)
        belongs to the suite. Earlier lines are parent suite markers and
        build noise, recorded against the run.
        """
        pending = session.take_pending_suite_output()
        for position, line in enumerate(pending):
            target = suite_index if position == len(pending) - 1 else None
            self._append_output(target, line, run_state)

    @staticmethod
    def _append_output(index: int | None, line: str, run_state: TestRunState) -> None:
        # Lines were split for parsing; put the terminator back.
        run_state.record_output(index, f"{line}{OUTPUT_LINE_TERMINATOR}")

# 🔼⚙️

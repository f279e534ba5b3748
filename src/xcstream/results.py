# src/xcstream/results.py
#
"""
An in-memory TestRunState that builds the result tree of a single test run.
"""

from collections import Counter
from enum import Enum

import structlog
from attrs import field, frozen, mutable

from xcstream.parsing.protocols import (
    UNKNOWN_TEST_INDEX,
    SourceLocation,
    TestIssueDiff,
    TestRunState,
    Timing,
)
from xcstream.telemetry import StructLogger

# Logger specific to result bookkeeping
log: StructLogger = structlog.get_logger("results")


class TestStatus(Enum):
    """Lifecycle of a test or suite within one run."""

    ENQUEUED = "enqueued"  # Known, but no output seen yet.
    STARTED = "started"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


STATUS_EMOJI_MAP = {
    TestStatus.ENQUEUED: "⏳",
    TestStatus.STARTED: "🔄",
    TestStatus.PASSED: "✅",
    TestStatus.FAILED: "❌",
    TestStatus.SKIPPED: "⏭️",
}


@frozen(slots=True)
class TestIssue:
    """A failure recorded against a test."""

    message: str
    is_known: bool = False
    location: SourceLocation | None = None
    diff: TestIssueDiff | None = None


@mutable(slots=True)
class TestRunItem:
    """A test or suite and everything recorded about it."""

    name: str = field()
    # Source file the test is declared in, when registered up front.
    file: str | None = field(default=None)
    status: TestStatus = field(default=TestStatus.ENQUEUED)
    issues: list[TestIssue] = field(factory=list)
    timing: Timing | None = field(default=None)
    output: list[str] = field(factory=list)

    @property
    def status_emoji(self) -> str:
        return STATUS_EMOJI_MAP.get(self.status, "❓")


class TestRunResults(TestRunState):
    """
    Collects the events of one run into a flat, ordered list of items.

    Darwin output names tests with their target ("Target.Class/method") and
    is looked up by exact name. Other platforms omit the target, so lookups
    match registered names by suffix and use the reported source file to
    choose between tests of the same name in different targets.
    """

    def __init__(self, match_suffix: bool = False, create_missing: bool = True):
        self.match_suffix = match_suffix
        self.create_missing = create_missing
        self.items: list[TestRunItem] = []
        self.all_output: list[str] = []
        self.started_suites: list[str] = []

    def add_test(self, name: str, file: str | None = None) -> int:
        """Registers a test before the run starts and returns its index."""
        self.items.append(TestRunItem(name=name, file=file))
        return len(self.items) - 1

    def _matches(self, item: TestRunItem, name: str) -> bool:
        if item.name == name:
            return True
        # Require a boundary so "MyTests/test" does not match "OtherMyTests/test".
        return self.match_suffix and item.name.endswith((f".{name}", f"/{name}"))

    def get_test_item_index(self, name: str, file_hint: str | None = None) -> int:
        candidates = [i for i, item in enumerate(self.items) if self._matches(item, name)]
        if file_hint is not None and len(candidates) > 1:
            in_file = [i for i in candidates if self.items[i].file == file_hint]
            if in_file:
                return in_file[0]
        if candidates:
            return candidates[0]
        if not self.create_missing:
            log.debug("Unknown test name", name=name, file_hint=file_hint)
            return UNKNOWN_TEST_INDEX
        return self.add_test(name, file_hint)

    def _item(self, index: int) -> TestRunItem | None:
        if 0 <= index < len(self.items):
            return self.items[index]
        log.debug("Ignoring event for unknown test index", index=index)
        return None

    def _set_status(self, item: TestRunItem, new_status: TestStatus) -> None:
        old_status = item.status
        if old_status == new_status:
            return
        item.status = new_status
        log_func = log.info if new_status == TestStatus.FAILED else log.debug
        log_func(
            "Test status changed",
            name=item.name,
            old_status=old_status.value,
            new_status=new_status.value,
            emoji_key="test",
        )

    def started(self, index: int) -> None:
        if item := self._item(index):
            self._set_status(item, TestStatus.STARTED)

    def completed(self, index: int, timing: Timing) -> None:
        if item := self._item(index):
            item.timing = timing
            self._set_status(item, TestStatus.FAILED if item.issues else TestStatus.PASSED)

    def skipped(self, index: int) -> None:
        if item := self._item(index):
            self._set_status(item, TestStatus.SKIPPED)

    def record_issue(
        self,
        index: int,
        message: str,
        is_known: bool = False,
        location: SourceLocation | None = None,
        diff: TestIssueDiff | None = None,
    ) -> None:
        if item := self._item(index):
            item.issues.append(TestIssue(message, is_known, location, diff))
            self._set_status(item, TestStatus.FAILED)

    def started_suite(self, name: str) -> None:
        self.started_suites.append(name)
        log.debug("Suite started", suite=name, emoji_key="suite")

    def passed_suite(self, name: str) -> None:
        if item := self._item(self.get_test_item_index(name)):
            self._set_status(item, TestStatus.PASSED)

    def failed_suite(self, name: str) -> None:
        if item := self._item(self.get_test_item_index(name)):
            self._set_status(item, TestStatus.FAILED)

    def record_output(self, index: int | None, line: str) -> None:
        if index is not None and (item := self._item(index)):
            item.output.append(line)
        self.all_output.append(line)

    # --- Queries ---

    def summary(self) -> dict[TestStatus, int]:
        """Counts items by status, with every status present."""
        counts = Counter(item.status for item in self.items)
        return {status: counts.get(status, 0) for status in TestStatus}

    @property
    def has_failures(self) -> bool:
        return any(item.status == TestStatus.FAILED for item in self.items)

# 🔼⚙️

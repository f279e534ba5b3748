#
# tests/unit/test_dialects.py
#
"""
Tests for dialect selection and line classification.
"""

import pytest

from xcstream.exceptions import ConfigurationError
from xcstream.parsing import DARWIN_DIALECT, NON_DARWIN_DIALECT, dialect_for_platform, get_dialect
from xcstream.parsing.events import EventKind, TestOutcome, classify_line

DARWIN_LINES = {
    "Test Case '-[MyTests.MyTests testPass]' started.": EventKind.STARTED,
    "Test Case '-[MyTests.MyTests testPass]' passed (0.001 seconds).": EventKind.FINISHED,
    "/tmp/MyTests.swift:59: error: -[MyTests.MyTests testFail] : failed": EventKind.ERROR,
    "/tmp/MyTests.swift:90: -[MyTests.MyTests testSkip] : Test skipped": EventKind.SKIPPED,
}

LINUX_LINES = {
    "Test Case 'MyTests.testPass' started at 2024-08-26 13:19:25.325": EventKind.STARTED,
    "Test Case 'MyTests.testPass' passed (0.001 seconds)": EventKind.FINISHED,
    "/tmp/MyTests.swift:59: error: MyTests.testFail : failed": EventKind.ERROR,
    "/tmp/MyTests.swift:90: MyTests.testSkip : Test skipped": EventKind.SKIPPED,
}


class TestDialectSelection:
    """Tests for get_dialect and dialect_for_platform."""

    def test_platform_dialects(self) -> None:
        assert dialect_for_platform("darwin") is DARWIN_DIALECT
        assert dialect_for_platform("linux") is NON_DARWIN_DIALECT
        assert dialect_for_platform("win32") is NON_DARWIN_DIALECT

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("darwin", DARWIN_DIALECT),
            ("Darwin", DARWIN_DIALECT),
            ("linux", NON_DARWIN_DIALECT),
            ("non-darwin", NON_DARWIN_DIALECT),
        ],
    )
    def test_named_dialects(self, name: str, expected) -> None:
        assert get_dialect(name) is expected

    def test_auto_uses_host(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.platform", "darwin")
        assert get_dialect("auto") is DARWIN_DIALECT
        monkeypatch.setattr("sys.platform", "linux")
        assert get_dialect("auto") is NON_DARWIN_DIALECT

    def test_unknown_dialect(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported output dialect: 'windows'"):
            get_dialect("windows")


class TestClassifyLine:
    """Tests for classify_line."""

    @pytest.mark.parametrize(("line", "kind"), DARWIN_LINES.items())
    def test_darwin_lines(self, line: str, kind: EventKind) -> None:
        assert classify_line(line, DARWIN_DIALECT).kind is kind

    @pytest.mark.parametrize(("line", "kind"), LINUX_LINES.items())
    def test_linux_lines(self, line: str, kind: EventKind) -> None:
        assert classify_line(line, NON_DARWIN_DIALECT).kind is kind

    @pytest.mark.parametrize("line", LINUX_LINES)
    def test_darwin_ignores_linux_test_lines(self, line: str) -> None:
        assert classify_line(line, DARWIN_DIALECT).kind is EventKind.UNMATCHED

    @pytest.mark.parametrize(
        ("dialect", "other"),
        [(DARWIN_DIALECT, NON_DARWIN_DIALECT), (NON_DARWIN_DIALECT, DARWIN_DIALECT)],
    )
    def test_start_and_finish_patterns_do_not_cross(self, dialect, other) -> None:
        """A start line of one dialect is never a finish line of the other, and vice versa."""
        lines = [*DARWIN_LINES, *LINUX_LINES]

        for line in lines:
            if dialect.started.match(line):
                assert not other.finished.match(line)
            if dialect.finished.match(line):
                assert not other.started.match(line)

    @pytest.mark.parametrize(
        ("line", "kind"),
        [
            ("Test Suite 'All tests' started at 2024-10-20 21:54:32.568.", EventKind.SUITE_STARTED),
            ("Test Suite 'All tests' passed at 2024-10-20 21:54:32.571.", EventKind.SUITE_PASSED),
            ("Test Suite 'All tests' failed at 2024-10-20 21:54:32.571.", EventKind.SUITE_FAILED),
            ("         Executed 2 tests, with 0 failures", EventKind.UNMATCHED),
            ("", EventKind.UNMATCHED),
        ],
    )
    def test_suite_lines(self, line: str, kind: EventKind) -> None:
        for dialect in (DARWIN_DIALECT, NON_DARWIN_DIALECT):
            assert classify_line(line, dialect).kind is kind

    def test_darwin_captures(self) -> None:
        event = classify_line(
            "Test Case '-[MyTests.MyTests testFail]' failed (0.106 seconds).", DARWIN_DIALECT
        )

        assert event.test_name == "MyTests.MyTests/testFail"
        assert event.suite_name == "MyTests.MyTests"
        assert event.outcome is TestOutcome.FAILED
        assert event.duration == 0.106

    def test_error_captures(self) -> None:
        event = classify_line(
            '/tmp/My Tests.swift:59: error: -[MyTests.MyTests testFail] : XCTAssertEqual failed: ("1")',
            DARWIN_DIALECT,
        )

        assert event.test_name == "MyTests.MyTests/testFail"
        assert event.file == "/tmp/My Tests.swift"
        assert event.line_number == 59
        assert event.message == 'XCTAssertEqual failed: ("1")'

    def test_linux_captures(self) -> None:
        event = classify_line("/tmp/MyTests.swift:59: error: MyTests.testFail : boom", NON_DARWIN_DIALECT)

        assert event.test_name == "MyTests/testFail"
        assert event.suite_name == "MyTests"
        assert event.file == "/tmp/MyTests.swift"
        assert event.message == "boom"

    def test_suite_name_captured(self) -> None:
        event = classify_line("Test Suite 'TestSuite1' started at 2024-10-20.", DARWIN_DIALECT)

        assert event.suite_name == "TestSuite1"
        assert event.test_name is None

# 🔼⚙️

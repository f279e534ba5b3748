#
# src/xcstream/parsing/dialects.py
#
"""
Line patterns for the two XCTest output dialects.

XCTest on Darwin prints Objective-C style names, ``-[Target.Class method]``,
while swift-corelibs-xctest on other platforms prints ``Class.method`` with no
target. Every pattern that names a test captures the two halves of the name
in groups 1 and 2 (or 3 and 4, after the file and line of an error).
"""
import re
import sys

import structlog
from attrs import define

from xcstream.exceptions import ConfigurationError
from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("parsing.dialects")


@define(frozen=True, slots=True)
class TestDialect:
    """A fixed set of compiled patterns recognising XCTest events."""
    name: str
    # "Test Case '<name>' started."
    started: re.Pattern[str]
    # "Test Case '<name>' passed|failed|skipped (<duration> seconds)."
    finished: re.Pattern[str]
    # "<path>:<line>: error: <name> : <message>"
    error: re.Pattern[str]
    # "<path>:<line>: <name> : Test skipped"
    skipped: re.Pattern[str]
    # "Test Suite '<suite>' started at <date>."
    started_suite: re.Pattern[str]
    # "Test Suite '<suite>' passed at <date>."
    passed_suite: re.Pattern[str]
    # "Test Suite '<suite>' failed at <date>."
    failed_suite: re.Pattern[str]


DARWIN_DIALECT = TestDialect(
    name="darwin",
    started=re.compile(r"^Test Case '-\[(\S+)\s(.*)\]' started\."),
    finished=re.compile(
        r"^Test Case '-\[(\S+)\s(.*)\]' (passed|failed|skipped) \((\d[\d.]*) seconds\)"
    ),
    error=re.compile(r"^(.+):(\d+):\serror:\s-\[(\S+)\s(.*)\] : (.*)$"),
    skipped=re.compile(r"^(.+):(\d+):\s-\[(\S+)\s(.*)\] : Test skipped"),
    started_suite=re.compile(r"^Test Suite '(.*)' started"),
    passed_suite=re.compile(r"^Test Suite '(.*)' passed"),
    failed_suite=re.compile(r"^Test Suite '(.*)' failed"),
)

NON_DARWIN_DIALECT = TestDialect(
    name="linux",
    started=re.compile(r"^Test Case '(.*)\.(.*)' started"),
    finished=re.compile(
        r"^Test Case '(.*)\.(.*)' (passed|failed|skipped) \((\d[\d.]*) seconds\)"
    ),
    error=re.compile(r"^(.+):(\d+):\serror:\s*(.*)\.(.*) : (.*)$"),
    skipped=re.compile(r"^(.+):(\d+):\s*(.*)\.(.*) : Test skipped"),
    started_suite=re.compile(r"^Test Suite '(.*)' started"),
    passed_suite=re.compile(r"^Test Suite '(.*)' passed"),
    failed_suite=re.compile(r"^Test Suite '(.*)' failed"),
)

DIALECT_MAP = {
    "darwin": DARWIN_DIALECT,
    "linux": NON_DARWIN_DIALECT,
    "non-darwin": NON_DARWIN_DIALECT,  # alias
}


def dialect_for_platform(platform: str | None = None) -> TestDialect:
    """Returns the dialect XCTest prints on the given platform (default: this host)."""
    platform = platform or sys.platform
    return DARWIN_DIALECT if platform == "darwin" else NON_DARWIN_DIALECT


def get_dialect(name: str) -> TestDialect:
    """
    Looks up a dialect by name. "auto" selects the host platform's dialect.
    """
    dialect_key = name.lower()
    if dialect_key == "auto":
        dialect = dialect_for_platform()
        log.debug("Selected dialect for host platform", platform=sys.platform, dialect=dialect.name)
        return dialect

    dialect = DIALECT_MAP.get(dialect_key)
    if dialect is None:
        log.error("Unsupported output dialect specified", dialect=name)
        raise ConfigurationError(
            f"Unsupported output dialect: '{name}'. "
            f"Available dialects: {['auto', *DIALECT_MAP.keys()]}"
        )
    return dialect

# 🔼⚙️

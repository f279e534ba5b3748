#
# src/xcstream/parsing/__init__.py
#
"""
XCTest output parsing sub-package for xcstream.
"""
from .dialects import DARWIN_DIALECT, NON_DARWIN_DIALECT, TestDialect, dialect_for_platform, get_dialect
from .diff import extract_diff
from .factory import get_output_parser
from .parallel import ParallelTestRunStateProxy, ParallelXCTestOutputParser, ToolchainVersion
from .protocols import (
    UNKNOWN_TEST_INDEX,
    Duration,
    OutputParser,
    SourceLocation,
    TestIssueDiff,
    TestRunState,
    Timestamp,
    Timing,
)
from .session import FailedTest, ParseSession
from .xctest_parser import XCTestOutputParser

__all__ = [
    "DARWIN_DIALECT",
    "NON_DARWIN_DIALECT",
    "UNKNOWN_TEST_INDEX",
    "Duration",
    "FailedTest",
    "OutputParser",
    "ParallelTestRunStateProxy",
    "ParallelXCTestOutputParser",
    "ParseSession",
    "SourceLocation",
    "TestDialect",
    "TestIssueDiff",
    "TestRunState",
    "Timestamp",
    "Timing",
    "ToolchainVersion",
    "XCTestOutputParser",
    "dialect_for_platform",
    "extract_diff",
    "get_dialect",
    "get_output_parser",
]

# 🔼⚙️

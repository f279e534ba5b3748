#
# src/xcstream/__init__.py
#
"""
xcstream: incremental parsing of streamed XCTest output into test results.
"""
from .parsing import (
    OutputParser,
    ParallelXCTestOutputParser,
    ParseSession,
    TestRunState,
    XCTestOutputParser,
    get_output_parser,
)
from .results import TestRunResults, TestStatus

__all__ = [
    "OutputParser",
    "ParallelXCTestOutputParser",
    "ParseSession",
    "TestRunResults",
    "TestRunState",
    "TestStatus",
    "XCTestOutputParser",
    "get_output_parser",
]

# 🔼⚙️

# src/xcstream/parsing/diff.py

"""
Extracts compared values from XCTest assertion failure messages.
"""

import re

from xcstream.parsing.protocols import TestIssueDiff

# Matches e.g. 'XCTAssertEqual failed: ("1") is not equal to ("2")' and
# 'XCTAssertIdentical failed: ("a") is not identical to ("b")'. Printed values may span lines.
DIFF_PATTERN = re.compile(r"\((.*)\) is not .* to \((.*)\)", re.DOTALL)


def extract_diff(message: str) -> TestIssueDiff | None:
    """
    Returns the actual and expected values of a failed comparison.

    Returns None when the message has no comparison, or when both printed
    values are equal: an identity assertion between equal-looking objects
    has nothing useful to diff.
    """
    match = DIFF_PATTERN.search(message)
    if match is None or match[1] == match[2]:
        return None
    return TestIssueDiff(actual=match[1], expected=match[2])

# 🔼⚙️

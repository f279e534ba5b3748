# src/xcstream/parsing/lines.py

"""
Reassembles complete lines from arbitrarily split chunks of process output.
"""

from xcstream.parsing.session import ParseSession

LINE_TERMINATOR = "\n"
# Terminator re-added to lines handed to TestRunState.record_output.
OUTPUT_LINE_TERMINATOR = "\r\n"


def split_lines(output: str, session: ParseSession) -> list[str]:
    """
    Splits a chunk into complete lines, stitching on the partial line of the previous chunk.

    A trailing partial line is stored in ``session.excess`` for the next call,
    so chunks delivered separately parse as one continuous stream.

    Args:
        output: The decoded chunk.
        session: Session holding the carried-over partial line. Updated in place.

    Returns:
        Complete lines, without terminators.
    """
    if not output:
        return []

    normalized = output.replace("\r\n", LINE_TERMINATOR)
    lines = normalized.split(LINE_TERMINATOR)
    if session.excess:
        lines[0] = session.excess + lines[0]

    if normalized.endswith(LINE_TERMINATOR):
        # split() leaves an empty element after the final terminator.
        lines.pop()
        session.excess = None
    else:
        session.excess = lines.pop()
    # A CRLF split across two chunks leaves the carriage return on the stitched line.
    return [line.removesuffix("\r") for line in lines]

# 🔼⚙️

"""Shared utilities for msgkey-navigator."""

from __future__ import annotations

from bisect import bisect_right


def line_starts(text: str) -> list[int]:
    """Offsets at which each line of ``text`` begins."""
    starts = [0]
    starts.extend(index + 1 for index, ch in enumerate(text) if ch == "\n")
    return starts


def offset_to_line_col(starts: list[int], offset: int) -> tuple[int, int]:
    """Convert a character offset to a 1-based (line, column) pair.

    Args:
        starts: Result of :func:`line_starts` for the same text
        offset: 0-based character offset

    Examples:
        >>> offset_to_line_col(line_starts("ab\\ncd"), 4)
        (2, 2)
        >>> offset_to_line_col(line_starts("ab"), 0)
        (1, 1)
    """
    line_index = bisect_right(starts, offset) - 1
    return line_index + 1, offset - starts[line_index] + 1

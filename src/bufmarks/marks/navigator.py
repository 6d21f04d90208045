"""Next/previous bookmark lookup with wraparound."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Sequence

from bufmarks.marks.models import NO_TARGET, WRAPPED_BACKWARD, WRAPPED_FORWARD, Navigation


def find_next(positions: Sequence[int], cursor_line: int) -> Navigation:
    """Return the first bookmark after the cursor line, wrapping to the top."""
    index = bisect_right(positions, cursor_line)
    if index < len(positions):
        return Navigation(line=positions[index])
    if not positions or positions[0] == cursor_line:
        return NO_TARGET
    return Navigation(line=positions[0], notice=WRAPPED_FORWARD)


def find_previous(positions: Sequence[int], cursor_line: int) -> Navigation:
    """Return the last bookmark before the cursor line, wrapping to the bottom."""
    index = bisect_left(positions, cursor_line)
    if index > 0:
        return Navigation(line=positions[index - 1])
    if not positions or positions[-1] == cursor_line:
        return NO_TARGET
    return Navigation(line=positions[-1], notice=WRAPPED_BACKWARD)

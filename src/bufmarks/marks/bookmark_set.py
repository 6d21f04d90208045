"""Per-buffer bookmark positions and line-shift reconciliation."""

from __future__ import annotations

from bisect import bisect_left, insort

from bufmarks.marks.models import ADDED, REMOVED, LineShift, ReconcileResult, ToggleResult


class BookmarkSet:
    """Sorted, duplicate-free bookmark lines for a single buffer.

    ``line_count`` is the buffer length as of the last reconciliation. It stays
    ``None`` until seeded, in which case the first ``reconcile`` call only
    records the count.
    """

    def __init__(self, positions: tuple[int, ...] = (), line_count: int | None = None) -> None:
        self._positions: list[int] = sorted(set(positions))
        self._line_count = line_count

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(self._positions)

    @property
    def line_count(self) -> int | None:
        return self._line_count

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, line: object) -> bool:
        if not isinstance(line, int):
            return False
        index = bisect_left(self._positions, line)
        return index < len(self._positions) and self._positions[index] == line

    def seed_line_count(self, line_count: int) -> None:
        """Record the buffer length if reconciliation has not done so yet."""
        if self._line_count is None:
            self._line_count = line_count

    def is_empty(self) -> bool:
        return not self._positions

    def toggle(self, line: int) -> ToggleResult:
        """Remove the bookmark on ``line`` if present, otherwise add one."""
        index = bisect_left(self._positions, line)
        if index < len(self._positions) and self._positions[index] == line:
            del self._positions[index]
            return ToggleResult(line=line, outcome=REMOVED)
        insort(self._positions, line)
        return ToggleResult(line=line, outcome=ADDED)

    def clear(self) -> tuple[int, ...]:
        """Remove every bookmark and return the lines that were cleared."""
        removed = tuple(self._positions)
        self._positions.clear()
        return removed

    def reconcile(self, line_count: int, edit_line: int) -> ReconcileResult:
        """Shift or drop bookmarks after the buffer grew or shrank.

        Bookmarks at or after ``edit_line`` move by the line-count delta. Only a
        single-line delete exactly on a bookmark is treated as removing it;
        wider edits cannot tell which lines vanished, so they shift uniformly.
        """
        if self._line_count is None:
            self._line_count = line_count
            return ReconcileResult(line_count=line_count)
        delta = line_count - self._line_count
        if delta == 0:
            return ReconcileResult(line_count=line_count)

        kept: list[int] = []
        seen: set[int] = set()
        shifted: list[LineShift] = []
        dropped: list[int] = []
        for position in self._positions:
            if delta == -1 and position == edit_line:
                dropped.append(position)
                continue
            target = position + delta if position >= edit_line else position
            if target < 1 or target > line_count or target in seen:
                dropped.append(position)
                continue
            if target != position:
                shifted.append(LineShift(old_line=position, new_line=target))
            kept.append(target)
            seen.add(target)

        kept.sort()
        self._positions = kept
        self._line_count = line_count
        return ReconcileResult(
            line_count=line_count,
            delta=delta,
            shifted=tuple(shifted),
            dropped=tuple(dropped),
        )

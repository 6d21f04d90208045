"""Explicit buffer-id to bookmark-set mapping."""

from __future__ import annotations

from dataclasses import dataclass, field

from bufmarks.marks.bookmark_set import BookmarkSet
from bufmarks.marks.models import NO_TARGET, Navigation, ReconcileResult, ToggleResult
from bufmarks.marks.navigator import find_next, find_previous


@dataclass(slots=True)
class BufferRegistry:
    """Independent bookmark sets keyed by buffer id, in creation order."""

    _sets: dict[str, BookmarkSet] = field(default_factory=dict)

    def get(self, buffer_id: str) -> BookmarkSet | None:
        """Return the bookmark set for a buffer, if one was created."""
        return self._sets.get(buffer_id)

    def buffer_ids(self) -> tuple[str, ...]:
        return tuple(self._sets.keys())

    def bookmark_count(self) -> int:
        return sum(len(bookmarks) for bookmarks in self._sets.values())

    def positions(self, buffer_id: str) -> tuple[int, ...]:
        bookmarks = self._sets.get(buffer_id)
        if bookmarks is None:
            return ()
        return bookmarks.positions

    def toggle(self, buffer_id: str, line: int, line_count: int | None = None) -> ToggleResult:
        """Toggle a bookmark, creating the buffer's set on first use.

        ``line_count`` seeds a set that has no line count yet, so that edits
        made before the next reconcile call are not missed. A set that already
        tracks a count keeps it; only ``reconcile`` moves it.
        """
        bookmarks = self._sets.get(buffer_id)
        if bookmarks is None:
            bookmarks = BookmarkSet(line_count=line_count)
            self._sets[buffer_id] = bookmarks
        elif line_count is not None:
            bookmarks.seed_line_count(line_count)
        return bookmarks.toggle(line)

    def reconcile(self, buffer_id: str, line_count: int, edit_line: int) -> ReconcileResult:
        bookmarks = self._sets.get(buffer_id)
        if bookmarks is None:
            return ReconcileResult(line_count=None)
        return bookmarks.reconcile(line_count, edit_line)

    def next(self, buffer_id: str, cursor_line: int) -> Navigation:
        bookmarks = self._sets.get(buffer_id)
        if bookmarks is None:
            return NO_TARGET
        return find_next(bookmarks.positions, cursor_line)

    def previous(self, buffer_id: str, cursor_line: int) -> Navigation:
        bookmarks = self._sets.get(buffer_id)
        if bookmarks is None:
            return NO_TARGET
        return find_previous(bookmarks.positions, cursor_line)

    def clear(self, buffer_id: str) -> tuple[int, ...]:
        bookmarks = self._sets.get(buffer_id)
        if bookmarks is None:
            return ()
        return bookmarks.clear()

    def close_buffer(self, buffer_id: str) -> bool:
        """Forget a buffer's bookmarks; return False when none were tracked."""
        return self._sets.pop(buffer_id, None) is not None

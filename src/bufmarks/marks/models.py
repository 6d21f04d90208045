"""Typed results for bookmark mutations and navigation."""

from __future__ import annotations

from dataclasses import dataclass

ADDED = "added"
REMOVED = "removed"

WRAPPED_FORWARD = "wrapped_forward"
WRAPPED_BACKWARD = "wrapped_backward"


@dataclass(slots=True, frozen=True)
class ToggleResult:
    """Outcome of toggling a bookmark on one line."""

    line: int
    outcome: str

    @property
    def added(self) -> bool:
        return self.outcome == ADDED


@dataclass(slots=True, frozen=True)
class LineShift:
    """A bookmark that moved from one line to another."""

    old_line: int
    new_line: int


@dataclass(slots=True, frozen=True)
class ReconcileResult:
    """Bookmark changes caused by a line-count delta."""

    line_count: int | None
    delta: int = 0
    shifted: tuple[LineShift, ...] = ()
    dropped: tuple[int, ...] = ()

    @property
    def changed(self) -> bool:
        """Return True when any bookmark moved or was dropped."""
        return bool(self.shifted or self.dropped)


@dataclass(slots=True, frozen=True)
class Navigation:
    """Target line of a next/previous query and an optional wrap notice."""

    line: int | None
    notice: str | None = None

    @property
    def wrapped(self) -> bool:
        return self.notice is not None


NO_TARGET = Navigation(line=None, notice=None)

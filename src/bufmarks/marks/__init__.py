"""Bookmark position tracking and navigation."""

from .bookmark_set import BookmarkSet
from .buffers import BufferRegistry
from .models import (
    ADDED,
    NO_TARGET,
    REMOVED,
    WRAPPED_BACKWARD,
    WRAPPED_FORWARD,
    LineShift,
    Navigation,
    ReconcileResult,
    ToggleResult,
)
from .navigator import find_next, find_previous

__all__ = [
    "ADDED",
    "BookmarkSet",
    "BufferRegistry",
    "LineShift",
    "NO_TARGET",
    "Navigation",
    "REMOVED",
    "ReconcileResult",
    "ToggleResult",
    "WRAPPED_BACKWARD",
    "WRAPPED_FORWARD",
    "find_next",
    "find_previous",
]

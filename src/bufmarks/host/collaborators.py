"""Contracts the host editor fulfils for the bookmark core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class CursorMover(Protocol):
    """Moves the cursor to a navigation target."""

    def move_cursor(self, buffer_id: str, line: int) -> None: ...


class MarkerRenderer(Protocol):
    """Draws one visual marker per bookmarked line."""

    def place_marker(self, buffer_id: str, line: int) -> None: ...

    def remove_marker(self, buffer_id: str, line: int) -> None: ...


class Notifier(Protocol):
    """Surfaces transient user-visible messages."""

    def notify(self, buffer_id: str, message: str) -> None: ...


@dataclass(slots=True)
class EffectRecorder:
    """Collaborator that records requested host effects as plain dicts.

    Used when the host lives in another process and receives effects inside
    command responses instead of direct calls.
    """

    effects: list[dict[str, object]] = field(default_factory=list)

    def move_cursor(self, buffer_id: str, line: int) -> None:
        self.effects.append({"kind": "move_cursor", "buffer": buffer_id, "line": line})

    def place_marker(self, buffer_id: str, line: int) -> None:
        self.effects.append({"kind": "place_marker", "buffer": buffer_id, "line": line})

    def remove_marker(self, buffer_id: str, line: int) -> None:
        self.effects.append({"kind": "remove_marker", "buffer": buffer_id, "line": line})

    def notify(self, buffer_id: str, message: str) -> None:
        self.effects.append({"kind": "notify", "buffer": buffer_id, "message": message})

    def drain(self) -> list[dict[str, object]]:
        """Return recorded effects in order and reset the recorder."""
        drained = list(self.effects)
        self.effects.clear()
        return drained

"""Host-facing bookmark commands wired to editor collaborators."""

from __future__ import annotations

from bufmarks.config import NotificationConfig
from bufmarks.host.collaborators import CursorMover, MarkerRenderer, Notifier
from bufmarks.marks import (
    WRAPPED_FORWARD,
    BufferRegistry,
    Navigation,
    ReconcileResult,
    ToggleResult,
)


class BookmarkController:
    """Runs bookmark operations and forwards their side effects to the host."""

    def __init__(
        self,
        registry: BufferRegistry,
        cursor: CursorMover,
        markers: MarkerRenderer,
        notifier: Notifier,
        notifications: NotificationConfig | None = None,
    ) -> None:
        self._registry = registry
        self._cursor = cursor
        self._markers = markers
        self._notifier = notifier
        self._notifications = notifications or NotificationConfig()

    @property
    def registry(self) -> BufferRegistry:
        return self._registry

    def toggle(self, buffer_id: str, line: int, line_count: int | None = None) -> ToggleResult:
        result = self._registry.toggle(buffer_id, line, line_count=line_count)
        if result.added:
            self._markers.place_marker(buffer_id, line)
        else:
            self._markers.remove_marker(buffer_id, line)
        return result

    def reconcile(self, buffer_id: str, line_count: int, edit_line: int) -> ReconcileResult:
        result = self._registry.reconcile(buffer_id, line_count, edit_line)
        for line in result.dropped:
            self._markers.remove_marker(buffer_id, line)
        return result

    def next(self, buffer_id: str, cursor_line: int) -> Navigation:
        return self._jump(buffer_id, self._registry.next(buffer_id, cursor_line))

    def previous(self, buffer_id: str, cursor_line: int) -> Navigation:
        return self._jump(buffer_id, self._registry.previous(buffer_id, cursor_line))

    def clear(self, buffer_id: str) -> tuple[int, ...]:
        removed = self._registry.clear(buffer_id)
        for line in removed:
            self._markers.remove_marker(buffer_id, line)
        return removed

    def close_buffer(self, buffer_id: str) -> bool:
        """Remove remaining markers, then forget the buffer's bookmarks."""
        for line in self._registry.positions(buffer_id):
            self._markers.remove_marker(buffer_id, line)
        return self._registry.close_buffer(buffer_id)

    def _jump(self, buffer_id: str, navigation: Navigation) -> Navigation:
        if navigation.line is None:
            return navigation
        self._cursor.move_cursor(buffer_id, navigation.line)
        if navigation.notice is not None and self._notifications.wrap_messages:
            if navigation.notice == WRAPPED_FORWARD:
                message = self._notifications.forward_message
            else:
                message = self._notifications.backward_message
            self._notifier.notify(buffer_id, message)
        return navigation

"""Built-in bookmark commands exposed to editor hosts."""

from __future__ import annotations

from collections.abc import Callable

from bufmarks.config import AppConfig
from bufmarks.host import BookmarkController, EffectRecorder
from bufmarks.marks import Navigation

MAX_AUDIT_ENTRIES = 200
DEFAULT_AUDIT_ENTRIES = 50

CommandHandler = Callable[[dict[str, object]], dict[str, object]]


class CommandError(Exception):
    """A request named no known command or carried unusable params."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def build_command_table(
    controller: BookmarkController,
    effects: EffectRecorder,
    read_audit_entries: Callable[[str | None, int], list[dict[str, object]]],
    config: AppConfig,
) -> dict[str, CommandHandler]:
    """Map each ``bookmarks.*`` command name to its handler.

    ``effects`` must be the collaborator wired into ``controller``; every
    handler drains it so each response carries only its own effects.
    """
    return {
        "bookmarks.toggle": _toggle_handler(controller, effects),
        "bookmarks.reconcile": _reconcile_handler(controller, effects),
        "bookmarks.next": _navigate_handler("bookmarks.next", controller.next, effects),
        "bookmarks.previous": _navigate_handler(
            "bookmarks.previous", controller.previous, effects
        ),
        "bookmarks.list": _list_handler(controller),
        "bookmarks.clear": _clear_handler(controller, effects),
        "bookmarks.close_buffer": _close_buffer_handler(controller, effects),
        "bookmarks.status": _status_handler(controller, config),
        "bookmarks.audit_log": _audit_log_handler(read_audit_entries),
    }


def _require_buffer(command: str, arguments: dict[str, object]) -> str:
    value = arguments.get("buffer")
    if not isinstance(value, str) or not value:
        raise CommandError(
            code="INVALID_PARAMS",
            message=f"{command} buffer must be a non-empty string.",
        )
    return value


def _require_line(command: str, arguments: dict[str, object], name: str) -> int:
    value = arguments.get(name)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise CommandError(
            code="INVALID_PARAMS",
            message=f"{command} {name} must be a positive integer.",
        )
    return value


def _optional_line_count(command: str, arguments: dict[str, object]) -> int | None:
    value = arguments.get("line_count")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CommandError(
            code="INVALID_PARAMS",
            message=f"{command} line_count must be a non-negative integer.",
        )
    return value


def _toggle_handler(controller: BookmarkController, effects: EffectRecorder) -> CommandHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        buffer_id = _require_buffer("bookmarks.toggle", arguments)
        line = _require_line("bookmarks.toggle", arguments, "line")
        line_count = _optional_line_count("bookmarks.toggle", arguments)
        result = controller.toggle(buffer_id, line, line_count=line_count)
        return {
            "buffer": buffer_id,
            "line": result.line,
            "outcome": result.outcome,
            "positions": list(controller.registry.positions(buffer_id)),
            "effects": effects.drain(),
        }

    return handler


def _reconcile_handler(controller: BookmarkController, effects: EffectRecorder) -> CommandHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        buffer_id = _require_buffer("bookmarks.reconcile", arguments)
        line_count = _optional_line_count("bookmarks.reconcile", arguments)
        if line_count is None:
            raise CommandError(
                code="INVALID_PARAMS",
                message="bookmarks.reconcile line_count is required.",
            )
        edit_line = _require_line("bookmarks.reconcile", arguments, "edit_line")
        result = controller.reconcile(buffer_id, line_count, edit_line)
        return {
            "buffer": buffer_id,
            "delta": result.delta,
            "line_count": result.line_count,
            "shifted": [
                {"from": shift.old_line, "to": shift.new_line} for shift in result.shifted
            ],
            "dropped": list(result.dropped),
            "positions": list(controller.registry.positions(buffer_id)),
            "effects": effects.drain(),
        }

    return handler


def _navigate_handler(
    command: str,
    navigate: Callable[[str, int], Navigation],
    effects: EffectRecorder,
) -> CommandHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        buffer_id = _require_buffer(command, arguments)
        cursor_line = _require_line(command, arguments, "cursor_line")
        navigation = navigate(buffer_id, cursor_line)
        return {
            "buffer": buffer_id,
            "line": navigation.line,
            "notice": navigation.notice,
            "effects": effects.drain(),
        }

    return handler


def _list_handler(controller: BookmarkController) -> CommandHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        buffer_id = _require_buffer("bookmarks.list", arguments)
        bookmarks = controller.registry.get(buffer_id)
        return {
            "buffer": buffer_id,
            "positions": list(bookmarks.positions) if bookmarks is not None else [],
            "line_count": bookmarks.line_count if bookmarks is not None else None,
        }

    return handler


def _clear_handler(controller: BookmarkController, effects: EffectRecorder) -> CommandHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        buffer_id = _require_buffer("bookmarks.clear", arguments)
        removed = controller.clear(buffer_id)
        return {"buffer": buffer_id, "removed": list(removed), "effects": effects.drain()}

    return handler


def _close_buffer_handler(
    controller: BookmarkController, effects: EffectRecorder
) -> CommandHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        buffer_id = _require_buffer("bookmarks.close_buffer", arguments)
        closed = controller.close_buffer(buffer_id)
        return {"buffer": buffer_id, "closed": closed, "effects": effects.drain()}

    return handler


def _status_handler(controller: BookmarkController, config: AppConfig) -> CommandHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        registry = controller.registry
        return {
            "buffers": list(registry.buffer_ids()),
            "bookmark_count": registry.bookmark_count(),
            "effective_config": config.to_public_dict(),
        }

    return handler


def _audit_log_handler(
    read_audit_entries: Callable[[str | None, int], list[dict[str, object]]],
) -> CommandHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        since = arguments.get("since")
        if since is not None and not isinstance(since, str):
            raise CommandError(
                code="INVALID_PARAMS",
                message="bookmarks.audit_log since must be a timestamp string.",
            )
        limit = arguments.get("limit", DEFAULT_AUDIT_ENTRIES)
        if (
            isinstance(limit, bool)
            or not isinstance(limit, int)
            or not 1 <= limit <= MAX_AUDIT_ENTRIES
        ):
            raise CommandError(
                code="INVALID_PARAMS",
                message=f"bookmarks.audit_log limit must be an integer in 1..{MAX_AUDIT_ENTRIES}.",
            )
        return {"entries": read_audit_entries(since, limit)}

    return handler

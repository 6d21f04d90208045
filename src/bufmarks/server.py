"""STDIO bookmark command server entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TextIO

from bufmarks.commands import CommandError, build_command_table
from bufmarks.config import AppConfig, CliOverrides, load_effective_config
from bufmarks.host import BookmarkController, EffectRecorder
from bufmarks.logging import AuditEvent, JsonlAuditLogger, utc_timestamp
from bufmarks.marks import BufferRegistry

RequestId = str | int | None


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for server startup configuration."""
    parser = argparse.ArgumentParser(prog="bufmarks")
    parser.add_argument("--root", required=False, default=".")
    parser.add_argument("--data-dir", required=False, default=None)
    parser.add_argument("--wrap-messages", choices=("true", "false"), required=False, default=None)
    parser.add_argument("--audit", choices=("true", "false"), required=False, default=None)
    return parser


class BookmarkServer:
    """Answers one JSON request per line with one JSON response per line.

    A request is ``{"id": ..., "method": "bookmarks.<name>", "params": {...}}``.
    The response echoes ``id`` and carries either ``result`` or ``error``.
    Every request, rejected or not, lands in the audit log.
    """

    def __init__(self, config: AppConfig) -> None:
        self._effects = EffectRecorder()
        controller = BookmarkController(
            registry=BufferRegistry(),
            cursor=self._effects,
            markers=self._effects,
            notifier=self._effects,
            notifications=config.notifications,
        )
        self._audit = JsonlAuditLogger(config.audit_log_path if config.audit.enabled else None)
        self._commands = build_command_table(
            controller,
            effects=self._effects,
            read_audit_entries=self._audit.tail,
            config=config,
        )

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        for raw_line in in_stream:
            if not raw_line.strip():
                continue
            response = self.handle_line(raw_line)
            out_stream.write(f"{json.dumps(response, sort_keys=True)}\n")
            out_stream.flush()

    def handle_line(self, raw_line: str) -> dict[str, object]:
        try:
            payload = json.loads(raw_line)
        except json.JSONDecodeError:
            error = CommandError(code="INVALID_JSON", message="Request must be valid JSON.")
            return self._reject(None, "invalid_json", {}, error)
        return self.handle_request(payload)

    def handle_request(self, payload: object) -> dict[str, object]:
        request_id = _request_id(payload)
        command = "invalid_request"
        params: dict[str, object] = {}
        try:
            command = _method(payload)
            params = _params(command, payload)
            handler = self._commands.get(command)
            if handler is None:
                raise CommandError(code="UNKNOWN_COMMAND", message=f"Unknown command: {command}")
            result = handler(params)
        except CommandError as error:
            return self._reject(request_id, command, params, error)
        except Exception:
            error = CommandError(
                code="INTERNAL_ERROR",
                message=f"{command} failed unexpectedly.",
            )
            return self._reject(request_id, command, params, error)

        self._audit.append(_describe(request_id, command, params, result))
        return {"id": request_id, "ok": True, "result": result}

    def _reject(
        self,
        request_id: RequestId,
        command: str,
        params: dict[str, object],
        error: CommandError,
    ) -> dict[str, object]:
        # effects of a half-run command must not leak into the next response
        self._effects.drain()
        buffer_id = params.get("buffer")
        self._audit.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                request_id=request_id,
                command=command,
                buffer=buffer_id if isinstance(buffer_id, str) else None,
                ok=False,
                error_code=error.code,
            )
        )
        return {
            "id": request_id,
            "ok": False,
            "error": {"code": error.code, "message": error.message},
        }


def _request_id(payload: object) -> RequestId:
    if not isinstance(payload, dict):
        return None
    value = payload.get("id")
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return value


def _method(payload: object) -> str:
    if not isinstance(payload, dict):
        raise CommandError(code="INVALID_REQUEST", message="Request must be an object.")
    method = payload.get("method")
    if not isinstance(method, str) or not method:
        raise CommandError(
            code="INVALID_REQUEST",
            message="Request method must be a non-empty string.",
        )
    return method


def _params(command: str, payload: dict[str, object]) -> dict[str, object]:
    params = payload.get("params", {})
    if not isinstance(params, dict):
        raise CommandError(code="INVALID_PARAMS", message=f"{command} params must be an object.")
    return params


def _describe(
    request_id: RequestId,
    command: str,
    params: dict[str, object],
    result: dict[str, object],
) -> AuditEvent:
    """Summarize a successful command as an audit event."""
    buffer_id = params.get("buffer")
    outcome = result.get("outcome") or result.get("notice")
    line = result.get("line")
    dropped = result.get("dropped")
    return AuditEvent(
        timestamp=utc_timestamp(),
        request_id=request_id,
        command=command,
        buffer=buffer_id if isinstance(buffer_id, str) else None,
        ok=True,
        outcome=outcome if isinstance(outcome, str) else None,
        line=line if isinstance(line, int) else None,
        dropped=len(dropped) if isinstance(dropped, list) else 0,
    )


def create_server(
    root: str,
    data_dir: str | None = None,
    cli_overrides: CliOverrides | None = None,
) -> BookmarkServer:
    """Create a configured STDIO server instance."""
    overrides = cli_overrides or CliOverrides()
    if data_dir is not None and overrides.data_dir is None:
        overrides = CliOverrides(
            data_dir=Path(data_dir).resolve(),
            wrap_messages=overrides.wrap_messages,
            audit_enabled=overrides.audit_enabled,
        )
    config = load_effective_config(root=Path(root).resolve(), overrides=overrides)
    return BookmarkServer(config=config)


def _parse_flag(value: str | None) -> bool | None:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the bookmark server process."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        wrap_messages=_parse_flag(args.wrap_messages),
        audit_enabled=_parse_flag(args.audit),
    )
    server = create_server(root=args.root, cli_overrides=overrides)
    server.serve(in_stream=sys.stdin, out_stream=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

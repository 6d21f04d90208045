"""JSONL audit trail of bookmark commands."""

from __future__ import annotations

import json
from collections import deque
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """One handled command and what it did to a buffer.

    ``outcome`` is the toggle outcome or wrap notice, ``line`` the toggled or
    navigated-to line, and ``dropped`` the number of bookmarks a reconcile lost.
    """

    timestamp: str
    request_id: str | int | None
    command: str
    buffer: str | None
    ok: bool
    outcome: str | None = None
    line: int | None = None
    dropped: int = 0
    error_code: str | None = None


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonlAuditLogger:
    """Appends command events to a JSONL file; a ``None`` path disables it."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event: AuditEvent) -> None:
        if self._path is None:
            return
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")

    def tail(self, since: str | None, limit: int) -> list[dict[str, object]]:
        """Return the last ``limit`` events at or after ``since``, oldest first."""
        recent: deque[dict[str, object]] = deque(maxlen=limit)
        if self._path is None or not self._path.exists():
            return []
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if since is not None and str(record.get("timestamp", "")) < since:
                    continue
                recent.append(record)
        return list(recent)

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any


def test_stdio_workflow_e2e(tmp_path: Path) -> None:
    (tmp_path / "bufmarks.toml").write_text(
        "[notifications]\nforward_message = \"back to the first bookmark\"\n",
        encoding="utf-8",
    )

    proc = _start_server(root=tmp_path)
    try:
        toggled = _call_command(
            proc,
            "req-e2e-1",
            "bookmarks.toggle",
            {"buffer": "app.py", "line": 4, "line_count": 10},
        )
        assert toggled["ok"] is True
        assert toggled["result"]["outcome"] == "added"

        reconciled = _call_command(
            proc,
            "req-e2e-2",
            "bookmarks.reconcile",
            {"buffer": "app.py", "line_count": 12, "edit_line": 1},
        )
        assert reconciled["ok"] is True
        assert reconciled["result"]["positions"] == [6]

        jumped = _call_command(
            proc, "req-e2e-3", "bookmarks.next", {"buffer": "app.py", "cursor_line": 9}
        )
        assert jumped["ok"] is True
        assert jumped["result"]["line"] == 6
        assert jumped["result"]["effects"][-1] == {
            "kind": "notify",
            "buffer": "app.py",
            "message": "back to the first bookmark",
        }

        audit = _call_command(proc, "req-e2e-4", "bookmarks.audit_log", {"limit": 20})
        assert audit["ok"] is True
        commands = [entry["command"] for entry in audit["result"]["entries"]]
        assert commands == ["bookmarks.toggle", "bookmarks.reconcile", "bookmarks.next"]
    finally:
        _stop_server(proc)


def _start_server(root: Path) -> subprocess.Popen[str]:
    env = os.environ.copy()
    workspace_root = Path(__file__).resolve().parents[2]
    src_path = workspace_root / "src"
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = str(src_path) if not existing else f"{src_path}{os.pathsep}{existing}"
    cmd = [
        sys.executable,
        "-m",
        "bufmarks.server",
        "--root",
        str(root),
        "--data-dir",
        str(root / ".bufmarks"),
    ]
    return subprocess.Popen(
        cmd,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )


def _call_command(
    proc: subprocess.Popen[str],
    request_id: str,
    method: str,
    params: dict[str, object],
) -> dict[str, Any]:
    assert proc.stdin is not None
    assert proc.stdout is not None
    payload = {"id": request_id, "method": method, "params": params}
    proc.stdin.write(json.dumps(payload) + "\n")
    proc.stdin.flush()
    line = proc.stdout.readline()
    if not line:
        stderr_output = ""
        if proc.stderr is not None:
            stderr_output = proc.stderr.read()
        raise RuntimeError(f"Server produced no response. stderr={stderr_output}")
    return json.loads(line)


def _stop_server(proc: subprocess.Popen[str]) -> None:
    if proc.stdin is not None:
        proc.stdin.close()
    proc.wait(timeout=5)
    if proc.returncode != 0 and proc.stderr is not None:
        stderr_output = proc.stderr.read()
        raise AssertionError(f"Server exited with code {proc.returncode}: {stderr_output}")

from __future__ import annotations

from pathlib import Path

from bufmarks.config import CliOverrides, load_effective_config
from bufmarks.server import create_server


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path)

    assert config.root == tmp_path.resolve()
    assert config.data_dir == tmp_path.resolve() / ".bufmarks"
    assert config.notifications.wrap_messages is True
    assert config.notifications.forward_message == "search hit BOTTOM, continuing at TOP"
    assert config.audit.enabled is True


def test_merge_order_defaults_then_file_then_cli(tmp_path: Path) -> None:
    (tmp_path / "bufmarks.toml").write_text(
        "\n".join(
            [
                "[notifications]",
                "wrap_messages = false",
                'forward_message = "wrapped to first bookmark"',
                "",
                "[audit]",
                "enabled = false",
            ]
        ),
        encoding="utf-8",
    )
    overrides = CliOverrides(wrap_messages=True)
    server = create_server(root=str(tmp_path), cli_overrides=overrides)

    response = server.handle_request(
        {"id": "req-merge", "method": "bookmarks.status", "params": {}}
    )
    effective = response["result"]["effective_config"]

    assert effective["notifications"]["wrap_messages"] is True
    assert effective["notifications"]["forward_message"] == "wrapped to first bookmark"
    assert effective["audit"]["enabled"] is False


def test_data_dir_override_has_highest_precedence(tmp_path: Path) -> None:
    custom_data_dir = tmp_path / ".custom_data"
    server = create_server(
        root=str(tmp_path),
        cli_overrides=CliOverrides(data_dir=custom_data_dir),
    )

    response = server.handle_request(
        {"id": "req-data-dir", "method": "bookmarks.status", "params": {}}
    )
    effective = response["result"]["effective_config"]
    assert effective["data_dir"] == str(custom_data_dir.resolve())


def test_data_dir_argument_is_used_without_overrides(tmp_path: Path) -> None:
    server = create_server(root=str(tmp_path), data_dir=str(tmp_path / "state"))

    response = server.handle_request({"id": "req-1", "method": "bookmarks.status", "params": {}})

    effective = response["result"]["effective_config"]
    assert effective["data_dir"] == str((tmp_path / "state").resolve())

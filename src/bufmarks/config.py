"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = "bufmarks.toml"
DEFAULT_DATA_DIR_NAME = ".bufmarks"
MAX_MESSAGE_LENGTH = 200

DEFAULT_FORWARD_MESSAGE = "search hit BOTTOM, continuing at TOP"
DEFAULT_BACKWARD_MESSAGE = "search hit TOP, continuing at BOTTOM"


@dataclass(slots=True, frozen=True)
class NotificationConfig:
    """Wraparound notice settings."""

    wrap_messages: bool = True
    forward_message: str = DEFAULT_FORWARD_MESSAGE
    backward_message: str = DEFAULT_BACKWARD_MESSAGE


@dataclass(slots=True, frozen=True)
class AuditConfig:
    """Audit log toggles."""

    enabled: bool = True


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Fully merged application configuration."""

    root: Path
    data_dir: Path
    notifications: NotificationConfig
    audit: AuditConfig

    @property
    def audit_log_path(self) -> Path:
        return self.data_dir / "audit.jsonl"

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for command responses."""
        return {
            "root": str(self.root),
            "data_dir": str(self.data_dir),
            "notifications": {
                "wrap_messages": self.notifications.wrap_messages,
                "forward_message": self.notifications.forward_message,
                "backward_message": self.notifications.backward_message,
            },
            "audit": {
                "enabled": self.audit.enabled,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    wrap_messages: bool | None = None
    audit_enabled: bool | None = None


def default_config(root: Path) -> AppConfig:
    """Build default config for a given root directory."""
    resolved_root = root.resolve()
    return AppConfig(
        root=resolved_root,
        data_dir=resolved_root / DEFAULT_DATA_DIR_NAME,
        notifications=NotificationConfig(),
        audit=AuditConfig(),
    )


def load_config_file(root: Path) -> dict[str, object]:
    """Load optional bufmarks.toml from the root directory."""
    config_path = root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_message(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    if len(value) > MAX_MESSAGE_LENGTH:
        raise ValueError(f"Config field '{name}' must be <= {MAX_MESSAGE_LENGTH} characters.")
    return value


def merge_config(base: AppConfig, payload: dict[str, object], overrides: CliOverrides) -> AppConfig:
    """Merge defaults, config file, then CLI/startup overrides."""
    notifications_payload = _get_table(payload, "notifications")
    audit_payload = _get_table(payload, "audit")

    unknown = sorted(set(payload.keys()) - {"notifications", "audit"})
    if unknown:
        raise ValueError(f"Unknown config section '{unknown[0]}'.")

    notifications = NotificationConfig(
        wrap_messages=_optional_bool(
            notifications_payload.get("wrap_messages"),
            "notifications.wrap_messages",
            base.notifications.wrap_messages,
        ),
        forward_message=_optional_message(
            notifications_payload.get("forward_message"),
            "notifications.forward_message",
            base.notifications.forward_message,
        ),
        backward_message=_optional_message(
            notifications_payload.get("backward_message"),
            "notifications.backward_message",
            base.notifications.backward_message,
        ),
    )
    audit = AuditConfig(
        enabled=_optional_bool(audit_payload.get("enabled"), "audit.enabled", base.audit.enabled)
    )

    merged = AppConfig(
        root=base.root,
        data_dir=base.data_dir,
        notifications=notifications,
        audit=audit,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: AppConfig, overrides: CliOverrides) -> AppConfig:
    """Apply startup overrides at highest precedence."""
    notifications = NotificationConfig(
        wrap_messages=(
            overrides.wrap_messages
            if overrides.wrap_messages is not None
            else config.notifications.wrap_messages
        ),
        forward_message=config.notifications.forward_message,
        backward_message=config.notifications.backward_message,
    )
    audit = AuditConfig(
        enabled=(
            overrides.audit_enabled
            if overrides.audit_enabled is not None
            else config.audit.enabled
        )
    )
    data_dir = overrides.data_dir or config.data_dir
    return AppConfig(
        root=config.root,
        data_dir=data_dir.resolve(),
        notifications=notifications,
        audit=audit,
    )


def load_effective_config(root: Path, overrides: CliOverrides | None = None) -> AppConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved_root = root.resolve()
    base = default_config(resolved_root)
    payload = load_config_file(resolved_root)
    return merge_config(base, payload, overrides or CliOverrides())

"""Configuration loading with layered overrides."""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from pxeorder.core.logging import DEFAULT_LOG_PATH, LOG_FORMATS


SYSTEM_CONFIG = Path("/etc/pxeorder/config.yaml")


class ConfigError(Exception):
    """A configuration value has the wrong type or is out of range."""

    pass


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the boot order fixer."""

    log_path: Path = DEFAULT_LOG_PATH
    log_format: str = "text"
    syslog_tag: str | None = "boot-order-fix"
    efibootmgr: str = "efibootmgr"
    max_retries: int = 3
    retry_delay: float = 2
    ready_attempts: int = 10
    ready_delay: float = 1
    verify_delay: float = 2


def user_config_path() -> Path:
    """Per-user config file."""
    return Path.home() / ".config" / "pxeorder" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists; unreadable files count as empty."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce(key: str, value: Any) -> Any:
    """Check and convert one config value."""
    if key == "log_path":
        if not isinstance(value, (str, Path)):
            raise ConfigError(f"{key} must be a path, got {value!r}")
        return Path(value)

    if key == "log_format":
        if value not in LOG_FORMATS:
            raise ConfigError(f"{key} must be one of {', '.join(LOG_FORMATS)}, got {value!r}")
        return value

    if key == "syslog_tag":
        if value is None or value is False or value == "":
            return None
        if not isinstance(value, str):
            raise ConfigError(f"{key} must be a string, got {value!r}")
        return value

    if key == "efibootmgr":
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{key} must be a command name or path, got {value!r}")
        return value

    if key in ("max_retries", "ready_attempts"):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"{key} must be a positive integer, got {value!r}")
        return value

    # delays in seconds
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigError(f"{key} must be a non-negative number, got {value!r}")
    return value


def apply_overrides(settings: Settings, data: dict[str, Any]) -> Settings:
    """Return settings updated with the known keys of data; unknown keys are ignored."""
    known = {f.name for f in fields(Settings)}
    changes = {key: _coerce(key, value) for key, value in data.items() if key in known}
    return replace(settings, **changes)


def load_settings(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """
    Build settings with system -> user -> explicit file -> overrides precedence.

    Args:
        config_path: Extra config file given on the command line
        overrides: Values from command-line flags; None values are skipped

    Returns:
        Settings with every layer applied

    Raises:
        ConfigError: If a value has the wrong type
    """
    settings = Settings()

    layers = [SYSTEM_CONFIG, user_config_path()]
    if config_path is not None:
        layers.append(config_path)

    for path in layers:
        settings = apply_overrides(settings, load_config_file(path))

    if overrides:
        settings = apply_overrides(
            settings, {k: v for k, v in overrides.items() if v is not None}
        )

    return settings

"""Configuration file management for budgeting."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from budgeting.store.schema import get_db_path

DEFAULT_RECENT_LIMIT = 20
DEFAULT_LOG_LEVEL = "WARNING"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "budgeting" / "config.toml"


def default_config(db_path: Path | None = None) -> dict[str, Any]:
    """Build the configuration written by 'budgeting init'.

    Args:
        db_path: Database location to record. If None, uses the XDG default.
    """
    return {
        "database": {"path": str(db_path or get_db_path())},
        "dashboard": {"recent_limit": DEFAULT_RECENT_LIMIT},
        "logging": {"level": DEFAULT_LOG_LEVEL},
    }


def create_default_config(config_path: Path | None = None, db_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        db_path: Database location to record. If None, uses the XDG default.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(default_config(db_path), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _load_or_empty(config_path: Path | None) -> dict[str, Any]:
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return {}


def get_database_path(config_path: Path | None = None) -> Path:
    """Database location from config, falling back to the XDG default."""
    path = _load_or_empty(config_path).get("database", {}).get("path")
    return Path(path).expanduser() if path else get_db_path()


def get_recent_limit(config_path: Path | None = None) -> int:
    """Number of transactions the dashboard shows."""
    limit = _load_or_empty(config_path).get("dashboard", {}).get("recent_limit", DEFAULT_RECENT_LIMIT)
    if not isinstance(limit, int) or limit <= 0:
        raise ValueError(f"dashboard.recent_limit must be a positive integer, got {limit!r}")
    return limit


def get_log_level(config_path: Path | None = None) -> str:
    """Logging level name from config."""
    level = _load_or_empty(config_path).get("logging", {}).get("level", DEFAULT_LOG_LEVEL)
    return str(level).upper()

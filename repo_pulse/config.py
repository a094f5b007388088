"""
Configuration management for Repo Pulse.

Settings are read from, in order of priority:
1. Values set explicitly (CLI flags)
2. Environment variables
3. .repo-pulse.toml (local config)
4. pyproject.toml (project-level config)
"""

import os
import tomllib
from pathlib import Path

from repo_pulse.activity import DEFAULT_ACTIVITY_WINDOW_DAYS

# project_root is the parent directory of repo_pulse/
PROJECT_ROOT = Path(__file__).resolve().parent.parent

CONFIG_SECTION = "repo-pulse"

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

# Global settings (can be overridden)
_ACTIVITY_WINDOW_DAYS: int | None = None
_VERBOSE: bool | None = None


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict:
    """
    Return the ``[tool.repo-pulse]`` table.

    .repo-pulse.toml takes priority; pyproject.toml is only read when the local
    config file does not exist.
    """
    local_config_path = PROJECT_ROOT / ".repo-pulse.toml"
    if local_config_path.exists():
        config = load_config_file(local_config_path)
        return config.get("tool", {}).get(CONFIG_SECTION, {})

    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        config = load_config_file(pyproject_path)
        return config.get("tool", {}).get(CONFIG_SECTION, {})

    return {}


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL


def _parse_window_days(value: object, source: str) -> int:
    try:
        days = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"Activity window from {source} should be an integer, got {value!r}."
        ) from e
    if days < 1:
        raise ValueError(
            f"Activity window from {source} should be at least 1 day, got {days}."
        )
    return days


def get_activity_window_days() -> int:
    """
    Get the number of days in the activity time series.

    Priority:
    1. Explicitly set value via set_activity_window_days()
    2. REPO_PULSE_WINDOW_DAYS environment variable
    3. ``activity_window_days`` in config files
    4. Default: 30

    Returns:
        Window size in days.

    Raises:
        ValueError: If a configured value is not a positive integer.
    """
    if _ACTIVITY_WINDOW_DAYS is not None:
        return _ACTIVITY_WINDOW_DAYS

    env_window = os.getenv("REPO_PULSE_WINDOW_DAYS")
    if env_window:
        return _parse_window_days(env_window, "REPO_PULSE_WINDOW_DAYS")

    config = get_tool_config()
    if "activity_window_days" in config:
        return _parse_window_days(config["activity_window_days"], "config file")

    return DEFAULT_ACTIVITY_WINDOW_DAYS


def set_activity_window_days(days: int | None) -> None:
    """
    Set the activity window explicitly. ``None`` clears the override.

    Raises:
        ValueError: If days is not a positive integer.
    """
    global _ACTIVITY_WINDOW_DAYS
    _ACTIVITY_WINDOW_DAYS = (
        None if days is None else _parse_window_days(days, "command line")
    )


def is_verbose_enabled() -> bool:
    """
    Check if verbose console output is enabled.

    Priority:
    1. Explicitly set value via set_verbose()
    2. REPO_PULSE_VERBOSE environment variable ("1", "true", "yes")
    3. ``verbose`` in config files
    4. Default: False
    """
    if _VERBOSE is not None:
        return _VERBOSE

    env_verbose = os.getenv("REPO_PULSE_VERBOSE")
    if env_verbose:
        return env_verbose.strip().lower() in ("1", "true", "yes", "on")

    return bool(get_tool_config().get("verbose", False))


def set_verbose(verbose: bool | None) -> None:
    """Set verbose output explicitly. ``None`` clears the override."""
    global _VERBOSE
    _VERBOSE = verbose

"""Configuration loading and precedence resolution.

jsonreference has very little to configure: the default parent reference
used by ``jsonref resolve`` and the output format.  Settings are merged from
(high to low precedence):

1. CLI flags,
2. environment variables ``JSONREF_BASE`` and ``JSONREF_FORMAT``,
3. the project-local ``./jsonref.json`` file,
4. defaults.

:func:`get_data_dir` gives the XDG data directory where the CLI writes
crash logs.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from jsonreference.exceptions import ConfigError
from jsonreference.models import Settings

_APP_NAME = "jsonref"
_PROJECT_CONFIG_FILENAME = "jsonref.json"

ENV_BASE = "JSONREF_BASE"
ENV_FORMAT = "JSONREF_FORMAT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/jsonref/`` (default ``~/.local/share/jsonref/``).
    On macOS/Windows: ``~/.jsonref/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./jsonref.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(cli_base: Optional[str] = None) -> Settings:
    """Resolve settings with the full precedence chain.

    Args:
        cli_base: ``--base`` value, highest precedence.

    Returns:
        The effective :class:`~jsonreference.models.Settings`.

    Raises:
        ConfigError: If the project file or an environment variable holds
            an invalid value.
    """
    data: dict[str, Any] = load_project_config() or {}

    env_base = os.environ.get(ENV_BASE)
    if env_base:
        data["base"] = env_base
    env_format = os.environ.get(ENV_FORMAT)
    if env_format:
        _set_format(data, env_format.lower())

    if cli_base is not None:
        data["base"] = cli_base

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _set_format(data: dict[str, Any], fmt: str) -> None:
    output = data.get("output")
    data["output"] = {**output, "format": fmt} if isinstance(output, dict) else {"format": fmt}

"""Server configuration with XDG paths and precedence resolution.

This module handles all configuration for specmock:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specmock/`` on macOS and Windows. Only the data directory is used,
  to hold crash logs. See :func:`get_data_dir`.
* **Project config** -- An optional ``./specmock.json`` next to the tests
  that pins the document and port for a repository. See
  :func:`load_project_config`.
* **Precedence resolution** -- :func:`resolve_server_config` merges CLI
  flags, environment variables, project-local config, and defaults into a
  :class:`~specmock.models.ServerConfig`.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specmock.exceptions import ConfigError
from specmock.models import ServerConfig

_APP_NAME = "specmock"
_PROJECT_CONFIG_FILENAME = "specmock.json"

# Environment variable -> ServerConfig field
_ENV_VARS = {
    "SPECMOCK_SPEC": "spec",
    "SPECMOCK_HOST": "host",
    "SPECMOCK_PORT": "port",
    "SPECMOCK_MEDIA_TYPE": "media_type",
    "SPECMOCK_DEFAULT_STATUS": "default_status",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specmock/`` (default
    ``~/.local/share/specmock/``). On macOS/Windows: ``~/.specmock/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
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
    """Load project-local configuration from ``./specmock.json``.

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
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for var, field in _ENV_VARS.items():
        value = os.environ.get(var)
        if value:
            overrides[field] = value
    return overrides


# --- Precedence resolution ---


def resolve_server_config(
    cli_spec: Optional[str] = None,
    cli_host: Optional[str] = None,
    cli_port: Optional[int] = None,
    cli_media_type: Optional[str] = None,
) -> ServerConfig:
    """Resolve the server configuration with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_spec``, ``cli_host``, ``cli_port``,
           ``cli_media_type``)
        2. Environment variables (``SPECMOCK_SPEC``, ``SPECMOCK_HOST``,
           ``SPECMOCK_PORT``, ``SPECMOCK_MEDIA_TYPE``,
           ``SPECMOCK_DEFAULT_STATUS``)
        3. Project config (``./specmock.json``)
        4. Defaults declared on :class:`~specmock.models.ServerConfig`

    Raises:
        ConfigError: If the merged values fail validation (for example a
            non-numeric ``SPECMOCK_PORT``).
    """
    # 4 + 3. Defaults come from the model; project config overlays them
    merged: dict[str, Any] = {}
    project = load_project_config()
    if project is not None:
        merged.update(
            {k: v for k, v in project.items() if k in ServerConfig.model_fields}
        )

    # 2. Environment variables
    merged.update(_env_overrides())

    # 1. CLI flags (highest precedence)
    cli = {
        "spec": cli_spec,
        "host": cli_host,
        "port": cli_port,
        "media_type": cli_media_type,
    }
    merged.update({k: v for k, v in cli.items() if v is not None})

    try:
        return ServerConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid server configuration: {exc}") from exc

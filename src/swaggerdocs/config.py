"""Settings resolution with precedence between CLI, environment, and project config.

swaggerdocs keeps no persistent state, so configuration is read-only and
resolved once at startup into a :class:`~swaggerdocs.models.Settings`:

* **Project config** -- an optional ``./swaggerdocs.json`` holding any
  subset of the ``Settings`` fields (see :func:`load_project_config`).
* **Environment** -- ``SWAGGER_URL``, ``AUTH_TYPE``, ``AUTH_USERNAME``,
  ``AUTH_PASSWORD``, ``AUTH_TOKEN``, ``API_KEY``, ``API_KEY_HEADER``,
  ``CACHE_TTL`` (milliseconds) and ``SWAGGERDOCS_TIMEOUT`` (seconds).
* **CLI flags** -- currently only the documentation URL.

See :func:`load_settings` for the full precedence chain.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from swaggerdocs.exceptions import ConfigError
from swaggerdocs.models import Settings

_PROJECT_CONFIG_FILENAME = "swaggerdocs.json"

# Environment variable -> key inside the ``auth`` section.
_AUTH_ENV_VARS = {
    "AUTH_TYPE": "type",
    "AUTH_USERNAME": "username",
    "AUTH_PASSWORD": "password",
    "AUTH_TOKEN": "token",
    "API_KEY": "api_key",
    "API_KEY_HEADER": "api_key_header",
}


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``swaggerdocs.json``.

    Args:
        directory: Directory to look in. Defaults to the current working
            directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def load_settings(
    cli_url: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    project_dir: Optional[Path] = None,
) -> Settings:
    """Resolve settings with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_url``)
        2. Environment variables
        3. Project config (``./swaggerdocs.json``)
        4. Defaults

    Empty environment variables count as unset.

    Args:
        cli_url: Documentation URL given on the command line.
        environ: Environment mapping. Defaults to ``os.environ``.
        project_dir: Directory holding the project config file.

    Returns:
        The validated :class:`~swaggerdocs.models.Settings`.

    Raises:
        ConfigError: If the project config is malformed, ``CACHE_TTL`` or
            ``SWAGGERDOCS_TIMEOUT`` is not a number, or validation fails
            (for example an unknown ``AUTH_TYPE``).
    """
    env = os.environ if environ is None else environ

    # 4 + 3. Defaults overlaid with the project file
    data: dict[str, Any] = dict(load_project_config(project_dir) or {})
    project_auth = data.get("auth") or {}
    if not isinstance(project_auth, dict):
        raise ConfigError("Invalid project config: 'auth' must be a JSON object")
    auth: dict[str, Any] = dict(project_auth)

    # 2. Environment
    if env.get("SWAGGER_URL"):
        data["default_url"] = env["SWAGGER_URL"]
    for var, key in _AUTH_ENV_VARS.items():
        if env.get(var):
            auth[key] = env[var]
    if env.get("CACHE_TTL"):
        data["cache_ttl_ms"] = _parse_number("CACHE_TTL", env["CACHE_TTL"], int)
    if env.get("SWAGGERDOCS_TIMEOUT"):
        data["timeout"] = _parse_number(
            "SWAGGERDOCS_TIMEOUT", env["SWAGGERDOCS_TIMEOUT"], float
        )

    # 1. CLI flags
    if cli_url:
        data["default_url"] = cli_url

    data["auth"] = auth
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _parse_number(name: str, raw: str, kind: type) -> Any:
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got '{raw}'") from exc

"""Configuration resolution and credential sources.

* **Client config** -- :func:`resolve_config` builds a
  :class:`~specfetch.models.ClientConfig` from a project file, environment
  variables and explicit arguments.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars, files, or literal values for the auth interceptors.

Precedence (high to low):
    1. Explicit arguments to :func:`resolve_config`
    2. Environment variables (``SPECFETCH_BASE_URL``, ``SPECFETCH_TIMEOUT``)
    3. Config file (explicit ``config_path`` or ``./specfetch.json``)
    4. Model defaults
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from specfetch.exceptions import ConfigError
from specfetch.models import ClientConfig

logger = logging.getLogger(__name__)

_PROJECT_CONFIG_FILENAME = "specfetch.json"

ENV_BASE_URL = "SPECFETCH_BASE_URL"
ENV_TIMEOUT = "SPECFETCH_TIMEOUT"


def load_config_file(path: Optional[Union[str, Path]] = None) -> Optional[dict[str, Any]]:
    """Load a JSON or YAML config file.

    Args:
        path: Explicit file path. When ``None``, ``./specfetch.json`` is used
            if it exists.

    Returns:
        The parsed mapping, or ``None`` when no file applies.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        candidate = Path.cwd() / _PROJECT_CONFIG_FILENAME
        if not candidate.is_file():
            return None
    else:
        candidate = Path(path).expanduser()
        if not candidate.is_file():
            raise ConfigError(f"Config file not found: {candidate}")

    try:
        text = candidate.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {candidate}: {exc}") from exc

    try:
        if candidate.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config at {candidate}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config at {candidate} must be an object (got {type(data).__name__})"
        )
    logger.debug("Loaded client config from %s", candidate)
    return data


def resolve_config(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    config_path: Optional[Union[str, Path]] = None,
) -> ClientConfig:
    """Resolve the effective :class:`~specfetch.models.ClientConfig`.

    Args:
        base_url: Explicit base URL (highest precedence).
        timeout: Explicit timeout in seconds (highest precedence).
        config_path: Config file to read instead of ``./specfetch.json``.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file or an environment value is invalid.
    """
    # 4 + 3. Defaults layered with the config file
    values: dict[str, Any] = load_config_file(config_path) or {}

    # 2. Environment variables
    env_base_url = os.environ.get(ENV_BASE_URL)
    if env_base_url:
        values["base_url"] = env_base_url
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        try:
            values["timeout"] = float(env_timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number of seconds, got {env_timeout!r}"
            ) from exc

    # 1. Explicit arguments
    if base_url is not None:
        values["base_url"] = base_url
    if timeout is not None:
        values["timeout"] = timeout

    try:
        return ClientConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc


def resolve_credential(source: str) -> str:
    """Return the secret named by a ``kind:reference`` descriptor.

    ``env:NAME`` reads an environment variable, ``file:PATH`` reads a file
    (surrounding whitespace stripped) and ``value:TEXT`` is the text itself.

    Raises:
        ConfigError: For an unknown kind, an unset variable, or an
            unreadable file.
    """
    kind, sep, reference = source.partition(":")
    if not sep:
        kind = ""

    if kind == "value":
        return reference

    if kind == "env":
        try:
            return os.environ[reference]
        except KeyError:
            raise ConfigError(
                f"Credential variable {reference!r} is not set ({source})"
            ) from None

    if kind == "file":
        secret_path = Path(reference).expanduser()
        try:
            return secret_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            raise ConfigError(f"Credential file not found: {secret_path}") from None
        except OSError as exc:
            raise ConfigError(f"Credential file {secret_path} is unreadable: {exc}") from exc

    raise ConfigError(
        f"Unknown credential source {source!r}; expected env:, file: or value:"
    )

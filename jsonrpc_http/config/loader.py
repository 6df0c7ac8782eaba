"""Configuration loading with fail-fast behavior.

Sources, in order of precedence (highest first):
1. JSONRPC_HTTP_TIMEOUT environment variable (timeout only)
2. Explicit path passed to load_config(), or the file named by JSONRPC_HTTP_CONFIG
3. ClientConfig defaults
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jsonrpc_http.config.schema import ClientConfig
from jsonrpc_http.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "JSONRPC_HTTP_CONFIG"
TIMEOUT_ENV_VAR = "JSONRPC_HTTP_TIMEOUT"


def load_config(path: Path | None = None) -> ClientConfig:
    """Load client configuration.

    Args:
        path: Explicit config file path. If None, JSONRPC_HTTP_CONFIG is
            consulted; if that is unset too, defaults are used.

    Returns:
        Validated ClientConfig object.

    Raises:
        ConfigError: If the config file is missing, unreadable or not a JSON
            object, the timeout override is not a number, or validation fails.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)

    if path is not None:
        data = _read_config_file(path)
    else:
        logger.debug("No config file given, using defaults")
        data = {}

    timeout_override = os.environ.get(TIMEOUT_ENV_VAR)
    if timeout_override:
        try:
            data["timeout"] = float(timeout_override)
        except ValueError as e:
            raise ConfigError(
                f"{TIMEOUT_ENV_VAR} must be a number, got: {timeout_override!r}"
            ) from e
        logger.debug("Timeout overridden from environment: %s", data["timeout"])

    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        source = path if path is not None else "defaults"
        raise ConfigError(f"Config validation failed for {source}: {e}") from e


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read a config file holding one JSON object. An empty file means no settings."""
    resolved = path.expanduser().resolve()
    if not resolved.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        # utf-8-sig tolerates files saved with a byte order mark
        content = resolved.read_text(encoding="utf-8-sig").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not content:
        logger.debug("Config file is empty: %s", resolved)
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must hold a JSON object, got {type(data).__name__}"
        )

    logger.debug("Loaded config from: %s", resolved)
    return data

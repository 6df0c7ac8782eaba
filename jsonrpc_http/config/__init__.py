"""Configuration loading and validation."""

from jsonrpc_http.config.loader import CONFIG_ENV_VAR, TIMEOUT_ENV_VAR, load_config
from jsonrpc_http.config.schema import ClientConfig

__all__ = [
    "ClientConfig",
    "CONFIG_ENV_VAR",
    "TIMEOUT_ENV_VAR",
    "load_config",
]

"""Pydantic models for jsonrpc_http configuration validation."""

import os
import warnings

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientConfig(BaseModel):
    """Settings for HTTP clients created by jsonrpc_http.

    Used by default_http_client() and create_http_client(). A client passed
    explicitly to RpcClient is used as-is and ignores this config.

    Example config.json:
        {
            "timeout": 10.0,
            "verify_ssl": true,
            "headers": {"User-Agent": "billing-worker/1.4"}
        }
    """

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(default=30.0, gt=0)
    """Default request timeout in seconds."""

    verify_ssl: bool = True
    """Verify TLS certificates. Set to False only for local testing."""

    ssl_ca_cert: str | None = None
    """Path to a CA bundle. Takes priority over verify_ssl when set."""

    headers: dict[str, str] = Field(default_factory=dict)
    """Headers sent with every request made through the configured client."""

    @field_validator("ssl_ca_cert")
    @classmethod
    def _expand_ca_cert(cls, value: str | None) -> str | None:
        if value is None:
            return None
        expanded = os.path.abspath(os.path.expanduser(value))
        if not os.path.isfile(expanded):
            warnings.warn(
                f"CA certificate file does not exist: {value!r} -> {expanded}",
                UserWarning,
                stacklevel=4,
            )
        return expanded

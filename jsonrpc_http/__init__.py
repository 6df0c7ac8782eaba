"""jsonrpc_http - a small JSON-RPC 2.0 client over HTTP.

Example usage:
    from jsonrpc_http import RpcClient

    client = RpcClient()
    answer = await client.call("https://example.com/rpc", "add", [40, 2], int)
"""

from jsonrpc_http.client import (
    CONTENT_TYPE,
    CallOptions,
    RpcClient,
    close_default_http_client,
    create_http_client,
    default_http_client,
)
from jsonrpc_http.config import ClientConfig, load_config
from jsonrpc_http.core import (
    CallCancelledError,
    CancellationToken,
    ClientError,
    ConfigError,
    EmptyMethodError,
    HttpStatusError,
    IdMismatchError,
    JsonRpcHttpError,
    RequestEncodeError,
    ResponseDecodeError,
    ResultDecodeError,
    TransportError,
)
from jsonrpc_http.rpc import VERSION, ErrorCode, ResponseError

__version__ = "0.1.0"

__all__ = [
    # Client
    "RpcClient",
    "CallOptions",
    "CONTENT_TYPE",
    "create_http_client",
    "default_http_client",
    "close_default_http_client",
    "CancellationToken",
    # Protocol
    "VERSION",
    "ErrorCode",
    "ResponseError",
    # Config
    "ClientConfig",
    "load_config",
    # Errors
    "JsonRpcHttpError",
    "ConfigError",
    "ClientError",
    "EmptyMethodError",
    "RequestEncodeError",
    "TransportError",
    "HttpStatusError",
    "ResponseDecodeError",
    "IdMismatchError",
    "ResultDecodeError",
    "CallCancelledError",
]

"""Core types: errors and cancellation."""

from jsonrpc_http.core.cancel import CancellationToken
from jsonrpc_http.core.errors import (
    CallCancelledError,
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

__all__ = [
    "CancellationToken",
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

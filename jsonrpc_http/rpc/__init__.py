"""JSON-RPC 2.0 protocol support: envelopes, error codes, serialization."""

from jsonrpc_http.rpc.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR_MAX,
    SERVER_ERROR_MIN,
    ErrorCode,
    ResponseError,
    ids_match,
    parse_response,
    serialize_request,
)
from jsonrpc_http.rpc.types import VERSION, Request, Response, new_request_id

__all__ = [
    # Types
    "Request",
    "Response",
    "VERSION",
    "new_request_id",
    # Protocol functions
    "serialize_request",
    "parse_response",
    "ids_match",
    # Error codes
    "ErrorCode",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR_MIN",
    "SERVER_ERROR_MAX",
    # Exceptions
    "ResponseError",
]

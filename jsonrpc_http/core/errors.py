"""Typed exception hierarchy for jsonrpc_http."""

from __future__ import annotations

from typing import Any


class JsonRpcHttpError(Exception):
    """Base class for all jsonrpc_http errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(JsonRpcHttpError):
    """Raised for configuration issues (invalid JSON, validation failure)."""


# === Client-side failures ===


class ClientError(JsonRpcHttpError):
    """Base for failures detected locally, before or after the round trip.

    Server-reported errors are not ClientErrors; they are raised as
    jsonrpc_http.rpc.protocol.ResponseError.
    """


class EmptyMethodError(ClientError):
    """Raised when call() is given an empty method name."""

    def __init__(self) -> None:
        super().__init__("method is empty")


class RequestEncodeError(ClientError):
    """Raised when the request envelope cannot be serialized to JSON."""


class TransportError(ClientError):
    """Raised on connection errors, timeouts and other HTTP transport failures."""


class HttpStatusError(ClientError):
    """Raised when the server answers with anything other than 200 OK."""

    def __init__(self, status_code: int, reason_phrase: str = "") -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        status = f"{status_code} {reason_phrase}".rstrip()
        super().__init__(f"server does not respond 200 OK: {status}")


class ResponseDecodeError(ClientError):
    """Raised when the response body is not a valid JSON-RPC envelope."""


class IdMismatchError(ClientError):
    """Raised when the response id does not echo the request id."""

    def __init__(self, request_id: str, response_id: Any) -> None:
        self.request_id = request_id
        self.response_id = response_id
        super().__init__(
            f"response ID is not matched to request: "
            f"expected {request_id!r}, got {response_id!r}"
        )


class ResultDecodeError(ClientError):
    """Raised when the result payload does not fit the requested result type."""


class CallCancelledError(ClientError):
    """Raised when a call is aborted through its CancellationToken."""

    def __init__(self, message: str = "call cancelled") -> None:
        super().__init__(message)

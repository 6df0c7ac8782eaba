"""JSON-RPC 2.0 error codes and envelope serialization."""

import json
import uuid
from enum import IntEnum
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from jsonrpc_http.core.errors import JsonRpcHttpError, RequestEncodeError, ResponseDecodeError
from jsonrpc_http.rpc.types import Request, Response


class ErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes."""

    # Invalid JSON was received by the server.
    PARSE_ERROR = -32700
    # The JSON sent is not a valid Request object.
    INVALID_REQUEST = -32600
    # The method does not exist or is not available.
    METHOD_NOT_FOUND = -32601
    # Invalid method parameter(s).
    INVALID_PARAMS = -32602
    # Internal JSON-RPC error.
    INTERNAL_ERROR = -32603


PARSE_ERROR = ErrorCode.PARSE_ERROR
INVALID_REQUEST = ErrorCode.INVALID_REQUEST
METHOD_NOT_FOUND = ErrorCode.METHOD_NOT_FOUND
INVALID_PARAMS = ErrorCode.INVALID_PARAMS
INTERNAL_ERROR = ErrorCode.INTERNAL_ERROR

# Reserved for implementation-defined server errors
SERVER_ERROR_MIN = -32099
SERVER_ERROR_MAX = -32000


class ResponseError(JsonRpcHttpError):
    """Error reported by the server in the response envelope.

    Attributes:
        code: JSON-RPC error code. Standard codes are ErrorCode members,
            anything else is kept as a plain int.
        message: Short description supplied by the server.
        data: Optional additional information supplied by the server.
    """

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        try:
            self.code: int = ErrorCode(code)
        except ValueError:
            self.code = code
        self.data = data
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} ({int(self.code)})"

    def __repr__(self) -> str:
        return f"ResponseError(code={int(self.code)}, message={self.message!r}, data={self.data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponseError):
            return NotImplemented
        return (
            self.code == other.code
            and self.message == other.message
            and self.data == other.data
        )

    def __hash__(self) -> int:
        return hash((int(self.code), self.message))

    @property
    def is_server_error(self) -> bool:
        """True if the code lies in the implementation-defined server range."""
        return SERVER_ERROR_MIN <= self.code <= SERVER_ERROR_MAX


def serialize_request(request: Request) -> bytes:
    """Serialize a Request to its JSON wire form.

    Params are first converted to JSON-compatible values, so dataclasses,
    pydantic models, UUIDs and datetimes are accepted. A params value of
    None is left out of the envelope entirely.

    Args:
        request: The Request object to serialize.

    Returns:
        UTF-8 encoded JSON text.

    Raises:
        RequestEncodeError: If params cannot be represented as JSON
            (unknown types, NaN or Infinity).
    """
    data: dict[str, Any] = {
        "jsonrpc": request.jsonrpc,
        "method": request.method,
    }

    try:
        if request.params is not None:
            data["params"] = to_jsonable_python(request.params)
        data["id"] = request.id
        text = json.dumps(data, separators=(",", ":"), allow_nan=False)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise RequestEncodeError(f"failed to marshal request: {e}") from e

    return text.encode("utf-8")


def parse_response(body: bytes | str) -> Response:
    """Parse an HTTP response body into a JSON-RPC 2.0 Response.

    The parser accepts what servers commonly send: "error": null next to a
    result means success, and a missing "result" decodes as None. The
    identifier is not checked here; see ids_match().

    Args:
        body: Raw response body.

    Returns:
        A parsed Response object.

    Raises:
        ResponseDecodeError: If the body is not JSON, not an object, or holds
            a malformed error object.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ResponseDecodeError(f"failed to decode response JSON: {e}") from e

    if not isinstance(data, dict):
        raise ResponseDecodeError(
            f"failed to decode response JSON: expected object, got {type(data).__name__}"
        )

    jsonrpc = data.get("jsonrpc", "")
    if not isinstance(jsonrpc, str):
        raise ResponseDecodeError(
            f"failed to decode response JSON: jsonrpc must be a string, got {type(jsonrpc).__name__}"
        )

    error = _parse_error(data.get("error"))

    return Response(
        jsonrpc=jsonrpc,
        id=data.get("id"),
        result=data.get("result"),
        error=error,
    )


def _parse_error(raw: Any) -> ResponseError | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ResponseDecodeError(
            f"failed to decode response JSON: error must be an object, got {type(raw).__name__}"
        )

    code = raw.get("code")
    # bool is an int subclass but never a valid code
    if not isinstance(code, int) or isinstance(code, bool):
        raise ResponseDecodeError("failed to decode response JSON: error code must be an integer")

    message = raw.get("message")
    if not isinstance(message, str):
        raise ResponseDecodeError("failed to decode response JSON: error message must be a string")

    return ResponseError(code, message, raw.get("data"))


def ids_match(request_id: str, response_id: Any) -> bool:
    """Check that a response identifier echoes the request identifier.

    Both sides are compared as UUIDs so that case or hyphenation differences
    in the echoed string do not count as a mismatch. Non-string ids never match.
    """
    if not isinstance(response_id, str):
        return False
    try:
        return uuid.UUID(response_id) == uuid.UUID(request_id)
    except ValueError:
        return response_id == request_id

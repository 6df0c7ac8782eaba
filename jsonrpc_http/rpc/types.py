"""JSON-RPC 2.0 envelope types."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jsonrpc_http.rpc.protocol import ResponseError

VERSION = "2.0"


def new_request_id() -> str:
    """Generate a fresh request identifier (random UUID4, canonical form)."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Request:
    """JSON-RPC 2.0 request.

    Attributes:
        method: Name of the method to invoke.
        params: Parameters for the method. None means the field is omitted
            from the wire; an empty dict or list is sent as-is.
        id: Request identifier, generated when the request is built.
        jsonrpc: Protocol version, always "2.0".
    """

    method: str
    params: Any = None
    id: str = field(default_factory=new_request_id)
    jsonrpc: str = VERSION


@dataclass
class Response:
    """JSON-RPC 2.0 response.

    Attributes:
        jsonrpc: Protocol version reported by the server.
        id: Identifier echoed by the server. Any JSON value.
        result: Raw, untyped result value. None on failure.
        error: Structured error reported by the server, if any.
    """

    jsonrpc: str
    id: Any
    result: Any = None
    error: ResponseError | None = None

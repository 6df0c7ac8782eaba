"""Unit tests for JSON-RPC envelope types and protocol functions."""

import dataclasses
import json
import uuid

import pytest

from jsonrpc_http.core.errors import RequestEncodeError, ResponseDecodeError
from jsonrpc_http.rpc.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ErrorCode,
    ResponseError,
    ids_match,
    parse_response,
    serialize_request,
)
from jsonrpc_http.rpc.types import VERSION, Request


class TestErrorCodes:
    """Standard JSON-RPC 2.0 error codes."""

    def test_values(self):
        """Codes have the values fixed by JSON-RPC 2.0."""
        assert ErrorCode.PARSE_ERROR == -32700
        assert ErrorCode.INVALID_REQUEST == -32600
        assert ErrorCode.METHOD_NOT_FOUND == -32601
        assert ErrorCode.INVALID_PARAMS == -32602
        assert ErrorCode.INTERNAL_ERROR == -32603

    def test_module_constants(self):
        """Module-level constants mirror the enum."""
        assert PARSE_ERROR == -32700
        assert INVALID_REQUEST == -32600
        assert METHOD_NOT_FOUND == -32601
        assert INVALID_PARAMS == -32602
        assert INTERNAL_ERROR == -32603

    def test_exactly_five_members(self):
        """ErrorCode holds only the standard codes."""
        assert len(ErrorCode) == 5


class TestRequest:
    """Tests for the Request dataclass."""

    def test_defaults(self):
        """A request gets version 2.0 and a fresh UUID."""
        request = Request(method="ping")
        assert request.jsonrpc == VERSION == "2.0"
        assert request.params is None
        assert uuid.UUID(request.id).version == 4

    def test_ids_unique(self):
        """Each request gets its own id."""
        assert Request(method="ping").id != Request(method="ping").id

    def test_immutable(self):
        """Requests cannot be changed once built."""
        request = Request(method="ping")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.method = "pong"


class TestSerializeRequest:
    """Tests for serialize_request."""

    def test_basic(self):
        """Serialize a request without params."""
        request = Request(method="ping", id="id-1")
        data = json.loads(serialize_request(request))

        assert data == {"jsonrpc": "2.0", "method": "ping", "id": "id-1"}

    def test_with_params(self):
        """Serialize a request with named params."""
        request = Request(method="subtract", params={"minuend": 42, "subtrahend": 23})
        data = json.loads(serialize_request(request))

        assert data["params"] == {"minuend": 42, "subtrahend": 23}
        assert data["id"] == request.id

    def test_empty_params_kept(self):
        """Empty params are present on the wire, unlike None."""
        data = json.loads(serialize_request(Request(method="m", params={})))
        assert data["params"] == {}

    def test_compact_output(self):
        """Output uses compact separators and is bytes."""
        body = serialize_request(Request(method="m", params=[1, 2], id="x"))
        assert isinstance(body, bytes)
        assert b" " not in body

    def test_non_json_values_converted(self):
        """UUIDs and tuples are converted to JSON-compatible values."""
        value = uuid.uuid4()
        data = json.loads(serialize_request(Request(method="m", params=(value, 1))))
        assert data["params"] == [str(value), 1]

    def test_unserializable_params(self):
        """Unknown types raise RequestEncodeError."""
        with pytest.raises(RequestEncodeError):
            serialize_request(Request(method="m", params={"handle": object()}))


class TestParseResponse:
    """Tests for parse_response."""

    def test_success(self):
        """Parse a success response with a null error."""
        response = parse_response(
            b'{"jsonrpc":"2.0","result":{"a":1},"error":null,"id":"abc"}'
        )
        assert response.jsonrpc == "2.0"
        assert response.id == "abc"
        assert response.result == {"a": 1}
        assert response.error is None

    def test_success_without_error_key(self):
        """A response without an error key is a success."""
        response = parse_response('{"jsonrpc":"2.0","result":42,"id":"abc"}')
        assert response.result == 42
        assert response.error is None

    def test_error(self):
        """Parse an error response into a ResponseError."""
        response = parse_response(
            '{"jsonrpc":"2.0","result":null,'
            '"error":{"code":-32601,"message":"Method not found","data":null},"id":"abc"}'
        )
        assert response.result is None
        assert response.error == ResponseError(-32601, "Method not found")

    def test_error_data(self):
        """Error data is carried through."""
        response = parse_response(
            '{"jsonrpc":"2.0","error":{"code":-32000,"message":"busy","data":[1]},"id":"abc"}'
        )
        assert response.error.data == [1]
        assert response.error.is_server_error

    def test_missing_id(self):
        """A missing id decodes as None and is left to the id check."""
        response = parse_response('{"jsonrpc":"2.0","result":1}')
        assert response.id is None

    @pytest.mark.parametrize(
        "body",
        [
            "not valid json {",
            "",
            "[1, 2, 3]",
            '"just a string"',
            b"\xff\xfe\x00garbage",
        ],
    )
    def test_invalid_bodies(self, body):
        """Bodies that are not JSON objects raise ResponseDecodeError."""
        with pytest.raises(ResponseDecodeError) as exc_info:
            parse_response(body)
        assert "failed to decode response JSON" in str(exc_info.value)

    @pytest.mark.parametrize(
        "error",
        [
            '"oops"',
            '{"message":"no code"}',
            '{"code":"-32601","message":"string code"}',
            '{"code":true,"message":"bool code"}',
            '{"code":-32601}',
            '{"code":-32601,"message":5}',
        ],
    )
    def test_malformed_error_object(self, error):
        """Malformed error objects raise ResponseDecodeError."""
        with pytest.raises(ResponseDecodeError):
            parse_response(f'{{"jsonrpc":"2.0","error":{error},"id":"abc"}}')

    def test_non_string_version(self):
        """A non-string jsonrpc member is rejected."""
        with pytest.raises(ResponseDecodeError):
            parse_response('{"jsonrpc":2,"result":1,"id":"abc"}')


class TestIdsMatch:
    """Tests for ids_match."""

    def test_same_id(self):
        """Identical ids match."""
        request_id = str(uuid.uuid4())
        assert ids_match(request_id, request_id)

    def test_case_insensitive(self):
        """The same UUID in upper case matches."""
        request_id = str(uuid.uuid4())
        assert ids_match(request_id, request_id.upper())

    def test_different_uuid(self):
        """A different UUID does not match."""
        assert not ids_match(str(uuid.uuid4()), str(uuid.uuid4()))

    @pytest.mark.parametrize("response_id", [None, 1, ["x"], {"id": "x"}])
    def test_non_string_ids(self, response_id):
        """Non-string ids never match."""
        assert not ids_match(str(uuid.uuid4()), response_id)

    def test_non_uuid_strings(self):
        """Non-UUID strings match only when identical."""
        assert ids_match("id-1", "id-1")
        assert not ids_match("id-1", "id-2")

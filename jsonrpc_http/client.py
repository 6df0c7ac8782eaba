"""Async JSON-RPC 2.0 client over HTTP."""

import asyncio
import functools
import logging
import ssl
import weakref
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from jsonrpc_http.config.loader import load_config
from jsonrpc_http.config.schema import ClientConfig
from jsonrpc_http.core.cancel import CancellationToken
from jsonrpc_http.core.errors import (
    CallCancelledError,
    EmptyMethodError,
    HttpStatusError,
    IdMismatchError,
    ResultDecodeError,
    TransportError,
)
from jsonrpc_http.rpc.protocol import ids_match, parse_response, serialize_request
from jsonrpc_http.rpc.types import Request, Response

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"

# Headers owned by the client; call options cannot override them
_RESERVED_HEADERS = frozenset({"content-type"})

HeaderTypes = httpx.Headers | Mapping[str, str] | Sequence[tuple[str, str]]


@dataclass(frozen=True)
class CallOptions:
    """Per-call settings for RpcClient.call().

    Instances are immutable; the builder methods return a modified copy, so
    a later with_headers() replaces the header set of an earlier one.

    Example:
        opts = CallOptions().with_headers({"Authorization": "Bearer abc"}).with_timeout(5.0)
        await client.call(url, "ping", options=opts)
    """

    headers: HeaderTypes | None = None
    """Extra headers added to the POST. None sends only the standard headers."""

    timeout: float | None = None
    """Request timeout in seconds. None uses the HTTP client's own timeout."""

    def with_headers(self, headers: HeaderTypes | None) -> "CallOptions":
        """Return a copy whose extra header set is replaced by headers."""
        return replace(self, headers=headers)

    def with_timeout(self, timeout: float | None) -> "CallOptions":
        """Return a copy with a different request timeout."""
        return replace(self, timeout=timeout)


# === Default transport ===

_default_http_clients: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, httpx.AsyncClient]" = (
    weakref.WeakKeyDictionary()
)


def create_http_client(config: ClientConfig | None = None) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient from a ClientConfig.

    Args:
        config: Client settings. If None, load_config() is used.

    Returns:
        A new AsyncClient. The caller owns it and must close it.
    """
    if config is None:
        config = load_config()

    # Priority: ssl_ca_cert (custom CA) > verify_ssl (bool)
    verify: bool | ssl.SSLContext
    if config.ssl_ca_cert:
        verify = ssl.create_default_context(cafile=config.ssl_ca_cert)
    else:
        verify = config.verify_ssl

    return httpx.AsyncClient(
        timeout=config.timeout,
        verify=verify,
        headers=config.headers,
    )


def default_http_client() -> httpx.AsyncClient:
    """Return the default HTTP client for the running event loop.

    Every RpcClient built without an explicit http_client shares this
    instance within one event loop. A pooled connection cannot outlive the
    loop that opened it, so each loop gets its own client, created on first
    use and recreated if it has been closed.

    Raises:
        RuntimeError: If called outside a running event loop.
    """
    loop = asyncio.get_running_loop()

    # Forget clients whose loop has shut down
    for stale in [other for other in _default_http_clients if other.is_closed()]:
        del _default_http_clients[stale]

    client = _default_http_clients.get(loop)
    if client is None or client.is_closed:
        client = create_http_client()
        _default_http_clients[loop] = client
        logger.debug("Created default HTTP client for loop %r", loop)
    return client


async def close_default_http_client() -> None:
    """Close the running loop's default HTTP client, if one was created."""
    client = _default_http_clients.pop(asyncio.get_running_loop(), None)
    if client is not None:
        await client.aclose()
        logger.debug("Closed default HTTP client")


@functools.lru_cache(maxsize=256)
def _cached_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def _result_adapter(result_type: Any) -> TypeAdapter[Any]:
    """Return a TypeAdapter for result_type, reusing one built earlier when possible."""
    try:
        hash(result_type)
    except TypeError:
        # Unhashable annotations cannot be cached
        return TypeAdapter(result_type)
    return _cached_adapter(result_type)


# === Client ===


class RpcClient:
    """JSON-RPC 2.0 client that sends each call as a single HTTP POST.

    The client holds nothing but an optional httpx.AsyncClient and is safe to
    share between concurrent calls.

    Usage:
        client = RpcClient()
        total = await client.call("https://example.com/rpc", "add", [1, 2], int)

        # With a dedicated transport:
        async with httpx.AsyncClient(timeout=5.0) as http:
            client = RpcClient(http)
            user = await client.call(url, "get_user", {"id": 7}, User)
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize the client.

        Args:
            http_client: Transport used for every call. If None, the shared
                default_http_client() is used.
        """
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The HTTP client calls are sent through.

        Without an explicit client this is the running loop's default, so it
        must be read from inside a coroutine.
        """
        if self._http_client is None:
            return default_http_client()
        return self._http_client

    async def call(
        self,
        url: str,
        method: str,
        params: Any = None,
        result_type: Any = None,
        *,
        options: CallOptions | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> Any:
        """Call method on the server at url and return the decoded result.

        Args:
            url: Endpoint the request is POSTed to.
            method: The RPC method name. Must not be empty.
            params: Method parameters. None leaves "params" out of the request;
                an empty dict or list is sent as-is.
            result_type: Type the result is validated into with pydantic
                (int, list[str], a dataclass, a BaseModel...). None returns
                the raw JSON value.
            options: Per-call headers and timeout.
            cancel_token: Cancelling it aborts the call in flight.

        Returns:
            The result, decoded into result_type.

        Raises:
            EmptyMethodError: If method is empty. Nothing is sent.
            RequestEncodeError: If params cannot be serialized.
            TransportError: On connection errors, timeouts or read failures.
            HttpStatusError: If the HTTP status is not exactly 200.
            ResponseDecodeError: If the body is not a JSON-RPC response.
            ResponseError: If the server reported an error.
            IdMismatchError: If the response id does not echo the request id.
            ResultDecodeError: If the result does not fit result_type.
            CallCancelledError: If cancel_token was cancelled.
        """
        if not method:
            raise EmptyMethodError()

        if options is None:
            options = CallOptions()

        adapter = _result_adapter(result_type) if result_type is not None else None

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        request = Request(method=method, params=params)
        http_request = self._build_http_request(url, serialize_request(request), options)

        logger.debug("RPC call: method=%s, id=%s, url=%s", method, request.id, url)
        if cancel_token is None:
            response = await self._exchange(http_request)
        else:
            response = await self._exchange_cancellable(http_request, cancel_token)

        if response.error is not None:
            logger.warning(
                "RPC error %d from server: method=%s, message=%s",
                response.error.code, method, response.error.message,
            )
            raise response.error

        if not ids_match(request.id, response.id):
            logger.warning(
                "Response id mismatch: method=%s, sent=%s, received=%r",
                method, request.id, response.id,
            )
            raise IdMismatchError(request.id, response.id)

        if adapter is None:
            return response.result

        try:
            return adapter.validate_python(response.result)
        except ValidationError as e:
            raise ResultDecodeError(f"failed to decode result JSON: {e}") from e

    def _build_http_request(
        self, url: str, body: bytes, options: CallOptions
    ) -> httpx.Request:
        headers: list[tuple[str, str]] = [("Content-Type", CONTENT_TYPE)]
        if options.headers is not None:
            for key, value in httpx.Headers(options.headers).multi_items():
                if key.lower() in _RESERVED_HEADERS:
                    logger.warning("Ignoring reserved header in call options: %s", key)
                    continue
                headers.append((key, value))

        extra: dict[str, Any] = {}
        if options.timeout is not None:
            extra["timeout"] = options.timeout

        try:
            return self.http_client.build_request(
                "POST", url, content=body, headers=headers, **extra
            )
        except (httpx.InvalidURL, httpx.HTTPError) as e:
            raise TransportError(f"failed to create new HTTP request: {e}") from e

    async def _exchange(self, http_request: httpx.Request) -> Response:
        """Send the request and parse the response envelope.

        The response body is drained and closed on every path.
        """
        try:
            http_response = await self.http_client.send(http_request, stream=True)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", http_request.url, e)
            raise TransportError(f"failed to post request: {e}") from e

        try:
            if http_response.status_code != 200:
                logger.warning(
                    "Unexpected HTTP status from %s: %d %s",
                    http_request.url, http_response.status_code, http_response.reason_phrase,
                )
                raise HttpStatusError(http_response.status_code, http_response.reason_phrase)

            try:
                content = await http_response.aread()
            except httpx.HTTPError as e:
                raise TransportError(f"failed to read response body: {e}") from e

            return parse_response(content)
        except asyncio.CancelledError:
            # Drop the connection rather than draining it
            await http_response.aclose()
            raise
        finally:
            await _discard(http_response)

    async def _exchange_cancellable(
        self, http_request: httpx.Request, cancel_token: CancellationToken
    ) -> Response:
        task = asyncio.ensure_future(self._exchange(http_request))
        cancel_token.on_cancel(task.cancel)
        try:
            return await task
        except asyncio.CancelledError:
            if cancel_token.is_cancelled and task.cancelled():
                logger.debug("RPC call cancelled: url=%s", http_request.url)
                raise CallCancelledError() from None
            raise
        finally:
            cancel_token.remove_callback(task.cancel)


async def _discard(response: httpx.Response) -> None:
    """Drain whatever is left of the body, then close the response."""
    if response.is_closed:
        return
    try:
        if not response.is_stream_consumed:
            async for _ in response.aiter_raw():
                pass
    except httpx.HTTPError as e:
        logger.debug("Failed to drain response body: %s", e)
    finally:
        await response.aclose()

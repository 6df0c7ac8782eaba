"""Cancellation support for in-flight RPC calls."""

import logging
from collections.abc import Callable

from jsonrpc_http.core.errors import CallCancelledError

logger = logging.getLogger(__name__)


class CancellationToken:
    """Token for cooperative cancellation of RPC calls.

    Pass a token to RpcClient.call(). Cancelling it aborts the HTTP exchange
    that is currently in flight and makes the call raise CallCancelledError.

    Example:
        token = CancellationToken()
        task = asyncio.create_task(client.call(url, "slow_method", cancel_token=token))

        # Elsewhere, e.g. on user request:
        token.cancel()
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation and notify callbacks."""
        if self._cancelled:
            return
        self._cancelled = True
        for callback in list(self._callbacks):
            self._invoke(callback)

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register a callback to be called when cancelled.

        If already cancelled, callback is invoked immediately.
        """
        self._callbacks.append(callback)
        if self._cancelled:
            self._invoke(callback)

    def remove_callback(self, callback: Callable[[], None]) -> None:
        """Unregister a callback. Unknown callbacks are ignored."""
        try:
            self._callbacks.remove(callback)
        except ValueError:
            pass

    def raise_if_cancelled(self) -> None:
        """Raise CallCancelledError if cancellation was requested."""
        if self._cancelled:
            raise CallCancelledError()

    def reset(self) -> None:
        """Reset the token for reuse.

        Clears cancelled state but keeps callbacks.
        """
        self._cancelled = False

    @staticmethod
    def _invoke(callback: Callable[[], None]) -> None:
        # A failing callback must not keep the others from running
        try:
            callback()
        except Exception as e:
            logger.debug("Cancellation callback raised %s: %s", type(e).__name__, e)

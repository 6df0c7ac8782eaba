"""Shared pytest fixtures and configuration for pytest."""

import weakref
from collections.abc import Callable

import httpx
import pytest

import jsonrpc_http.client as client_module
from jsonrpc_http.client import RpcClient
from jsonrpc_http.config.loader import CONFIG_ENV_VAR, TIMEOUT_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of the caller's environment and of each other."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(TIMEOUT_ENV_VAR, raising=False)
    monkeypatch.setattr(client_module, "_default_http_clients", weakref.WeakKeyDictionary())


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], RpcClient]:
    """Factory for an RpcClient whose transport is an httpx.MockTransport."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> RpcClient:
        return RpcClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    return factory

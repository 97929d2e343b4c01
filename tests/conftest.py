"""Test configuration and fixtures."""

import os
from typing import Callable, List
from unittest.mock import patch

import httpx
import pytest

# Set test environment variables BEFORE importing the package
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("DEFAULT_REGISTRY", None)

from registry_mcp.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_http():
    """Route outbound requests to a handler supplied by the test.

    Usage::

        requests = mock_http(lambda request: httpx.Response(200, json={...}))

    Returns the list of requests seen by the handler so tests can assert on
    URLs and query parameters.
    """
    patchers = []

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> List[httpx.Request]:
        seen: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        patcher = patch("registry_mcp.clients.fetch.get_http_client", return_value=client)
        patcher.start()
        patchers.append(patcher)
        return seen

    yield install

    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def route_http(mock_http):
    """Serve fixed JSON bodies keyed by URL host+path; anything else is a 404."""

    def install(routes):
        def handler(request: httpx.Request) -> httpx.Response:
            key = f"{request.url.host}{request.url.path}"
            if key not in routes:
                return httpx.Response(404, json={"error": "Not found"})
            route = routes[key]
            if isinstance(route, Exception):
                raise route
            if isinstance(route, httpx.Response):
                return route
            return httpx.Response(200, json=route)

        return mock_http(handler)

    return install

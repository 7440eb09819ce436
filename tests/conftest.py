"""
Shared test configuration and fixtures for ADDR tests.

Provides mocked aiohttp client sessions for unit testing strategies, and a fake upstream aiohttp
application standing in for the name-service, domain registry and wallet profile services.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from social.graze.addr.app.config import Settings
from social.graze.addr.app.server import start_web_server

SYSTEM_PROGRAM_ADDRESS = "11111111111111111111111111111111"
WRAPPED_SOL_MINT = "So11111111111111111111111111111111111111112"
TOKEN_PROGRAM_ADDRESS = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

NAME_SERVICE_URL = "https://sns-sdk-proxy.bonfida.workers.dev/resolve/"
DOMAIN_REGISTRY_URL = "https://alldomains.id/api/domain-owner/"
WALLET_PROFILE_URL = "https://api.phantom.app/user/v1/profiles/"


def make_response(body: Any, status: int = 200) -> AsyncMock:
    """Create a mock aiohttp response whose json() returns body."""
    response = AsyncMock()
    response.status = status
    response.json.return_value = body
    return response


def make_session(routes: Dict[str, Any]) -> MagicMock:
    """Create a mock aiohttp client session.

    Each route maps a URL to a JSON body, a prepared response mock, or an exception raised when the
    request is made. Requests for unknown URLs fail the test.
    """
    session = MagicMock()

    def get(url: str, **kwargs):
        assert url in routes, f"unexpected request to {url}"
        value = routes[url]
        ctx = MagicMock()
        if isinstance(value, BaseException):
            ctx.__aenter__.side_effect = value
        elif isinstance(value, AsyncMock):
            ctx.__aenter__.return_value = value
        else:
            ctx.__aenter__.return_value = make_response(value)
        return ctx

    session.get.side_effect = get
    return session


@dataclass
class FakeUpstream:
    """Bodies served by the fake upstream, keyed by (service, identifier)."""

    base_url: str = ""
    bodies: Dict[Tuple[str, str], Any] = field(default_factory=dict)
    calls: List[Tuple[str, str]] = field(default_factory=list)


@pytest_asyncio.fixture
async def upstream():
    """Run a fake upstream server for the three resolution services.

    Unknown (service, identifier) pairs answer 404 with a plain text body, which does not decode as
    JSON.
    """
    state = FakeUpstream()

    async def handle(request: web.Request) -> web.Response:
        key = (request.match_info["service"], request.match_info["identifier"])
        state.calls.append(key)
        if key not in state.bodies:
            return web.Response(status=404, text="Not Found")
        return web.json_response(state.bodies[key])

    app = web.Application()
    app.router.add_get("/{service}/{identifier}", handle)

    async with TestServer(app) as server:
        state.base_url = f"http://{server.host}:{server.port}"
        yield state


@pytest_asyncio.fixture
async def client(upstream):
    """Run the ADDR application against the fake upstream."""
    settings = Settings(
        metrics_backend="none",
        name_service_url=upstream.base_url + "/sns/{identifier}",
        domain_registry_url=upstream.base_url + "/registry/{identifier}",
        wallet_profile_url=upstream.base_url + "/profile/{identifier}",
    )
    app = await start_web_server(settings)
    async with TestClient(TestServer(app)) as test_client:
        yield test_client

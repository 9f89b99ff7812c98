"""
Pytest configuration and shared fixtures.

Provides an in-process aiohttp server standing in for the CryptoMarket API,
a fixed clock for reproducible signatures, and pre-wired clients.
"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Configure test environment
os.environ['ENVIRONMENT'] = 'test'

from cryptomkt.client import CryptomktClient
from cryptomkt.config import ExchangeConfig, ExchangeCredentials, ClockConfig
from cryptomkt.infrastructure.clock import ClockSource
from cryptomkt.infrastructure.logging.factory import LoggerFactory

TEST_TIMESTAMP = 1620000000
TEST_API_KEY = "some-key"
TEST_SECRET = "some-secret"


class FixedClock(ClockSource):
    """Clock returning a constant timestamp."""

    def __init__(self, timestamp: int = TEST_TIMESTAMP):
        self.timestamp = timestamp
        self.calls = 0

    async def now(self) -> int:
        self.calls += 1
        return self.timestamp


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Mapping[str, str]
    query: Dict[str, str]
    form: Dict[str, str]
    content_type: str


@dataclass
class FakeExchange:
    """Canned responses keyed by (method, path); every request is recorded."""
    base_url: str = ""
    routes: Dict[Tuple[str, str], Tuple[int, str]] = field(default_factory=dict)
    requests: List[RecordedRequest] = field(default_factory=list)

    def reply(self, method: str, path: str, body: Any, status: int = 200) -> None:
        text = body if isinstance(body, str) else json.dumps(body)
        self.routes[(method, path)] = (status, text)

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]

    async def handle(self, request: web.Request) -> web.Response:
        form = {}
        if request.method == 'POST':
            form = {k: str(v) for k, v in (await request.post()).items()}

        self.requests.append(RecordedRequest(
            method=request.method,
            path=request.path,
            headers=request.headers.copy(),
            query=dict(request.query),
            form=form,
            content_type=request.content_type,
        ))

        status, text = self.routes.get(
            (request.method, request.path),
            (404, json.dumps({"status": "error", "message": "not found"}))
        )
        return web.Response(status=status, text=text, content_type='application/json')


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep the logger factory cache from leaking between tests."""
    LoggerFactory.clear_cache()
    yield
    LoggerFactory.clear_cache()


@pytest.fixture
def fixed_clock():
    return FixedClock()


@pytest.fixture
async def fake_exchange():
    exchange = FakeExchange()
    app = web.Application()
    app.router.add_route('*', '/{tail:.*}', exchange.handle)

    server = TestServer(app)
    await server.start_server()
    exchange.base_url = f"http://{server.host}:{server.port}"

    yield exchange

    await server.close()


@pytest.fixture
def exchange_config(fake_exchange):
    return ExchangeConfig(
        credentials=ExchangeCredentials(api_key=TEST_API_KEY, secret_key=TEST_SECRET),
        base_url=fake_exchange.base_url,
        clock=ClockConfig(source="local"),
    )


@pytest.fixture
def public_config(fake_exchange):
    return ExchangeConfig(base_url=fake_exchange.base_url, clock=ClockConfig(source="local"))


@pytest.fixture
async def client(exchange_config, fixed_clock):
    client = CryptomktClient(exchange_config, clock=fixed_clock)
    yield client
    await client.close()


@pytest.fixture
async def public_client(public_config):
    client = CryptomktClient(public_config)
    yield client
    await client.close()

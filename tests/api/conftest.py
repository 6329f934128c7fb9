"""API test fixtures — the sample 'nodes' service mounted on a test app.

Invariants:
    - Every test gets a fresh endpoint, operation set and app

Design Decisions:
    - raise_app_exceptions=False: the catch-all handler answers 500 AND
      re-raises; tests assert on the answer
"""

import pytest
from httpx import ASGITransport, AsyncClient

from console_api.config import Settings
from console_api.main import create_app
from tests.api.sample_service import NodesEndpoint


@pytest.fixture
def settings():
    return Settings(log_format="text", disabled_services=[])


@pytest.fixture
def endpoint(settings):
    return NodesEndpoint(settings=settings)


@pytest.fixture
async def client(endpoint, settings):
    app = create_app([endpoint], settings=settings)
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

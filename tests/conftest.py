"""Shared test fixtures for the FastAPI test client and relay dependencies."""

from collections.abc import AsyncGenerator
from types import MappingProxyType

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_discord_client, get_route_table, get_webhook_secret
from app.main import app
from app.services.discord_client import InMemoryDiscordClient
from app.services.routing import RouteTable

WEBHOOK_SECRET = "test-secret"
DEFAULT_DESTINATION = "https://discord.test/api/webhooks/1/default"
PROJECT_DESTINATION = "https://discord.test/api/webhooks/2/project"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def route_table() -> RouteTable:
    """A resolved table with a default route and one project route."""
    return MappingProxyType({"/": DEFAULT_DESTINATION, "/project": PROJECT_DESTINATION})


@pytest.fixture
def webhook_secret() -> str:
    return WEBHOOK_SECRET


@pytest.fixture
def mock_discord_client() -> InMemoryDiscordClient:
    """Create a fresh in-memory Discord client for test inspection."""
    return InMemoryDiscordClient()


@pytest.fixture
async def client(
    route_table: RouteTable,
    webhook_secret: str,
    mock_discord_client: InMemoryDiscordClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient with dependencies overridden.

    Uses a fixed route table and secret, and an in-memory Discord client
    so deliveries can be inspected without network access.
    """
    app.dependency_overrides[get_route_table] = lambda: route_table
    app.dependency_overrides[get_webhook_secret] = lambda: webhook_secret
    app.dependency_overrides[get_discord_client] = lambda: mock_discord_client
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

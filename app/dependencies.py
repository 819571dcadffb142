"""Centralized FastAPI dependencies for use with Depends()."""

from collections.abc import Mapping
from types import MappingProxyType

from app.config import settings
from app.services.discord_client import DiscordClient, HttpDiscordClient
from app.services.routing import RouteTable, load_route_table

_route_table: RouteTable = MappingProxyType({})
_discord_client: DiscordClient = HttpDiscordClient(timeout=settings.delivery_timeout)


def init_relay_deps(
    routes: Mapping[str, str],
    environ: Mapping[str, str],
    delivery_timeout: float,
) -> RouteTable:
    """Resolve the route table and build the Discord client once at startup.

    Raises:
        RouteConfigurationError: If a route names an unset environment variable.
    """
    global _route_table, _discord_client  # noqa: PLW0603

    _route_table = load_route_table(routes, environ)
    _discord_client = HttpDiscordClient(timeout=delivery_timeout)
    return _route_table


def get_route_table() -> RouteTable:
    """Return the read-only route table resolved by ``init_relay_deps()``."""
    return _route_table


def get_discord_client() -> DiscordClient:
    """Return the application Discord client instance.

    Tests swap in ``InMemoryDiscordClient`` through dependency overrides.
    """
    return _discord_client


def get_webhook_secret() -> str:
    """Return the shared secret GitHub signs deliveries with (empty if unset)."""
    return settings.webhook_secret


__all__ = [
    "get_discord_client",
    "get_route_table",
    "get_webhook_secret",
    "init_relay_deps",
]

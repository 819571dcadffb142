"""Map inbound webhook paths to Discord webhook destinations.

Routes are configured as ``subpath -> env var name`` and resolved once at
startup by ``load_route_table``. The resulting table is read-only and
handed to request handlers through ``app.dependencies``.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

import structlog

from app.services.errors import RouteConfigurationError

logger = structlog.get_logger()

DEFAULT_ROUTE = "/"

RouteTable = Mapping[str, str]


def normalize_path(path: str) -> str:
    """Strip one trailing slash, keeping the root path intact."""
    if path == DEFAULT_ROUTE:
        return path
    return path.removesuffix("/")


def load_route_table(routes: Mapping[str, str], environ: Mapping[str, str]) -> RouteTable:
    """Resolve each route's env var name into a concrete destination URL.

    Raises:
        RouteConfigurationError: If a referenced variable is unset or empty.
    """
    resolved: dict[str, str] = {}
    for subpath, env_var in routes.items():
        url = environ.get(env_var)
        if not url:
            raise RouteConfigurationError(subpath, env_var)
        resolved[normalize_path(subpath)] = url

    if DEFAULT_ROUTE not in resolved:
        logger.warning("route_table_missing_default", routes=sorted(resolved))

    return MappingProxyType(resolved)


def resolve_destination(path: str, route_table: RouteTable) -> str | None:
    """Return the destination for *path*, falling back to the default route."""
    normalized = normalize_path(path)
    destination = route_table.get(normalized)
    if destination is None:
        destination = route_table.get(DEFAULT_ROUTE)
    return destination

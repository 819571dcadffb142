"""Tests for route table loading and path-to-destination resolution."""

from types import MappingProxyType

import pytest

from app.services.errors import RouteConfigurationError
from app.services.routing import load_route_table, normalize_path, resolve_destination

DEFAULT_URL = "https://discord.test/api/webhooks/1/default"
PROJECT_URL = "https://discord.test/api/webhooks/2/project"

TABLE = MappingProxyType({"/": DEFAULT_URL, "/project": PROJECT_URL})


@pytest.mark.parametrize(
    ("path", "expected"),
    [("/", "/"), ("/project/", "/project"), ("/project", "/project"), ("/a/b/", "/a/b")],
)
def test_normalize_path(path: str, expected: str) -> None:
    assert normalize_path(path) == expected


def test_resolve_exact_match() -> None:
    assert resolve_destination("/project", TABLE) == PROJECT_URL


def test_resolve_strips_trailing_slash() -> None:
    assert resolve_destination("/project/", TABLE) == PROJECT_URL


@pytest.mark.parametrize("path", ["/", "/unknown", "/project/nested", "/PROJECT"])
def test_resolve_falls_back_to_default(path: str) -> None:
    assert resolve_destination(path, TABLE) == DEFAULT_URL


def test_resolve_without_default_returns_none() -> None:
    table = MappingProxyType({"/project": PROJECT_URL})

    assert resolve_destination("/unknown", table) is None
    assert resolve_destination("/", table) is None


def test_load_route_table_resolves_env_vars() -> None:
    environ = {"DISCORD_WEBHOOK_URL": DEFAULT_URL, "DISCORD_WEBHOOK_PROJECT": PROJECT_URL}

    table = load_route_table(
        {"/": "DISCORD_WEBHOOK_URL", "/project/": "DISCORD_WEBHOOK_PROJECT"},
        environ,
    )

    assert dict(table) == {"/": DEFAULT_URL, "/project": PROJECT_URL}


def test_load_route_table_is_read_only() -> None:
    table = load_route_table({"/": "HOOK"}, {"HOOK": DEFAULT_URL})

    with pytest.raises(TypeError):
        table["/new"] = PROJECT_URL  # type: ignore[index]


@pytest.mark.parametrize("environ", [{}, {"DISCORD_WEBHOOK_PROJECT": ""}])
def test_load_route_table_missing_env_var_raises(environ: dict[str, str]) -> None:
    """An unset or empty referenced variable fails at load time."""
    with pytest.raises(RouteConfigurationError) as exc_info:
        load_route_table({"/project": "DISCORD_WEBHOOK_PROJECT"}, environ)

    assert exc_info.value.env_var == "DISCORD_WEBHOOK_PROJECT"
    assert exc_info.value.subpath == "/project"


def test_load_route_table_without_default_is_allowed() -> None:
    """A missing default route is tolerated at load time and surfaces per request."""
    table = load_route_table({"/project": "HOOK"}, {"HOOK": PROJECT_URL})

    assert resolve_destination("/elsewhere", table) is None

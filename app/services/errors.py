"""Exception types raised by the relay services.

Routers translate these into HTTP responses; services never build
responses themselves.
"""


class RelayError(Exception):
    """Base class for all relay service errors."""


class RouteConfigurationError(RelayError):
    """A configured route names an environment variable that is not set."""

    def __init__(self, subpath: str, env_var: str) -> None:
        super().__init__(f"Route {subpath!r} references unset environment variable {env_var!r}")
        self.subpath = subpath
        self.env_var = env_var


class UnexpectedTagUpdateError(RelayError):
    """A tag ref presented as an in-place update, which GitHub never sends."""

    def __init__(self, tag_name: str) -> None:
        super().__init__(f"Tag {tag_name!r} cannot be updated in place")
        self.tag_name = tag_name


class DeliveryError(RelayError):
    """The Discord webhook could not be reached or rejected the message."""

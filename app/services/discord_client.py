"""Discord incoming-webhook delivery with protocol-based swappable implementations.

Production code uses ``HttpDiscordClient``, which POSTs each message once
through a short-lived ``httpx.AsyncClient`` with a hard timeout. Tests use
``InMemoryDiscordClient``, which records deliveries for assertion without
touching the network.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import httpx

from app.schemas.discord import DiscordWebhookMessage
from app.services.errors import DeliveryError

DEFAULT_DELIVERY_TIMEOUT = 5.0


async def post_message(
    client: httpx.AsyncClient,
    url: str,
    message: DiscordWebhookMessage,
) -> httpx.Response:
    """POST *message* to a Discord webhook URL.

    ``with_components=true`` is required for Discord to render components
    sent through a webhook that is not owned by an application.

    Raises:
        httpx.HTTPError: On transport failures, timeouts, and non-2xx responses.
    """
    resp = await client.post(
        url,
        params={"with_components": "true"},
        json=message.model_dump(mode="json", exclude_none=True),
        headers={"Content-Type": "application/json"},
    )
    resp.raise_for_status()
    return resp


class DiscordClient(Protocol):
    """Protocol for delivering a message to a Discord webhook."""

    async def send(self, url: str, message: DiscordWebhookMessage) -> None:
        """Deliver *message* to *url* exactly once.

        Raises:
            DeliveryError: If the message could not be delivered.
        """
        ...


class HttpDiscordClient:
    """Production implementation over httpx. Never retries.

    httpx timeouts apply per connect/read/write; the outer ``asyncio.timeout``
    bounds the whole delivery.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_DELIVERY_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def send(self, url: str, message: DiscordWebhookMessage) -> None:
        try:
            async with asyncio.timeout(self._timeout), httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                await post_message(client, url, message)
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise DeliveryError(f"Discord webhook timed out after {self._timeout}s") from exc
        except httpx.HTTPStatusError as exc:
            raise DeliveryError(
                f"Discord webhook returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Discord webhook request failed: {exc}") from exc


class InMemoryDiscordClient:
    """Test double that records delivered messages for assertions.

    Set ``fail_with`` to make every ``send`` raise ``DeliveryError``.
    """

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.fail_with: str | None = None

    async def send(self, url: str, message: DiscordWebhookMessage) -> None:
        """Append the delivery to the in-memory list, or fail if configured to."""
        if self.fail_with is not None:
            raise DeliveryError(self.fail_with)
        self.sent.append({"url": url, "message": message.model_dump(mode="json", exclude_none=True)})

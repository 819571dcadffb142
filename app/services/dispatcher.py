"""Build and deliver the Discord notification for one push event."""

import structlog

from app.schemas.webhooks import PushWebhookPayload
from app.services.classifier import ChangeContext
from app.services.discord_client import DiscordClient
from app.services.messages import build_notification

logger = structlog.get_logger()


async def dispatch(
    change: ChangeContext,
    payload: PushWebhookPayload,
    destination: str,
    discord: DiscordClient,
) -> None:
    """Send the notification for *change* to *destination*.

    Delivery is attempted once; failures propagate as ``DeliveryError``
    for the caller to report.
    """
    message = build_notification(change, payload)
    await discord.send(destination, message)
    logger.info(
        "notification_sent",
        kind=type(change).__name__,
        ref_name=change.name,
        action=change.action.value,
        commits=len(payload.commits),
    )

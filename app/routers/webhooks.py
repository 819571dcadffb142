"""GitHub webhook relay router with HMAC-SHA256 signature verification.

Every path is a potential webhook endpoint: the request path selects the
Discord destination from the route table. Non-POST requests never reach
it; ``NonPostRedirectMiddleware`` redirects them.
"""

import json
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from app.dependencies import get_discord_client, get_route_table, get_webhook_secret
from app.logging_config import bind_delivery_context
from app.schemas.webhooks import PushWebhookPayload
from app.services.classifier import classify
from app.services.discord_client import DiscordClient
from app.services.dispatcher import dispatch
from app.services.errors import DeliveryError, UnexpectedTagUpdateError
from app.services.routing import RouteTable, resolve_destination
from app.services.signature import verify_signature

logger = structlog.get_logger()

router = APIRouter(tags=["webhooks"])


async def verify_github_signature(
    request: Request,
    secret: Annotated[str, Depends(get_webhook_secret)],
    x_hub_signature_256: Annotated[str | None, Header()] = None,
) -> bytes:
    """Verify GitHub webhook HMAC-SHA256 signature.

    Reads the raw request body and checks it against the signature header
    with a constant-time comparison.

    Returns the raw body bytes on success so the route handler can parse
    the payload without reading the body stream a second time.

    Raises:
        HTTPException: 401 if the header or the secret is missing,
            403 if the signature does not match.
    """
    if not x_hub_signature_256 or not secret:
        logger.warning(
            "webhook_unauthorized",
            has_signature=bool(x_hub_signature_256),
            has_secret=bool(secret),
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    body = await request.body()
    if not verify_signature(body, x_hub_signature_256, secret):
        logger.warning("signature_mismatch", path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    return body


@router.post("/{path:path}", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    raw_body: Annotated[bytes, Depends(verify_github_signature)],
    route_table: Annotated[RouteTable, Depends(get_route_table)],
    discord: Annotated[DiscordClient, Depends(get_discord_client)],
    x_github_event: Annotated[str | None, Header()] = None,
    x_github_delivery: Annotated[str | None, Header()] = None,
) -> PlainTextResponse:
    """Receive a GitHub webhook delivery and relay push events to Discord.

    ``ping`` is acknowledged, other non-push events are accepted and
    ignored, and push events are classified and forwarded to the Discord
    webhook configured for the request path.
    """
    bind_delivery_context(delivery_id=x_github_delivery, event=x_github_event)

    try:
        data = json.loads(raw_body)
    except ValueError:
        logger.warning("webhook_invalid_json")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON payload",
        ) from None

    if x_github_event == "ping":
        logger.info("ping_received")
        return PlainTextResponse("Ping received")
    if x_github_event != "push":
        logger.info("event_ignored")
        return PlainTextResponse(f"Event {x_github_event} not handled")

    path = request.url.path
    logger.info("push_received", path=path)

    destination = resolve_destination(path, route_table)
    if destination is None:
        logger.error("no_destination_configured", path=path)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No webhook destination configured for {path}",
        )

    try:
        payload = PushWebhookPayload.model_validate(data)
    except ValidationError as exc:
        logger.warning("push_payload_invalid", errors=exc.error_count())
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid push payload",
        ) from None

    try:
        change = classify(payload.ref, payload.before, payload.after)
    except UnexpectedTagUpdateError as exc:
        logger.error("tag_update_rejected", ref=payload.ref)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from None
    if change is None:
        logger.warning("unrecognized_ref", ref=payload.ref)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unrecognized ref: {payload.ref}",
        )

    try:
        await dispatch(change, payload, destination, discord)
    except DeliveryError:
        logger.exception("delivery_failed", ref=payload.ref)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to deliver notification",
        ) from None

    return PlainTextResponse("Notification sent")

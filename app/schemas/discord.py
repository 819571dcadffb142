"""Pydantic models for the Discord webhook message the relay posts.

Covers the subset of the components-v2 message layout in use: a
container of text displays followed by an action row of link buttons.

Reference: https://discord.com/developers/docs/components/reference
"""

from enum import IntEnum

from pydantic import BaseModel, Field


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    TEXT_DISPLAY = 10
    CONTAINER = 17


class ButtonStyle(IntEnum):
    LINK = 5


class MessageFlag(IntEnum):
    IS_COMPONENTS_V2 = 1 << 15


class TextDisplay(BaseModel):
    """Markdown text block."""

    type: ComponentType = ComponentType.TEXT_DISPLAY
    content: str


class Container(BaseModel):
    """Boxed group of components with a coloured accent bar."""

    type: ComponentType = ComponentType.CONTAINER
    accent_color: int | None = None
    components: list[TextDisplay] = Field(default_factory=list)


class LinkButton(BaseModel):
    """Button that opens *url*; Discord sends no interaction for it."""

    type: ComponentType = ComponentType.BUTTON
    style: ButtonStyle = ButtonStyle.LINK
    url: str
    label: str


class ActionRow(BaseModel):
    type: ComponentType = ComponentType.ACTION_ROW
    components: list[LinkButton] = Field(default_factory=list)


class DiscordWebhookMessage(BaseModel):
    """Body of a POST to a Discord incoming webhook."""

    flags: int = MessageFlag.IS_COMPONENTS_V2.value
    components: list[Container | ActionRow]
    username: str | None = None
    avatar_url: str | None = None

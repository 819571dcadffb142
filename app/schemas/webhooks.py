"""Pydantic models for GitHub webhook payloads.

Only the fields the relay renders are modelled; everything else GitHub
sends is ignored. Every URL that ends up in a link is required and non-empty.
"""

from pydantic import BaseModel, Field


class CommitAuthor(BaseModel):
    """Author information from a Git commit."""

    name: str
    email: str | None = None


class Commit(BaseModel):
    """A single commit within a GitHub push event."""

    id: str
    url: str = Field(min_length=1)
    message: str
    author: CommitAuthor


class Account(BaseModel):
    """A GitHub user or organization (repository owner or event sender)."""

    login: str | None = None
    name: str | None = None
    html_url: str = Field(min_length=1)

    @property
    def display_name(self) -> str:
        return self.name or self.login or ""


class Repository(BaseModel):
    """Repository metadata from the webhook payload."""

    name: str
    html_url: str = Field(min_length=1)
    owner: Account


class PushWebhookPayload(BaseModel):
    """GitHub push webhook event payload.

    Reference: https://docs.github.com/en/webhooks/webhook-events-and-payloads#push
    """

    ref: str
    before: str
    after: str
    repository: Repository
    sender: Account
    compare: str = Field(min_length=1)
    commits: list[Commit] = Field(default_factory=list)

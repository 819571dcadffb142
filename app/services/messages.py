"""Build Discord notification messages for classified push events.

Three layouts exist: branch created/deleted, tag created/deleted, and an
ordinary push listing its commits. All share the same header line and
message envelope.
"""

from __future__ import annotations

from app.schemas.discord import ActionRow, Container, DiscordWebhookMessage, LinkButton, TextDisplay
from app.schemas.webhooks import Commit, PushWebhookPayload
from app.services.classifier import BranchAction, BranchChange, ChangeContext, TagAction, TagChange

ACCENT_COLOR = 0x6E5494
GITHUB_ICON_URL = "https://github.githubassets.com/images/modules/logos_page/GitHub-Mark.png"
BOT_USERNAME = "GitHub"

MAX_LISTED_COMMITS = 10
MAX_COMMIT_SUMMARY_LENGTH = 200
SHORT_SHA_LENGTH = 7
NO_COMMITS_LINE = "_No commits in this push. (How did this happen?)_"


def _code(text: str) -> str:
    return f"`{text}`"


def _header(payload: PushWebhookPayload) -> str:
    repo = payload.repository
    return (
        f"### [{repo.owner.display_name}]({repo.owner.html_url}) - "
        f"[{repo.name}]({repo.html_url})"
    )


def _sender(payload: PushWebhookPayload) -> str:
    return f"[**{payload.sender.display_name}**]({payload.sender.html_url})"


def _envelope(container: Container, buttons: list[LinkButton]) -> DiscordWebhookMessage:
    return DiscordWebhookMessage(
        components=[container, ActionRow(components=buttons)],
        username=BOT_USERNAME,
        avatar_url=GITHUB_ICON_URL,
    )


def _repository_button(payload: PushWebhookPayload) -> LinkButton:
    return LinkButton(url=payload.repository.html_url, label="View Repository")


def branch_url(payload: PushWebhookPayload, branch: str) -> str:
    return f"{payload.repository.html_url}/tree/{branch}"


def tag_url(payload: PushWebhookPayload, tag: str) -> str:
    return f"{payload.repository.html_url}/releases/tag/{tag}"


def format_commit_line(commit: Commit) -> str:
    """Render one commit as a markdown list item.

    Only the first line of the message is shown, cut to 200 characters.
    """
    summary = commit.message.split("\n", 1)[0][:MAX_COMMIT_SUMMARY_LENGTH]
    short_sha = commit.id[:SHORT_SHA_LENGTH]
    return f"- [{_code(short_sha)}]({commit.url}) {commit.author.name}: {summary}"


def build_ref_action_message(
    payload: PushWebhookPayload,
    *,
    kind: str,
    name: str,
    created: bool,
    ref_url: str,
    button_label: str,
) -> DiscordWebhookMessage:
    """Build the message for a branch or tag being created or deleted.

    The link button to the ref itself is only added on creation, since a
    deleted ref has nothing left to show.
    """
    action = "created" if created else "deleted"
    container = Container(
        accent_color=ACCENT_COLOR,
        components=[
            TextDisplay(
                content="\n".join(
                    [
                        _header(payload),
                        f"{_sender(payload)} {action} {kind} [{_code(name)}]({ref_url}).",
                    ]
                )
            )
        ],
    )
    buttons = [_repository_button(payload)]
    if created:
        buttons.append(LinkButton(url=ref_url, label=button_label))
    return _envelope(container, buttons)


def build_commit_push_message(payload: PushWebhookPayload, branch: str) -> DiscordWebhookMessage:
    """Build the message for commits pushed to an existing branch."""
    commits = payload.commits
    commit_count = len(commits)
    commit_word = "commit" if commit_count == 1 else "commits"

    container = Container(
        accent_color=ACCENT_COLOR,
        components=[
            TextDisplay(
                content=(
                    f"{_header(payload)}\n"
                    f"-# {_sender(payload)} pushed {_code(str(commit_count))} "
                    f"{commit_word} to {_code(branch)}."
                )
            )
        ],
    )

    if commits:
        container.components.extend(
            TextDisplay(content=format_commit_line(commit))
            for commit in commits[:MAX_LISTED_COMMITS]
        )
        if commit_count > MAX_LISTED_COMMITS:
            container.components.append(
                TextDisplay(content=f"and {commit_count - MAX_LISTED_COMMITS} more commits...")
            )
    else:
        container.components.append(TextDisplay(content=NO_COMMITS_LINE))

    buttons = [
        _repository_button(payload),
        LinkButton(url=payload.compare, label="View Changes"),
    ]
    return _envelope(container, buttons)


def build_notification(change: ChangeContext, payload: PushWebhookPayload) -> DiscordWebhookMessage:
    """Pick and build the message layout for *change*."""
    match change:
        case BranchChange(name=name, action=BranchAction.UPDATED):
            return build_commit_push_message(payload, name)
        case BranchChange(name=name, action=action):
            return build_ref_action_message(
                payload,
                kind="branch",
                name=name,
                created=action is BranchAction.CREATED,
                ref_url=branch_url(payload, name),
                button_label="View Branch",
            )
        case TagChange(name=name, action=action):
            return build_ref_action_message(
                payload,
                kind="tag",
                name=name,
                created=action is TagAction.CREATED,
                ref_url=tag_url(payload, name),
                button_label="View Tag",
            )
    raise TypeError(f"Unsupported change context: {change!r}")

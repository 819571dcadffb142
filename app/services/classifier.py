"""Classify a push event into branch or tag creation, deletion, or update.

GitHub reports every ref change as a push. Which kind of change it was is
only recoverable from the ref prefix and from whether the ``before`` or
``after`` hash is the all-zero sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.services.errors import UnexpectedTagUpdateError

BRANCH_REF_PREFIX = "refs/heads/"
TAG_REF_PREFIX = "refs/tags/"
ZERO_SHA = "0" * 40


class BranchAction(str, Enum):
    CREATED = "created"
    DELETED = "deleted"
    UPDATED = "updated"


class TagAction(str, Enum):
    CREATED = "created"
    DELETED = "deleted"


@dataclass(frozen=True)
class BranchChange:
    """A branch ref was created, deleted, or moved by pushed commits."""

    name: str
    action: BranchAction


@dataclass(frozen=True)
class TagChange:
    """A tag ref was created or deleted."""

    name: str
    action: TagAction


ChangeContext = BranchChange | TagChange


def _ref_action(before: str, after: str) -> BranchAction:
    if before == ZERO_SHA and after != ZERO_SHA:
        return BranchAction.CREATED
    if before != ZERO_SHA and after == ZERO_SHA:
        return BranchAction.DELETED
    return BranchAction.UPDATED


def classify(ref: str, before: str, after: str) -> ChangeContext | None:
    """Derive the change context for a push to *ref*.

    Returns:
        A ``BranchChange`` or ``TagChange``, or None when *ref* is neither
        a branch nor a tag ref.

    Raises:
        UnexpectedTagUpdateError: If a tag ref has non-zero hashes on both
            sides. GitHub sends a re-pointed tag as delete plus create.
    """
    action = _ref_action(before, after)

    if ref.startswith(BRANCH_REF_PREFIX):
        return BranchChange(name=ref.removeprefix(BRANCH_REF_PREFIX), action=action)

    if ref.startswith(TAG_REF_PREFIX):
        name = ref.removeprefix(TAG_REF_PREFIX)
        if action is BranchAction.UPDATED:
            raise UnexpectedTagUpdateError(name)
        return TagChange(name=name, action=TagAction(action.value))

    return None

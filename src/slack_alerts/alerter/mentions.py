"""Resolve free-text names to Slack user ids."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

import httpx

from slack_alerts.exceptions import SlackApiError

if TYPE_CHECKING:
    from slack_alerts.alerter.channels.slack import SlackChannel
    from slack_alerts.alerter.models import SlackMember

logger = logging.getLogger(__name__)


def member_matches(member: SlackMember, fragments: Iterable[str]) -> bool:
    """Check whether a member matches any lower-cased name fragment.

    The handle must equal the fragment; real and display names only need
    to contain it.
    """
    name = (member.name or "").lower()
    real_name = (member.real_name or "").lower()
    display_name = (member.display_name or "").lower()
    return any(
        name == fragment or fragment in real_name or fragment in display_name
        for fragment in fragments
    )


def resolve_user_ids(members: Iterable[SlackMember], names: Sequence[str]) -> list[str]:
    """Return the ids of members matching any of ``names``, in directory order.

    Blank names are ignored and each id appears at most once. Members
    without an id are skipped.
    """
    fragments = [name.strip().lower() for name in names if name and name.strip()]
    if not fragments:
        return []

    user_ids: list[str] = []
    for member in members:
        if member.id and member.id not in user_ids and member_matches(member, fragments):
            user_ids.append(member.id)
    return user_ids


async def fetch_user_ids(channel: SlackChannel, names: Sequence[str] | None) -> list[str]:
    """Look up the workspace directory and resolve ``names`` against it.

    A failed lookup is logged and resolves to no mentions.
    """
    if not names:
        return []

    try:
        members = await channel.list_users()
    except (SlackApiError, httpx.HTTPError, ValueError) as e:
        logger.warning("Could not resolve mentions %s: %s", list(names), e)
        return []

    user_ids = resolve_user_ids(members, names)
    if len(user_ids) < len(names):
        logger.debug("Resolved %d of %d mentions", len(user_ids), len(names))
    return user_ids

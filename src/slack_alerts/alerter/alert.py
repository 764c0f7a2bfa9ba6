"""Leveled Slack alerts with accumulated context.

This module composes the block builders into the public alert operations
(info, warning, error and table) and hands the result to a SlackChannel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from slack_alerts.alerter.blocks import (
    collect_blocks,
    make_attachment,
    make_code_block,
    make_context_block,
    make_mentions_block,
    make_payload_block,
    make_table_block,
    make_text_block,
)
from slack_alerts.alerter.channels.slack import SlackChannel
from slack_alerts.alerter.mentions import fetch_user_ids
from slack_alerts.alerter.models import AlertLevel, Block, ContextItem, DeliveryResult
from slack_alerts.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_TABLE_TEXT = "No items to process"

ContextInput = ContextItem | Mapping[str, str]


def format_title(level: AlertLevel, service_name: str, text: str) -> str:
    """Format the primary alert line, e.g. ``*ERROR*: *api* - boom``."""
    return f"*{level.label}*: *{service_name}* - {text}"


def _to_context_item(item: ContextInput) -> ContextItem:
    if isinstance(item, ContextItem):
        return item
    return ContextItem(key=str(item["key"]), value=str(item.get("value") or ""))


class SlackAlert:
    """Sends leveled alerts to a Slack channel.

    Context added with :meth:`add_context` is shown as a strip at the top
    of the attachment of every later alert. Mentions are rendered as
    top-level blocks above the attachment.

    Example:
        >>> alert = SlackAlert(token="xoxb-...", channel_id="C0123")
        >>> alert.add_context(ContextItem(key="userId", value="42"))
        >>> await alert.error(text="Payment failed", service_name="billing")
    """

    def __init__(
        self,
        token: str | None = None,
        channel_id: str | None = None,
        *,
        settings: Settings | None = None,
        dry_run: bool | None = None,
        channel: SlackChannel | None = None,
    ) -> None:
        """Initialize the alert client.

        Credentials not passed explicitly are read from the settings
        (``SLACK_MONITORING_TOKEN`` / ``SLACK_MONITORING_CHANNEL_ID``).
        Missing credentials are only logged here; sends will fail until
        :meth:`set_options` provides them.

        Args:
            token: Slack bot token.
            channel_id: Target channel ID.
            settings: Settings to read defaults from.
            dry_run: Override the dry-run flag (also applied to ``channel``).
            channel: Pre-built channel to deliver through.
        """
        if channel is None:
            settings = settings or get_settings()
            env_token = settings.slack.token.get_secret_value() if settings.slack.token else None
            channel = SlackChannel(
                token=token or env_token,
                channel_id=channel_id or settings.slack.channel_id,
                base_url=settings.slack.api_base_url,
                timeout=settings.slack.timeout,
                dry_run=settings.dry_run if dry_run is None else dry_run,
            )
        elif dry_run is not None:
            channel.dry_run = dry_run
        self.channel = channel
        self._context: list[ContextItem] = []

        if not self.channel.token:
            logger.warning(
                "No Slack token provided. Use set_options() or the "
                "SLACK_MONITORING_TOKEN environment variable"
            )
        if not self.channel.channel_id:
            logger.warning(
                "No Slack channel ID provided. Use set_options() or the "
                "SLACK_MONITORING_CHANNEL_ID environment variable"
            )

    @property
    def context(self) -> tuple[ContextItem, ...]:
        """Accumulated context items in insertion order."""
        return tuple(self._context)

    def set_options(self, token: str | None = None, channel_id: str | None = None) -> None:
        """Set the Slack token and/or channel ID.

        Raises:
            ConfigurationError: If a credential is still missing afterwards.
        """
        self.channel.update_credentials(token=token, channel_id=channel_id)

    def add_context(self, context: ContextInput | Iterable[ContextInput]) -> None:
        """Add one or more context items.

        Items with an empty value and exact (key, value) duplicates are
        ignored.
        """
        if isinstance(context, (ContextItem, Mapping)):
            items: Iterable[ContextInput] = [context]
        else:
            items = context

        for raw in items:
            item = _to_context_item(raw)
            if item.value and item not in self._context:
                self._context.append(item)

    async def _deliver(
        self,
        level: AlertLevel,
        blocks: Sequence[Block | None],
        notification_text: str,
        mentions: Sequence[str] | None,
    ) -> DeliveryResult:
        """Wrap the blocks in a leveled attachment and send them."""
        user_ids = await fetch_user_ids(self.channel, mentions)
        top_level_blocks = collect_blocks(make_mentions_block(user_ids))

        attachment = make_attachment(
            level.color,
            collect_blocks(make_context_block(self._context), *blocks),
        )
        return await self.channel.send(
            [attachment],
            notification_text,
            top_level_blocks or None,
        )

    async def info(
        self,
        text: str,
        service_name: str,
        payload: str | dict[str, Any] | None = None,
        mentions: Sequence[str] | None = None,
    ) -> DeliveryResult:
        """Send an info alert."""
        return await self._deliver(
            AlertLevel.INFO,
            [
                make_text_block(format_title(AlertLevel.INFO, service_name, text)),
                make_payload_block(payload),
            ],
            text,
            mentions,
        )

    async def warning(
        self,
        text: str,
        service_name: str,
        payload: str | dict[str, Any] | None = None,
        mentions: Sequence[str] | None = None,
    ) -> DeliveryResult:
        """Send a warning alert."""
        return await self._deliver(
            AlertLevel.WARNING,
            [
                make_text_block(format_title(AlertLevel.WARNING, service_name, text)),
                make_payload_block(payload),
            ],
            text,
            mentions,
        )

    async def error(
        self,
        text: str,
        service_name: str,
        stack_trace: str | None = None,
        payload: str | dict[str, Any] | None = None,
        mentions: Sequence[str] | None = None,
    ) -> DeliveryResult:
        """Send an error alert.

        Args:
            text: Short description of the failure.
            service_name: Service reporting the error.
            stack_trace: Optional traceback, rendered in a code block.
            payload: Optional request/event data, rendered as JSON.
            mentions: Names of users to ping.

        Returns:
            DeliveryResult of the post.
        """
        return await self._deliver(
            AlertLevel.ERROR,
            [
                make_text_block(format_title(AlertLevel.ERROR, service_name, text)),
                make_code_block(stack_trace),
                make_payload_block(payload),
            ],
            text,
            mentions,
        )

    async def table(
        self,
        title: str,
        headers: Sequence[str],
        items: Sequence[T],
        row_mapper: Callable[[T], Sequence[str]],
        service_name: str,
        alert_level: AlertLevel | str = AlertLevel.INFO,
        mentions: Sequence[str] | None = None,
    ) -> DeliveryResult:
        """Send a table of items.

        An empty ``items`` sequence sends a plain info alert saying there
        is nothing to process instead.

        Args:
            title: Title shown above the table and used as fallback text.
            headers: Column headers.
            items: Items to render, one row each.
            row_mapper: Maps an item to its row cells (same order as headers).
            service_name: Service reporting the table.
            alert_level: Level used for the color and label.
            mentions: Names of users to ping.

        Returns:
            DeliveryResult of the post.
        """
        if not items:
            return await self.info(text=EMPTY_TABLE_TEXT, service_name=service_name)

        level = AlertLevel(alert_level)
        rows = [list(row_mapper(item)) for item in items]
        return await self._deliver(
            level,
            [
                make_text_block(format_title(level, service_name, title)),
                make_table_block(headers, rows),
            ],
            title,
            mentions,
        )

"""Slack Web API channel implementation."""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any

import httpx

from slack_alerts.alerter.models import DeliveryResult, DeliveryStatus, SlackMember
from slack_alerts.exceptions import ConfigurationError, SlackApiError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from slack_alerts.alerter.models import Attachment, Block

logger = logging.getLogger(__name__)

SLACK_API_BASE = "https://slack.com/api"
NOT_IN_CHANNEL = "not_in_channel"

# Failures that are reported instead of raised by send()
DELIVERY_ERRORS = (SlackApiError, httpx.HTTPError, ValueError, TypeError)


class SlackChannel:
    """Slack Web API channel for sending alerts.

    Holds the bot token and target channel, builds the HTTP client lazily
    and rebuilds it whenever the credentials change. Posting is
    self-healing for one case: when the bot is not a member of the channel
    it joins and resends once.

    Not safe for concurrent credential updates; one instance is meant to
    be owned by a single host application.
    """

    def __init__(
        self,
        token: str | None = None,
        channel_id: str | None = None,
        *,
        base_url: str = SLACK_API_BASE,
        timeout: float = 10.0,
        dry_run: bool = False,
    ) -> None:
        """Initialize Slack channel.

        Args:
            token: Bot token (``xoxb-...``). May be empty until set later.
            channel_id: Target channel ID. May be empty until set later.
            base_url: Web API base URL.
            timeout: HTTP request timeout in seconds.
            dry_run: Log messages instead of posting them.
        """
        self.token = token or ""
        self.channel_id = channel_id or ""
        self.base_url = base_url
        self.timeout = timeout
        self.dry_run = dry_run
        self.name = "slack"

        self._client: httpx.AsyncClient | None = None
        self._retired_clients: list[httpx.AsyncClient] = []

    async def __aenter__(self) -> SlackChannel:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def enabled(self) -> bool:
        """Check if both credentials are set."""
        return bool(self.token and self.channel_id)

    def update_credentials(self, token: str | None = None, channel_id: str | None = None) -> None:
        """Merge new credentials into the current ones and rebuild the client.

        Args:
            token: New bot token, or None to keep the current one.
            channel_id: New channel ID, or None to keep the current one.

        Raises:
            ConfigurationError: If either credential is still empty afterwards.
        """
        merged_token = token or self.token
        merged_channel = channel_id or self.channel_id
        if not merged_token:
            raise ConfigurationError("Slack token is required")
        if not merged_channel:
            raise ConfigurationError("Slack channel ID is required")

        self.token = merged_token
        self.channel_id = merged_channel
        if self._client is not None:
            self._retired_clients.append(self._client)
            self._client = None
        logger.debug("Slack credentials updated for channel %s", self.channel_id)

    def _create_client(self) -> httpx.AsyncClient:
        """Create an HTTP client bound to the current token."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json; charset=utf-8",
            },
            timeout=self.timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the current client, creating it on first use."""
        while self._retired_clients:
            await self._retired_clients.pop().aclose()
        if self._client is None:
            self._client = self._create_client()
        return self._client

    async def aclose(self) -> None:
        """Close any open HTTP client."""
        while self._retired_clients:
            await self._retired_clients.pop().aclose()
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _call(
        self,
        method: str,
        payload: dict[str, Any] | None = None,
        *,
        http_method: str = "POST",
    ) -> dict[str, Any]:
        """Call a Web API method and return the decoded body.

        Raises:
            SlackApiError: If Slack answers with ``ok: false``.
            httpx.HTTPError: On transport failures or non-2xx responses.
        """
        client = await self._get_client()
        if http_method == "GET":
            response = await client.get(method, params=payload)
        else:
            response = await client.post(method, json=payload)
        response.raise_for_status()

        result: dict[str, Any] = response.json()
        if not result.get("ok"):
            raise SlackApiError(method, result.get("error", "unknown_error"), result)
        return result

    async def post_message(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Post a prepared message payload."""
        return await self._call("chat.postMessage", payload)

    async def join_channel(self) -> None:
        """Join the configured channel."""
        await self._call("conversations.join", {"channel": self.channel_id})
        logger.info("Joined Slack channel %s", self.channel_id)

    async def list_users(self) -> list[SlackMember]:
        """Fetch the workspace directory (first page only)."""
        result = await self._call("users.list", http_method="GET")
        return [SlackMember.from_api(member) for member in result.get("members", [])]

    def build_payload(
        self,
        attachments: Sequence[Attachment],
        text: str,
        blocks: Sequence[Block] | None = None,
    ) -> dict[str, Any]:
        """Build the ``chat.postMessage`` body."""
        payload: dict[str, Any] = {
            "channel": self.channel_id,
            "text": text,
            "attachments": [attachment.to_dict() for attachment in attachments],
        }
        if blocks:
            payload["blocks"] = list(blocks)
        return payload

    async def send(
        self,
        attachments: Sequence[Attachment],
        text: str,
        blocks: Sequence[Block] | None = None,
    ) -> DeliveryResult:
        """Send a message to the configured channel.

        Never raises: failures are logged with the full message and
        reported in the result.

        Args:
            attachments: Colored attachments of the message.
            text: Plain-text fallback shown in notifications.
            blocks: Optional top-level blocks shown outside the attachments.

        Returns:
            DeliveryResult describing the outcome.
        """
        payload = self.build_payload(attachments, text, blocks)

        if self.dry_run:
            logger.info("Dry run, not sending Slack message: %s", json.dumps(payload, default=str))
            return DeliveryResult(status=DeliveryStatus.SKIPPED)

        attempts = 1
        try:
            await self.post_message(payload)
            logger.debug("Slack alert delivered successfully")
            return DeliveryResult(status=DeliveryStatus.DELIVERED, attempts=attempts)
        except DELIVERY_ERRORS as e:
            failure: Exception = e

        if isinstance(failure, SlackApiError) and failure.error == NOT_IN_CHANNEL:
            logger.warning("Not a member of Slack channel %s, joining", self.channel_id)
            try:
                await self.join_channel()
                attempts += 1
                await self.post_message(payload)
                logger.info("Slack alert delivered after joining channel")
                return DeliveryResult(status=DeliveryStatus.RETRIED, attempts=attempts)
            except DELIVERY_ERRORS as e:
                failure = e

        logger.error(
            "Failed to send message to Slack: %s\nattachments=%s\nblocks=%s\ntext=%s",
            failure,
            json.dumps(payload["attachments"], indent=2, ensure_ascii=False, default=str),
            json.dumps(payload.get("blocks"), indent=2, ensure_ascii=False, default=str),
            json.dumps(text, ensure_ascii=False, default=str),
        )
        return DeliveryResult(status=DeliveryStatus.FAILED, attempts=attempts, error=str(failure))

"""Exception hierarchy for the Slack alerts library."""

from __future__ import annotations

from typing import Any


class SlackAlertsError(Exception):
    """Base exception for all library errors."""


class ConfigurationError(SlackAlertsError):
    """Raised when credentials are missing after an explicit update."""


class EmptyAttachmentError(SlackAlertsError):
    """Raised when an attachment is built without any blocks."""


class SlackApiError(SlackAlertsError):
    """Raised when the Slack Web API answers with ``ok: false``.

    Attributes:
        method: Web API method that was called (e.g. ``chat.postMessage``).
        error: Slack error code (e.g. ``not_in_channel``).
        response: Raw decoded response body.
    """

    def __init__(self, method: str, error: str, response: dict[str, Any] | None = None) -> None:
        super().__init__(f"{method} failed: {error}")
        self.method = method
        self.error = error
        self.response = response or {}

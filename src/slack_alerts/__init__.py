"""Slack alerts - Leveled Block Kit notifications for Python services."""

from slack_alerts.alerter import (
    AlertLevel,
    ContextItem,
    DeliveryResult,
    DeliveryStatus,
    SlackAlert,
    SlackChannel,
)
from slack_alerts.exceptions import (
    ConfigurationError,
    EmptyAttachmentError,
    SlackAlertsError,
    SlackApiError,
)

__version__ = "0.1.0"

__all__ = [
    "AlertLevel",
    "ConfigurationError",
    "ContextItem",
    "DeliveryResult",
    "DeliveryStatus",
    "EmptyAttachmentError",
    "SlackAlert",
    "SlackAlertsError",
    "SlackApiError",
    "SlackChannel",
    "__version__",
]

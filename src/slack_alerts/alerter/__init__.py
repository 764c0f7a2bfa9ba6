"""Alerting layer - Block Kit formatting and Slack delivery."""

from slack_alerts.alerter.alert import SlackAlert
from slack_alerts.alerter.channels.slack import SlackChannel
from slack_alerts.alerter.models import (
    AlertLevel,
    Attachment,
    ContextItem,
    DeliveryResult,
    DeliveryStatus,
    SlackMember,
)

__all__ = [
    "AlertLevel",
    "Attachment",
    "ContextItem",
    "DeliveryResult",
    "DeliveryStatus",
    "SlackAlert",
    "SlackChannel",
    "SlackMember",
]

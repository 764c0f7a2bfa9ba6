"""Alert channel implementations."""

from slack_alerts.alerter.channels.slack import SlackChannel

__all__ = [
    "SlackChannel",
]

"""Data models for the alerter module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

# Block Kit blocks are plain JSON objects
Block = dict[str, Any]

# Attachment side-bar colors
COLOR_INFO = "#3b76ff"
COLOR_WARNING = "#ffa500"
COLOR_ERROR = "#B22222"


class AlertLevel(str, Enum):
    """Severity of an alert, driving its color and label."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> str:
        """Attachment color for this level."""
        return _LEVEL_COLORS[self]

    @property
    def label(self) -> str:
        """Upper-case label shown in front of the alert text."""
        return self.value.upper()


_LEVEL_COLORS = {
    AlertLevel.INFO: COLOR_INFO,
    AlertLevel.WARNING: COLOR_WARNING,
    AlertLevel.ERROR: COLOR_ERROR,
}


@dataclass(frozen=True)
class ContextItem:
    """A key/value label shown alongside every alert of an instance.

    Attributes:
        key: Category of the label (e.g. ``userId``), selects the glyph.
        value: Displayed value. Items with an empty value are never stored.
    """

    key: str
    value: str


@dataclass(frozen=True)
class Attachment:
    """A colored, bordered group of blocks attached to a message."""

    color: str
    blocks: tuple[Block, ...]

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form expected by ``chat.postMessage``."""
        return {"color": self.color, "blocks": list(self.blocks)}


class DeliveryStatus(Enum):
    """Outcome of a delivery attempt."""

    DELIVERED = "delivered"
    RETRIED = "retried"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class DeliveryResult:
    """Result of sending one message to Slack.

    Attributes:
        status: Final outcome of the delivery.
        attempts: Number of ``chat.postMessage`` calls issued.
        error: Description of the terminal failure, if any.
        timestamp: When the delivery finished.
    """

    status: DeliveryStatus
    attempts: int = 0
    error: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def succeeded(self) -> bool:
        """Return True if the message reached the channel."""
        return self.status in (DeliveryStatus.DELIVERED, DeliveryStatus.RETRIED)


@dataclass(frozen=True)
class SlackMember:
    """A workspace member as returned by ``users.list``."""

    id: str | None
    name: str | None = None
    real_name: str | None = None
    display_name: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> SlackMember:
        """Build a member from a raw ``users.list`` record."""
        profile = data.get("profile") or {}
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            real_name=data.get("real_name"),
            display_name=profile.get("display_name"),
        )

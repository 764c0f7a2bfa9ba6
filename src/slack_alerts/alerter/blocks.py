"""Block Kit builders for alert messages.

Each builder is a pure function returning a block, or ``None`` when its
input is empty so callers can drop it with :func:`collect_blocks`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any

from slack_alerts.alerter.models import Attachment, Block, ContextItem
from slack_alerts.exceptions import EmptyAttachmentError

# Context glyphs by key; camelCase and snake_case spellings are both accepted
CONTEXT_GLYPHS = {
    "userId": "👤",
    "user_id": "👤",
    "userEmail": "📧",
    "user_email": "📧",
    "organizationId": "🏢",
    "organization_id": "🏢",
    "organizationName": "🏢",
    "organization_name": "🏢",
}
DEFAULT_CONTEXT_GLYPH = "🔍"


def fence(text: str) -> str:
    """Wrap text in a Markdown code fence."""
    return f"```\n{text}\n```"


def get_context_glyph(key: str) -> str:
    """Get the glyph prefixed to a context entry."""
    return CONTEXT_GLYPHS.get(key, DEFAULT_CONTEXT_GLYPH)


def make_text_block(text: str | None) -> Block | None:
    """Build a mrkdwn section block."""
    if not text:
        return None
    return {
        "type": "section",
        "text": {"type": "mrkdwn", "text": text},
    }


def make_code_block(text: str | None) -> Block | None:
    """Build a section block with the text in a code fence."""
    if not text:
        return None
    return make_text_block(fence(text))


def make_payload_block(payload: str | dict[str, Any] | None) -> Block | None:
    """Build a code-fenced section for a payload.

    Strings are fenced as-is; anything else is rendered as JSON with a
    two-space indent. Values JSON cannot encode fall back to ``str()``.
    """
    if payload is None or payload == "":
        return None
    if isinstance(payload, str):
        return make_code_block(payload)
    return make_code_block(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def make_context_block(items: Iterable[ContextItem]) -> Block | None:
    """Build a context strip with one glyph-prefixed entry per item."""
    elements = [
        {
            "type": "plain_text",
            "text": f"{get_context_glyph(item.key)} {item.value}",
            "emoji": True,
        }
        for item in items
        if item.value
    ]
    if not elements:
        return None
    return {"type": "context", "elements": elements}


def make_mentions_block(user_ids: Sequence[str]) -> Block | None:
    """Build a rich text block pinging each user."""
    if not user_ids:
        return None
    return {
        "type": "rich_text",
        "elements": [
            {
                "type": "rich_text_section",
                "elements": [{"type": "user", "user_id": user_id} for user_id in user_ids],
            }
        ],
    }


def make_table_cell(text: Any, *, bold: bool = False) -> Block:
    """Build a single rich text table cell; non-string values are rendered with ``str()``."""
    element: dict[str, Any] = {"type": "text", "text": str(text)}
    if bold:
        element["style"] = {"bold": True}
    return {
        "type": "rich_text",
        "elements": [{"type": "rich_text_section", "elements": [element]}],
    }


def make_table_block(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> Block:
    """Build a table block with a bold header row followed by the data rows."""
    header_row = [make_table_cell(header, bold=True) for header in headers]
    data_rows = [[make_table_cell(cell) for cell in row] for row in rows]
    return {"type": "table", "rows": [header_row, *data_rows]}


def collect_blocks(*candidates: Block | None) -> list[Block]:
    """Keep the blocks that were produced, in the given order."""
    return [block for block in candidates if block is not None]


def make_attachment(color: str, blocks: Sequence[Block]) -> Attachment:
    """Build an attachment.

    Raises:
        EmptyAttachmentError: If ``blocks`` is empty.
    """
    if not blocks:
        raise EmptyAttachmentError("Blocks are required to create an attachment")
    return Attachment(color=color, blocks=tuple(blocks))

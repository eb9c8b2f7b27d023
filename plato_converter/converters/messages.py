"""Conversion from the messages form to Plato text.

WHY: Chat transcripts come back from model APIs as message lists. To
show or edit them alongside the rest of a dialogue they have to become
Plato text. Role information has no place in text form, so only the
speaker name survives.

HOW: Each element is checked for string name/content (Message objects
pass directly, dicts are checked against MESSAGE_FIELDS_SCHEMA), then
rendered as one text-form turn.

RULES:
- Non-list input is logged as an error and yields ""
- Malformed elements are logged and skipped; the rest still convert
- name is stripped; content has 2+ newlines collapsed to "\\n\\t" and is
  stripped
- Output order equals input order
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import jsonschema

from plato_converter.converters.common import (
    MESSAGE_FIELDS_SCHEMA,
    collapse_paragraph_breaks,
    format_turn,
)
from plato_converter.core.ir import Message

logger = logging.getLogger(__name__)

_FIELDS_VALIDATOR = jsonschema.Draft7Validator(MESSAGE_FIELDS_SCHEMA)


def _message_fields(item: Any) -> Optional[Tuple[str, str]]:
    """Return (name, content) for a usable message, else None."""
    if isinstance(item, Message):
        return item.name, item.content
    if _FIELDS_VALIDATOR.is_valid(item):
        return item["name"], item["content"]
    return None


def messages_to_text(messages: Any) -> str:
    """Render a message list as Plato text.

    Args:
        messages: A list of Message objects or ``{"name", "content"}``
                  dicts. Extra keys such as ``role`` are ignored.

    Returns:
        "Speaker: utterance" blocks, each followed by a blank line.
    """
    if not isinstance(messages, list):
        logger.error(
            "Invalid input: messages must be a list, got %s",
            type(messages).__name__,
        )
        return ""

    parts: List[str] = []
    for item in messages:
        fields = _message_fields(item)
        if fields is None:
            logger.warning("Skipping malformed message: %r", item)
            continue

        name, content = fields
        utterance = collapse_paragraph_breaks(content).strip()
        parts.append(format_turn(name.strip(), utterance))
    return "".join(parts)

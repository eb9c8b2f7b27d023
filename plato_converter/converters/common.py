"""Helpers and JSON schemas shared by the document and messages converters.

WHY: Text form is produced from two directions (document → text and
messages → text) and consumed once (text → document). The turn line
format and the paragraph-break collapsing rule must be identical in all
three, so they live here.

RULES:
- A text-form turn is "{speaker}: {utterance}" followed by one blank line
- Two or more consecutive newlines inside an utterance always collapse
  to the sub-paragraph marker "\\n\\t"
- MESSAGE_LIST_SCHEMA describes the JSON messages form exactly
- MESSAGE_FIELDS_SCHEMA is the looser per-item check used when reading
  messages: only string name and content are required
"""

from __future__ import annotations

import re
from typing import Any, Dict

from plato_converter.config import SUB_PARAGRAPH_MARKER, TURN_SEPARATOR
from plato_converter.core.ir import Role

_PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")

MESSAGE_FIELDS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "content": {"type": "string"},
    },
    "required": ["name", "content"],
}

MESSAGE_LIST_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "role": {"enum": [role.value for role in Role]},
            "name": {"type": "string"},
            "content": {"type": "string"},
        },
        "required": ["role", "name", "content"],
        "additionalProperties": False,
    },
}


def collapse_paragraph_breaks(text: str) -> str:
    """Replace every run of 2+ newlines with the sub-paragraph marker."""
    return _PARAGRAPH_BREAK_RE.sub(SUB_PARAGRAPH_MARKER, text)


def format_turn(speaker: str, utterance: str) -> str:
    """Render one text-form turn, including its trailing blank line."""
    return "{}: {}{}".format(speaker, utterance, TURN_SEPARATOR)

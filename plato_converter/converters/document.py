"""Conversions to and from Plato HTML (the document form).

WHY: Plato HTML is what the transcript editor renders; Plato text is
what people and models read and write. The two must convert both ways
without drifting, and the document form is also the only source of the
role-tagged messages form.

HOW:
- document_to_text / document_to_messages walk the dialogue containers
  through core.extractor and serialize each Turn.
- text_to_document splits text into speaker blocks, escapes each
  utterance in a fixed order, and emits one container per block.

RULES:
- document_to_text is lenient: bad input → "", bad containers skipped;
  blank lines inside an utterance collapse to "\\n\\t" so they can never
  be read back as a turn boundary
- document_to_messages is strict: empty document → InvalidInput,
  missing assistant name → MissingConfiguration
- text_to_document: non-string → InvalidInput; a block without a
  "speaker:" prefix is dropped with a warning
- A blank line ends a turn only when the next line starts with a
  speaker label and a colon; otherwise it belongs to the utterance
- Escape order is fixed: & < > " ' then tab → &emsp; then newline → <br />
- No text → messages conversion exists; messages come from documents only
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

import jsonschema

from plato_converter.config import (
    DIALOGUE_CLASS,
    SPEAKER_CLASS,
    SPEAKER_LABEL_PATTERN,
    SYSTEM_SPEAKER,
)
from plato_converter.converters.common import (
    MESSAGE_LIST_SCHEMA,
    collapse_paragraph_breaks,
    format_turn,
)
from plato_converter.core.extractor import iter_turns
from plato_converter.core.ir import Message, Role
from plato_converter.errors import InvalidInput, MissingConfiguration

logger = logging.getLogger(__name__)

_BLOCK_BOUNDARY_RE = re.compile(r"\n\n(?={}:\s*)".format(SPEAKER_LABEL_PATTERN))
_SPEAKER_PREFIX_RE = re.compile(r"^({}):\s*".format(SPEAKER_LABEL_PATTERN))

# Ampersand first, or the entities produced by later rules would be escaped
# a second time.
_UTTERANCE_ESCAPES: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
    ("\t", "&emsp;"),
    ("\n", "<br />"),
)

_CONTAINER_TEMPLATE = (
    '<p class="' + DIALOGUE_CLASS + '"><span class="' + SPEAKER_CLASS + '">'
    "{speaker}</span> {utterance}</p>"
)


def document_to_text(document: str) -> str:
    """Serialize every turn of a Plato HTML document as Plato text.

    Args:
        document: Plato HTML. Non-string, empty, or whitespace-only
                  input produces an empty string.

    Returns:
        "Speaker: utterance" blocks, each followed by a blank line, in
        document order. Turns with neither speaker nor utterance are
        omitted.
    """
    if not isinstance(document, str) or not document.strip():
        return ""

    parts: List[str] = []
    for turn in iter_turns(document):
        if turn.speaker or turn.utterance:
            parts.append(format_turn(
                turn.speaker, collapse_paragraph_breaks(turn.utterance)
            ))
    return "".join(parts)


def assign_role(speaker: str, assistant_name: str) -> Role:
    """Map a speaker label to a chat role (case-insensitive)."""
    speaker_upper = speaker.upper()
    if speaker_upper == assistant_name.upper():
        return Role.assistant
    if speaker_upper == SYSTEM_SPEAKER:
        return Role.system
    return Role.user


def document_to_messages(document: str, assistant_name: str) -> List[Message]:
    """Convert a Plato HTML document into role-tagged messages.

    Args:
        document: Plato HTML; must be a non-empty string.
        assistant_name: Display name of the assistant. Speakers matching
                        it (ignoring case) get the assistant role.

    Returns:
        One Message per extracted turn, in document order.

    Raises:
        InvalidInput: document is not a string or is blank.
        MissingConfiguration: assistant_name is missing or empty.
    """
    if not isinstance(document, str) or not document.strip():
        raise InvalidInput("Invalid input: document must be a non-empty string")
    if not isinstance(assistant_name, str) or not assistant_name:
        raise MissingConfiguration(
            "An assistant name is required for role assignment."
        )

    messages = [
        Message(
            role=assign_role(turn.speaker, assistant_name),
            name=turn.speaker,
            content=turn.utterance,
        )
        for turn in iter_turns(document)
    ]

    jsonschema.validate(
        instance=[message.to_dict() for message in messages],
        schema=MESSAGE_LIST_SCHEMA,
    )
    return messages


def escape_utterance(utterance: str) -> str:
    """Escape a text-form utterance for embedding in Plato HTML."""
    for raw, escaped in _UTTERANCE_ESCAPES:
        utterance = utterance.replace(raw, escaped)
    return utterance


def split_text_blocks(text: str) -> List[str]:
    """Split Plato text into per-turn blocks.

    A blank line splits only when a "speaker:" line follows it, so blank
    lines inside an utterance stay in that utterance's block.
    """
    return _BLOCK_BOUNDARY_RE.split(text)


def text_to_document(text: str) -> str:
    """Convert Plato text into Plato HTML.

    Args:
        text: Plato text. Blank input produces an empty string.

    Returns:
        One dialogue container per speaker block, joined by newlines,
        without a trailing newline.

    Raises:
        InvalidInput: text is not a string.
    """
    if not isinstance(text, str):
        raise InvalidInput("Invalid input: text must be a string")

    trimmed = text.strip()
    if not trimmed:
        return ""

    containers: List[str] = []
    for raw_block in split_text_blocks(trimmed):
        block = raw_block.strip()
        if not block:
            continue

        match = _SPEAKER_PREFIX_RE.match(block)
        if match is None:
            logger.warning(
                "Skipping block that does not start with a speaker label: %r",
                block,
            )
            continue

        speaker = match.group(1)
        utterance = collapse_paragraph_breaks(block[match.end():]).strip()
        containers.append(_CONTAINER_TEMPLATE.format(
            speaker=speaker,
            utterance=escape_utterance(utterance),
        ))

    return "\n".join(containers)

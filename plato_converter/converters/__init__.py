"""Conversion registry: one lookup for every supported transcript conversion.

WHY: The CLI and HTTP API both need to find a conversion by name, know
which forms it reads and writes, and know whether it needs an assistant
name. A central dict keeps those facts in one place.

HOW: CONVERSIONS maps a key such as "document-to-text" to a Conversion
record holding the callable. run_conversion() looks the key up and calls
it, passing the assistant name only where it is needed.

RULES:
- Keys are kebab-case "{source}-to-{target}" identifiers, plus "sanitize"
- Forms: "document" (Plato HTML), "text" (Plato text), "messages"
  (message list), "llm" (raw model output)
- The graph is deliberately incomplete: there is no text-to-messages
  and no messages-to-document entry
- run_conversion() returns JSON-ready values (messages as dicts)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from plato_converter.converters.document import (
    document_to_messages,
    document_to_text,
    text_to_document,
)
from plato_converter.converters.messages import messages_to_text
from plato_converter.errors import InvalidInput
from plato_converter.sanitizer import sanitize_llm_text


@dataclass(frozen=True)
class Conversion:
    """A registered conversion between two transcript forms."""

    key: str
    name: str
    source: str
    target: str
    convert: Callable[..., Any]
    requires_assistant_name: bool = False


CONVERSIONS: Dict[str, Conversion] = {
    "document-to-text": Conversion(
        key="document-to-text",
        name="Plato HTML to Plato text",
        source="document",
        target="text",
        convert=document_to_text,
    ),
    "document-to-messages": Conversion(
        key="document-to-messages",
        name="Plato HTML to chat messages",
        source="document",
        target="messages",
        convert=document_to_messages,
        requires_assistant_name=True,
    ),
    "text-to-document": Conversion(
        key="text-to-document",
        name="Plato text to Plato HTML",
        source="text",
        target="document",
        convert=text_to_document,
    ),
    "messages-to-text": Conversion(
        key="messages-to-text",
        name="Chat messages to Plato text",
        source="messages",
        target="text",
        convert=messages_to_text,
    ),
    "sanitize": Conversion(
        key="sanitize",
        name="Model output to plain paragraph text",
        source="llm",
        target="text",
        convert=sanitize_llm_text,
    ),
}


def run_conversion(key: str, value: Any, assistant_name: Optional[str] = None) -> Any:
    """Run the conversion registered under ``key`` on ``value``.

    Raises:
        InvalidInput: the key is not registered, or the conversion itself
                      rejects the input.
        MissingConfiguration: the conversion needs an assistant name and
                              none was given.
    """
    conversion = CONVERSIONS.get(key)
    if conversion is None:
        raise InvalidInput(
            "Unknown conversion '{}'. Available: {}".format(
                key, ", ".join(sorted(CONVERSIONS))
            )
        )

    if conversion.requires_assistant_name:
        result = conversion.convert(value, assistant_name)
    else:
        result = conversion.convert(value)

    if conversion.target == "messages":
        return [message.to_dict() for message in result]
    return result


__all__ = [
    "CONVERSIONS",
    "Conversion",
    "document_to_messages",
    "document_to_text",
    "messages_to_text",
    "run_conversion",
    "sanitize_llm_text",
    "text_to_document",
]

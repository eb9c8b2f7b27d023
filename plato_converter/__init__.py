"""Plato Transcript Converter: dialogue transcript format hub.

WHY: A dialogue lives in three shapes. The editor renders Plato HTML,
people and models read and write Plato text ("Speaker: utterance"
blocks), and chat APIs take role-tagged message lists. Model replies
also arrive as Markdown that has to be flattened before it can become a
turn. This package converts between those shapes without losing turn
boundaries or paragraph structure.

HOW: core/ extracts turns from Plato HTML, converters/ implements each
conversion as a pure function and registers it in CONVERSIONS,
sanitizer.py flattens model Markdown. The CLI and the FastAPI server are
thin wrappers over the same functions.

RULES:
- Every conversion takes a complete input and returns a complete output
- Conversions are pure: no I/O, no shared state, inputs never mutated
- "\\n\\t" marks a paragraph break inside one turn; a blank line
  followed by "Speaker:" ends a turn
"""

from plato_converter.converters import (
    CONVERSIONS,
    document_to_messages,
    document_to_text,
    messages_to_text,
    run_conversion,
    sanitize_llm_text,
    text_to_document,
)
from plato_converter.core.ir import Message, Role, Turn
from plato_converter.errors import ConversionError, InvalidInput, MissingConfiguration

__version__ = "0.1.0"

__all__ = [
    "CONVERSIONS",
    "ConversionError",
    "InvalidInput",
    "Message",
    "MissingConfiguration",
    "Role",
    "Turn",
    "document_to_messages",
    "document_to_text",
    "messages_to_text",
    "run_conversion",
    "sanitize_llm_text",
    "text_to_document",
]

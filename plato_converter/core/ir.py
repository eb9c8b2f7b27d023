"""Dataclasses shared by every transcript conversion.

WHY: The document, text, and messages forms are all strings or JSON on
the outside, but the converters pass structured values between them.
Turn is the transient speaker/utterance pair read out of a document;
Message is the role-tagged unit of the messages form.

HOW: Plain dataclasses plus a str-valued Role enum. Message.to_dict()
produces the JSON shape of the messages form.

RULES:
- utterance / content use the same convention: "\\n" is a hard line
  break, "\\n\\t" is a sub-paragraph break inside one turn
- Role values are exactly "user", "assistant", "system"
- Message order always mirrors document order
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Role(str, Enum):
    """Chat role assigned to a speaker."""

    user = "user"
    assistant = "assistant"
    system = "system"


@dataclass
class Turn:
    """One speaker/utterance pair extracted from a dialogue container."""

    speaker: str
    utterance: str


@dataclass
class Message:
    """A role-tagged message in the structured messages form.

    RULES:
    - name is the speaker label as it appeared in the transcript
    - content follows the utterance newline/tab convention
    """

    role: Role
    name: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON form ``{"role", "name", "content"}``."""
        return {
            "role": self.role.value,
            "name": self.name,
            "content": self.content,
        }

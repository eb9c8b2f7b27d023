"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: One request model per conversion input and one response model per
output form. All fields carry descriptions for the /docs UI.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Lenient inputs (messages, sanitizer text) are typed Any so that a
  wrong JSON type reaches the converter and yields an empty result
  instead of a 422 validation error
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from plato_converter.core.ir import Role


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class DocumentRequest(BaseModel):
    """A Plato HTML document to convert to text."""

    document: str = Field(description="Plato HTML with <p class=\"dialogue\"> turns.")


class DocumentMessagesRequest(BaseModel):
    """A Plato HTML document to convert to chat messages."""

    document: str = Field(description="Plato HTML with <p class=\"dialogue\"> turns.")
    assistant_name: Optional[str] = Field(
        default=None,
        description="Assistant speaker name. Defaults to PLATO_ASSISTANT_NAME.",
    )


class TextRequest(BaseModel):
    """Plato text to convert to HTML."""

    text: str = Field(description="Plato text: 'Speaker: utterance' blocks.")


class MessagesRequest(BaseModel):
    """Chat messages to convert to Plato text."""

    messages: Any = Field(
        description="List of {name, content} objects. Malformed items are skipped.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "messages": [
                    {"role": "system", "name": "INSTRUCTIONS", "content": "Be concise."},
                    {"role": "user", "name": "Alice", "content": "Hello there"},
                ]
            }
        ]
    }}


class SanitizeRequest(BaseModel):
    """Raw model output to flatten into plain paragraph text."""

    text: Any = Field(description="Model reply, usually Markdown.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class MessageModel(BaseModel):
    """One role-tagged chat message."""

    role: Role = Field(description="Chat role of the speaker.")
    name: str = Field(description="Speaker label as written in the transcript.")
    content: str = Field(description="Utterance; '\\n\\t' marks a sub-paragraph break.")


class TextResponse(BaseModel):
    """Plato text or sanitized plain text."""

    text: str = Field(description="Converted text.")


class DocumentResponse(BaseModel):
    """Plato HTML."""

    document: str = Field(description="Converted Plato HTML.")


class MessagesResponse(BaseModel):
    """Ordered chat messages."""

    messages: List[MessageModel] = Field(description="Messages in document order.")


class ConversionInfo(BaseModel):
    """Description of a registered conversion."""

    key: str = Field(description="Conversion identifier.")
    name: str = Field(description="Human-readable conversion name.")
    source: str = Field(description="Input form.")
    target: str = Field(description="Output form.")
    requires_assistant_name: bool = Field(
        description="Whether an assistant name is needed.",
    )


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})

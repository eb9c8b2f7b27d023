"""FastAPI application exposing the transcript conversions over HTTP.

WHY: The editor front end, browser extensions, and automation tools
(n8n, curl, model orchestration scripts) need to convert transcripts
without embedding Python. FastAPI gives request validation and OpenAPI
documentation for free.

HOW: One POST endpoint per registered conversion plus /sanitize, a
listing of the registry, and a health check. Each handler calls the
pure conversion function and maps ConversionError subclasses to HTTP
errors.

RULES:
- InvalidInput → 400, MissingConfiguration → 422, both as ErrorResponse
- assistant_name falls back to PLATO_ASSISTANT_NAME when omitted
- Lenient conversions (messages-to-text, sanitize) never fail on a wrong
  input type; they answer 200 with an empty text
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException

from plato_converter import __version__
from plato_converter.config import API_HOST, API_PORT, DEFAULT_ASSISTANT_NAME, LOG_LEVEL
from plato_converter.converters import CONVERSIONS
from plato_converter.converters.document import (
    document_to_messages,
    document_to_text,
    text_to_document,
)
from plato_converter.converters.messages import messages_to_text
from plato_converter.errors import ConversionError, InvalidInput, MissingConfiguration
from plato_converter.sanitizer import sanitize_llm_text
from plato_converter.server.models import (
    ConversionInfo,
    DocumentMessagesRequest,
    DocumentRequest,
    DocumentResponse,
    ErrorResponse,
    HealthResponse,
    MessageModel,
    MessagesRequest,
    MessagesResponse,
    SanitizeRequest,
    TextRequest,
    TextResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Plato Transcript Converter API",
    description=(
        "Convert dialogue transcripts between Plato HTML, Plato text and "
        "role-tagged chat messages, and flatten Markdown model output into "
        "plain paragraph text."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    422: {"model": ErrorResponse, "description": "Missing configuration or malformed request"},
}


def _to_http_error(exc: ConversionError) -> HTTPException:
    """Map a conversion error to the matching HTTP status."""
    if isinstance(exc, MissingConfiguration):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints: Conversions
# ---------------------------------------------------------------------------


@app.post(
    "/conversions/document-to-text",
    response_model=TextResponse,
    tags=["conversions"],
    summary="Convert Plato HTML to Plato text",
    description=(
        "Serialize every dialogue turn as a 'Speaker: utterance' block. "
        "Containers without exactly one speaker span are skipped."
    ),
)
async def convert_document_to_text(request: DocumentRequest) -> TextResponse:
    return TextResponse(text=document_to_text(request.document))


@app.post(
    "/conversions/document-to-messages",
    response_model=MessagesResponse,
    tags=["conversions"],
    summary="Convert Plato HTML to chat messages",
    description=(
        "Assign each turn a role: 'assistant' when the speaker matches the "
        "assistant name, 'system' for INSTRUCTIONS, 'user' otherwise."
    ),
    responses=_ERROR_RESPONSES,
)
async def convert_document_to_messages(request: DocumentMessagesRequest) -> MessagesResponse:
    assistant_name = request.assistant_name or DEFAULT_ASSISTANT_NAME
    try:
        messages = document_to_messages(request.document, assistant_name)
    except ConversionError as exc:
        raise _to_http_error(exc)
    return MessagesResponse(messages=[
        MessageModel(role=m.role, name=m.name, content=m.content) for m in messages
    ])


@app.post(
    "/conversions/text-to-document",
    response_model=DocumentResponse,
    tags=["conversions"],
    summary="Convert Plato text to Plato HTML",
    description=(
        "Split the text into speaker blocks and render one dialogue "
        "container per block. Blocks without a speaker label are dropped."
    ),
    responses=_ERROR_RESPONSES,
)
async def convert_text_to_document(request: TextRequest) -> DocumentResponse:
    try:
        document = text_to_document(request.text)
    except InvalidInput as exc:
        raise _to_http_error(exc)
    return DocumentResponse(document=document)


@app.post(
    "/conversions/messages-to-text",
    response_model=TextResponse,
    tags=["conversions"],
    summary="Convert chat messages to Plato text",
    description=(
        "Render each {name, content} message as a text block. Roles are "
        "dropped. Malformed messages are skipped; non-list input yields ''."
    ),
)
async def convert_messages_to_text(request: MessagesRequest) -> TextResponse:
    return TextResponse(text=messages_to_text(request.messages))


@app.post(
    "/sanitize",
    response_model=TextResponse,
    tags=["conversions"],
    summary="Flatten Markdown model output",
    description=(
        "Remove Markdown and HTML markup from model output and mark "
        "paragraph breaks with '\\n\\t'. Non-string input yields ''."
    ),
)
async def sanitize(request: SanitizeRequest) -> TextResponse:
    return TextResponse(text=sanitize_llm_text(request.text))


@app.get(
    "/conversions",
    response_model=List[ConversionInfo],
    tags=["conversions"],
    summary="List available conversions",
)
async def list_conversions() -> List[ConversionInfo]:
    return [
        ConversionInfo(
            key=conversion.key,
            name=conversion.name,
            source=conversion.source,
            target=conversion.target,
            requires_assistant_name=conversion.requires_assistant_name,
        )
        for _, conversion in sorted(CONVERSIONS.items())
    ]


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the plato-api console script."""
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Plato converter API on %s:%d", API_HOST, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT)

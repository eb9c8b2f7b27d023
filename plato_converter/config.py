"""Configuration constants, transcript format markers, and .env loading.

WHY: The converters, CLI, and HTTP API share a handful of format markers
(speaker pattern, CSS classes, sub-paragraph marker) and a few deployment
settings (default assistant name, parser backend, API host/port). Keeping
them here as plain module-level data means no marker is duplicated inside
parsing logic.

HOW: python-dotenv loads the .env file on import. Format markers are
fixed constants. Deployment settings read os.environ with defaults.

RULES:
- Format markers are part of the document/text wire formats; never
  override them from the environment
- Deployment settings can all be overridden via environment variables
- PLATO_ASSISTANT_NAME defaults to empty; callers that need it must
  fail with MissingConfiguration rather than guess a name
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Transcript format markers
# ---------------------------------------------------------------------------

SPEAKER_LABEL_PATTERN = r"[A-Za-z0-9_-]+"
"""A speaker label: letters, digits, underscore, hyphen; no whitespace."""

SUB_PARAGRAPH_MARKER = "\n\t"
"""Secondary paragraph break inside one utterance (not a turn separator)."""

TURN_SEPARATOR = "\n\n"

SYSTEM_SPEAKER = "INSTRUCTIONS"
"""Speaker label that always maps to the system role (case-insensitive)."""

DIALOGUE_CLASS = "dialogue"
SPEAKER_CLASS = "speaker"

# ---------------------------------------------------------------------------
# Deployment settings
# ---------------------------------------------------------------------------

DEFAULT_ASSISTANT_NAME = os.getenv("PLATO_ASSISTANT_NAME", "").strip()
HTML_PARSER = os.getenv("PLATO_HTML_PARSER", "lxml")
API_HOST = os.getenv("PLATO_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("PLATO_API_PORT", "8000"))
LOG_LEVEL = os.getenv("PLATO_LOG_LEVEL", "WARNING").upper()

"""Shared test fixtures for the plato_converter test suite.

WHY: Several test modules need the same transcript in its three forms.
Centralizing them here keeps the document, text, and messages versions
of the sample in sync.

HOW: Module-level constants hold the hand-verified strings; fixtures
hand out fresh copies.

RULES:
- RICH_TEXT and RICH_DOCUMENT are exact inverses of each other
- RICH_TEXT exercises escaping, hard line breaks, and a blank line that
  stays inside an utterance
- The assistant speaker in every sample is "BOT"
"""

from typing import Any, Dict, List

import pytest


SIMPLE_TEXT = "Alice: Hello there\n\nBOT: Hi! Good to meet you.\n\n"

SIMPLE_DOCUMENT = (
    '<p class="dialogue"><span class="speaker">Alice</span> Hello there</p>\n'
    '<p class="dialogue"><span class="speaker">BOT</span> Hi! Good to meet you.</p>'
)

RICH_TEXT = (
    "INSTRUCTIONS: Be concise & polite.\n\n"
    "Alice: First line\nsecond line\n\tStill Alice, new paragraph.\n\n"
    "BOT: Use <b> \"quotes\" and 'apostrophes'.\n\n"
)

RICH_DOCUMENT = (
    '<p class="dialogue"><span class="speaker">INSTRUCTIONS</span> '
    "Be concise &amp; polite.</p>\n"
    '<p class="dialogue"><span class="speaker">Alice</span> '
    "First line<br />second line<br />&emsp;Still Alice, new paragraph.</p>\n"
    '<p class="dialogue"><span class="speaker">BOT</span> '
    "Use &lt;b&gt; &quot;quotes&quot; and &#039;apostrophes&#039;.</p>"
)

RICH_MESSAGES: List[Dict[str, Any]] = [
    {"role": "system", "name": "INSTRUCTIONS", "content": "Be concise & polite."},
    {
        "role": "user",
        "name": "Alice",
        "content": "First line\nsecond line\n\tStill Alice, new paragraph.",
    },
    {"role": "assistant", "name": "BOT", "content": "Use <b> \"quotes\" and 'apostrophes'."},
]


@pytest.fixture
def simple_text():
    return SIMPLE_TEXT


@pytest.fixture
def simple_document():
    return SIMPLE_DOCUMENT


@pytest.fixture
def rich_text():
    return RICH_TEXT


@pytest.fixture
def rich_document():
    return RICH_DOCUMENT


@pytest.fixture
def rich_messages():
    return [dict(message) for message in RICH_MESSAGES]

"""Turn extraction from Plato HTML dialogue containers.

WHY: Both document conversions (to text and to messages) walk the same
``<p class="dialogue">`` containers and need the same speaker/utterance
split. Keeping the extraction in one place guarantees the two outputs
never disagree about what a turn says.

HOW: The document is parsed with BeautifulSoup. For each container the
speaker span's text is the speaker. The utterance is taken from the
container's serialized inner markup *after* the span's own markup, so
inline markup in the remainder survives until the structural breaks
have been decoded. Breaks are decoded in two ordered passes (em-space
breaks first, bare breaks second), then the parser turns what is left
into plain text.

RULES:
- A container with zero or several speaker spans yields no turn (None)
- One leading space after the speaker span is dropped
- <br> + optional whitespace + em-space → "\\n\\t" (sub-paragraph)
- Remaining <br> → "\\n" (hard line break)
- Entities are resolved and residual tags stripped by the parser
- Speaker and utterance are both stripped
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from plato_converter.config import (
    DIALOGUE_CLASS,
    HTML_PARSER,
    SPEAKER_CLASS,
    SUB_PARAGRAPH_MARKER,
)
from plato_converter.core.ir import Turn

logger = logging.getLogger(__name__)

# The parser resolves &emsp; to U+2003 before re-serializing, so all three
# spellings of the em-space have to be recognised.
_SUB_PARAGRAPH_BREAK_RE = re.compile(
    r"<br\s*/?>\s*(?:&emsp;|&#8195;|&#x2003;|\u2003)",
    re.IGNORECASE,
)
_LINE_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)


def parse_document(document: str) -> BeautifulSoup:
    """Parse a Plato HTML string with the configured tree builder."""
    return BeautifulSoup(document, HTML_PARSER)


def dialogue_containers(soup: BeautifulSoup) -> List[Tag]:
    """Return every dialogue container in document order."""
    return soup.select("p.{}".format(DIALOGUE_CLASS))


def _decode_utterance_markup(utterance_html: str) -> str:
    """Turn utterance markup into plain text with the newline/tab convention.

    The two substitutions must run in this order: the bare-break pass
    would otherwise consume the break in front of the em-space.
    """
    processed = _SUB_PARAGRAPH_BREAK_RE.sub(SUB_PARAGRAPH_MARKER, utterance_html)
    processed = _LINE_BREAK_RE.sub("\n", processed)

    # Wrapped so that short fragments are never mistaken for a filename/URL.
    decoder = BeautifulSoup("<div>{}</div>".format(processed), HTML_PARSER)
    return decoder.get_text().strip()


def extract_turn(paragraph: Tag) -> Optional[Turn]:
    """Split one dialogue container into a Turn.

    Args:
        paragraph: A ``<p class="dialogue">`` element from a parsed document.

    Returns:
        The extracted Turn, or None when the container does not hold
        exactly one speaker span.
    """
    speaker_spans = paragraph.select("span.{}".format(SPEAKER_CLASS))
    if len(speaker_spans) != 1:
        logger.debug(
            "Skipping dialogue container with %d speaker spans", len(speaker_spans)
        )
        return None

    speaker_span = speaker_spans[0]
    speaker = speaker_span.get_text().strip()

    inner_html = paragraph.decode_contents()
    span_html = speaker_span.decode()
    span_start = inner_html.find(span_html)
    if span_start < 0:
        logger.debug("Skipping dialogue container: speaker span markup not found")
        return None

    utterance_html = inner_html[span_start + len(span_html):]
    if utterance_html.startswith(" "):
        utterance_html = utterance_html[1:]

    return Turn(speaker=speaker, utterance=_decode_utterance_markup(utterance_html))


def iter_turns(document: str) -> Iterator[Turn]:
    """Yield every extractable turn of a Plato HTML document, in order.

    Containers that fail extraction are skipped silently.
    """
    soup = parse_document(document)
    for paragraph in dialogue_containers(soup):
        turn = extract_turn(paragraph)
        if turn is not None:
            yield turn

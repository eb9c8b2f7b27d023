"""Markdown sanitizer for free-form language model output.

WHY: Models answer in Markdown (headings, bold, lists, code fences,
links) but a Plato utterance is plain paragraph text. Before a model
reply can become a turn, all presentational markup has to go and its
paragraph structure has to be rewritten into the "\\n\\t" sub-paragraph
convention used by Plato text.

HOW: An ordered tuple of named rewrite steps, SANITIZER_STEPS. Each step
is a pure ``str -> str`` function; sanitize_llm_text() runs them in
order. The order is load-bearing:
  - newlines are normalized first so a blank line is a reliable
    paragraph signal for every later step
  - fences are removed before tags and inline code, so fenced content
    never leaks into prose
  - bold is unwrapped before italic, so "**" is never read as two "*"
  - the paragraph signal becomes "\\n\\t" only after lines are trimmed
    and tabs are gone

RULES:
- Non-string input is logged and yields ""
- Code blocks, comments, links, and images are deleted with their content
- Headings, quotes, list items, bold, italic, inline code keep their text
- Line-anchored rules match horizontal whitespace only and never eat the
  blank line that carries the paragraph signal
- Passes repeat until the text stops changing, so the result is a fixed
  point: sanitizing it again returns it unchanged
- Output paragraphs are separated by "\\n\\t", lines inside a paragraph
  by "\\n"; no leading/trailing whitespace
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Tuple

from plato_converter.config import SUB_PARAGRAPH_MARKER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteStep:
    """One named stage of the sanitizer pipeline."""

    name: str
    rewrite: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.rewrite(text)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_BACKTICK_FENCE_RE = re.compile(r"`{3,}[^\n]*\n[\s\S]*?\n`{3,}")
_TILDE_FENCE_RE = re.compile(r"~{3,}[^\n]*\n[\s\S]*?\n~{3,}")
_HTML_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_HTML_TAG_RE = re.compile(r"<[^>]+>")
_HORIZONTAL_RULE_RE = re.compile(r"^[ \t]*(?:-|\*|_){3,}[ \t]*$", re.MULTILINE)
_BLOCKQUOTE_RE = re.compile(r"^(?:[ \t]*>[ \t]*)+", re.MULTILINE)
_ATX_HEADING_RE = re.compile(r"^[ \t]*#{1,6}[ \t]*", re.MULTILINE)
_SETEXT_HEADING_RE = re.compile(r"^([^\n]+)\n[ \t]*(?:=|-){2,}[ \t]*$", re.MULTILINE)
_LINK_OR_IMAGE_RE = re.compile(r"!?\[.*?\]\(.*?\)")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_BOLD_STAR_RE = re.compile(r"\*\*([^*]+?)\*\*")
_BOLD_UNDERSCORE_RE = re.compile(r"__([^_]+?)__")
_ITALIC_STAR_RE = re.compile(r"\*([^*]+?)\*")
_ITALIC_UNDERSCORE_RE = re.compile(r"_([^_]+?)_")
_LIST_MARKER_RE = re.compile(r"^(?:[ \t]*(?:[-*+]|\d+\.)[ \t]+)+", re.MULTILINE)
_MULTIPLE_SPACES_RE = re.compile(r" {2,}")
_PARAGRAPH_SIGNAL_RE = re.compile(r"\n{2,}")
_LEADING_BREAKS_RE = re.compile(r"^[\n\t]+")
_REPEATED_TABS_RE = re.compile(r"\n\t{2,}")
_REPEATED_MARKERS_RE = re.compile(r"(?:\n\t){2,}")


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def normalize_newlines(text: str) -> str:
    """Use "\\n" only, read "\\n\\t" as a paragraph break, cap blank runs at one."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace(SUB_PARAGRAPH_MARKER, "\n\n")
    return _EXCESS_NEWLINES_RE.sub("\n\n", text)


def remove_fenced_code(text: str) -> str:
    text = _BACKTICK_FENCE_RE.sub("", text)
    return _TILDE_FENCE_RE.sub("", text)


def remove_html_comments(text: str) -> str:
    return _HTML_COMMENT_RE.sub("", text)


def remove_html_tags(text: str) -> str:
    return _HTML_TAG_RE.sub("", text)


def remove_horizontal_rules(text: str) -> str:
    return _HORIZONTAL_RULE_RE.sub("", text)


def remove_blockquote_markers(text: str) -> str:
    return _BLOCKQUOTE_RE.sub("", text)


def remove_atx_headings(text: str) -> str:
    return _ATX_HEADING_RE.sub("", text)


def remove_setext_underlines(text: str) -> str:
    return _SETEXT_HEADING_RE.sub(r"\1", text)


def remove_links_and_images(text: str) -> str:
    """Delete ``[text](url)`` and ``![alt](url)`` entirely, label included."""
    return _LINK_OR_IMAGE_RE.sub("", text)


def unwrap_inline_code(text: str) -> str:
    return _INLINE_CODE_RE.sub(r"\1", text)


def unwrap_bold(text: str) -> str:
    text = _BOLD_STAR_RE.sub(r"\1", text)
    return _BOLD_UNDERSCORE_RE.sub(r"\1", text)


def unwrap_italic(text: str) -> str:
    text = _ITALIC_STAR_RE.sub(r"\1", text)
    return _ITALIC_UNDERSCORE_RE.sub(r"\1", text)


def remove_list_markers(text: str) -> str:
    return _LIST_MARKER_RE.sub("", text)


def strip_lines(text: str) -> str:
    return "\n".join(line.strip() for line in text.split("\n"))


def collapse_spaces(text: str) -> str:
    text = text.replace("\t", " ")
    return _MULTIPLE_SPACES_RE.sub(" ", text)


def mark_paragraphs(text: str) -> str:
    """Turn the blank-line paragraph signal into the sub-paragraph marker."""
    return _PARAGRAPH_SIGNAL_RE.sub(SUB_PARAGRAPH_MARKER, text)


def final_trim(text: str) -> str:
    text = text.strip()
    text = _LEADING_BREAKS_RE.sub("", text)
    text = _REPEATED_TABS_RE.sub(SUB_PARAGRAPH_MARKER, text)
    return _REPEATED_MARKERS_RE.sub(SUB_PARAGRAPH_MARKER, text)


SANITIZER_STEPS: Tuple[RewriteStep, ...] = (
    RewriteStep("normalize_newlines", normalize_newlines),
    RewriteStep("remove_fenced_code", remove_fenced_code),
    RewriteStep("remove_html_comments", remove_html_comments),
    RewriteStep("remove_html_tags", remove_html_tags),
    RewriteStep("remove_horizontal_rules", remove_horizontal_rules),
    RewriteStep("remove_blockquote_markers", remove_blockquote_markers),
    RewriteStep("remove_atx_headings", remove_atx_headings),
    RewriteStep("remove_setext_underlines", remove_setext_underlines),
    RewriteStep("remove_links_and_images", remove_links_and_images),
    RewriteStep("unwrap_inline_code", unwrap_inline_code),
    RewriteStep("unwrap_bold", unwrap_bold),
    RewriteStep("unwrap_italic", unwrap_italic),
    RewriteStep("remove_list_markers", remove_list_markers),
    RewriteStep("strip_lines", strip_lines),
    RewriteStep("collapse_spaces", collapse_spaces),
    RewriteStep("mark_paragraphs", mark_paragraphs),
    RewriteStep("final_trim", final_trim),
)


def apply_steps(text: str, steps: Iterable[RewriteStep]) -> str:
    """Run ``text`` through ``steps`` in the given order."""
    for step in steps:
        text = step(text)
    return text


def sanitize_llm_text(llm_response: Any) -> str:
    """Strip Markdown from model output and normalize its paragraphs.

    Args:
        llm_response: Raw model reply. Anything other than a string is
                      logged and produces an empty string.

    Returns:
        Plain text using the Plato text paragraph convention.
    """
    if not isinstance(llm_response, str):
        logger.warning(
            "sanitize_llm_text received non-string input: %r", llm_response
        )
        return ""

    cleaned = apply_steps(llm_response, SANITIZER_STEPS)
    # Later steps can expose markup for earlier ones ("`#` x" -> "# x").
    # On already-cleaned text a pass that changes anything only deletes.
    while True:
        again = apply_steps(cleaned, SANITIZER_STEPS)
        if again == cleaned:
            break
        cleaned = again
    logger.debug(
        "Sanitized model output: %d chars in, %d chars out",
        len(llm_response),
        len(cleaned),
    )
    return cleaned

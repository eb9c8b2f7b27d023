"""Unit tests for messages → Plato text.

WHY: Message lists come from model APIs and are often partly malformed.
The conversion must keep every usable message, drop the rest with a
diagnostic, and never raise.

HOW: Inputs are literal lists of dicts / Message objects; caplog checks
the diagnostics.
"""

import logging

import pytest

from plato_converter.converters.messages import messages_to_text
from plato_converter.core.ir import Message, Role


class TestMessagesToText:
    """Well-formed message lists."""

    def test_instructions_paragraphs_collapse(self):
        messages = [
            {"role": "system", "name": "INSTRUCTIONS", "content": "Be concise.\n\n\nStay on topic."}
        ]
        assert messages_to_text(messages) == "INSTRUCTIONS: Be concise.\n\tStay on topic.\n\n"

    def test_roles_are_dropped(self, rich_messages, rich_text):
        assert messages_to_text(rich_messages) == rich_text

    def test_preserves_order(self):
        messages = [
            {"name": "B", "content": "second"},
            {"name": "A", "content": "first"},
        ]
        assert messages_to_text(messages) == "B: second\n\nA: first\n\n"

    def test_name_and_content_stripped(self):
        messages = [{"name": "  Alice ", "content": "\n\n  Hi  \n"}]
        assert messages_to_text(messages) == "Alice: Hi\n\n"

    def test_single_newline_kept(self):
        messages = [{"name": "A", "content": "line one\nline two"}]
        assert messages_to_text(messages) == "A: line one\nline two\n\n"

    def test_accepts_message_objects(self):
        messages = [Message(role=Role.assistant, name="BOT", content="Sure.")]
        assert messages_to_text(messages) == "BOT: Sure.\n\n"

    def test_empty_list(self):
        assert messages_to_text([]) == ""


class TestMalformedMessages:
    """Lenient handling of bad elements and bad input types."""

    def test_malformed_elements_skipped(self, caplog):
        messages = [
            {"name": "A", "content": "kept"},
            {"name": 1, "content": "bad name"},
            None,
            "just a string",
            {"content": "no name"},
            {"name": "B"},
            {"name": "C", "content": "also kept"},
        ]
        with caplog.at_level(logging.WARNING):
            text = messages_to_text(messages)
        assert text == "A: kept\n\nC: also kept\n\n"
        skipped = [r for r in caplog.records if "Skipping malformed message" in r.getMessage()]
        assert len(skipped) == 5

    @pytest.mark.parametrize(
        "messages",
        ["A: hi", None, 3, {"name": "A", "content": "hi"}, ({"name": "A", "content": "hi"},)],
    )
    def test_non_list_input_yields_empty(self, messages, caplog):
        with caplog.at_level(logging.ERROR):
            assert messages_to_text(messages) == ""
        assert "must be a list" in caplog.text

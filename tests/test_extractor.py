"""Unit tests for turn extraction from Plato HTML containers.

WHY: Every document conversion depends on extract_turn(). A wrong split
between speaker and utterance, or a mis-decoded break, would corrupt
both the text and the messages output.

HOW: Each test parses a small document with parse_document(), picks the
dialogue containers, and checks the extracted Turn.

RULES:
- Containers need exactly one speaker span
- <br> + em-space decodes to "\\n\\t", a bare <br> to "\\n"
- Inline markup after the speaker is stripped to its text
"""

import logging

from plato_converter.core.extractor import (
    dialogue_containers,
    extract_turn,
    iter_turns,
    parse_document,
)
from plato_converter.core.ir import Turn


def _first_turn(document):
    containers = dialogue_containers(parse_document(document))
    assert len(containers) == 1
    return extract_turn(containers[0])


class TestExtractTurn:
    """extract_turn() splits one container into speaker and utterance."""

    def test_plain_utterance(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> Hello there</p>'
        )
        assert turn == Turn(speaker="Alice", utterance="Hello there")

    def test_speaker_text_is_stripped(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">  Alice </span> Hi</p>'
        )
        assert turn.speaker == "Alice"

    def test_sub_paragraph_break_decoded(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> '
            "One<br />&emsp;Two</p>"
        )
        assert turn.utterance == "One\n\tTwo"

    def test_sub_paragraph_break_with_whitespace_before_emsp(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> '
            "One<br>\n  &emsp;Two</p>"
        )
        assert turn.utterance == "One\n\tTwo"

    def test_numeric_emsp_reference(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> '
            "One<br/>&#8195;Two</p>"
        )
        assert turn.utterance == "One\n\tTwo"

    def test_bare_line_break_decoded(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> '
            "One<br />Two<BR>Three</p>"
        )
        assert turn.utterance == "One\nTwo\nThree"

    def test_entities_resolved(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> '
            "Tom &amp; Jerry say &quot;hi&quot; &lt;3 it&#039;s</p>"
        )
        assert turn.utterance == "Tom & Jerry say \"hi\" <3 it's"

    def test_inline_markup_reduced_to_text(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> '
            "I <em>really</em> mean <b>it</b></p>"
        )
        assert turn.utterance == "I really mean it"

    def test_utterance_is_stripped(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span>    spaced out   </p>'
        )
        assert turn.utterance == "spaced out"

    def test_empty_utterance(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span></p>'
        )
        assert turn == Turn(speaker="Alice", utterance="")

    def test_missing_speaker_yields_none(self):
        assert _first_turn('<p class="dialogue">Nobody is speaking</p>') is None

    def test_two_speaker_spans_yield_none(self):
        turn = _first_turn(
            '<p class="dialogue"><span class="speaker">Alice</span> and '
            '<span class="speaker">Bob</span> together</p>'
        )
        assert turn is None

    def test_unlocatable_span_markup_yields_none_and_logs(self, monkeypatch, caplog):
        containers = dialogue_containers(parse_document(
            '<p class="dialogue"><span class="speaker">Alice</span> Hi</p>'
        ))
        paragraph = containers[0]
        monkeypatch.setattr(paragraph, "decode_contents", lambda: "Hi")
        with caplog.at_level(logging.DEBUG, logger="plato_converter.core.extractor"):
            assert extract_turn(paragraph) is None
        assert "speaker span markup not found" in caplog.text


class TestIterTurns:
    """iter_turns() walks dialogue containers in document order."""

    def test_document_order(self, rich_document):
        speakers = [turn.speaker for turn in iter_turns(rich_document)]
        assert speakers == ["INSTRUCTIONS", "Alice", "BOT"]

    def test_ignores_non_dialogue_paragraphs(self):
        document = (
            "<p>Alice: not a turn</p>"
            '<div class="dialogue"><span class="speaker">Eve</span> wrong tag</div>'
            '<p class="dialogue"><span class="speaker">Bob</span> real turn</p>'
        )
        assert list(iter_turns(document)) == [Turn(speaker="Bob", utterance="real turn")]

    def test_skips_unextractable_containers(self):
        document = (
            '<p class="dialogue">no speaker</p>\n'
            '<p class="dialogue"><span class="speaker">Bob</span> kept</p>'
        )
        assert [turn.speaker for turn in iter_turns(document)] == ["Bob"]

    def test_empty_document(self):
        assert list(iter_turns("")) == []

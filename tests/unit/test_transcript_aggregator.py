"""
Unit Tests for TranscriptAggregator

Tests fragment buffering, reset semantics and deduplicated transcript rebuilds.
"""

import pytest

from services.transcript_aggregator import TranscriptAggregator


@pytest.fixture
def aggregator():
    return TranscriptAggregator()


class TestAppendFinalFragment:
    """Tests for append_final_fragment."""

    def test_appends_trimmed_fragment(self, aggregator):
        assert aggregator.append_final_fragment("  hello there  ") is True
        assert aggregator.current_transcript() == "hello there"
        assert aggregator.fragment_count == 1

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_ignores_empty_input(self, aggregator, text):
        assert aggregator.append_final_fragment(text) is False
        assert aggregator.is_empty()

    def test_preserves_arrival_order(self, aggregator):
        for fragment in ["first part", "second part", "third part"]:
            aggregator.append_final_fragment(fragment)

        assert aggregator.current_transcript() == "first part second part third part"


class TestCurrentTranscript:
    """Tests for transcript rebuilds."""

    def test_empty_buffer_gives_empty_transcript(self, aggregator):
        assert aggregator.current_transcript() == ""

    def test_repeated_fragment_is_deduplicated(self, aggregator):
        aggregator.append_final_fragment("alpha beta gamma delta")
        aggregator.append_final_fragment("alpha beta gamma delta")

        assert aggregator.current_transcript() == "alpha beta gamma delta gamma delta"

    def test_rebuild_does_not_mutate_fragments(self, aggregator):
        aggregator.append_final_fragment("alpha beta gamma delta")
        aggregator.append_final_fragment("alpha beta gamma delta")

        first = aggregator.current_transcript()
        second = aggregator.current_transcript()

        assert first == second
        assert aggregator.fragment_count == 2


class TestReset:
    """Tests for reset between sessions."""

    def test_reset_clears_fragments(self, aggregator):
        aggregator.append_final_fragment("old session text")
        aggregator.reset()

        assert aggregator.is_empty()
        assert aggregator.current_transcript() == ""

    def test_appends_after_reset_start_fresh(self, aggregator):
        aggregator.append_final_fragment("old session text")
        aggregator.reset()
        aggregator.append_final_fragment("new session")

        assert aggregator.current_transcript() == "new session"

"""
Name: Approximate Matcher Unit Tests

Responsibilities:
  - Verify context-scored verbatim matches (fuzzy)
  - Verify sliding-window similarity matches (approximate)
  - Verify raw offset mapping and rejection below the threshold
"""

import threading

import pytest

from marginalia.anchoring.fuzzy_matcher import find_approximate, similarity
from marginalia.domain.entities import ExtractedContext, MatchType
from marginalia.exceptions import MatchCancelledError

pytestmark = pytest.mark.unit

TWO_BROWNS = "A quick brown fox. A lazy brown dog."


class TestSimilarity:
    def test_identical_strings(self):
        assert similarity("abc", "abc") == 1.0

    def test_empty_strings(self):
        assert similarity("", "") == 1.0
        assert similarity("abc", "") == 0.0
        assert similarity("", "abc") == 0.0

    def test_partial_overlap_is_between_bounds(self):
        ratio = similarity("brown fox", "brown cat")
        assert 0.0 < ratio < 1.0


class TestVerbatimCandidates:
    """R: Selection found verbatim, occurrences ranked by context similarity."""

    def test_context_picks_first_occurrence(self):
        content = ExtractedContext("brown", "quick ", " fox")

        match = find_approximate(content, TWO_BROWNS)

        assert match.position == 8
        assert match.match_type == MatchType.FUZZY
        assert match.confidence == 1.0

    def test_context_picks_second_occurrence(self):
        content = ExtractedContext("brown", "lazy ", " dog")

        match = find_approximate(content, TWO_BROWNS)

        assert match.position == 26
        assert match.match_type == MatchType.FUZZY

    def test_maps_back_to_raw_offsets(self):
        document = "Intro.\n\n   The  quick brown fox"
        content = ExtractedContext("quick brown", "the ", " fox")

        match = find_approximate(content, document)

        assert match.position == 16
        assert document[match.position :].startswith("quick brown")

    def test_case_and_quote_insensitive(self):
        document = "She said “HELLO there” and left."
        content = ExtractedContext('"hello there"', "said ", " and")

        match = find_approximate(content, document)

        assert match.position == document.index("“")
        assert match.confidence == 1.0

    def test_without_stored_context_scores_selection_only(self):
        match = find_approximate(ExtractedContext("brown", "", ""), TWO_BROWNS)

        assert match.position == 8
        assert match.confidence == 1.0


class TestWindowCandidates:
    """R: Edited selections recovered by sliding-window similarity."""

    def test_recovers_lightly_edited_selection(self):
        content = ExtractedContext("the quick brown fox jumps", "", "")
        document = "the quick brown cat jumps over"

        match = find_approximate(content, document)

        assert match is not None
        assert match.match_type == MatchType.APPROXIMATE
        assert match.position == 0
        assert 0.8 <= match.confidence < 1.0

    def test_rejects_below_min_ratio(self):
        content = ExtractedContext("completely different words", "", "")
        assert find_approximate(content, TWO_BROWNS) is None

    def test_min_ratio_is_configurable(self):
        content = ExtractedContext("the quick brown fox jumps", "", "")
        document = "the quick brown cat jumps over"

        assert find_approximate(content, document, min_ratio=0.99) is None

    def test_short_selection_requires_verbatim_match(self):
        content = ExtractedContext("browm", "", "")
        assert find_approximate(content, TWO_BROWNS) is None


class TestEdgeCases:
    def test_empty_selection_returns_none(self):
        assert find_approximate(ExtractedContext("  ", "a", "b"), TWO_BROWNS) is None

    def test_empty_document_returns_none(self):
        assert find_approximate(ExtractedContext("brown", "", ""), "") is None

    def test_cancel_event_stops_window_scan(self):
        event = threading.Event()
        event.set()
        content = ExtractedContext("nothing like this here", "", "")

        with pytest.raises(MatchCancelledError):
            find_approximate(content, TWO_BROWNS, cancel_event=event)

"""
Unit tests for marginalia/anchoring/context_extractor.py.
"""

import pytest

from marginalia.anchoring.context_extractor import extract_context
from marginalia.exceptions import OutOfRangeError

pytestmark = pytest.mark.unit

FOX = "The quick brown fox jumps over the lazy dog."


class TestExtractContext:
    def test_extracts_bounded_context(self):
        ctx = extract_context(FOX, 10, 15, 5)

        assert ctx.selected_text == "brown"
        assert ctx.context_before == "uick "
        assert ctx.context_after == " fox "

    def test_default_context_covers_short_document(self):
        ctx = extract_context(FOX, 10, 15)

        assert ctx.context_before == "The quick "
        assert ctx.context_after == " fox jumps over the lazy dog."

    def test_clamps_at_document_edges(self):
        ctx = extract_context(FOX, 0, len(FOX), 10)

        assert ctx.selected_text == FOX
        assert ctx.context_before == ""
        assert ctx.context_after == ""

    def test_empty_selection_is_allowed(self):
        ctx = extract_context(FOX, 10, 10, 3)

        assert ctx.selected_text == ""
        assert ctx.context_before == "ck "
        assert ctx.context_after == "bro"

    def test_zero_context_length(self):
        ctx = extract_context(FOX, 10, 15, 0)

        assert ctx.context_before == ""
        assert ctx.context_after == ""

    def test_reconstructs_document_slice(self):
        ctx = extract_context(FOX, 16, 19, 4)
        assert ctx.context_before + ctx.selected_text + ctx.context_after == FOX[12:23]

    @pytest.mark.parametrize(
        "start,end",
        [(-1, 5), (10, 5), (0, len(FOX) + 1)],
    )
    def test_invalid_bounds_raise(self, start, end):
        with pytest.raises(OutOfRangeError):
            extract_context(FOX, start, end, 5)

    def test_negative_context_length_raises(self):
        with pytest.raises(OutOfRangeError):
            extract_context(FOX, 10, 15, -1)

    def test_out_of_range_is_a_value_error(self):
        with pytest.raises(ValueError):
            extract_context("abc", 2, 1)

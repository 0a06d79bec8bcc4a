"""
Unit tests for marginalia/anchoring/normalizer.py.

Tests:
  - Case, whitespace and quote canonicalization
  - Idempotence
  - Raw offset mapping used by the approximate matcher
"""

import pytest

from marginalia.anchoring.normalizer import normalize, normalize_with_offsets


pytestmark = pytest.mark.unit


class TestNormalize:
    """R: Canonical form used before hashing and comparison."""

    def test_lowercases_trims_and_collapses(self):
        assert normalize("  “Hello”\n\tWorld ") == '"hello" world'

    def test_empty_input_returns_empty(self):
        assert normalize("") == ""
        assert normalize("   \n\t ") == ""

    def test_unifies_single_quotes(self):
        assert normalize("It’s ‘fine’") == "it's 'fine'"

    def test_unifies_low_double_quotes(self):
        assert normalize("„Tak‟") == '"tak"'

    def test_non_breaking_space_is_whitespace(self):
        assert normalize("A\u00a0\u00a0B") == "a b"

    def test_crlf_collapses_to_single_space(self):
        assert normalize("line one\r\n\r\nline two") == "line one line two"

    @pytest.mark.parametrize(
        "raw",
        [
            "The Quick  Brown\nFox",
            "  “Quoted”\ttext  ",
            "ALREADY normal",
            "",
            "tabs\t\tand spaces",
        ],
    )
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    def test_never_contains_runs_of_spaces(self):
        result = normalize("a \n \t b    c")
        assert "  " not in result
        assert result == "a b c"


class TestNormalizeWithOffsets:
    """R: Normalization that remembers where every character came from."""

    def test_maps_collapsed_whitespace_to_run_start(self):
        text, offsets = normalize_with_offsets("  Hello   World  ")

        assert text == "hello world"
        assert offsets == [2, 3, 4, 5, 6, 7, 10, 11, 12, 13, 14]

    @pytest.mark.parametrize(
        "raw",
        [
            "The quick brown fox.",
            "  “Smart” quotes\n\nand   gaps ",
            "",
            "MiXeD CaSe",
        ],
    )
    def test_agrees_with_normalize(self, raw):
        text, offsets = normalize_with_offsets(raw)

        assert text == normalize(raw)
        assert len(offsets) == len(text)

    def test_offsets_are_non_decreasing(self):
        _, offsets = normalize_with_offsets("A  b\n\nc “d”")
        assert offsets == sorted(offsets)

    def test_multi_char_lowercase_maps_to_same_index(self):
        text, offsets = normalize_with_offsets("Aİ")

        assert text == "a" + "İ".lower()
        assert offsets == [0] + [1] * len("İ".lower())

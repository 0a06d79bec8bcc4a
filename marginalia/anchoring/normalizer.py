"""
Name: Text Normalizer

Responsibilities:
  - Canonicalize raw text fragments into a comparison-stable form
  - Make content comparisons insensitive to case, whitespace and quote glyphs
  - Map normalized positions back to raw positions (approximate matching)

Collaborators:
  - anchoring.fingerprint: normalizes before hashing
  - anchoring.window_matcher: normalizes every candidate window
  - anchoring.fuzzy_matcher: uses normalize_with_offsets

Constraints:
  - Pure functions (no IO, no side effects)
  - Idempotent: normalize(normalize(x)) == normalize(x)
  - Never raises for any str input (empty in, empty out)

Notes:
  - Order: lowercase → trim → collapse whitespace → unify quotes
  - Whitespace is anything str.isspace() accepts (CR, LF, TAB, NBSP, ...)
"""

import re

# R: Curly/smart quote glyphs and their straight replacements
_DOUBLE_QUOTES = "“”„‟"
_SINGLE_QUOTES = "‘’‚‛"

_QUOTE_TABLE = str.maketrans(
    {**{q: '"' for q in _DOUBLE_QUOTES}, **{q: "'" for q in _SINGLE_QUOTES}}
)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    R: Canonicalize text for fingerprinting and comparison.

    Args:
        text: Raw text fragment (may be empty)

    Returns:
        Lowercased, trimmed text with single ASCII spaces and straight quotes

    Examples:
        >>> normalize("  “Hello”\\n\\tWorld ")
        '"hello" world'
    """
    if not text:
        return ""

    text = text.lower().strip()
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.translate(_QUOTE_TABLE)


def normalize_with_offsets(text: str) -> tuple[str, list[int]]:
    """
    R: Normalize text and keep, for each output character, its raw index.

    Applies the normalize() rules one character at a time, so the output
    equals normalize(text) except where lowercasing is context-sensitive
    (Greek final sigma). Characters whose lowercase form is longer than one
    code point map every produced character to the same raw index; a
    collapsed whitespace run maps to its first character.

    Returns:
        (normalized_text, offsets) with len(offsets) == len(normalized_text)
    """
    chars: list[str] = []
    offsets: list[int] = []

    for index, char in enumerate(text):
        if char.isspace():
            # R: Collapse runs and drop leading whitespace
            if chars and chars[-1] != " ":
                chars.append(" ")
                offsets.append(index)
            continue
        for lowered in char.lower():
            chars.append(lowered)
            offsets.append(index)

    # R: Drop trailing space left by a final whitespace run
    if chars and chars[-1] == " ":
        chars.pop()
        offsets.pop()

    return "".join(chars).translate(_QUOTE_TABLE), offsets

"""
Name: Context Extractor

Responsibilities:
  - Slice the selected text out of a full document body
  - Derive bounded before/after context windows around it

Collaborators:
  - anchoring.service: builds TextAnchor from the extracted triple
  - domain.entities.ExtractedContext: result type

Constraints:
  - Selection bounds are validated, never clamped (OutOfRangeError)
  - Context bounds are clamped to [0, len(full_text)], never padded
"""

from ..domain.entities import ExtractedContext
from ..exceptions import OutOfRangeError

DEFAULT_CONTEXT_LENGTH = 100


def extract_context(
    full_text: str,
    start_offset: int,
    end_offset: int,
    context_length: int = DEFAULT_CONTEXT_LENGTH,
) -> ExtractedContext:
    """
    R: Extract selection and surrounding context from a document body.

    Args:
        full_text: Complete logical text of the page/section
        start_offset: Selection start (inclusive)
        end_offset: Selection end (exclusive)
        context_length: Max characters of context on each side

    Returns:
        ExtractedContext with selected_text, context_before, context_after

    Raises:
        OutOfRangeError: If 0 <= start <= end <= len(full_text) does not hold
            or context_length is negative
    """
    if start_offset < 0 or end_offset < start_offset or end_offset > len(full_text):
        raise OutOfRangeError(
            f"Invalid selection bounds [{start_offset}, {end_offset}) "
            f"for text of length {len(full_text)}"
        )
    if context_length < 0:
        raise OutOfRangeError(f"context_length must be >= 0, got {context_length}")

    before_start = max(0, start_offset - context_length)
    after_end = min(len(full_text), end_offset + context_length)

    return ExtractedContext(
        selected_text=full_text[start_offset:end_offset],
        context_before=full_text[before_start:start_offset],
        context_after=full_text[end_offset:after_end],
    )

"""
Name: Selection Resolver

Responsibilities:
  - Map a live user selection (raw substring) to offsets in the logical text

Collaborators:
  - anchoring.service: turns a missing selection into SelectionNotFoundError
  - anchoring.context_extractor: consumes the resolved offsets

Constraints:
  - First literal occurrence wins (repeated phrases resolve to the first)
  - Surrounding whitespace of the selection is ignored
  - Not found → None (display text may strip markup differently)
"""

from typing import Optional

from ..domain.entities import SelectionRange


def resolve_selection(selected_substring: str, full_text: str) -> Optional[SelectionRange]:
    """
    R: Resolve a selected substring to [start, end) offsets.

    Args:
        selected_substring: Raw text of the reader's selection
        full_text: Full logical text of the displayed page/section

    Returns:
        SelectionRange of the first occurrence, or None if absent/empty
    """
    selected = selected_substring.strip()
    if not selected:
        return None

    start = full_text.find(selected)
    if start == -1:
        return None

    return SelectionRange(start_offset=start, end_offset=start + len(selected))

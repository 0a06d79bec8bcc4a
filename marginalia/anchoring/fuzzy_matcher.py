"""
Name: Approximate Anchor Matcher (optional fallback)

Responsibilities:
  - Recover an anchor when the exact fingerprint scan finds nothing
  - Score candidates by selection and context similarity
  - Map the match back to a raw document offset

Collaborators:
  - anchoring.normalizer.normalize_with_offsets: normalized text + raw map
  - anchoring.service: calls this only when fuzzy matching is enabled

Constraints:
  - Never used by find_by_fingerprint (exact results stay exact)
  - Returns None below min_ratio (no low-confidence guesses)
  - Ties resolve to the leftmost candidate

Algorithm:
  1. fuzzy: every verbatim occurrence of the normalized selection is a
     candidate; score = 0.5 + 0.25 * sim(before) + 0.25 * sim(after)
  2. approximate: slide a selection-sized window (coarse step, then a
     1-char refinement around the best hit), score = SequenceMatcher ratio

Performance:
  - Step 2 is O(n / step * L^2) in the worst case; keep it opt-in
"""

import threading
from difflib import SequenceMatcher
from typing import Optional

from ..domain.entities import ExtractedContext, MatchType, TextMatch
from .normalizer import normalize_with_offsets
from .window_matcher import CHECK_INTERVAL, check_abort, deadline_for

DEFAULT_MIN_RATIO = 0.8

# R: Shorter selections only match verbatim (ratio is meaningless on tiny strings)
MIN_FUZZY_LENGTH = 10

SELECTION_WEIGHT = 0.5
CONTEXT_WEIGHT = 0.25


def similarity(first: str, second: str) -> float:
    """R: SequenceMatcher ratio in [0.0, 1.0]; two empty strings are identical."""
    if not first and not second:
        return 1.0
    if not first or not second:
        return 0.0
    return SequenceMatcher(None, first, second).ratio()


def find_approximate(
    content: ExtractedContext,
    document_text: str,
    min_ratio: float = DEFAULT_MIN_RATIO,
    *,
    timeout: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
    deadline: Optional[float] = None,
) -> Optional[TextMatch]:
    """
    R: Locate an anchor by similarity when its fingerprint no longer matches.

    Args:
        content: Stored selection and context windows
        document_text: Current full document body
        min_ratio: Minimum score (0-1) to accept a match
        timeout: Max seconds to search (None or <= 0 disables)
        cancel_event: Set by another thread to stop the search
        deadline: Absolute time.monotonic() deadline; overrides timeout

    Returns:
        TextMatch (FUZZY or APPROXIMATE) at the raw selection start, or None

    Raises:
        MatchTimeoutError: If the deadline passed before or during the search
        MatchCancelledError: If cancel_event was set
    """
    if deadline is None:
        deadline = deadline_for(timeout)
    check_abort(0, deadline, cancel_event)

    normalized_doc, offsets = normalize_with_offsets(document_text)
    selected = normalize_with_offsets(content.selected_text)[0]
    if not selected or not normalized_doc:
        return None

    match = _best_verbatim(
        normalized_doc,
        selected,
        normalize_with_offsets(content.context_before)[0],
        normalize_with_offsets(content.context_after)[0],
        deadline,
        cancel_event,
    )
    if match is None and len(selected) >= MIN_FUZZY_LENGTH:
        match = _best_window(normalized_doc, selected, deadline, cancel_event)

    if match is None:
        return None

    position, score, match_type = match
    if score < min_ratio:
        return None

    return TextMatch(
        position=offsets[position],
        confidence=round(score, 4),
        match_type=match_type,
    )


def _best_verbatim(
    doc: str,
    selected: str,
    before: str,
    after: str,
    deadline: Optional[float],
    cancel_event: Optional[threading.Event],
) -> Optional[tuple[int, float, MatchType]]:
    """R: Score every verbatim occurrence of the selection by its context."""
    best: Optional[tuple[int, float, MatchType]] = None
    checked = 0

    position = doc.find(selected)
    while position != -1:
        checked += 1
        if checked % CHECK_INTERVAL == 0:
            check_abort(checked, deadline, cancel_event)

        end = position + len(selected)
        # R: One extra char absorbs the space separating context and selection
        actual_before = doc[max(0, position - len(before) - 1) : position].strip()
        actual_after = doc[end : end + len(after) + 1].strip()

        score = SELECTION_WEIGHT + CONTEXT_WEIGHT * (
            _context_score(before, actual_before) + _context_score(after, actual_after)
        )
        if best is None or score > best[1]:
            best = (position, score, MatchType.FUZZY)

        position = doc.find(selected, position + 1)

    return best


def _context_score(stored: str, actual: str) -> float:
    # R: No stored context means nothing to disagree with
    if not stored:
        return 1.0
    return similarity(stored, actual)


def _best_window(
    doc: str,
    selected: str,
    deadline: Optional[float],
    cancel_event: Optional[threading.Event],
) -> Optional[tuple[int, float, MatchType]]:
    """R: Slide a selection-sized window and keep the most similar one."""
    size = len(selected)
    last_start = max(0, len(doc) - size)
    step = max(1, size // 10)

    best_position = -1
    best_ratio = 0.0
    for index, start in enumerate(range(0, last_start + 1, step)):
        if index % CHECK_INTERVAL == 0:
            check_abort(start, deadline, cancel_event)
        ratio = similarity(selected, doc[start : start + size])
        if ratio > best_ratio:
            best_ratio = ratio
            best_position = start

    if best_position == -1:
        return None

    # R: Refine around the coarse hit one character at a time
    low = max(0, best_position - step + 1)
    high = min(last_start, best_position + step - 1)
    for start in range(low, high + 1):
        ratio = similarity(selected, doc[start : start + size])
        if ratio > best_ratio or (ratio == best_ratio and start < best_position):
            best_ratio = ratio
            best_position = start

    return best_position, best_ratio, MatchType.APPROXIMATE

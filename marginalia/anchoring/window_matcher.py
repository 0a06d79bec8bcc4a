"""
Name: Window Matcher

Responsibilities:
  - Re-locate a fingerprinted passage inside a (re-extracted) document body
  - Support early timeout/cancellation of long scans

Collaborators:
  - anchoring.normalizer: normalizes each candidate window
  - anchoring.fingerprint: digests each normalized window
  - anchoring.service: wraps the scan with settings, metrics and logging

Constraints:
  - Exhaustive scan, leftmost match wins (scan order is the tie-break)
  - Window size is snippet_length * 3 (selection + both context widths)
  - Document shorter than the window → None, no scan, no error
  - None means "not found" and is never an error

Algorithm:
  - For start in 0..len(doc) - window_size (inclusive):
      digest(normalize(doc[start:start + window_size])) == fingerprint

Performance:
  - O(n * w) where n = len(doc), w = window size, plus one SHA-256 per shift
  - CPU-bound: async callers must offload it to a worker thread
  - Upgrade path (same results): polynomial rolling hash over the normalized
    stream, or verify only starts found by searching a short normalized prefix
"""

import threading
import time
from typing import Optional

from ..exceptions import MatchCancelledError, MatchTimeoutError, OutOfRangeError
from .fingerprint import digest
from .normalizer import normalize

DEFAULT_SNIPPET_LENGTH = 100
WINDOW_MULTIPLIER = 3

# R: Positions scanned between two timeout/cancel checks
CHECK_INTERVAL = 256


def window_size_for(snippet_length: int) -> int:
    """R: Window size used by the scan for a given snippet length."""
    return snippet_length * WINDOW_MULTIPLIER


def deadline_for(timeout: Optional[float]) -> Optional[float]:
    """R: Absolute monotonic deadline for a budget (None or <= 0 disables)."""
    return time.monotonic() + timeout if timeout and timeout > 0 else None


def find_by_fingerprint(
    fingerprint: str,
    document_text: str,
    snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    *,
    timeout: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
    deadline: Optional[float] = None,
) -> Optional[int]:
    """
    R: Find the start offset of the first window matching a fingerprint.

    Args:
        fingerprint: 64-char hex digest to look for
        document_text: Current full document body
        snippet_length: Approximate length of the original snippet
        timeout: Max seconds to scan (None or <= 0 disables)
        cancel_event: Set by another thread to stop the scan
        deadline: Absolute time.monotonic() deadline; overrides timeout

    Returns:
        Start offset of the leftmost matching window, or None

    Raises:
        OutOfRangeError: If snippet_length <= 0
        MatchTimeoutError: If the timeout elapsed before the scan finished
        MatchCancelledError: If cancel_event was set during the scan
    """
    if snippet_length <= 0:
        raise OutOfRangeError(f"snippet_length must be > 0, got {snippet_length}")

    window_size = window_size_for(snippet_length)
    last_start = len(document_text) - window_size
    if last_start < 0:
        return None

    if deadline is None:
        deadline = deadline_for(timeout)

    for start in range(last_start + 1):
        if start % CHECK_INTERVAL == 0:
            check_abort(start, deadline, cancel_event)

        window = document_text[start : start + window_size]
        if digest(normalize(window)) == fingerprint:
            return start

    return None


def check_abort(
    scanned: int,
    deadline: Optional[float],
    cancel_event: Optional[threading.Event],
) -> None:
    """R: Raise if the scan was cancelled or ran past its deadline."""
    if cancel_event is not None and cancel_event.is_set():
        raise MatchCancelledError(
            f"Fingerprint scan cancelled after {scanned} positions",
            scanned_positions=scanned,
        )
    if deadline is not None and time.monotonic() >= deadline:
        raise MatchTimeoutError(
            f"Fingerprint scan timed out after {scanned} positions",
            scanned_positions=scanned,
        )

"""
Name: Fingerprint Service

Responsibilities:
  - Compose normalizer, extractor, matcher and resolver behind one object
  - Apply configured defaults (context length, snippet length, timeout)
  - Build TextAnchor values whose fingerprint always matches their triple
  - Re-locate stored anchors, with an optional approximate fallback

Collaborators:
  - anchoring.*: pure engine functions
  - container.py: builds the singleton from Settings
  - application.use_cases: anchor creation and relocation

Constraints:
  - Holds configuration only (no mutable state, safe across threads)
  - Exact fingerprint scan always runs first; fallback only when enabled

Notes:
  - Validates parameters on initialization to fail fast
"""

import threading
from typing import Optional

from ..domain.entities import ExtractedContext, MatchType, TextAnchor, TextMatch
from ..exceptions import SelectionNotFoundError
from .context_extractor import DEFAULT_CONTEXT_LENGTH, extract_context
from .fingerprint import fingerprint
from .fuzzy_matcher import DEFAULT_MIN_RATIO, find_approximate
from .normalizer import normalize
from .selection_resolver import resolve_selection
from .window_matcher import DEFAULT_SNIPPET_LENGTH, deadline_for, find_by_fingerprint


def build_anchor(context: ExtractedContext, start_offset: int, end_offset: int) -> TextAnchor:
    """R: Create a TextAnchor; the entity derives its fingerprint from the triple."""
    return TextAnchor(
        selected_text=context.selected_text,
        context_before=context.context_before,
        context_after=context.context_after,
        start_offset=start_offset,
        end_offset=end_offset,
    )


def character_offset(start_offset: int, end_offset: int) -> int:
    """R: Midpoint of a selection, stored as a display hint only."""
    return (start_offset + end_offset) // 2


class FingerprintService:
    """
    R: Default anchoring service built on the pure engine functions.
    """

    def __init__(
        self,
        context_length: int = DEFAULT_CONTEXT_LENGTH,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
        match_timeout_seconds: Optional[float] = None,
        fuzzy_enabled: bool = False,
        fuzzy_min_ratio: float = DEFAULT_MIN_RATIO,
    ):
        """
        Initialize service with validated parameters.

        Args:
            context_length: Context chars captured on each side (must be >= 0)
            snippet_length: Snippet length for the window scan (must be > 0)
            match_timeout_seconds: Scan time budget (None or <= 0 disables)
            fuzzy_enabled: Try approximate matching when the exact scan fails
            fuzzy_min_ratio: Minimum approximate score (0 < ratio <= 1)

        Raises:
            ValueError: If parameters are invalid
        """
        if context_length < 0:
            raise ValueError(f"context_length must be >= 0, got {context_length}")
        if snippet_length <= 0:
            raise ValueError(f"snippet_length must be > 0, got {snippet_length}")
        if not 0 < fuzzy_min_ratio <= 1:
            raise ValueError(
                f"fuzzy_min_ratio must be in (0, 1], got {fuzzy_min_ratio}"
            )

        self.context_length = context_length
        self.snippet_length = snippet_length
        self.match_timeout_seconds = match_timeout_seconds
        self.fuzzy_enabled = fuzzy_enabled
        self.fuzzy_min_ratio = fuzzy_min_ratio

    def normalize(self, text: str) -> str:
        return normalize(text)

    def fingerprint(
        self, selected_text: str, context_before: str, context_after: str
    ) -> str:
        return fingerprint(selected_text, context_before, context_after)

    def extract_context(
        self,
        full_text: str,
        start_offset: int,
        end_offset: int,
        context_length: Optional[int] = None,
    ) -> ExtractedContext:
        if context_length is None:
            context_length = self.context_length
        return extract_context(full_text, start_offset, end_offset, context_length)

    def create_anchor(
        self,
        full_text: str,
        start_offset: int,
        end_offset: int,
        context_length: Optional[int] = None,
    ) -> TextAnchor:
        """
        R: Anchor the span [start_offset, end_offset) of full_text.

        Raises:
            OutOfRangeError: If the offsets do not fit full_text
        """
        context = self.extract_context(full_text, start_offset, end_offset, context_length)
        return build_anchor(context, start_offset, end_offset)

    def anchor_selection(self, selected_text: str, full_text: str) -> TextAnchor:
        """
        R: Resolve a live selection and anchor its first occurrence.

        Raises:
            SelectionNotFoundError: If the selection does not occur in full_text
        """
        selection = resolve_selection(selected_text, full_text)
        if selection is None:
            raise SelectionNotFoundError("Selected text was not found in the document")
        return self.create_anchor(full_text, selection.start_offset, selection.end_offset)

    def find_by_fingerprint(
        self,
        fingerprint_hex: str,
        document_text: str,
        snippet_length: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
    ) -> Optional[int]:
        """
        R: Exact fingerprint scan with the configured snippet length and budget.

        Raises:
            OutOfRangeError: If an explicit snippet_length is <= 0
        """
        if snippet_length is None:
            snippet_length = self.snippet_length
        if deadline is None:
            deadline = deadline_for(self.match_timeout_seconds)
        return find_by_fingerprint(
            fingerprint_hex,
            document_text,
            snippet_length,
            cancel_event=cancel_event,
            deadline=deadline,
        )

    def relocate(
        self,
        content: ExtractedContext,
        document_text: str,
        *,
        fingerprint_hex: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[TextMatch]:
        """
        R: Re-locate a stored anchor in the current document text.

        Args:
            content: Stored selection and context windows
            document_text: Current full document body
            fingerprint_hex: Stored fingerprint (computed from content if None)
            cancel_event: Set by another thread to stop the search

        Returns:
            EXACT match from the fingerprint scan, a FUZZY/APPROXIMATE match
            from the fallback (if enabled), or None

        Raises:
            MatchAbortedError: If the timeout elapsed or the search was cancelled

        Notes:
            One deadline covers both the exact scan and the fallback
        """
        if fingerprint_hex is None:
            fingerprint_hex = fingerprint(
                content.selected_text, content.context_before, content.context_after
            )

        deadline = deadline_for(self.match_timeout_seconds)
        position = self.find_by_fingerprint(
            fingerprint_hex, document_text, cancel_event=cancel_event, deadline=deadline
        )
        if position is not None:
            return TextMatch(position=position, confidence=1.0, match_type=MatchType.EXACT)

        if not self.fuzzy_enabled:
            return None

        return find_approximate(
            content,
            document_text,
            self.fuzzy_min_ratio,
            cancel_event=cancel_event,
            deadline=deadline,
        )

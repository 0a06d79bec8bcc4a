"""
Name: Fingerprint Generator

Responsibilities:
  - Build a deterministic content digest for a selection plus its context
  - Expose the hashing step for callers that normalize on their own

Collaborators:
  - anchoring.normalizer: canonical form before hashing
  - anchoring.window_matcher: compares window digests against fingerprints

Constraints:
  - Pure functions (no IO, no side effects)
  - Fixed concatenation order: selected + before + after, no separator
  - Never fails for str input (empty input → digest of empty string)

Notes:
  - SHA-256, rendered as 64 lowercase hex characters
  - Opaque content identifier, not a security credential
"""

import hashlib

from .normalizer import normalize

FINGERPRINT_LENGTH = 64


def digest(normalized_text: str) -> str:
    """R: SHA-256 hex digest of already-normalized text."""
    return hashlib.sha256(normalized_text.encode("utf-8")).hexdigest()


def fingerprint(selected_text: str, context_before: str, context_after: str) -> str:
    """
    R: Compute the position-independent fingerprint of an anchor.

    Args:
        selected_text: Text the reader highlighted
        context_before: Text immediately preceding the selection
        context_after: Text immediately following the selection

    Returns:
        64-char lowercase hex digest of the normalized concatenation
    """
    return digest(normalize(selected_text + context_before + context_after))

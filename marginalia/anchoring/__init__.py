"""Text anchoring engine exports"""

from .context_extractor import DEFAULT_CONTEXT_LENGTH, extract_context
from .fingerprint import FINGERPRINT_LENGTH, digest, fingerprint
from .fuzzy_matcher import find_approximate, similarity
from .normalizer import normalize, normalize_with_offsets
from .selection_resolver import resolve_selection
from .service import FingerprintService, build_anchor, character_offset
from .window_matcher import (
    DEFAULT_SNIPPET_LENGTH,
    find_by_fingerprint,
    window_size_for,
)

__all__ = [
    "DEFAULT_CONTEXT_LENGTH",
    "DEFAULT_SNIPPET_LENGTH",
    "FINGERPRINT_LENGTH",
    "FingerprintService",
    "build_anchor",
    "character_offset",
    "digest",
    "extract_context",
    "find_approximate",
    "find_by_fingerprint",
    "fingerprint",
    "normalize",
    "normalize_with_offsets",
    "resolve_selection",
    "similarity",
    "window_size_for",
]

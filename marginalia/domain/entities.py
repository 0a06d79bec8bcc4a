"""
Name: Domain Entities

Responsibilities:
  - Define core value objects of the anchoring engine (TextAnchor, TextMatch)
  - Define records of the comment service (Text, Comment)
  - Provide type safety for domain and application layers

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Anchors and matches are frozen (immutable after creation)
  - Must remain framework-agnostic

Notes:
  - TextAnchor computes its own fingerprint from the
    (selected, before, after) triple; it cannot be passed in
  - Comment.character_offset is a display hint, never used for re-anchoring
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID


@dataclass(frozen=True)
class ExtractedContext:
    """
    R: Selected text plus its bounded context windows.

    Attributes:
        selected_text: Text the reader highlighted
        context_before: Up to N chars immediately before the selection
        context_after: Up to N chars immediately after the selection
    """

    selected_text: str
    context_before: str
    context_after: str


@dataclass(frozen=True)
class SelectionRange:
    """R: Character range [start_offset, end_offset) in a logical text."""

    start_offset: int
    end_offset: int


@dataclass(frozen=True)
class TextAnchor:
    """
    R: Position-independent identity of a commented span.

    Attributes:
        selected_text: Text the reader highlighted
        context_before: Context preceding the selection
        context_after: Context following the selection
        start_offset: Selection start in the original logical text
        end_offset: Selection end in the original logical text
        fingerprint: SHA-256 hex of the normalized triple
    """

    selected_text: str
    context_before: str
    context_after: str
    start_offset: int
    end_offset: int
    fingerprint: str = field(init=False)

    def __post_init__(self) -> None:
        # R: Imported here, anchoring depends on this module at import time
        from ..anchoring.fingerprint import fingerprint

        if self.start_offset < 0 or self.start_offset > self.end_offset:
            raise ValueError(
                f"start_offset ({self.start_offset}) must be >= 0 and "
                f"<= end_offset ({self.end_offset})"
            )
        object.__setattr__(
            self,
            "fingerprint",
            fingerprint(self.selected_text, self.context_before, self.context_after),
        )

    @property
    def content(self) -> ExtractedContext:
        return ExtractedContext(
            selected_text=self.selected_text,
            context_before=self.context_before,
            context_after=self.context_after,
        )


class MatchType(str, Enum):
    """R: How a stored anchor was recovered in the current text."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    APPROXIMATE = "approximate"


@dataclass(frozen=True)
class TextMatch:
    """
    R: Recovered location of an anchor.

    Attributes:
        position: Character offset in the current document text
        confidence: 1.0 for exact matches, similarity score otherwise
        match_type: exact (fingerprint scan) or fuzzy/approximate (fallback)
    """

    position: int
    confidence: float = 1.0
    match_type: MatchType = MatchType.EXACT


@dataclass
class Text:
    """
    R: A readable work (book, article, ...) that comments attach to.

    Attributes:
        id: Unique text identifier
        title: Work title
        author: Optional author (title + author identify a text)
        isbn: Optional ISBN
        type: Optional kind of work (book, article, ...)
        edition: Optional edition label
        url: Optional source URL
        metadata: Additional custom metadata
        created_at: Creation timestamp
    """

    id: UUID
    title: str
    author: Optional[str] = None
    isbn: Optional[str] = None
    type: Optional[str] = None
    edition: Optional[str] = None
    url: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None


@dataclass
class Comment:
    """
    R: A reader's comment anchored to a span of a text.

    Attributes:
        id: Unique comment identifier
        text_id: Text the comment belongs to
        user_id: Caller identity of the author
        selected_text: Anchored selection
        context_before: Context preceding the selection
        context_after: Context following the selection
        fingerprint: Fingerprint of the anchored triple
        comment_text: Body of the comment
        character_offset: Midpoint of the original selection (display hint)
        chapter: Optional chapter label
        page_number: Optional page number
        paragraph_number: Optional paragraph number
        is_public: Visible to other readers
        created_at: Creation timestamp
    """

    id: UUID
    text_id: UUID
    user_id: str
    selected_text: str
    context_before: str
    context_after: str
    fingerprint: str
    comment_text: str
    character_offset: int
    chapter: Optional[str] = None
    page_number: Optional[int] = None
    paragraph_number: Optional[int] = None
    is_public: bool = True
    created_at: Optional[datetime] = None

    @property
    def content(self) -> ExtractedContext:
        return ExtractedContext(
            selected_text=self.selected_text,
            context_before=self.context_before,
            context_after=self.context_after,
        )

"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define contracts for text and comment persistence
  - Provide abstraction over the key-value store behind the service
  - Enable dependency inversion (use cases don't depend on storage)

Collaborators:
  - domain.entities: Text, Comment
  - Implementations in infrastructure.repositories

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Storage-agnostic (in-memory, relational, document store)

Notes:
  - Using typing.Protocol for structural subtyping (duck typing)
  - Enables testing with mock repositories
"""

from typing import List, Optional, Protocol
from uuid import UUID

from .entities import Comment, Text


class TextRepository(Protocol):
    """
    R: Interface for text (book/article) records.

    Implementations must provide:
      - Create-or-find by (title, author)
      - A per-user library ordered by last access
    """

    def save_text(self, text: Text) -> None:
        """R: Persist a text record."""
        ...

    def get_text(self, text_id: UUID) -> Optional[Text]:
        """R: Fetch a text by ID (None if absent)."""
        ...

    def find_text(self, *, title: str, author: Optional[str]) -> Optional[Text]:
        """
        R: Find a text by its identifying pair.

        Args:
            title: Exact title
            author: Exact author, or None for texts without author
        """
        ...

    def record_access(self, *, user_id: str, text_id: UUID) -> None:
        """R: Add a text to the user's library, or mark it accessed now."""
        ...

    def list_user_texts(self, user_id: str) -> List[Text]:
        """R: Texts in the user's library, most recently accessed first."""
        ...


class CommentRepository(Protocol):
    """
    R: Interface for comment persistence.

    Implementations must provide:
      - Insert and delete (comments are never edited)
      - Listing per text ordered by character_offset
    """

    def save_comment(self, comment: Comment) -> None:
        """R: Persist a new comment."""
        ...

    def get_comment(self, comment_id: UUID) -> Optional[Comment]:
        """R: Fetch a comment by ID (None if absent)."""
        ...

    def list_comments(
        self, text_id: UUID, *, public_only: bool = True
    ) -> List[Comment]:
        """
        R: List comments of a text ordered by character_offset ascending.

        Args:
            text_id: Text UUID
            public_only: Exclude private comments
        """
        ...

    def delete_comment(self, comment_id: UUID) -> bool:
        """R: Delete a comment. Returns False if it did not exist."""
        ...

"""
Name: In-Memory Comment Repository

Responsibilities:
  - Store comments in memory (tests, local dev, default key-value store)
  - Return per-text listings ordered by character_offset

Collaborators:
  - domain.entities.Comment
  - domain.repositories.CommentRepository (contract implemented)

Constraints:
  - Thread-safe: every access happens under a Lock
  - Data is lost on restart

Notes:
  - Ties on character_offset keep creation order (stable sort)
"""

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ...domain.entities import Comment


class InMemoryCommentRepository:
    """R: In-memory implementation of CommentRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._comments: Dict[UUID, Comment] = {}

    def save_comment(self, comment: Comment) -> None:
        if comment.created_at is None:
            comment.created_at = datetime.now(timezone.utc)
        with self._lock:
            self._comments[comment.id] = comment

    def get_comment(self, comment_id: UUID) -> Optional[Comment]:
        with self._lock:
            return self._comments.get(comment_id)

    def list_comments(self, text_id: UUID, *, public_only: bool = True) -> List[Comment]:
        with self._lock:
            comments = [
                c
                for c in self._comments.values()
                if c.text_id == text_id and (c.is_public or not public_only)
            ]
        return sorted(comments, key=lambda c: c.character_offset)

    def delete_comment(self, comment_id: UUID) -> bool:
        with self._lock:
            return self._comments.pop(comment_id, None) is not None

"""
Name: List Comments Use Case

Responsibilities:
  - List the public comments of a text in document order (character_offset)
"""

from uuid import UUID

from ...domain.repositories import CommentRepository, TextRepository
from .comment_results import ListCommentsResult, text_not_found


class ListCommentsUseCase:
    """R: List public comments of a text."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        text_repository: TextRepository,
    ):
        self.comment_repository = comment_repository
        self.text_repository = text_repository

    def execute(self, text_id: UUID) -> ListCommentsResult:
        if not self.text_repository.get_text(text_id):
            return ListCommentsResult(error=text_not_found())

        comments = self.comment_repository.list_comments(text_id, public_only=True)
        return ListCommentsResult(comments=comments)

"""
Name: Delete Comment Use Case

Responsibilities:
  - Delete a comment by ID
  - Only the author may delete their comment

Collaborators:
  - domain.repositories.CommentRepository
"""

from uuid import UUID

from ...domain.repositories import CommentRepository
from ...logger import logger
from .comment_results import (
    CommentError,
    CommentErrorCode,
    DeleteCommentResult,
    comment_not_found,
)


class DeleteCommentUseCase:
    """R: Delete a comment owned by the caller."""

    def __init__(self, repository: CommentRepository):
        self.repository = repository

    def execute(self, *, comment_id: UUID, user_id: str) -> DeleteCommentResult:
        comment = self.repository.get_comment(comment_id)
        if not comment:
            return DeleteCommentResult(deleted=False, error=comment_not_found())

        if comment.user_id != user_id:
            return DeleteCommentResult(
                deleted=False,
                error=CommentError(
                    code=CommentErrorCode.FORBIDDEN,
                    message="You can only delete your own comments.",
                    resource="Comment",
                ),
            )

        # R: Concurrent delete between get and delete
        if not self.repository.delete_comment(comment_id):
            return DeleteCommentResult(deleted=False, error=comment_not_found())

        logger.info("comment deleted", extra={"comment_id": str(comment_id)})
        return DeleteCommentResult(deleted=True)

"""
Name: Create Comment Use Case

Responsibilities:
  - Validate the anchored selection sent by the reader
  - Compute the anchor fingerprint server-side from the submitted triple
  - Derive character_offset (midpoint of the selection, display hint)
  - Persist the comment for an existing text

Collaborators:
  - domain/repositories.TextRepository: text must exist
  - domain/repositories.CommentRepository: persistence
  - anchoring.FingerprintService: fingerprint computation

Constraints:
  - The client never supplies the fingerprint (it is always recomputed)
  - start_offset <= end_offset, both >= 0
  - Comments are immutable after creation (delete only)
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4

from ...anchoring import FingerprintService, character_offset
from ...domain.entities import Comment
from ...domain.repositories import CommentRepository, TextRepository
from ...logger import logger
from .comment_results import (
    CommentError,
    CommentErrorCode,
    CreateCommentResult,
    text_not_found,
)


@dataclass
class CreateCommentInput:
    text_id: UUID
    user_id: str
    selected_text: str
    context_before: str
    context_after: str
    comment_text: str
    start_offset: int
    end_offset: int
    chapter: Optional[str] = None
    page_number: Optional[int] = None
    paragraph_number: Optional[int] = None
    is_public: bool = True


class CreateCommentUseCase:
    """
    R: Use case for anchoring a new comment to a text.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        text_repository: TextRepository,
        fingerprint_service: FingerprintService,
    ):
        self.comment_repository = comment_repository
        self.text_repository = text_repository
        self.fingerprint_service = fingerprint_service

    def execute(self, input_data: CreateCommentInput) -> CreateCommentResult:
        error = self._validate(input_data)
        if error:
            return CreateCommentResult(error=error)

        if not self.text_repository.get_text(input_data.text_id):
            return CreateCommentResult(error=text_not_found())

        fingerprint = self.fingerprint_service.fingerprint(
            input_data.selected_text,
            input_data.context_before,
            input_data.context_after,
        )

        comment = Comment(
            id=uuid4(),
            text_id=input_data.text_id,
            user_id=input_data.user_id,
            selected_text=input_data.selected_text,
            context_before=input_data.context_before,
            context_after=input_data.context_after,
            fingerprint=fingerprint,
            comment_text=input_data.comment_text,
            character_offset=character_offset(
                input_data.start_offset, input_data.end_offset
            ),
            chapter=input_data.chapter,
            page_number=input_data.page_number,
            paragraph_number=input_data.paragraph_number,
            is_public=input_data.is_public,
        )
        self.comment_repository.save_comment(comment)

        logger.info(
            "comment created",
            extra={
                "comment_id": str(comment.id),
                "text_id": str(comment.text_id),
                "character_offset": comment.character_offset,
            },
        )
        return CreateCommentResult(comment=comment)

    @staticmethod
    def _validate(input_data: CreateCommentInput) -> CommentError | None:
        if input_data.start_offset < 0 or input_data.end_offset < input_data.start_offset:
            message = "start_offset must be >= 0 and <= end_offset."
        elif not input_data.selected_text:
            message = "selected_text must not be empty."
        elif not input_data.comment_text.strip():
            message = "comment_text must not be empty."
        else:
            return None

        return CommentError(
            code=CommentErrorCode.VALIDATION_ERROR,
            message=message,
            resource="Comment",
        )

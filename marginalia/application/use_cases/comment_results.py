"""
Name: Comment Use Case Results

Responsibilities:
  - Provide consistent error/result types for text and comment use cases
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List
from uuid import UUID

from ...domain.entities import Comment, Text, TextMatch


class CommentErrorCode(str, Enum):
    """R: Error codes for text/comment use cases."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass
class CommentError:
    code: CommentErrorCode
    message: str
    resource: str | None = None


@dataclass
class CreateTextResult:
    text: Text | None = None
    created: bool = False
    error: CommentError | None = None


@dataclass
class GetTextResult:
    text: Text | None = None
    error: CommentError | None = None


@dataclass
class ListUserTextsResult:
    texts: List[Text] = field(default_factory=list)
    error: CommentError | None = None


@dataclass
class CreateCommentResult:
    comment: Comment | None = None
    error: CommentError | None = None


@dataclass
class ListCommentsResult:
    comments: List[Comment] = field(default_factory=list)
    error: CommentError | None = None


@dataclass
class DeleteCommentResult:
    deleted: bool
    error: CommentError | None = None


@dataclass
class CommentRelocation:
    """R: Outcome of re-anchoring one comment (match is None when not recovered)."""

    comment_id: UUID
    match: TextMatch | None = None
    aborted: bool = False

    @property
    def found(self) -> bool:
        return self.match is not None


@dataclass
class RelocateCommentsResult:
    relocations: List[CommentRelocation] = field(default_factory=list)
    error: CommentError | None = None


def text_not_found() -> CommentError:
    return CommentError(
        code=CommentErrorCode.NOT_FOUND,
        message="Text not found.",
        resource="Text",
    )


def comment_not_found() -> CommentError:
    return CommentError(
        code=CommentErrorCode.NOT_FOUND,
        message="Comment not found.",
        resource="Comment",
    )

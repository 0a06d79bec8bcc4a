"""Application use cases"""

from .create_comment import CreateCommentInput, CreateCommentUseCase
from .create_text import CreateTextInput, CreateTextUseCase
from .delete_comment import DeleteCommentUseCase
from .get_text import GetTextUseCase
from .list_comments import ListCommentsUseCase
from .list_user_texts import ListUserTextsUseCase
from .relocate_comments import RelocateCommentsInput, RelocateCommentsUseCase
from .comment_results import (
    CommentError,
    CommentErrorCode,
    CommentRelocation,
    CreateCommentResult,
    CreateTextResult,
    DeleteCommentResult,
    GetTextResult,
    ListCommentsResult,
    ListUserTextsResult,
    RelocateCommentsResult,
)

__all__ = [
    "CreateCommentInput",
    "CreateCommentUseCase",
    "CreateCommentResult",
    "CreateTextInput",
    "CreateTextUseCase",
    "CreateTextResult",
    "DeleteCommentUseCase",
    "DeleteCommentResult",
    "GetTextUseCase",
    "GetTextResult",
    "ListCommentsUseCase",
    "ListCommentsResult",
    "ListUserTextsUseCase",
    "ListUserTextsResult",
    "RelocateCommentsInput",
    "RelocateCommentsUseCase",
    "RelocateCommentsResult",
    "CommentRelocation",
    "CommentError",
    "CommentErrorCode",
]

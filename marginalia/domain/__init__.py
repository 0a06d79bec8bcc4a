"""Domain layer exports"""

from .entities import (
    Comment,
    ExtractedContext,
    MatchType,
    SelectionRange,
    Text,
    TextAnchor,
    TextMatch,
)
from .repositories import CommentRepository, TextRepository

__all__ = [
    "Comment",
    "CommentRepository",
    "ExtractedContext",
    "MatchType",
    "SelectionRange",
    "Text",
    "TextAnchor",
    "TextMatch",
    "TextRepository",
]

"""Infrastructure repositories"""

from .in_memory_comment_repo import InMemoryCommentRepository
from .in_memory_text_repo import InMemoryTextRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryTextRepository",
]

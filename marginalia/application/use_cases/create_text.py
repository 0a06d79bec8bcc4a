"""
Name: Create Text Use Case

Responsibilities:
  - Create a text record, or return the existing one with the same
    (title, author) pair
  - Add the text to the caller's library (new or existing text alike)

Collaborators:
  - domain.repositories.TextRepository
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import uuid4

from ...domain.entities import Text
from ...domain.repositories import TextRepository
from ...logger import logger
from .comment_results import CommentError, CommentErrorCode, CreateTextResult


@dataclass
class CreateTextInput:
    title: str
    author: Optional[str] = None
    isbn: Optional[str] = None
    type: Optional[str] = None
    edition: Optional[str] = None
    url: Optional[str] = None
    metadata: Dict[str, Any] | None = None
    user_id: Optional[str] = None


class CreateTextUseCase:
    """R: Create-or-find a text by title and author."""

    def __init__(self, repository: TextRepository):
        self.repository = repository

    def execute(self, input_data: CreateTextInput) -> CreateTextResult:
        title = input_data.title.strip()
        if not title:
            return CreateTextResult(
                error=CommentError(
                    code=CommentErrorCode.VALIDATION_ERROR,
                    message="Title is required.",
                    resource="Text",
                )
            )
        author = (input_data.author or "").strip() or None

        existing = self.repository.find_text(title=title, author=author)
        if existing:
            self._record_access(input_data.user_id, existing)
            return CreateTextResult(text=existing, created=False)

        text = Text(
            id=uuid4(),
            title=title,
            author=author,
            isbn=input_data.isbn,
            type=input_data.type,
            edition=input_data.edition,
            url=input_data.url,
            metadata=input_data.metadata or {},
        )
        self.repository.save_text(text)
        logger.info("text created", extra={"text_id": str(text.id)})
        self._record_access(input_data.user_id, text)

        return CreateTextResult(text=text, created=True)

    def _record_access(self, user_id: Optional[str], text: Text) -> None:
        if user_id:
            self.repository.record_access(user_id=user_id, text_id=text.id)

"""
Name: Get Text Use Case

Responsibilities:
  - Retrieve a single text record by ID
"""

from uuid import UUID

from ...domain.repositories import TextRepository
from .comment_results import GetTextResult, text_not_found


class GetTextUseCase:
    """R: Fetch a text by ID."""

    def __init__(self, repository: TextRepository):
        self.repository = repository

    def execute(self, text_id: UUID) -> GetTextResult:
        text = self.repository.get_text(text_id)
        if not text:
            return GetTextResult(error=text_not_found())
        return GetTextResult(text=text)

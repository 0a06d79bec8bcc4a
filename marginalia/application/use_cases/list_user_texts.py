"""
Name: List User Texts Use Case

Responsibilities:
  - List the texts a user has opened, most recently accessed first

Collaborators:
  - domain.repositories.TextRepository
"""

from ...domain.repositories import TextRepository
from .comment_results import ListUserTextsResult


class ListUserTextsUseCase:
    """R: Return the caller's library."""

    def __init__(self, repository: TextRepository):
        self.repository = repository

    def execute(self, user_id: str) -> ListUserTextsResult:
        return ListUserTextsResult(texts=self.repository.list_user_texts(user_id))

"""
Name: Dependency Injection Container

Responsibilities:
  - Wire up repositories, the fingerprint service and use cases
  - Manage singleton instances
  - Enable dependency injection in FastAPI endpoints

Collaborators:
  - infrastructure.repositories: InMemoryTextRepository, InMemoryCommentRepository
  - anchoring.FingerprintService
  - application.use_cases
  - FastAPI Depends(): Dependency injection mechanism

Constraints:
  - Manual DI (no library like dependency-injector)
  - Singletons via functools.lru_cache

Notes:
  - This is the composition root (where dependencies are wired)
  - Tests override these providers through app.dependency_overrides
"""

from functools import lru_cache

from .anchoring import FingerprintService
from .application.use_cases import (
    CreateCommentUseCase,
    CreateTextUseCase,
    DeleteCommentUseCase,
    GetTextUseCase,
    ListCommentsUseCase,
    ListUserTextsUseCase,
    RelocateCommentsUseCase,
)
from .config import get_settings
from .domain.repositories import CommentRepository, TextRepository
from .infrastructure.repositories import (
    InMemoryCommentRepository,
    InMemoryTextRepository,
)


@lru_cache
def get_text_repository() -> TextRepository:
    """R: Get singleton instance of the text repository."""
    return InMemoryTextRepository()


@lru_cache
def get_comment_repository() -> CommentRepository:
    """R: Get singleton instance of the comment repository."""
    return InMemoryCommentRepository()


@lru_cache
def get_fingerprint_service() -> FingerprintService:
    """
    R: Get singleton fingerprint service configured from Settings.

    Returns:
        FingerprintService (stateless, shared across threads)
    """
    settings = get_settings()
    return FingerprintService(
        context_length=settings.anchor_context_length,
        snippet_length=settings.anchor_snippet_length,
        match_timeout_seconds=settings.match_timeout,
        fuzzy_enabled=settings.fuzzy_matching_enabled,
        fuzzy_min_ratio=settings.fuzzy_min_ratio,
    )


def get_create_text_use_case() -> CreateTextUseCase:
    return CreateTextUseCase(repository=get_text_repository())


def get_get_text_use_case() -> GetTextUseCase:
    return GetTextUseCase(repository=get_text_repository())


def get_list_user_texts_use_case() -> ListUserTextsUseCase:
    return ListUserTextsUseCase(repository=get_text_repository())


def get_create_comment_use_case() -> CreateCommentUseCase:
    return CreateCommentUseCase(
        comment_repository=get_comment_repository(),
        text_repository=get_text_repository(),
        fingerprint_service=get_fingerprint_service(),
    )


def get_list_comments_use_case() -> ListCommentsUseCase:
    return ListCommentsUseCase(
        comment_repository=get_comment_repository(),
        text_repository=get_text_repository(),
    )


def get_delete_comment_use_case() -> DeleteCommentUseCase:
    return DeleteCommentUseCase(repository=get_comment_repository())


def get_relocate_comments_use_case() -> RelocateCommentsUseCase:
    return RelocateCommentsUseCase(
        comment_repository=get_comment_repository(),
        text_repository=get_text_repository(),
        fingerprint_service=get_fingerprint_service(),
    )

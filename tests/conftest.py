"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Provide reusable test fixtures
  - Isolate settings and container singletons between tests
  - Provide an HTTP client with fresh in-memory repositories

Collaborators:
  - pytest: Test framework
  - unittest.mock: Mocking library
  - marginalia.domain: Domain entities and protocols

Notes:
  - Fixtures are auto-discovered by pytest
  - A local .env is never read during tests
"""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from marginalia import config as app_config

app_config.Settings.model_config["env_file"] = None

from marginalia import container  # noqa: E402
from marginalia.anchoring import FingerprintService  # noqa: E402
from marginalia.domain.entities import Comment, Text  # noqa: E402
from marginalia.domain.repositories import (  # noqa: E402
    CommentRepository,
    TextRepository,
)
from marginalia.infrastructure.repositories import (  # noqa: E402
    InMemoryCommentRepository,
    InMemoryTextRepository,
)

FOX = "The quick brown fox jumps over the lazy dog."


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def reset_singletons():
    """R: Clear cached settings and container singletons around each test."""
    _clear_caches()
    yield
    _clear_caches()


def _clear_caches() -> None:
    app_config.get_settings.cache_clear()
    container.get_text_repository.cache_clear()
    container.get_comment_repository.cache_clear()
    container.get_fingerprint_service.cache_clear()


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def fox_text() -> str:
    return FOX


@pytest.fixture
def sample_text() -> Text:
    """R: Create a sample text for testing."""
    return Text(id=uuid4(), title="Moby Dick", author="Herman Melville")


@pytest.fixture
def make_comment():
    """R: Factory for comments anchored to a text."""

    def _make(text_id, **overrides) -> Comment:
        values = dict(
            id=uuid4(),
            text_id=text_id,
            user_id="user-1",
            selected_text="brown",
            context_before="quick ",
            context_after=" fox",
            fingerprint="0" * 64,
            comment_text="Nice colour.",
            character_offset=12,
        )
        values.update(overrides)
        return Comment(**values)

    return _make


# ============================================================================
# Service and Repository Fixtures
# ============================================================================


@pytest.fixture
def fingerprint_service() -> FingerprintService:
    return FingerprintService()


@pytest.fixture
def text_repository() -> InMemoryTextRepository:
    return InMemoryTextRepository()


@pytest.fixture
def comment_repository() -> InMemoryCommentRepository:
    return InMemoryCommentRepository()


@pytest.fixture
def mock_text_repository() -> Mock:
    """R: Mock TextRepository for isolated use case tests."""
    return Mock(spec=TextRepository)


@pytest.fixture
def mock_comment_repository() -> Mock:
    """R: Mock CommentRepository for isolated use case tests."""
    return Mock(spec=CommentRepository)


# ============================================================================
# HTTP Fixtures
# ============================================================================


@pytest.fixture
def client():
    """R: TestClient over the app with fresh in-memory repositories."""
    from fastapi.testclient import TestClient

    from marginalia.main import app

    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    return {"X-User-Id": "user-1"}

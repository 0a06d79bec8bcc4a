"""
Unit tests for the in-memory text and comment repositories.
"""

from uuid import uuid4

import pytest

from marginalia.domain.entities import Text

pytestmark = pytest.mark.unit


class TestInMemoryTextRepository:
    def test_save_and_get(self, text_repository, sample_text):
        text_repository.save_text(sample_text)

        assert text_repository.get_text(sample_text.id) is sample_text
        assert text_repository.get_text(uuid4()) is None

    def test_find_by_title_and_author(self, text_repository):
        anonymous = Text(id=uuid4(), title="Beowulf")
        attributed = Text(id=uuid4(), title="Beowulf", author="Heaney")
        text_repository.save_text(anonymous)
        text_repository.save_text(attributed)

        assert text_repository.find_text(title="Beowulf", author=None) is anonymous
        assert text_repository.find_text(title="Beowulf", author="Heaney") is attributed
        assert text_repository.find_text(title="Grendel", author=None) is None

    def test_library_lists_most_recently_accessed_first(self, text_repository):
        first = Text(id=uuid4(), title="Emma")
        second = Text(id=uuid4(), title="Persuasion")
        text_repository.save_text(first)
        text_repository.save_text(second)

        text_repository.record_access(user_id="user-1", text_id=first.id)
        text_repository.record_access(user_id="user-1", text_id=second.id)
        assert text_repository.list_user_texts("user-1") == [second, first]

        text_repository.record_access(user_id="user-1", text_id=first.id)
        assert text_repository.list_user_texts("user-1") == [first, second]

    def test_library_is_per_user(self, text_repository, sample_text):
        text_repository.save_text(sample_text)
        text_repository.record_access(user_id="user-1", text_id=sample_text.id)

        assert text_repository.list_user_texts("user-1") == [sample_text]
        assert text_repository.list_user_texts("user-2") == []

    def test_library_skips_unknown_texts(self, text_repository):
        text_repository.record_access(user_id="user-1", text_id=uuid4())

        assert text_repository.list_user_texts("user-1") == []


class TestInMemoryCommentRepository:
    def test_save_sets_created_at(self, comment_repository, make_comment):
        comment = make_comment(uuid4())
        comment_repository.save_comment(comment)

        assert comment.created_at is not None
        assert comment_repository.get_comment(comment.id) is comment

    def test_list_includes_private_when_requested(self, comment_repository, make_comment):
        text_id = uuid4()
        private = make_comment(text_id, is_public=False)
        comment_repository.save_comment(private)

        assert comment_repository.list_comments(text_id) == []
        assert comment_repository.list_comments(text_id, public_only=False) == [private]

    def test_delete_returns_whether_removed(self, comment_repository, make_comment):
        comment = make_comment(uuid4())
        comment_repository.save_comment(comment)

        assert comment_repository.delete_comment(comment.id) is True
        assert comment_repository.delete_comment(comment.id) is False

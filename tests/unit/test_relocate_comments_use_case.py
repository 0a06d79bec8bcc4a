"""
Name: Relocate Comments Use Case Tests

Responsibilities:
  - Verify per-comment relocation outcomes (exact, fuzzy, not found)
  - Verify timeouts mark a single comment as aborted
  - Verify cancellation aborts the whole batch
"""

import threading
from unittest.mock import Mock
from uuid import uuid4

import pytest

from marginalia.anchoring import FingerprintService
from marginalia.application.use_cases import (
    CommentErrorCode,
    RelocateCommentsInput,
    RelocateCommentsUseCase,
)
from marginalia.domain.entities import MatchType, TextMatch
from marginalia.exceptions import MatchCancelledError, MatchTimeoutError

pytestmark = pytest.mark.unit

FOX = "The quick brown fox jumps over the lazy dog."


def _anchored_comment(make_comment, service, text_id, document, start, end, **kw):
    anchor = service.create_anchor(document, start, end, context_length=6)
    return make_comment(
        text_id,
        selected_text=anchor.selected_text,
        context_before=anchor.context_before,
        context_after=anchor.context_after,
        fingerprint=anchor.fingerprint,
        character_offset=(start + end) // 2,
        **kw,
    )


@pytest.fixture
def stored_text(text_repository, sample_text):
    text_repository.save_text(sample_text)
    return sample_text


class TestRelocateComments:
    def test_unknown_text_is_not_found(self, comment_repository, text_repository):
        use_case = RelocateCommentsUseCase(
            comment_repository, text_repository, FingerprintService()
        )

        result = use_case.execute(RelocateCommentsInput(text_id=uuid4(), document_text=FOX))

        assert result.error.code == CommentErrorCode.NOT_FOUND

    def test_exact_window_match(
        self, comment_repository, text_repository, stored_text, make_comment
    ):
        service = FingerprintService(snippet_length=5)
        comment = make_comment(
            stored_text.id,
            selected_text=FOX[0:15],
            context_before="",
            context_after="",
            fingerprint=service.fingerprint(FOX[0:15], "", ""),
        )
        comment_repository.save_comment(comment)

        result = RelocateCommentsUseCase(
            comment_repository, text_repository, service
        ).execute(RelocateCommentsInput(text_id=stored_text.id, document_text=FOX))

        (relocation,) = result.relocations
        assert relocation.comment_id == comment.id
        assert relocation.found is True
        assert relocation.match == TextMatch(0, 1.0, MatchType.EXACT)

    def test_unrecovered_anchor_reports_not_found(
        self, comment_repository, text_repository, stored_text, make_comment
    ):
        service = FingerprintService()
        comment = _anchored_comment(make_comment, service, stored_text.id, FOX, 10, 15)
        comment_repository.save_comment(comment)

        result = RelocateCommentsUseCase(
            comment_repository, text_repository, service
        ).execute(
            RelocateCommentsInput(text_id=stored_text.id, document_text="Other text.")
        )

        (relocation,) = result.relocations
        assert relocation.found is False
        assert relocation.aborted is False

    def test_fuzzy_fallback_after_reflow(
        self, comment_repository, text_repository, stored_text, make_comment
    ):
        service = FingerprintService(fuzzy_enabled=True)
        brown = _anchored_comment(make_comment, service, stored_text.id, FOX, 10, 15)
        lazy = _anchored_comment(make_comment, service, stored_text.id, FOX, 35, 39)
        comment_repository.save_comment(brown)
        comment_repository.save_comment(lazy)
        new_text = "Preface.\n\nThe quick  brown fox jumps over the lazy dog."

        result = RelocateCommentsUseCase(
            comment_repository, text_repository, service
        ).execute(RelocateCommentsInput(text_id=stored_text.id, document_text=new_text))

        positions = {r.comment_id: r.match.position for r in result.relocations}
        assert positions[brown.id] == new_text.index("brown")
        assert positions[lazy.id] == new_text.index("lazy")
        assert all(r.match.match_type == MatchType.FUZZY for r in result.relocations)

    def test_private_comments_are_skipped(
        self, comment_repository, text_repository, stored_text, make_comment
    ):
        comment_repository.save_comment(make_comment(stored_text.id, is_public=False))

        result = RelocateCommentsUseCase(
            comment_repository, text_repository, FingerprintService()
        ).execute(RelocateCommentsInput(text_id=stored_text.id, document_text=FOX))

        assert result.relocations == []


class TestAbortedRelocation:
    def test_timeout_marks_comment_aborted_and_continues(
        self, comment_repository, text_repository, stored_text, make_comment
    ):
        first = make_comment(stored_text.id, character_offset=1)
        second = make_comment(stored_text.id, character_offset=2)
        comment_repository.save_comment(first)
        comment_repository.save_comment(second)

        service = Mock(spec=FingerprintService)
        service.relocate.side_effect = [
            MatchTimeoutError("timed out", scanned_positions=512),
            TextMatch(position=7),
        ]

        result = RelocateCommentsUseCase(
            comment_repository, text_repository, service
        ).execute(RelocateCommentsInput(text_id=stored_text.id, document_text=FOX))

        aborted, found = result.relocations
        assert aborted.comment_id == first.id
        assert aborted.aborted is True
        assert aborted.found is False
        assert found.match.position == 7

    def test_cancel_propagates(
        self, comment_repository, text_repository, stored_text, make_comment
    ):
        comment_repository.save_comment(make_comment(stored_text.id))
        event = threading.Event()
        event.set()

        use_case = RelocateCommentsUseCase(
            comment_repository, text_repository, FingerprintService(snippet_length=5)
        )

        with pytest.raises(MatchCancelledError):
            use_case.execute(
                RelocateCommentsInput(
                    text_id=stored_text.id, document_text=FOX, cancel_event=event
                )
            )

    def test_passes_stored_fingerprint_and_cancel_event(
        self, comment_repository, text_repository, stored_text, make_comment
    ):
        comment = make_comment(stored_text.id, fingerprint="a" * 64)
        comment_repository.save_comment(comment)
        service = Mock(spec=FingerprintService)
        service.relocate.return_value = None
        event = threading.Event()

        RelocateCommentsUseCase(comment_repository, text_repository, service).execute(
            RelocateCommentsInput(
                text_id=stored_text.id, document_text=FOX, cancel_event=event
            )
        )

        service.relocate.assert_called_once_with(
            comment.content, FOX, fingerprint_hex="a" * 64, cancel_event=event
        )

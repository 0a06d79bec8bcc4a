"""
Name: Relocate Comments Use Case

Responsibilities:
  - Re-anchor every public comment of a text against its current body
  - Report, per comment, the recovered position or the unanchored state
  - Record relocation outcome metrics and log unrecovered anchors

Collaborators:
  - domain/repositories.CommentRepository, TextRepository
  - anchoring.FingerprintService: exact scan (+ optional fallback)
  - metrics.record_relocation_metrics
  - timing.ScanTimer

Constraints:
  - CPU-bound: callers inside an event loop must run it in a worker thread
  - A timed-out anchor is reported as aborted; the batch continues
  - A cancelled batch propagates MatchCancelledError to the caller

Notes:
  - Relocation never mutates comments (anchors are immutable)
"""

import threading
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from ...anchoring import FingerprintService
from ...domain.entities import Comment
from ...domain.repositories import CommentRepository, TextRepository
from ...exceptions import MatchTimeoutError
from ...logger import logger
from ...metrics import record_relocation_metrics
from ...timing import ScanTimer
from .comment_results import (
    CommentRelocation,
    RelocateCommentsResult,
    text_not_found,
)


@dataclass
class RelocateCommentsInput:
    text_id: UUID
    document_text: str
    cancel_event: Optional[threading.Event] = None


class RelocateCommentsUseCase:
    """
    R: Use case for re-anchoring stored comments in a re-extracted text.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        text_repository: TextRepository,
        fingerprint_service: FingerprintService,
    ):
        self.comment_repository = comment_repository
        self.text_repository = text_repository
        self.fingerprint_service = fingerprint_service

    def execute(self, input_data: RelocateCommentsInput) -> RelocateCommentsResult:
        if not self.text_repository.get_text(input_data.text_id):
            return RelocateCommentsResult(error=text_not_found())

        comments = self.comment_repository.list_comments(
            input_data.text_id, public_only=True
        )

        relocations: list[CommentRelocation] = []
        with ScanTimer() as batch_timer:
            for comment in comments:
                relocations.append(self._relocate_one(comment, input_data))

        unresolved = sum(1 for r in relocations if not r.found)
        logger.info(
            "comments relocated",
            extra={
                "text_id": str(input_data.text_id),
                "comments": len(relocations),
                "unresolved": unresolved,
                "document_chars": len(input_data.document_text),
                "latency_ms": batch_timer.elapsed_ms,
            },
        )
        return RelocateCommentsResult(relocations=relocations)

    def _relocate_one(
        self, comment: Comment, input_data: RelocateCommentsInput
    ) -> CommentRelocation:
        timer = ScanTimer().start()
        try:
            match = self.fingerprint_service.relocate(
                comment.content,
                input_data.document_text,
                fingerprint_hex=comment.fingerprint,
                cancel_event=input_data.cancel_event,
            )
        except MatchTimeoutError as exc:
            record_relocation_metrics("aborted", timer.stop())
            logger.warning(
                "anchor relocation timed out",
                extra={
                    "comment_id": str(comment.id),
                    "error_id": exc.error_id,
                    "scanned_positions": exc.scanned_positions,
                },
            )
            return CommentRelocation(comment_id=comment.id, aborted=True)

        elapsed = timer.stop()
        outcome = match.match_type.value if match else "not_found"
        record_relocation_metrics(outcome, elapsed)

        if match is None:
            logger.info(
                "anchor not recovered",
                extra={"comment_id": str(comment.id), "fingerprint": comment.fingerprint},
            )
        return CommentRelocation(comment_id=comment.id, match=match)

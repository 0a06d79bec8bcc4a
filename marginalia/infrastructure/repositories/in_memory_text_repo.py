"""
Name: In-Memory Text Repository

Responsibilities:
  - Store text records in memory
  - Look texts up by (title, author)
  - Keep each user's library of accessed texts

Constraints:
  - Thread-safe: every access happens under a Lock
  - Data is lost on restart

Notes:
  - Library dicts keep insertion order; re-accessing moves a text to the end
"""

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ...domain.entities import Text


class InMemoryTextRepository:
    """R: In-memory implementation of TextRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._texts: Dict[UUID, Text] = {}
        # R: user_id -> {text_id: last accessed (UTC)}, oldest access first
        self._libraries: Dict[str, Dict[UUID, datetime]] = {}

    def save_text(self, text: Text) -> None:
        if text.created_at is None:
            text.created_at = datetime.now(timezone.utc)
        with self._lock:
            self._texts[text.id] = text

    def get_text(self, text_id: UUID) -> Optional[Text]:
        with self._lock:
            return self._texts.get(text_id)

    def find_text(self, *, title: str, author: Optional[str]) -> Optional[Text]:
        with self._lock:
            for text in self._texts.values():
                if text.title == title and text.author == author:
                    return text
        return None

    def record_access(self, *, user_id: str, text_id: UUID) -> None:
        with self._lock:
            library = self._libraries.setdefault(user_id, {})
            library.pop(text_id, None)
            library[text_id] = datetime.now(timezone.utc)

    def list_user_texts(self, user_id: str) -> List[Text]:
        with self._lock:
            library = self._libraries.get(user_id, {})
            return [
                self._texts[text_id]
                for text_id in reversed(library)
                if text_id in self._texts
            ]

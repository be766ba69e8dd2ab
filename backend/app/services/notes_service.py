import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from app.exceptions import NotFoundError
from app.services.validation import parse_create, parse_update
from app.storage.notes_store import Note, NotesStore, utc_iso, utc_now_iso

logger = logging.getLogger(__name__)


def _next_timestamp(previous: str) -> str:
    # updatedAt must move forward even when two writes land in the same clock tick
    now = datetime.now(timezone.utc)
    try:
        prev = datetime.fromisoformat(previous.replace("Z", "+00:00"))
    except ValueError:
        return utc_iso(now)
    if prev.tzinfo is None:
        prev = prev.replace(tzinfo=timezone.utc)
    if now <= prev:
        now = prev + timedelta(microseconds=1)
    return utc_iso(now)


class NoteService:
    """Validated CRUD over the cached note collection.

    The cache is loaded from the store once, at construction. Every mutation
    rewrites the whole store document while holding ``_lock``, so concurrent
    requests cannot interleave cache changes and file writes.
    """

    def __init__(self, store: NotesStore):
        self.store = store
        self._lock = threading.Lock()
        self._notes: list[Note] = store.load()

    def list_notes(self) -> list[Note]:
        return list(self._notes)

    def get_note(self, note_id: str) -> Optional[Note]:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def create_note(self, payload: Any) -> Note:
        draft = parse_create(payload)
        now = utc_now_iso()
        note = Note(
            id=str(uuid.uuid4()),
            title=draft.title,
            content=draft.content,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._notes.append(note)
            self.store.save(self._notes)
        logger.info("Created note %s", note.id)
        return note

    def update_note(self, note_id: str, payload: Any) -> Note:
        with self._lock:
            note = self.get_note(note_id)
            if note is None:
                raise NotFoundError(note_id)

            patch = parse_update(payload)
            if patch.title is not None:
                note.title = patch.title
            if patch.content is not None:
                note.content = patch.content
            note.updated_at = _next_timestamp(note.updated_at)
            self.store.save(self._notes)
        logger.info("Updated note %s", note_id)
        return note

    def delete_note(self, note_id: str) -> bool:
        with self._lock:
            remaining = [n for n in self._notes if n.id != note_id]
            if len(remaining) == len(self._notes):
                return False
            self._notes = remaining
            self.store.save(self._notes)
        logger.info("Deleted note %s", note_id)
        return True

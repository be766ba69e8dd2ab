import json
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

NOTE_FIELDS = ("id", "title", "content", "createdAt", "updatedAt")

SEED_NOTES = (
    (
        "Welcome to Simple Notes",
        "This is your first note. You can create, view, edit, and delete notes.",
    ),
    (
        "Ocean Professional Theme",
        "API follows a clean, modern, documented style with blue and amber accents.",
    ),
)


def utc_iso(moment: datetime) -> str:
    # fixed width so stamps compare in order as strings
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def utc_now_iso() -> str:
    return utc_iso(datetime.now(timezone.utc))


def _atomic_write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


@dataclass
class Note:
    id: str
    title: str
    content: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Note":
        if not isinstance(raw, dict):
            raise ValueError("note must be a JSON object")
        for field in NOTE_FIELDS:
            if not isinstance(raw.get(field), str):
                raise ValueError(f"note field {field!r} must be a string")
        return cls(
            id=raw["id"],
            title=raw["title"],
            content=raw["content"],
            created_at=raw["createdAt"],
            updated_at=raw["updatedAt"],
        )


def seed_notes() -> list[Note]:
    now = utc_now_iso()
    return [
        Note(id=str(uuid.uuid4()), title=title, content=content, created_at=now, updated_at=now)
        for title, content in SEED_NOTES
    ]


class NotesStore:
    """The whole note collection as one JSON array in ``<base_dir>/<file_name>``."""

    def __init__(self, base_dir: Path, file_name: str = "notes.json"):
        self.base_dir = base_dir
        self.path = base_dir / file_name

    def load(self) -> list[Note]:
        if not self.path.exists():
            notes = seed_notes()
            self.save(notes)
            logger.info("Seeded %d notes into %s", len(notes), self.path)
            return notes

        try:
            # utf-8-sig also accepts files an editor saved with a BOM
            raw = json.loads(self.path.read_text(encoding="utf-8-sig"))
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            logger.warning("Notes file %s is not valid JSON (%s); starting with no notes", self.path, exc)
            return []

        if not isinstance(raw, list):
            logger.warning(
                "Notes file %s holds a %s instead of a list; starting with no notes",
                self.path,
                type(raw).__name__,
            )
            return []

        try:
            notes = [Note.from_dict(item) for item in raw]
        except ValueError as exc:
            logger.warning("Notes file %s has a malformed note (%s); starting with no notes", self.path, exc)
            return []

        ids = {n.id for n in notes}
        if len(ids) != len(notes):
            logger.warning("Notes file %s has duplicate note ids; starting with no notes", self.path)
            return []

        return notes

    def save(self, notes: list[Note]) -> None:
        _atomic_write_json(self.path, [n.to_dict() for n in notes])

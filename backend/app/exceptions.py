"""Typed errors raised by the notes service.

The service never knows about HTTP; app.main maps these to status codes:

    NotesError (base)
    ├── ValidationError  -> 400
    └── NotFoundError    -> 404
"""
from __future__ import annotations

from typing import Iterable


class NotesError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(NotesError):
    """One or more input rules failed; ``messages`` keeps them in rule order."""

    def __init__(self, messages: Iterable[str], message: str = "Validation failed"):
        self.messages = list(messages)
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message}: {'; '.join(self.messages)}"


class NotFoundError(NotesError):
    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__("Note not found")

"""Payload validation for note create/update.

Both parsers collect every failed rule before raising, so a client sees all
problems with its payload at once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from app.exceptions import ValidationError

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 10_000

MSG_BODY_NOT_OBJECT = "Body must be a JSON object."
MSG_TITLE_REQUIRED = "title is required and must be a non-empty string."
MSG_TITLE_TOO_LONG = f"title must be <= {TITLE_MAX_LENGTH} characters."
MSG_CONTENT_REQUIRED = "content is required and must be a string."
MSG_CONTENT_TOO_LONG = f"content must be <= {CONTENT_MAX_LENGTH} characters."


@dataclass(frozen=True)
class NoteDraft:
    title: str
    content: str


@dataclass(frozen=True)
class NotePatch:
    # None = field absent from the payload
    title: Optional[str] = None
    content: Optional[str] = None


def _title_errors(value: Any) -> list[str]:
    if not isinstance(value, str) or not value.strip():
        return [MSG_TITLE_REQUIRED]
    if len(value) > TITLE_MAX_LENGTH:
        return [MSG_TITLE_TOO_LONG]
    return []


def _content_errors(value: Any) -> list[str]:
    if not isinstance(value, str):
        return [MSG_CONTENT_REQUIRED]
    if len(value) > CONTENT_MAX_LENGTH:
        return [MSG_CONTENT_TOO_LONG]
    return []


def parse_create(payload: Any) -> NoteDraft:
    if not isinstance(payload, dict):
        raise ValidationError([MSG_BODY_NOT_OBJECT])

    errors = _title_errors(payload.get("title")) + _content_errors(payload.get("content"))
    if errors:
        raise ValidationError(errors)

    return NoteDraft(title=payload["title"].strip(), content=payload["content"])


def parse_update(payload: Any) -> NotePatch:
    """Validate only the fields present in ``payload``; absent ones stay None."""
    if not isinstance(payload, dict):
        raise ValidationError([MSG_BODY_NOT_OBJECT])

    errors: list[str] = []
    if "title" in payload:
        errors += _title_errors(payload["title"])
    if "content" in payload:
        errors += _content_errors(payload["content"])
    if errors:
        raise ValidationError(errors)

    title = payload.get("title")
    return NotePatch(
        title=title.strip() if title is not None else None,
        content=payload.get("content"),
    )

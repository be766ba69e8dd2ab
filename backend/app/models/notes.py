from typing import Literal, Optional

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    """Request body for POST /notes (documentation only; rules are enforced by the service)."""

    title: str = Field(max_length=200, description="Note title, trimmed on save")
    content: str = Field(max_length=10_000, description="Note body")


class NoteUpdate(BaseModel):
    """Request body for PUT /notes/{id}; only the fields sent are changed."""

    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, max_length=10_000)


class NoteOut(BaseModel):
    id: str
    title: str
    content: str
    createdAt: str
    updatedAt: str


class NoteEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: NoteOut


class NoteListEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: list[NoteOut]


class ErrorEnvelope(BaseModel):
    status: Literal["error"] = "error"
    message: str
    errors: Optional[list[str]] = None

"""Note schemas for API request/response."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from src.research_notes.schemas.fields import (
    ActiveTab,
    NoteContent,
    NoteTitle,
    TabName,
    reject_null,
)


class NoteTab(BaseModel):
    """One named section of a note.

    Strict so that stored tabs come back exactly as they were sent:
    no "1" -> 1 or True -> 1 coercion, no extra keys.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    content: str
    order: int
    created_at: str


class _NoteFields(BaseModel):
    content: NoteContent = None
    tabs: dict[TabName, NoteTab] | None = None
    active_tab: ActiveTab = None
    default_tabs: list[TabName] | None = None

    @field_validator("tabs")
    @classmethod
    def validate_tabs(cls, v: dict[str, NoteTab] | None) -> dict[str, NoteTab] | None:
        if not v:
            return None
        return v

    @field_validator("default_tabs")
    @classmethod
    def validate_default_tabs(cls, v: list[str] | None) -> list[str] | None:
        if not v:
            return None
        if len(set(v)) != len(v):
            raise ValueError("Default tab names must be unique")
        return v

    def to_row(self) -> dict[str, Any]:
        """Return the fields present in the request, ready to store."""
        return self.model_dump(exclude_unset=True)


class NoteCreate(_NoteFields):
    """Schema for creating a note in a project."""

    title: NoteTitle


class NoteUpdate(_NoteFields):
    """Schema for updating a note. Only fields present in the body are applied."""

    title: NoteTitle | None = None

    check_title_not_null = field_validator("title", mode="before")(reject_null("Note title"))


class NoteRead(BaseModel):
    """Schema for reading a note.

    `tabs` is returned as stored, without re-validation.
    """

    id: UUID
    project_id: UUID
    title: str
    content: str | None
    tabs: dict[str, Any] | None
    active_tab: str | None
    default_tabs: list[str] | None
    display_order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class NoteResponse(BaseModel):
    note: NoteRead


class NoteListResponse(BaseModel):
    notes: list[NoteRead]


# Range of the 32-bit INTEGER display_order column.
DISPLAY_ORDER_MIN = -(2**31)
DISPLAY_ORDER_MAX = 2**31 - 1


class NoteOrder(BaseModel):
    """One (id, order) pair of a reorder request."""

    id: UUID
    order: StrictInt = Field(ge=DISPLAY_ORDER_MIN, le=DISPLAY_ORDER_MAX)


class NoteReorderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    note_orders: list[NoteOrder] = Field(alias="noteOrders", min_length=1)


class NoteReorderResponse(BaseModel):
    message: str
    updated: int

"""Note model - titled content belonging to one project."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, ForeignKey, Index, Uuid
from sqlmodel import Field, SQLModel

from src.research_notes.models.base import utc_now


class Note(SQLModel, table=True):
    """Note entity.

    `tabs` is stored as JSON exactly as received so that it round-trips
    unchanged: {tab_name: {"content": str, "order": int, "created_at": str}}.
    """

    __tablename__ = "notes"
    __table_args__ = (Index("ix_notes_project_id_display_order", "project_id", "display_order"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(
        sa_column=Column(
            Uuid(),
            ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    title: str = Field(max_length=200)
    content: str | None = Field(default=None)
    tabs: dict[str, Any] | None = Field(default=None, sa_type=JSON)
    active_tab: str | None = Field(default=None, max_length=100)
    default_tabs: list[str] | None = Field(default=None, sa_type=JSON)
    display_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.research_notes.schemas.fields import ProjectDescription, ProjectName, reject_null


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: ProjectName
    description: ProjectDescription = None


class ProjectUpdate(BaseModel):
    """Schema for updating a project.

    Only fields present in the request body are applied.
    """

    name: ProjectName | None = None
    description: ProjectDescription = None

    check_name_not_null = field_validator("name", mode="before")(reject_null("Project name"))


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectResponse(BaseModel):
    project: ProjectRead


class ProjectListResponse(BaseModel):
    projects: list[ProjectRead]

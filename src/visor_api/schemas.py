from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ValidationError


def _text_or_empty(value: Any) -> str:
    """Non-string values count as missing."""
    return value if isinstance(value, str) else ""


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


# PUBLIC_INTERFACE
class ProjectCreate(BaseModel):
    """
    Payload for creating a project. Both fields are required and non-empty.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Work", "slug": "work"}}
    )

    name: str = Field(default="", description="Display name of the project")
    slug: str = Field(default="", description="Unique human-facing identifier")

    @field_validator("name", "slug", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _text_or_empty(v)

    def require(self) -> "ProjectCreate":
        if not self.name or not self.slug:
            raise ValidationError("name and slug required")
        return self


class _ContentPayload(BaseModel):
    content: str = Field(default="", description="Text of the item; must not be empty")
    project: Optional[str] = Field(
        default=None,
        description="Slug of the owning project; unmatched or missing slugs file the item in the inbox",
    )

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, v: Any) -> str:
        return _text_or_empty(v)

    @field_validator("project", mode="before")
    @classmethod
    def coerce_project(cls, v: Any) -> Optional[str]:
        return _text_or_none(v)

    def require(self) -> "_ContentPayload":
        if not self.content:
            raise ValidationError("content required")
        return self


# PUBLIC_INTERFACE
class TaskCreate(_ContentPayload):
    """Payload for creating a task."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"content": "write spec", "project": "work"}}
    )


# PUBLIC_INTERFACE
class LogEntryCreate(_ContentPayload):
    """Payload for appending a log entry."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"content": "shipped the release", "project": "work"}}
    )


# PUBLIC_INTERFACE
class StatusSummary(BaseModel):
    """Counts returned by GET /api/status."""

    tasks: int = Field(..., description="Number of tasks")
    projects: int = Field(..., description="Number of projects")
    pending: int = Field(..., description="Tasks neither archived nor completed")


def parse_payload(model: type, body: Dict[str, Any]):
    """Build a request payload from an already-decoded JSON object."""
    return model.model_validate(body).require()

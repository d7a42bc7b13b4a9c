"""Unified business models shared by the task store, the API and the client.

Request bodies (``TaskCreate``, ``TaskUpdate``) and the response shape
(``TaskRead``) are plain Pydantic models; the persistence entity lives in
``schemas.database``.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


# ============================================================================
# UNIFIED CONFIGURATION
# ============================================================================


class UnifiedConfig:
    """Centralized configuration for all business models."""

    PYDANTIC_CONFIG = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        serialize_by_alias=True,
        populate_by_name=True,
        frozen=False,
        from_attributes=True,
    )


# ============================================================================
# BASE MODELS
# ============================================================================


class BaseBusinessModel(BaseModel):
    """Base for pure business logic models."""

    model_config = UnifiedConfig.PYDANTIC_CONFIG


# ============================================================================
# TASK MODELS
# ============================================================================


class TaskCreate(BaseBusinessModel):
    """Body of a create request.

    The title is trimmed before the length check, so a whitespace-only title
    fails the same way an empty one does.
    """

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        """Trim surrounding whitespace from the title."""
        return v.strip() if isinstance(v, str) else v


class TaskUpdate(BaseBusinessModel):
    """Body of an update request.

    Only ``completed`` is mutable; any other key is rejected. The key may be
    left out, but an explicit null is not a boolean.
    """

    completed: bool | None = None

    @field_validator("completed")
    @classmethod
    def reject_null(cls, v: bool | None) -> bool:
        """Defaults skip validation, so this only sees values that were sent."""
        if v is None:
            raise ValueError("completed must be true or false")
        return v

    def has_changes(self) -> bool:
        """Whether the patch sets anything at all."""
        return bool(self.model_fields_set)


class TaskRead(BaseBusinessModel):
    """Task as returned by the API."""

    id: int = Field(..., gt=0)
    title: str
    description: str | None = None
    completed: bool = False
    created_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """SQLite drops tzinfo; stored timestamps are always UTC."""
        return v.replace(tzinfo=UTC) if v.tzinfo is None else v.astimezone(UTC)

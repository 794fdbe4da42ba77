"""Settings schemas for API request/response validation."""

from typing import Any

from pydantic import BaseModel, Field


class SettingsScopeQuerySchema(BaseModel):
    """Query parameters selecting the target scope of a settings request."""

    target_type: str | None = Field(
        None,
        min_length=1,
        max_length=255,
        description="Owning entity type (omit for global settings)",
        examples=["User"],
    )
    target_id: int | None = Field(
        None,
        description="Owning entity id (omit for global settings)",
        examples=[42],
    )


class SettingsListQuerySchema(SettingsScopeQuerySchema):
    """Query parameters for listing settings."""

    prefix: str | None = Field(
        None,
        description="Only return settings whose names start with this prefix",
        examples=["user_"],
    )


class SettingWriteSchema(BaseModel):
    """Request schema for writing or merging a single setting."""

    value: Any = Field(
        ...,
        description="JSON value to store (a mapping when merging)",
        examples=["dark", {"per_page": 25}],
    )


class SettingsBulkWriteSchema(BaseModel):
    """Request schema for writing several settings at once."""

    settings: dict[str, Any] = Field(
        ...,
        description="Mapping of setting name to value",
    )


class SettingResponseSchema(BaseModel):
    """Response schema for a single setting."""

    name: str = Field(..., description="Setting name")
    value: Any = Field(None, description="Stored value, default, or null")


class SettingsListResponseSchema(BaseModel):
    """Response schema for a bulk settings read."""

    settings: dict[str, Any] = Field(..., description="Mapping of setting name to value")
    count: int = Field(..., description="Number of settings returned")

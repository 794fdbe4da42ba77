"""Role type schemas for API responses."""

from pydantic import BaseModel, Field


class RoleTypeSchema(BaseModel):
    """A single role type with its translated title."""

    id: int = Field(..., description="Role id", examples=[4])
    code: str = Field(..., description="Symbolic role code", examples=["admin"])
    title: str = Field(..., description="Translated role label", examples=["Administrator"])


class RoleTypeListResponseSchema(BaseModel):
    """Response schema for listing role types."""

    roles: list[RoleTypeSchema] = Field(..., description="Role types in id order")
    count: int = Field(..., description="Number of role types")

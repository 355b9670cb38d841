from typing import Any, Optional
from datetime import datetime
from pydantic import Field, field_validator

from app.schemas.base import CamelModel


class RoleCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    authorized_menu: Any = Field(...)

    @field_validator("authorized_menu")
    def validate_authorized_menu(cls, v):
        if v is None:
            raise ValueError("authorizedMenu is required")
        return v


class RoleUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    authorized_menu: Optional[Any] = None


class RoleResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    authorized_menu: Any = None
    status: str
    created_at: datetime
    updated_at: datetime


class RoleSummary(CamelModel):
    """Role as embedded in member payloads, without the menu grant."""
    id: int
    name: str
    description: Optional[str] = None
    status: str

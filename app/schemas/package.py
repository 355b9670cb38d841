from typing import List, Optional
from datetime import datetime
from pydantic import Field

from app.schemas.base import CamelModel


class PackageCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    selected_menu: List[int] = Field(default_factory=list)


class PackageUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    selected_menu: Optional[List[int]] = None


class PackageResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    selected_menu: Optional[List[int]] = None
    status: str
    created_at: datetime
    updated_at: datetime

from typing import Any, Optional
from datetime import datetime
from pydantic import Field

from app.schemas.base import CamelModel


class MenuBase(CamelModel):
    description: Optional[str] = None
    url_menu: Optional[str] = None
    icon_menu: Optional[str] = None
    category: Optional[str] = None
    ordering_number: Optional[int] = None
    parent_menu: Optional[Any] = None


class MenuCreate(MenuBase):
    name: str = Field(..., min_length=1)


class MenuUpdate(MenuBase):
    name: Optional[str] = None


class MenuResponse(MenuBase):
    id: int
    name: str
    status: str
    created_at: datetime
    updated_at: datetime

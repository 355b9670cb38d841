from typing import Optional
from datetime import datetime
from pydantic import Field

from app.schemas.base import CamelModel


class TeamContractCreate(CamelModel):
    contract_number: Optional[str] = None
    active_period_start: Optional[datetime] = None
    active_period_end: datetime
    member_quota: int = Field(..., ge=0)
    package_id: int


class TeamContractUpdate(CamelModel):
    contract_number: Optional[str] = None
    active_period_start: Optional[datetime] = None
    active_period_end: Optional[datetime] = None
    member_quota: Optional[int] = Field(None, ge=0)
    package_id: Optional[int] = None


class TeamContractResponse(CamelModel):
    id: int
    contract_number: Optional[str] = None
    team_id: int
    active_period_start: Optional[datetime] = None
    active_period_end: datetime
    member_quota: int
    package_id: int
    status: str
    created_at: datetime
    updated_at: datetime

from typing import List, Optional
from datetime import datetime
from pydantic import EmailStr, Field

from app.schemas.base import CamelModel
from app.schemas.member import TeamMemberResponse
from app.schemas.team_contract import TeamContractResponse


class TeamBase(CamelModel):
    company_name: Optional[str] = None
    hq_address: Optional[str] = None
    manager_first_name: Optional[str] = None
    manager_last_name: Optional[str] = None
    manager_phone: Optional[str] = None
    image_url: Optional[str] = None


class TeamCreate(TeamBase):
    """Team together with its first contract; the manager becomes the first member."""
    team_name: str = Field(..., min_length=1)
    manager_email: EmailStr
    contract_number: Optional[str] = None
    active_period_start: Optional[datetime] = None
    active_period_end: datetime
    member_quota: int = Field(..., ge=0)
    package_id: int


class TeamUpdate(TeamBase):
    team_name: Optional[str] = None
    manager_email: Optional[EmailStr] = None


class TeamResponse(TeamBase):
    id: int
    team_name: str
    manager_full_name: Optional[str] = None
    manager_email: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
    members: List[TeamMemberResponse] = []
    contracts: List[TeamContractResponse] = []

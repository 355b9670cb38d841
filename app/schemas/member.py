from typing import List, Optional
from datetime import date, datetime
from pydantic import EmailStr, Field

from app.schemas.base import CamelModel
from app.schemas.role import RoleSummary


class MemberFields(CamelModel):
    phone_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    name: Optional[str] = None
    employee_number: Optional[str] = None
    joined_date: Optional[date] = None
    resigned_date: Optional[date] = None
    home_address: Optional[str] = None
    district: Optional[str] = None
    sub_district: Optional[str] = None
    birth_place: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    religion: Optional[str] = None
    marital_status: Optional[str] = None
    profile_image: Optional[str] = None
    team_id: Optional[int] = None


class AdministrationFields(CamelModel):
    tax_number: Optional[str] = None
    tax_number_attachment: Optional[str] = None
    identity_number: Optional[str] = None
    card_number: Optional[str] = None
    identity_number_attachment: Optional[str] = None


ADMINISTRATION_FIELDS = tuple(AdministrationFields.model_fields)


class RelativeIn(CamelModel):
    full_name: str = Field(..., min_length=1)
    relation_type: Optional[str] = None
    phone_number: Optional[str] = None
    is_emergency: bool = False


class MemberCreate(MemberFields, AdministrationFields):
    """
    Member payload with its administration record flattened in.
    `relatives`, when given, becomes the member's full relatives list.
    """
    email: EmailStr
    password: Optional[str] = Field(None, min_length=4)
    role_id: int
    relatives: Optional[List[RelativeIn]] = None


class MemberUpdate(MemberFields, AdministrationFields):
    email: Optional[EmailStr] = None
    role_id: Optional[int] = None
    relatives: Optional[List[RelativeIn]] = None


class MemberTeam(CamelModel):
    """Team as embedded in member payloads, without address or manager contact."""
    id: int
    team_name: str
    company_name: Optional[str] = None
    image_url: Optional[str] = None
    status: str


class AdministrationResponse(AdministrationFields):
    id: int
    member_id: int


class RelativeResponse(CamelModel):
    id: int
    member_id: int
    full_name: str
    relation_type: Optional[str] = None
    phone_number: Optional[str] = None
    is_emergency: bool


class ActivityLogResponse(CamelModel):
    id: int
    action: str
    description: Optional[str] = None
    created_at: datetime


class MemberResponse(MemberFields):
    id: int
    uid: str
    email: str
    role_id: int
    status: str
    created_at: datetime
    updated_at: datetime
    team: Optional[MemberTeam] = None
    role: Optional[RoleSummary] = None
    relatives: List[RelativeResponse] = []


class MemberDetailResponse(MemberResponse):
    administration: Optional[AdministrationResponse] = None
    activity_logs: List[ActivityLogResponse] = []


class TeamMemberResponse(CamelModel):
    """Member as listed under its team."""
    id: int
    uid: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    name: Optional[str] = None
    phone_number: Optional[str] = None
    employee_number: Optional[str] = None
    role_id: int
    status: str
    role: Optional[RoleSummary] = None

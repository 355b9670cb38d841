from typing import Any, Dict, Optional, Tuple, Union
from sqlalchemy import func
from sqlalchemy.orm import Session, Query
from app.config import settings
from app.models import Team, TeamContract, Member
from app.schemas.team import TeamCreate, TeamUpdate
from app.crud.base import CRUDBase
from app.crud.member import member_crud
from app.crud.team_contract import team_contract_crud
from common_utils import generate_temporary_password

TEAM_FIELDS = (
    "team_name", "company_name", "hq_address", "manager_first_name",
    "manager_last_name", "manager_email", "manager_phone", "image_url",
)
CONTRACT_FIELDS = (
    "contract_number", "active_period_start", "active_period_end",
    "member_quota", "package_id",
)


def full_name(first: Optional[str], last: Optional[str]) -> Optional[str]:
    joined = " ".join(part.strip() for part in (first, last) if part and part.strip())
    return joined or None


class CRUDTeam(CRUDBase[Team, TeamCreate, TeamUpdate]):
    def get_by_name(self, db: Session, *, team_name: str) -> Optional[Team]:
        """Get team by name, deleted ones included since the name stays taken"""
        return db.query(Team).filter(func.lower(Team.team_name) == team_name.strip().lower()).first()

    def list_query(self, db: Session, *, team_name: Optional[str] = None) -> Query:
        query = self.query_visible(db)
        if team_name:
            query = query.filter(Team.team_name.ilike(f"%{team_name}%"))
        return query

    def create_with_manager(self, db: Session, *, obj_in: TeamCreate) -> Tuple[Team, TeamContract, Member, str]:
        """
        Add a team, its first contract and its manager as the first member.
        Only flushes; the caller owns the transaction.
        Returns the new rows plus the manager's temporary password in clear.
        """
        team_data = obj_in.model_dump(include=set(TEAM_FIELDS))
        team_data["manager_full_name"] = full_name(obj_in.manager_first_name, obj_in.manager_last_name)
        team = self.create(db, obj_in=team_data, commit=False)

        contract = team_contract_crud.create(
            db,
            obj_in=obj_in.model_dump(include=set(CONTRACT_FIELDS)),
            team_id=team.id,
            commit=False,
        )

        temporary_password = generate_temporary_password()
        manager = member_crud.create_account(
            db,
            email=obj_in.manager_email,
            password=temporary_password,
            first_name=obj_in.manager_first_name,
            last_name=obj_in.manager_last_name,
            phone_number=obj_in.manager_phone,
            team_id=team.id,
            role_id=settings.BOOTSTRAP_ADMIN_ROLE_ID,
        )
        return team, contract, manager, temporary_password

    def update(
        self, db: Session, *, db_obj: Team, obj_in: Union[TeamUpdate, Dict[str, Any]], commit: bool = True
    ) -> Team:
        """Update team, keeping the manager's full name in step with first/last"""
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        if "manager_first_name" in update_data or "manager_last_name" in update_data:
            update_data = {
                **update_data,
                "manager_full_name": full_name(
                    update_data.get("manager_first_name", db_obj.manager_first_name),
                    update_data.get("manager_last_name", db_obj.manager_last_name),
                ),
            }
        return super().update(db, db_obj=db_obj, obj_in=update_data, commit=commit)


team_crud = CRUDTeam(Team)

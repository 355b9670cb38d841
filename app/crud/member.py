from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, Query
from app.models import Member, MemberAdministration, MemberRelative
from app.models.status import EntityStatus
from app.schemas.member import ADMINISTRATION_FIELDS, MemberCreate, MemberUpdate, RelativeIn
from app.crud.base import CRUDBase
from common_utils import generate_numeric_uid
from common_utils.auth.utils import hash_password

NESTED_FIELDS = {"relatives", "password", *ADMINISTRATION_FIELDS}


class CRUDMember(CRUDBase[Member, MemberCreate, MemberUpdate]):
    """
    Member writes touch three tables (members, member_administrations,
    member_relatives). The *_with_details methods only flush so that the
    router can commit or roll back all of it together.
    """

    def get_by_email(self, db: Session, *, email: str) -> Optional[Member]:
        return db.query(Member).filter(Member.email == email.strip().lower()).first()

    def get_active_by_email(self, db: Session, *, email: str) -> Optional[Member]:
        return self.query_visible(db).filter(Member.email == email.strip().lower()).first()

    def list_query(
        self,
        db: Session,
        *,
        team_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Query:
        query = self.query_visible(db)
        if team_id is not None:
            query = query.filter(Member.team_id == team_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Member.email.ilike(pattern),
                    Member.name.ilike(pattern),
                    Member.full_name.ilike(pattern),
                    Member.first_name.ilike(pattern),
                    Member.last_name.ilike(pattern),
                )
            )
        return query

    def create_account(
        self,
        db: Session,
        *,
        email: str,
        role_id: int,
        password: Optional[str] = None,
        **fields: Any,
    ) -> Member:
        """Add a member row with a fresh uid; full_name and name default to first + last."""
        display_name = " ".join(
            part for part in (fields.get("first_name"), fields.get("last_name")) if part
        ) or None
        if not fields.get("full_name"):
            fields["full_name"] = display_name
        if not fields.get("name"):
            fields["name"] = fields["full_name"]

        member = Member(
            uid=generate_numeric_uid(),
            email=email.strip().lower(),
            password=hash_password(password) if password else None,
            role_id=role_id,
            status=EntityStatus.ACTIVE.value,
            **fields,
        )
        db.add(member)
        db.flush()
        return member

    def upsert_administration(self, db: Session, *, member: Member, data: Dict[str, Any]) -> MemberAdministration:
        administration = member.administration
        if administration is None:
            administration = MemberAdministration(member_id=member.id, **data)
            member.administration = administration
        else:
            for field, value in data.items():
                setattr(administration, field, value)
        db.add(administration)
        db.flush()
        return administration

    def replace_relatives(self, db: Session, *, member: Member, relatives: List[RelativeIn]) -> List[MemberRelative]:
        """Drop every existing relative of the member, then insert the given list."""
        member.relatives.clear()
        db.flush()
        for relative in relatives:
            member.relatives.append(MemberRelative(member_id=member.id, **relative.model_dump()))
        db.flush()
        return member.relatives

    def create_with_details(self, db: Session, *, obj_in: MemberCreate) -> Member:
        fields = obj_in.model_dump(exclude=NESTED_FIELDS | {"email", "role_id"})
        member = self.create_account(
            db,
            email=obj_in.email,
            role_id=obj_in.role_id,
            password=obj_in.password,
            **fields,
        )
        self.upsert_administration(
            db, member=member, data=obj_in.model_dump(include=set(ADMINISTRATION_FIELDS))
        )
        if obj_in.relatives:
            self.replace_relatives(db, member=member, relatives=obj_in.relatives)
        return member

    def update_with_details(self, db: Session, *, db_obj: Member, obj_in: MemberUpdate) -> Member:
        """
        Partial update of the member and its administration record.
        Relatives are replaced wholesale when the payload carries the key,
        even as an empty list, and left alone otherwise.
        """
        member_data = obj_in.model_dump(exclude_unset=True, exclude=NESTED_FIELDS)
        if member_data.get("email"):
            member_data["email"] = member_data["email"].strip().lower()
        elif "email" in member_data:
            del member_data["email"]
        if "role_id" in member_data and member_data["role_id"] is None:
            del member_data["role_id"]
        member = self.update(db, db_obj=db_obj, obj_in=member_data, commit=False)

        self.upsert_administration(
            db,
            member=member,
            data=obj_in.model_dump(exclude_unset=True, include=set(ADMINISTRATION_FIELDS)),
        )
        if "relatives" in obj_in.model_fields_set:
            self.replace_relatives(db, member=member, relatives=obj_in.relatives or [])
        return member


member_crud = CRUDMember(Member)

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.crud.base import parse_id
from app.crud.member import member_crud
from app.crud.role import role_crud
from app.crud.team import team_crud
from app.database.session import get_db
from app.models import Member
from app.schemas.base import to_payload
from app.schemas.member import MemberCreate, MemberDetailResponse, MemberResponse, MemberUpdate
from app.utils.pagination import ListQueryParams, list_params
from app.utils.response_utils import (
    ResponseWrapper, handle_db_error, handle_http_error, invalid_parameters, not_found
)
from common_utils.auth.token_validation import require_session

logger = get_logger(__name__)
router = APIRouter(prefix="/members", tags=["members"], dependencies=[Depends(require_session)])


def get_member_or_404(db: Session, member_id: str) -> Member:
    member = member_crud.get_visible(db, member_id)
    if not member:
        raise not_found("Member not found")
    return member


def _check_references(db: Session, role_id: Optional[int], team_id: Optional[int]) -> None:
    if role_id is not None and not role_crud.get(db, role_id):
        raise invalid_parameters("Role not found", details={"roleId": role_id})
    if team_id is not None and not team_crud.get_visible(db, team_id):
        raise invalid_parameters("Team not found", details={"teamId": team_id})


def _ensure_email_free(db: Session, email: Optional[str], member_id: Optional[int] = None) -> None:
    if not email:
        return
    existing = member_crud.get_by_email(db, email=email)
    if existing and existing.id != member_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ResponseWrapper.error(
                message=f"Member with email '{email}' already exists",
                error_code="DUPLICATE_RESOURCE",
            ),
        )


@router.get("", status_code=status.HTTP_200_OK)
def read_members(
    type: Optional[str] = Query(None, description="'team' to restrict the list to teamId"),
    teamId: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches email or any name field"),
    params: ListQueryParams = Depends(list_params(Member)),
    db: Session = Depends(get_db),
):
    """
    List members with their team, role and relatives.
    Passwords and administration records never appear in the list.
    """
    try:
        team_id = None
        if type == "team" and teamId:
            team_id = parse_id(teamId)
            if team_id is None:
                raise invalid_parameters("Invalid teamId", details={"teamId": teamId})

        total, items = member_crud.get_multi(
            db, params=params, query=member_crud.list_query(db, team_id=team_id, search=search)
        )
        return ResponseWrapper.paginated(
            items=[to_payload(MemberResponse, m) for m in items],
            total=total,
            params=params,
            message="Members fetched successfully",
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.get("/{member_id}", status_code=status.HTTP_200_OK)
def read_member(member_id: str, db: Session = Depends(get_db)):
    try:
        member = get_member_or_404(db, member_id)
        return ResponseWrapper.success(
            data=to_payload(MemberDetailResponse, member), message="Member fetched successfully"
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_member(member_in: MemberCreate, db: Session = Depends(get_db)):
    """
    Create a member together with its administration record and relatives.
    The three writes commit together or not at all.
    """
    try:
        _check_references(db, member_in.role_id, member_in.team_id)
        _ensure_email_free(db, member_in.email)

        member = member_crud.create_with_details(db, obj_in=member_in)
        db.commit()
        db.refresh(member)
        logger.info(f"Member {member.id} (uid {member.uid}) created")
        return ResponseWrapper.created(
            data=to_payload(MemberDetailResponse, member), message="Member created successfully"
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Member creation rolled back: {e}")
        raise handle_db_error(e)
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


def _update_member(db: Session, member_id: str, member_update: MemberUpdate, message: str):
    try:
        member = get_member_or_404(db, member_id)
        fields_set = member_update.model_fields_set
        _check_references(
            db,
            member_update.role_id if "role_id" in fields_set else None,
            member_update.team_id if "team_id" in fields_set else None,
        )
        if "email" in fields_set:
            _ensure_email_free(db, member_update.email, member_id=member.id)

        member = member_crud.update_with_details(db, db_obj=member, obj_in=member_update)
        db.commit()
        db.refresh(member)
        logger.info(f"Member {member.id} updated")
        return ResponseWrapper.updated(data=to_payload(MemberDetailResponse, member), message=message)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Member update rolled back: {e}")
        raise handle_db_error(e)
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.put("/verify/{member_id}", status_code=status.HTTP_200_OK)
def verify_member(member_id: str, member_update: MemberUpdate, db: Session = Depends(get_db)):
    """Approval step used by the admin UI; behaves exactly like an update."""
    return _update_member(db, member_id, member_update, "Member verified successfully")


@router.put("/{member_id}", status_code=status.HTTP_200_OK)
def update_member(member_id: str, member_update: MemberUpdate, db: Session = Depends(get_db)):
    return _update_member(db, member_id, member_update, "Member updated successfully")


@router.delete("/{member_id}", status_code=status.HTTP_200_OK)
def delete_member(member_id: str, db: Session = Depends(get_db)):
    try:
        member = get_member_or_404(db, member_id)
        member = member_crud.soft_delete(db, db_obj=member)
        logger.info(f"Member {member.id} marked {member.status}")
        return ResponseWrapper.deleted(
            data=to_payload(MemberResponse, member), message="Member deleted successfully"
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)

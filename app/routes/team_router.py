from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.email_service import get_email_service
from app.core.logging_config import get_logger
from app.crud.member import member_crud
from app.crud.team import team_crud
from app.database.session import get_db
from app.models import Team
from app.models.status import EntityStatus
from app.schemas.member import TeamMemberResponse
from app.schemas.team import TeamCreate, TeamResponse, TeamUpdate
from app.schemas.team_contract import TeamContractResponse
from app.utils.pagination import ListQueryParams, list_params
from app.utils.response_utils import ResponseWrapper, handle_db_error, handle_http_error, not_found
from common_utils.auth.token_validation import require_session

logger = get_logger(__name__)
router = APIRouter(prefix="/teams", tags=["teams"], dependencies=[Depends(require_session)])


def _visible(rows):
    return [row for row in rows if (row.status or "").lower() != EntityStatus.NON_ACTIVE.value]


def team_payload(team: Team) -> dict:
    """Team with its visible members and contracts."""
    data = TeamResponse.model_validate(team)
    data.members = [TeamMemberResponse.model_validate(m) for m in _visible(team.members)]
    data.contracts = [TeamContractResponse.model_validate(c) for c in _visible(team.contracts)]
    return data.model_dump(by_alias=True, mode="json")


def get_team_or_404(db: Session, team_id: str) -> Team:
    team = team_crud.get_visible(db, team_id)
    if not team:
        raise not_found("Team not found")
    return team


def send_manager_welcome_email(manager_email: str, manager_name: str, team_name: str, password: str):
    """Deliver the manager's temporary credentials; runs after the response is sent."""
    try:
        sent = get_email_service().send_welcome_email(
            user_email=manager_email,
            user_name=manager_name,
            login_credentials={"username": manager_email, "password": password},
        )
        if sent:
            logger.info(f"Welcome email sent to manager of team {team_name}")
        else:
            logger.warning(f"Welcome email to manager of team {team_name} was not delivered")
    except Exception as e:
        logger.exception(f"Welcome email for team {team_name} failed: {e}")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_team(
    team_in: TeamCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Create a team, its first contract and its manager account in one transaction.

    The manager joins with the bootstrap admin role and a random temporary
    password that is mailed to them once the transaction has committed.
    Nothing is persisted if any of the three inserts fails.
    """
    try:
        if team_crud.get_by_name(db, team_name=team_in.team_name):
            logger.warning(f"Team creation failed - duplicate name: {team_in.team_name}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=ResponseWrapper.error(
                    message=f"Team with name '{team_in.team_name}' already exists",
                    error_code="DUPLICATE_RESOURCE",
                ),
            )
        if member_crud.get_by_email(db, email=team_in.manager_email):
            logger.warning(f"Team creation failed - manager email already registered: {team_in.manager_email}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=ResponseWrapper.error(
                    message=f"Member with email '{team_in.manager_email}' already exists",
                    error_code="DUPLICATE_RESOURCE",
                ),
            )

        team, contract, manager, temporary_password = team_crud.create_with_manager(db, obj_in=team_in)
        db.commit()
        logger.info(
            f"Team {team.id} ({team.team_name}) created with contract {contract.id} and manager member {manager.id}"
        )

    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Team creation rolled back: {e}")
        raise handle_db_error(e)
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)

    background_tasks.add_task(
        send_manager_welcome_email,
        manager_email=manager.email,
        manager_name=manager.full_name or manager.email,
        team_name=team.team_name,
        password=temporary_password,
    )

    db.refresh(team)
    return ResponseWrapper.created(data=team_payload(team), message="Team created successfully")


@router.get("", status_code=status.HTTP_200_OK)
def read_teams(
    teamName: Optional[str] = Query(None),
    params: ListQueryParams = Depends(list_params(Team)),
    db: Session = Depends(get_db),
):
    try:
        total, items = team_crud.get_multi(
            db, params=params, query=team_crud.list_query(db, team_name=teamName)
        )
        return ResponseWrapper.paginated(
            items=[team_payload(team) for team in items],
            total=total,
            params=params,
            message="Teams fetched successfully",
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.get("/{team_id}", status_code=status.HTTP_200_OK)
def read_team(team_id: str, db: Session = Depends(get_db)):
    try:
        team = get_team_or_404(db, team_id)
        return ResponseWrapper.success(data=team_payload(team), message="Team fetched successfully")
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.put("/{team_id}", status_code=status.HTTP_200_OK)
def update_team(team_id: str, team_update: TeamUpdate, db: Session = Depends(get_db)):
    try:
        team = get_team_or_404(db, team_id)
        new_name = team_update.team_name
        if new_name and new_name.strip().lower() != team.team_name.lower():
            clash = team_crud.get_by_name(db, team_name=new_name)
            if clash and clash.id != team.id:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=ResponseWrapper.error(
                        message=f"Team with name '{new_name}' already exists",
                        error_code="DUPLICATE_RESOURCE",
                    ),
                )

        team = team_crud.update(db, db_obj=team, obj_in=team_update)
        logger.info(f"Team {team.id} updated")
        return ResponseWrapper.updated(data=team_payload(team), message="Team updated successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.delete("/{team_id}", status_code=status.HTTP_200_OK)
def delete_team(team_id: str, db: Session = Depends(get_db)):
    try:
        team = get_team_or_404(db, team_id)
        team = team_crud.soft_delete(db, db_obj=team)
        logger.info(f"Team {team.id} marked {team.status}")
        return ResponseWrapper.deleted(data=team_payload(team), message="Team deleted successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)

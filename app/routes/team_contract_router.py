from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.crud.team_contract import team_contract_crud
from app.database.session import get_db
from app.models import TeamContract
from app.schemas.base import to_payload
from app.schemas.team_contract import TeamContractCreate, TeamContractResponse, TeamContractUpdate
from app.utils.pagination import ListQueryParams, list_params
from app.utils.response_utils import ResponseWrapper, handle_db_error, handle_http_error, not_found
from app.routes.team_router import get_team_or_404
from common_utils.auth.token_validation import require_session

logger = get_logger(__name__)
router = APIRouter(
    prefix="/teams/{team_id}/contracts",
    tags=["team contracts"],
    dependencies=[Depends(require_session)],
)


def get_contract_or_404(db: Session, team_id: str, contract_id: str) -> TeamContract:
    team = get_team_or_404(db, team_id)
    contract = team_contract_crud.get_for_team(db, team_id=team.id, contract_id=contract_id)
    if not contract:
        raise not_found("Contract not found")
    return contract


@router.get("", status_code=status.HTTP_200_OK)
def read_contracts(
    team_id: str,
    params: ListQueryParams = Depends(list_params(TeamContract)),
    db: Session = Depends(get_db),
):
    try:
        team = get_team_or_404(db, team_id)
        total, items = team_contract_crud.get_multi(
            db, params=params, query=team_contract_crud.list_query(db, team_id=team.id)
        )
        return ResponseWrapper.paginated(
            items=[to_payload(TeamContractResponse, c) for c in items],
            total=total,
            params=params,
            message="Contracts fetched successfully",
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.get("/{contract_id}", status_code=status.HTTP_200_OK)
def read_contract(team_id: str, contract_id: str, db: Session = Depends(get_db)):
    try:
        contract = get_contract_or_404(db, team_id, contract_id)
        return ResponseWrapper.success(
            data=to_payload(TeamContractResponse, contract), message="Contract fetched successfully"
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_contract(team_id: str, contract_in: TeamContractCreate, db: Session = Depends(get_db)):
    try:
        team = get_team_or_404(db, team_id)
        contract = team_contract_crud.create(db, obj_in=contract_in, team_id=team.id)
        logger.info(f"Contract {contract.id} created for team {team.id}")
        return ResponseWrapper.created(
            data=to_payload(TeamContractResponse, contract), message="Contract created successfully"
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.put("/{contract_id}", status_code=status.HTTP_200_OK)
def update_contract(
    team_id: str,
    contract_id: str,
    contract_update: TeamContractUpdate,
    db: Session = Depends(get_db),
):
    try:
        contract = get_contract_or_404(db, team_id, contract_id)
        contract = team_contract_crud.update(db, db_obj=contract, obj_in=contract_update)
        return ResponseWrapper.updated(
            data=to_payload(TeamContractResponse, contract), message="Contract updated successfully"
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.delete("/{contract_id}", status_code=status.HTTP_200_OK)
def delete_contract(team_id: str, contract_id: str, db: Session = Depends(get_db)):
    """Contracts are soft deleted like every other entity."""
    try:
        contract = get_contract_or_404(db, team_id, contract_id)
        contract = team_contract_crud.soft_delete(db, db_obj=contract)
        logger.info(f"Contract {contract.id} of team {contract.team_id} marked {contract.status}")
        return ResponseWrapper.deleted(
            data=to_payload(TeamContractResponse, contract), message="Contract deleted successfully"
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)

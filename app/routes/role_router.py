from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.crud.role import role_crud
from app.database.session import get_db
from app.models import Role
from app.schemas.base import to_payload
from app.schemas.role import RoleCreate, RoleResponse, RoleUpdate
from app.utils.pagination import ListQueryParams, list_params
from app.utils.response_utils import ResponseWrapper, handle_db_error, handle_http_error, not_found
from common_utils.auth.token_validation import require_session

logger = get_logger(__name__)
router = APIRouter(prefix="/roles", tags=["roles"], dependencies=[Depends(require_session)])


def get_role_or_404(db: Session, role_id: str) -> Role:
    role = role_crud.get_visible(db, role_id)
    if not role:
        raise not_found("Role not found")
    return role


@router.get("", status_code=status.HTTP_200_OK)
def read_roles(
    name: Optional[str] = Query(None),
    description: Optional[str] = Query(None),
    params: ListQueryParams = Depends(list_params(Role)),
    db: Session = Depends(get_db),
):
    try:
        total, items = role_crud.get_multi(
            db, params=params, query=role_crud.list_query(db, name=name, description=description)
        )
        return ResponseWrapper.paginated(
            items=[to_payload(RoleResponse, r) for r in items],
            total=total,
            params=params,
            message="Roles fetched successfully",
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.get("/{role_id}", status_code=status.HTTP_200_OK)
def read_role(role_id: str, db: Session = Depends(get_db)):
    try:
        role = get_role_or_404(db, role_id)
        return ResponseWrapper.success(data=to_payload(RoleResponse, role), message="Role fetched successfully")
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_role(role_in: RoleCreate, db: Session = Depends(get_db)):
    try:
        role = role_crud.create(db, obj_in=role_in)
        logger.info(f"Role {role.id} ({role.name}) created")
        return ResponseWrapper.created(data=to_payload(RoleResponse, role), message="Role created successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.put("/{role_id}", status_code=status.HTTP_200_OK)
def update_role(role_id: str, role_update: RoleUpdate, db: Session = Depends(get_db)):
    try:
        role = get_role_or_404(db, role_id)
        role = role_crud.update(db, db_obj=role, obj_in=role_update)
        return ResponseWrapper.updated(data=to_payload(RoleResponse, role), message="Role updated successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.delete("/{role_id}", status_code=status.HTTP_200_OK)
def delete_role(role_id: str, db: Session = Depends(get_db)):
    try:
        role = get_role_or_404(db, role_id)
        role = role_crud.soft_delete(db, db_obj=role)
        logger.info(f"Role {role.id} marked {role.status}")
        return ResponseWrapper.deleted(data=to_payload(RoleResponse, role), message="Role deleted successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)

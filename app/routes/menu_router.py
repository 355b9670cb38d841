from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.crud.menu import menu_crud
from app.database.session import get_db
from app.models import Menu
from app.schemas.base import to_payload
from app.schemas.menu import MenuCreate, MenuResponse, MenuUpdate
from app.utils.pagination import ListQueryParams, list_params
from app.utils.response_utils import ResponseWrapper, handle_db_error, handle_http_error, not_found
from common_utils.auth.token_validation import require_session

logger = get_logger(__name__)
router = APIRouter(prefix="/menus", tags=["menus"], dependencies=[Depends(require_session)])


def get_menu_or_404(db: Session, menu_id: str) -> Menu:
    menu = menu_crud.get_visible(db, menu_id)
    if not menu:
        raise not_found("Menu not found")
    return menu


@router.get("", status_code=status.HTTP_200_OK)
def read_menus(
    category: Optional[str] = Query(None),
    params: ListQueryParams = Depends(list_params(Menu)),
    db: Session = Depends(get_db),
):
    try:
        total, items = menu_crud.get_multi(
            db, params=params, query=menu_crud.list_query(db, category=category)
        )
        return ResponseWrapper.paginated(
            items=[to_payload(MenuResponse, m) for m in items],
            total=total,
            params=params,
            message="Menus fetched successfully",
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.get("/{menu_id}", status_code=status.HTTP_200_OK)
def read_menu(menu_id: str, db: Session = Depends(get_db)):
    try:
        menu = get_menu_or_404(db, menu_id)
        return ResponseWrapper.success(data=to_payload(MenuResponse, menu), message="Menu fetched successfully")
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_menu(menu_in: MenuCreate, db: Session = Depends(get_db)):
    try:
        menu = menu_crud.create(db, obj_in=menu_in)
        logger.info(f"Menu {menu.id} ({menu.name}) created")
        return ResponseWrapper.created(data=to_payload(MenuResponse, menu), message="Menu created successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.put("/{menu_id}", status_code=status.HTTP_200_OK)
def update_menu(menu_id: str, menu_update: MenuUpdate, db: Session = Depends(get_db)):
    try:
        menu = get_menu_or_404(db, menu_id)
        menu = menu_crud.update(db, db_obj=menu, obj_in=menu_update)
        return ResponseWrapper.updated(data=to_payload(MenuResponse, menu), message="Menu updated successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.delete("/{menu_id}", status_code=status.HTTP_200_OK)
def delete_menu(menu_id: str, db: Session = Depends(get_db)):
    try:
        menu = get_menu_or_404(db, menu_id)
        menu = menu_crud.soft_delete(db, db_obj=menu)
        logger.info(f"Menu {menu.id} marked {menu.status}")
        return ResponseWrapper.deleted(data=to_payload(MenuResponse, menu), message="Menu deleted successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)

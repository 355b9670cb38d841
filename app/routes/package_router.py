from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.crud.package import package_crud
from app.database.session import get_db
from app.models import Package
from app.schemas.base import to_payload
from app.schemas.package import PackageCreate, PackageResponse, PackageUpdate
from app.utils.pagination import ListQueryParams, list_params
from app.utils.response_utils import ResponseWrapper, handle_db_error, handle_http_error, not_found
from common_utils.auth.token_validation import require_session

logger = get_logger(__name__)
router = APIRouter(prefix="/packages", tags=["packages"], dependencies=[Depends(require_session)])


def get_package_or_404(db: Session, package_id: str) -> Package:
    package = package_crud.get_visible(db, package_id)
    if not package:
        raise not_found("Package not found")
    return package


@router.get("", status_code=status.HTTP_200_OK)
def read_packages(
    name: Optional[str] = Query(None),
    params: ListQueryParams = Depends(list_params(Package)),
    db: Session = Depends(get_db),
):
    try:
        total, items = package_crud.get_multi(
            db, params=params, query=package_crud.list_query(db, name=name)
        )
        return ResponseWrapper.paginated(
            items=[to_payload(PackageResponse, p) for p in items],
            total=total,
            params=params,
            message="Packages fetched successfully",
        )
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.get("/{package_id}", status_code=status.HTTP_200_OK)
def read_package(package_id: str, db: Session = Depends(get_db)):
    try:
        package = get_package_or_404(db, package_id)
        return ResponseWrapper.success(data=to_payload(PackageResponse, package), message="Package fetched successfully")
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_package(package_in: PackageCreate, db: Session = Depends(get_db)):
    try:
        package = package_crud.create(db, obj_in=package_in)
        logger.info(f"Package {package.id} ({package.name}) created")
        return ResponseWrapper.created(data=to_payload(PackageResponse, package), message="Package created successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.put("/{package_id}", status_code=status.HTTP_200_OK)
def update_package(package_id: str, package_update: PackageUpdate, db: Session = Depends(get_db)):
    try:
        package = get_package_or_404(db, package_id)
        package = package_crud.update(db, db_obj=package, obj_in=package_update)
        return ResponseWrapper.updated(data=to_payload(PackageResponse, package), message="Package updated successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.delete("/{package_id}", status_code=status.HTTP_200_OK)
def delete_package(package_id: str, db: Session = Depends(get_db)):
    try:
        package = get_package_or_404(db, package_id)
        package = package_crud.soft_delete(db, db_obj=package)
        logger.info(f"Package {package.id} marked {package.status}")
        return ResponseWrapper.deleted(data=to_payload(PackageResponse, package), message="Package deleted successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)

import re
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.base import (
    create_success_response,
    create_error_response,
    create_paginated_response
)
from app.core.logging_config import get_logger

if TYPE_CHECKING:
    from app.utils.pagination import ListQueryParams

logger = get_logger(__name__)


class ResponseWrapper:
    """Utility class for wrapping responses in standard format"""

    @staticmethod
    def success(data: Any = None, message: str = "Success") -> Dict[str, Any]:
        return create_success_response(data, message)

    @staticmethod
    def error(
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Wrap error response and make it JSON-safe"""
        raw = create_error_response(message, error_code, details)
        return jsonable_encoder(raw)

    @staticmethod
    def paginated(
        items: List[Any],
        total: int,
        params: "ListQueryParams",
        message: str = "Success"
    ) -> Dict[str, Any]:
        return create_paginated_response(
            items,
            total,
            params.page,
            params.limit,
            params.sort_by,
            params.order_direction,
            message,
        )

    @staticmethod
    def created(data: Any = None, message: str = "Resource created successfully") -> Dict[str, Any]:
        return create_success_response(data, message)

    @staticmethod
    def updated(data: Any = None, message: str = "Resource updated successfully") -> Dict[str, Any]:
        return create_success_response(data, message)

    @staticmethod
    def deleted(data: Any = None, message: str = "Resource deleted successfully") -> Dict[str, Any]:
        return create_success_response(data, message)


def not_found(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=ResponseWrapper.error(message=message, error_code="NOT_FOUND"),
    )


def invalid_parameters(message: str = "Invalid parameters", details: Optional[Dict[str, Any]] = None) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=ResponseWrapper.error(message=message, error_code="INVALID_PARAMETERS", details=details),
    )


def unauthenticated() -> HTTPException:
    """Single 401 used for every authentication failure, whatever the cause."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=ResponseWrapper.error(message="You are not authenticated", error_code="UNAUTHENTICATED"),
        headers={"WWW-Authenticate": "Bearer"},
    )


def _conflicting_fields(error_msg: str) -> List[str]:
    # PostgreSQL: Key (email)=(a@b.c) ; SQLite: UNIQUE constraint failed: members.email
    match = re.search(r"Key \((.*?)\)=", error_msg)
    if match:
        return match.group(1).split(", ")
    match = re.search(r"UNIQUE constraint failed: (.*)", error_msg)
    if match:
        return [col.strip().split(".")[-1] for col in match.group(1).split(",")]
    return []


def handle_db_error(error: Exception) -> HTTPException:
    """Convert database errors to HTTP exceptions; the raw driver message stays in the log"""
    error_msg = str(error).strip().replace("\n", " ")
    logger.error(f"Database error: {error_msg}")
    lowered = error_msg.lower()

    if isinstance(error, IntegrityError) and ("duplicate key" in lowered or "unique constraint" in lowered):
        detail = ResponseWrapper.error(
            message="Resource already exists with the same values",
            error_code="DUPLICATE_RESOURCE",
            details={"conflicting_fields": _conflicting_fields(error_msg)},
        )
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)

    elif isinstance(error, IntegrityError) and "foreign key" in lowered:
        detail = ResponseWrapper.error(
            message="Referenced resource not found",
            error_code="FOREIGN_KEY_VIOLATION",
        )
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

    detail = ResponseWrapper.error(
        message="Database operation failed",
        error_code="PERSISTENCE_FAILURE",
    )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def handle_http_error(error: Exception) -> HTTPException:
    """Convert HTTP and generic exceptions into structured ResponseWrapper format"""
    if isinstance(error, HTTPException):
        detail = getattr(error, "detail", str(error))
        if isinstance(detail, dict) and detail.get("success") is not None:
            return error

        detail = ResponseWrapper.error(
            message=str(detail),
            error_code="HTTP_ERROR",
        )
        return HTTPException(status_code=error.status_code, detail=detail)

    logger.exception(f"Unexpected error: {error}")
    detail = ResponseWrapper.error(
        message="Unexpected server error",
        error_code="INTERNAL_SERVER_ERROR",
    )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if not (isinstance(detail, dict) and "success" in detail):
        code = "NOT_FOUND" if exc.status_code == status.HTTP_404_NOT_FOUND else "HTTP_ERROR"
        detail = ResponseWrapper.error(message=str(detail), error_code=code)
    return JSONResponse(status_code=exc.status_code, content=detail, headers=getattr(exc, "headers", None))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg")}
        for err in exc.errors()
    ]
    logger.info(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ResponseWrapper.error(
            message="Invalid parameters",
            error_code="INVALID_PARAMETERS",
            details={"errors": errors},
        ),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseWrapper.error(message="Unexpected server error", error_code="INTERNAL_SERVER_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Make every error leave the app as an envelope instead of FastAPI's {"detail": ...}"""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

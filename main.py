from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

from app.config import settings
from app.core.logging_config import setup_logging, get_logger

# Setup logging as early as possible
setup_logging(log_level=settings.LOG_LEVEL, force_configure=True)

from app.database.session import get_db, dispose_engine
from app.middleware import ErrorTrackingMiddleware, RequestTrackingMiddleware, error_tracker, request_tracker
from app.routes import (
    auth_router,
    team_router,
    team_contract_router,
    member_router,
    role_router,
    menu_router,
    package_router,
)
from app.utils.response_utils import ResponseWrapper, register_exception_handlers

logger = get_logger(__name__)

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Team, member and access administration API",
    version=settings.APP_VERSION,
)

register_exception_handlers(app)

# Outermost last: CORS wraps request tracking, which wraps error tracking
app.add_middleware(ErrorTrackingMiddleware)
app.add_middleware(RequestTrackingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(team_router, prefix=settings.API_PREFIX)
app.include_router(team_contract_router, prefix=settings.API_PREFIX)
app.include_router(member_router, prefix=settings.API_PREFIX)
app.include_router(role_router, prefix=settings.API_PREFIX)
app.include_router(menu_router, prefix=settings.API_PREFIX)
app.include_router(package_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    return ResponseWrapper.success(message=f"Welcome to {settings.APP_NAME} API")


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed, database unreachable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=ResponseWrapper.error(message="Database unavailable", error_code="PERSISTENCE_FAILURE"),
        )
    return ResponseWrapper.success(
        data={
            "database": "ok",
            "requests": request_tracker.get_request_stats(),
            "errors": error_tracker.get_error_stats(),
        },
        message="I Am Alive!!",
    )


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info(f"{settings.APP_NAME} starting up ({settings.ENV}), routes under {settings.API_PREFIX}")

@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    dispose_engine()
    logger.info(f"{settings.APP_NAME} shut down, database pool closed")

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)

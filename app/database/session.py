import time
from contextvars import ContextVar
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.orm import declarative_base

from app.config import settings

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# time.monotonic() deadline of the request being served, set by RequestTrackingMiddleware
request_deadline: ContextVar[Optional[float]] = ContextVar("request_deadline", default=None)


class RequestDeadlineExceeded(SQLAlchemyError):
    """Commit refused because the request it belongs to has already timed out"""


def _engine_options(url: str) -> dict:
    # SQLite uses a single-connection pool and rejects the sizing knobs
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
    }


# One engine (and connection pool) per process, disposed on application shutdown
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    **_engine_options(SQLALCHEMY_DATABASE_URL),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@event.listens_for(Session, "before_commit")
def refuse_commit_after_deadline(session):
    # The worker thread outlives a timed-out request; the client was already told it failed
    deadline = request_deadline.get()
    if deadline is not None and time.monotonic() > deadline:
        raise RequestDeadlineExceeded("Request deadline passed before commit")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dispose_engine() -> None:
    engine.dispose()

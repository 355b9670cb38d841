"""
Create every table known to the models if it does not exist yet
"""
import app.models  # noqa: F401  registers the models on Base.metadata
from app.core.logging_config import get_logger
from app.database.session import engine, Base

logger = get_logger(__name__)


def create_tables(bind=None):
    """Initialize the database and create all tables."""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")

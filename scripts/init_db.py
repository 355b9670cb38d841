#!/usr/bin/env python3
"""
Create the schema and load the default roles, menus, packages, team and
admin member (admin@example.com / 1234).

    python -m scripts.init_db [--skip-seed]
"""
import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.logging_config import setup_logging, get_logger
from app.database.create_tables import create_tables
from app.database.session import SessionLocal
from app.seed.seed_data import seed_all

logger = get_logger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the Sigap admin database")
    parser.add_argument("--skip-seed", action="store_true", help="only create tables")
    args = parser.parse_args(argv)

    setup_logging(force_configure=True)
    try:
        create_tables()
        if not args.skip_seed:
            db = SessionLocal()
            try:
                seed_all(db)
            finally:
                db.close()
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")
        return 1

    logger.info("Database initialization completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())

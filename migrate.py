#!/usr/bin/env python3
"""
Schema migration commands for the Sigap admin database.

    python migrate.py upgrade [rev]      # default: head
    python migrate.py downgrade [rev]    # default: -1
    python migrate.py create "message"   # autogenerate from app.models
    python migrate.py current | history | heads
"""
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

project_root = Path(__file__).parent


def alembic_config() -> Config:
    return Config(str(project_root / "alembic.ini"))


def upgrade_database(revision: str = "head"):
    print(f"Upgrading database to: {revision}")
    command.upgrade(alembic_config(), revision)


def downgrade_database(revision: str = "-1"):
    print(f"Downgrading database to: {revision}")
    command.downgrade(alembic_config(), revision)


def create_migration(message: str):
    print(f"Creating new migration: {message}")
    command.revision(alembic_config(), message=message, autogenerate=True)
    print("Review the generated migration file before applying it")


COMMANDS = {
    "upgrade": lambda args: upgrade_database(args[0] if args else "head"),
    "downgrade": lambda args: downgrade_database(args[0] if args else "-1"),
    "current": lambda args: command.current(alembic_config(), verbose=True),
    "history": lambda args: command.history(alembic_config(), verbose=True),
    "heads": lambda args: command.heads(alembic_config(), verbose=True),
}


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] in ("help", "-h", "--help"):
        print(__doc__)
        return 0 if argv else 1

    name, args = argv[0].lower(), argv[1:]
    if name == "create":
        if not args:
            print('Usage: python migrate.py create "add column to members"')
            return 1
        create_migration(" ".join(args))
        return 0

    if name not in COMMANDS:
        print(f"Unknown command: {name}")
        print(__doc__)
        return 1

    COMMANDS[name](args)
    return 0


if __name__ == "__main__":
    sys.exit(main())

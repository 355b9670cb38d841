"""
The Alembic history must build exactly the schema the models describe.
"""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from app.database.session import Base

project_root = Path(__file__).parent.parent


def alembic_config(url: str) -> Config:
    config = Config(str(project_root / "alembic.ini"))
    config.set_main_option("script_location", str(project_root / "migrations"))
    config.set_main_option("sqlalchemy.url", url)
    return config


class TestMigrations:
    def test_upgrade_matches_models(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'migrations.db'}"

        command.upgrade(alembic_config(url), "head")

        inspector = inspect(create_engine(url))
        tables = set(inspector.get_table_names()) - {"alembic_version"}
        assert tables == set(Base.metadata.tables)
        for name, table in Base.metadata.tables.items():
            columns = {column["name"] for column in inspector.get_columns(name)}
            assert columns == set(table.columns.keys()), name

    def test_downgrade_to_base(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'migrations.db'}"
        config = alembic_config(url)

        command.upgrade(config, "head")
        command.downgrade(config, "base")

        tables = set(inspect(create_engine(url)).get_table_names())
        assert tables <= {"alembic_version"}

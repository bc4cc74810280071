from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from common.db.base import Base

BACKEND_DIR = Path(__file__).resolve().parents[2]


@pytest.fixture
def migration_db(tmp_path):
    db_path = tmp_path / "migrations.db"
    config = Config()
    config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    return config, f"sqlite:///{db_path}"


class TestMigrations:
    def test_upgrade_creates_every_table(self, migration_db):
        config, sync_url = migration_db

        command.upgrade(config, "head")

        engine = create_engine(sync_url)
        try:
            inspector = inspect(engine)
            tables = set(inspector.get_table_names()) - {"alembic_version"}
            assert tables == set(Base.metadata.tables)
            indexes = {
                index["name"]: index
                for index in inspector.get_indexes("user_subscriptions")
            }
            assert indexes["uq_user_subscriptions_active_subsector"]["unique"]
        finally:
            engine.dispose()

    def test_downgrade_to_base(self, migration_db):
        config, sync_url = migration_db

        command.upgrade(config, "head")
        command.downgrade(config, "base")

        engine = create_engine(sync_url)
        try:
            assert set(inspect(engine).get_table_names()) == {"alembic_version"}
        finally:
            engine.dispose()

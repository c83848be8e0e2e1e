import os

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from core.database import Base

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


def _alembic_config(db_path):
    cfg = Config(os.path.join(ROOT, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(ROOT, "alembic"))
    cfg.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    return cfg


def test_upgrade_matches_models_and_downgrades(tmp_path):
    db_path = tmp_path / "migrated.db"
    cfg = _alembic_config(db_path)

    command.upgrade(cfg, "head")
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        tables = set(inspect(engine).get_table_names()) - {"alembic_version"}
        assert tables == set(Base.metadata.tables)

        for name, table in Base.metadata.tables.items():
            columns = {c["name"] for c in inspect(engine).get_columns(name)}
            assert columns == {c.name for c in table.columns}, name

        sessions = {c["name"] for c in inspect(engine).get_columns("sessions")}
        assert sessions == {"id", "user_id", "token", "expires_at", "created_at", "updated_at"}
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        assert set(inspect(engine).get_table_names()) - {"alembic_version"} == set()
    finally:
        engine.dispose()

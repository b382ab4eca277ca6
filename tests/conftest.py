from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient

from app.main import create_app
from app.showroom.core.config import Settings
from app.showroom.core.metrics import metrics

ROOT = Path(__file__).resolve().parents[1]


def _run_migrations(database_url: str):
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(config, "head")


@pytest.fixture()
def settings_overrides():
    return {}


@pytest.fixture()
def settings(tmp_path: Path, settings_overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite+pysqlite:///{tmp_path / 'test.db'}",
        "SECRET_KEY": "test-secret",
        "ADMIN_USERNAME": "admin",
        "ADMIN_PASSWORD": "Admin1234!",
    }
    values.update(settings_overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def client(settings):
    _run_migrations(settings.DATABASE_URL)
    metrics.reset()
    app = create_app(settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def db_session(client):
    db = client.app.state.database.session()
    try:
        yield db
    finally:
        db.close()

from sqlalchemy import func, inspect, select

from app.showroom.db.models import User
from app.showroom.db.seed import run_seed
from tests.showroom_helpers import login

EXPECTED_TABLES = {
    "users",
    "bikes",
    "cars",
    "rickshaws",
    "loaders",
    "electric_bikes",
    "sales",
    "audit_events",
    "idempotency_records",
}


def test_migrations_create_every_table(client, db_session):
    tables = set(inspect(db_session.get_bind()).get_table_names())

    assert EXPECTED_TABLES <= tables


def test_vehicle_tables_enforce_unique_engine_and_chassis(client, db_session):
    inspector = inspect(db_session.get_bind())
    for table in ("bikes", "cars", "rickshaws", "loaders", "electric_bikes"):
        unique_columns = {tuple(item["column_names"]) for item in inspector.get_unique_constraints(table)}
        unique_columns |= {
            tuple(item["column_names"]) for item in inspector.get_indexes(table) if item.get("unique")
        }
        assert ("engine_number",) in unique_columns, table
        assert ("chassis_number",) in unique_columns, table


def test_seed_creates_admin_once(client, db_session, settings):
    first = run_seed(db_session, settings)
    second = run_seed(db_session, settings)

    assert first.id == second.id
    assert first.role == "admin"
    count = db_session.execute(select(func.count(User.id)).where(User.username == settings.ADMIN_USERNAME)).scalar_one()
    assert count == 1
    assert login(client, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)

import argparse

from sqlalchemy import select

from app.showroom.core.config import Settings, settings as default_settings
from app.showroom.core.context import ADMIN_ROLE
from app.showroom.core.security import get_password_hash
from app.showroom.db.models import User
from app.showroom.db.session import Database


def _get_or_create_admin(db, settings: Settings) -> User:
    user = db.execute(select(User).where(User.username == settings.ADMIN_USERNAME)).scalars().first()
    if user:
        return user
    user = User(
        username=settings.ADMIN_USERNAME,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role=ADMIN_ROLE,
        showroom_name=None,
        is_active=True,
    )
    db.add(user)
    return user


def run_seed(db, settings: Settings | None = None) -> User:
    admin = _get_or_create_admin(db, settings or default_settings)
    db.commit()
    return admin


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the showroom database with the admin account")
    parser.add_argument("--database-url", default=None)
    args = parser.parse_args(argv)
    database = Database(args.database_url or default_settings.DATABASE_URL).connect()
    try:
        with database.session() as db:
            admin = run_seed(db)
            print(f"admin account ready: {admin.username}")
    finally:
        database.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

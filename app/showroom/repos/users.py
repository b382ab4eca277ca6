from sqlalchemy import func, or_, select

from app.showroom.db.models import User


class UserRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, user_id):
        return self.db.get(User, user_id)

    def get_by_username(self, username: str):
        stmt = select(User).where(User.username == username)
        return self.db.execute(stmt).scalars().first()

    def list_users(
        self,
        *,
        role: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ):
        stmt = select(User)
        count_stmt = select(func.count()).select_from(User)

        if role:
            normalized_role = role.strip().lower()
            stmt = stmt.where(func.lower(User.role) == normalized_role)
            count_stmt = count_stmt.where(func.lower(User.role) == normalized_role)

        if search:
            pattern = f"%{search.strip()}%"
            search_filter = or_(User.username.ilike(pattern), User.showroom_name.ilike(pattern))
            stmt = stmt.where(search_filter)
            count_stmt = count_stmt.where(search_filter)

        stmt = stmt.order_by(User.username.asc())
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        rows = self.db.execute(stmt).scalars().all()
        total = self.db.execute(count_stmt).scalar_one()
        return rows, total

    def create(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()

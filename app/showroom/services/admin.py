from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.showroom.core.context import ADMIN_ROLE, RequestContext
from app.showroom.core.error_catalog import AppError, ErrorCatalog
from app.showroom.core.ids import parse_uuid
from app.showroom.core.logging import log_json
from app.showroom.core.security import get_password_hash
from app.showroom.db.models import User
from app.showroom.repos.users import UserRepository
from app.showroom.repos.vehicles import InventoryRepository
from app.showroom.schemas.admin import UserCreateRequest

logger = logging.getLogger("showroom.admin")


@dataclass
class ShowroomDeletion:
    user_id: str
    username: str
    vehicles_deleted: dict[str, int]


class ShowroomAdminService:
    def __init__(self, db):
        self.db = db
        self.users = UserRepository(db)

    def create_user(self, caller: RequestContext, payload: UserCreateRequest) -> User:
        username = payload.username.strip()
        if self.users.get_by_username(username) is not None:
            raise AppError(ErrorCatalog.USERNAME_TAKEN, details={"username": username})
        showroom_name = (payload.showroom_name or "").strip() or None
        user = User(
            username=username,
            hashed_password=get_password_hash(payload.password),
            role=payload.role,
            showroom_name=showroom_name,
            is_active=True,
        )
        try:
            user = self.users.create(user)
        except IntegrityError as exc:
            self.db.rollback()
            raise AppError(ErrorCatalog.USERNAME_TAKEN, details={"username": username}) from exc
        log_json(
            logger,
            {
                "event": "user_created",
                "user_id": str(user.id),
                "role": user.role,
                "actor": caller.user_id,
                "trace_id": caller.trace_id,
            },
        )
        return user

    def list_users(self, *, role: str | None = None, search: str | None = None, limit=None, offset=None):
        return self.users.list_users(role=role, search=search, limit=limit, offset=offset)

    def delete_showroom(self, caller: RequestContext, user_id: str) -> ShowroomDeletion:
        """Remove a showroom account and every vehicle it owns, all or nothing."""
        parsed = parse_uuid(user_id)
        user = self.users.get_by_id(parsed) if parsed else None
        if user is None:
            raise AppError(ErrorCatalog.USER_NOT_FOUND, details={"user_id": user_id})
        if user.role == ADMIN_ROLE:
            raise AppError(ErrorCatalog.ADMIN_DELETE_FORBIDDEN, details={"user_id": user_id})

        username = user.username
        try:
            deleted = {
                inventory.category.value: inventory.delete_by_showroom(user.id)
                for inventory in InventoryRepository.all_categories(self.db)
            }
            self.users.delete(user)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Showroom deletion rolled back", extra={"user_id": user_id})
            raise AppError(ErrorCatalog.STORAGE_FAILURE, details={"type": exc.__class__.__name__}) from exc

        log_json(
            logger,
            {
                "event": "showroom_deleted",
                "user_id": str(parsed),
                "vehicles_deleted": deleted,
                "actor": caller.user_id,
                "trace_id": caller.trace_id,
            },
        )
        return ShowroomDeletion(user_id=str(parsed), username=username, vehicles_deleted=deleted)

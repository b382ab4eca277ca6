from app.showroom.core.config import Settings
from app.showroom.core.error_catalog import AppError, ErrorCatalog
from app.showroom.core.security import create_user_access_token, verify_password
from app.showroom.repos.users import UserRepository


class AuthService:
    def __init__(self, db, settings: Settings):
        self.repo = UserRepository(db)
        self.settings = settings

    def login(self, username: str, password: str):
        user = self.repo.get_by_username(username.strip())
        if user is None or not verify_password(password, user.hashed_password):
            raise AppError(ErrorCatalog.INVALID_CREDENTIALS)
        if not user.is_active:
            raise AppError(ErrorCatalog.USER_INACTIVE)
        return user, create_user_access_token(user, self.settings)

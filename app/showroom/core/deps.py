from fastapi import Depends, Request
from jose import JWTError
from pydantic import ValidationError

from app.showroom.core.config import Settings
from app.showroom.core.context import RequestContext, build_request_context, get_request_context
from app.showroom.core.error_catalog import AppError, ErrorCatalog
from app.showroom.core.ids import parse_uuid
from app.showroom.core.security import TokenData, decode_token, oauth2_scheme
from app.showroom.db.session import get_db
from app.showroom.repos.users import UserRepository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_token_data(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> TokenData:
    try:
        payload = decode_token(token, settings)
        return TokenData(**payload)
    except (JWTError, ValidationError, TypeError) as exc:
        raise AppError(ErrorCatalog.INVALID_TOKEN) from exc


def get_current_user(token_data: TokenData = Depends(get_current_token_data), db=Depends(get_db)):
    user_id = parse_uuid(token_data.sub)
    if user_id is None:
        raise AppError(ErrorCatalog.INVALID_TOKEN)
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise AppError(ErrorCatalog.INVALID_TOKEN)
    return user


def require_active_user(user=Depends(get_current_user)):
    if not user.is_active:
        raise AppError(ErrorCatalog.USER_INACTIVE)
    return user


def require_request_context(
    request: Request,
    token_data: TokenData = Depends(get_current_token_data),
    _user=Depends(require_active_user),
) -> RequestContext:
    context = build_request_context(
        user_id=token_data.sub,
        showroom_id=token_data.showroom_id,
        role=token_data.role,
        username=token_data.username,
        trace_id=getattr(request.state, "trace_id", ""),
    )
    request.state.context = context
    return context


def require_admin(context: RequestContext = Depends(require_request_context)) -> RequestContext:
    if not context.is_admin:
        raise AppError(ErrorCatalog.PERMISSION_DENIED)
    return context


__all__ = [
    "get_settings",
    "get_current_token_data",
    "get_current_user",
    "require_active_user",
    "require_request_context",
    "require_admin",
    "get_request_context",
]

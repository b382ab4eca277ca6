import logging
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, Request

from app.showroom.core.config import Settings
from app.showroom.core.context import SHOWROOM_ROLE
from app.showroom.core.deps import get_settings
from app.showroom.core.error_catalog import AppError
from app.showroom.core.logging import log_json
from app.showroom.db.session import get_db
from app.showroom.schemas.auth import LoginRequest, OAuth2TokenResponse, TokenResponse
from app.showroom.schemas.errors import ERROR_RESPONSES
from app.showroom.services.auth import AuthService

logger = logging.getLogger("showroom.auth")

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login (JSON)",
    responses={401: ERROR_RESPONSES[401], 403: ERROR_RESPONSES[403]},
)
def login(request: Request, payload: LoginRequest, settings: Settings = Depends(get_settings), db=Depends(get_db)):
    trace_id = getattr(request.state, "trace_id", "")
    try:
        user, token = AuthService(db, settings).login(payload.username, payload.password)
    except AppError as exc:
        log_json(
            logger,
            {"event": "login_failed", "username": payload.username, "code": exc.error.code, "trace_id": trace_id},
            level=logging.WARNING,
        )
        raise
    log_json(logger, {"event": "login", "user_id": str(user.id), "role": user.role, "trace_id": trace_id})
    return TokenResponse(
        access_token=token,
        role=user.role,
        showroom_id=str(user.id) if user.role == SHOWROOM_ROLE else None,
        trace_id=trace_id,
    )


@router.post(
    "/token",
    response_model=OAuth2TokenResponse,
    summary="OAuth2 Token (Swagger/Auth)",
    description="OAuth2 password flow for the Swagger Authorize button, form-encoded username/password.",
)
async def oauth2_token(request: Request, settings: Settings = Depends(get_settings), db=Depends(get_db)):
    raw_body = (await request.body()).decode()
    form_data = parse_qs(raw_body)
    username = (form_data.get("username") or [""])[0]
    password = (form_data.get("password") or [""])[0]
    _, token = AuthService(db, settings).login(username, password)
    return OAuth2TokenResponse(access_token=token)

from jose import JWTError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.showroom.core.context import build_request_context
from app.showroom.core.security import decode_token


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Best-effort caller context for logging; routes still authenticate."""

    async def dispatch(self, request: Request, call_next):
        request.state.user_id = None
        request.state.showroom_id = None
        request.state.role = None
        username = None

        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.lower().startswith("bearer "):
            token = auth_header.split(" ", 1)[1]
            try:
                payload = decode_token(token, request.app.state.settings)
            except JWTError:
                payload = {}
            request.state.user_id = payload.get("sub")
            request.state.showroom_id = payload.get("showroom_id")
            request.state.role = payload.get("role")
            username = payload.get("username")

        request.state.context = build_request_context(
            user_id=request.state.user_id,
            showroom_id=request.state.showroom_id,
            role=request.state.role,
            username=username,
            trace_id=getattr(request.state, "trace_id", ""),
        )

        return await call_next(request)

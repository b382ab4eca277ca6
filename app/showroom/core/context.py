from dataclasses import dataclass

from fastapi import Request

ADMIN_ROLE = "admin"
SHOWROOM_ROLE = "showroom"
ROLES = (ADMIN_ROLE, SHOWROOM_ROLE)


@dataclass(frozen=True)
class RequestContext:
    user_id: str | None
    showroom_id: str | None
    role: str | None
    username: str | None
    trace_id: str

    @property
    def is_admin(self) -> bool:
        return (self.role or "").lower() == ADMIN_ROLE


def build_request_context(
    *,
    user_id: str | None,
    showroom_id: str | None,
    role: str | None,
    username: str | None = None,
    trace_id: str = "",
) -> RequestContext:
    return RequestContext(
        user_id=user_id,
        showroom_id=showroom_id,
        role=role,
        username=username,
        trace_id=trace_id,
    )


def get_request_context(request: Request) -> RequestContext:
    context = getattr(request.state, "context", None)
    if isinstance(context, RequestContext):
        return context
    return build_request_context(
        user_id=getattr(request.state, "user_id", None),
        showroom_id=getattr(request.state, "showroom_id", None),
        role=getattr(request.state, "role", None),
        trace_id=getattr(request.state, "trace_id", ""),
    )

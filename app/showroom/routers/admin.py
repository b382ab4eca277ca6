from fastapi import APIRouter, Depends, Query

from app.showroom.core.context import RequestContext
from app.showroom.core.deps import require_admin
from app.showroom.db.models import User
from app.showroom.db.session import get_db
from app.showroom.schemas.admin import (
    AdminUserListResponse,
    AdminUserResponse,
    ShowroomDeleteResponse,
    UserCreateRequest,
)
from app.showroom.schemas.errors import ERROR_RESPONSES
from app.showroom.services.admin import ShowroomAdminService

router = APIRouter()


def _user_response(user: User) -> AdminUserResponse:
    return AdminUserResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        showroom_name=user.showroom_name,
        is_active=user.is_active,
        created_at=user.created_at,
    )


@router.post(
    "/users",
    response_model=AdminUserResponse,
    status_code=201,
    summary="Create user",
    responses=ERROR_RESPONSES,
)
def create_user(
    payload: UserCreateRequest,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    user = ShowroomAdminService(db).create_user(context, payload)
    return _user_response(user)


@router.get("/users", response_model=AdminUserListResponse, summary="List users", responses=ERROR_RESPONSES)
def list_users(
    role: str | None = Query(None),
    search: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    _context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    rows, total = ShowroomAdminService(db).list_users(role=role, search=search, limit=limit, offset=offset)
    return AdminUserListResponse(rows=[_user_response(user) for user in rows], total=total)


@router.delete(
    "/users/{user_id}",
    response_model=ShowroomDeleteResponse,
    summary="Delete a showroom and its vehicles",
    responses=ERROR_RESPONSES,
)
def delete_user(
    user_id: str,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    deletion = ShowroomAdminService(db).delete_showroom(context, user_id)
    return ShowroomDeleteResponse(
        message=f"Showroom {deletion.username} and all its vehicles deleted",
        user_id=deletion.user_id,
        vehicles_deleted=deletion.vehicles_deleted,
    )

from fastapi import Depends, APIRouter

from app.showroom.core.deps import require_active_user, require_request_context
from app.showroom.schemas.auth import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def me(user=Depends(require_active_user), context=Depends(require_request_context)):
    return UserResponse(
        id=str(user.id),
        username=user.username,
        role=user.role,
        showroom_id=context.showroom_id,
        showroom_name=user.showroom_name,
    )

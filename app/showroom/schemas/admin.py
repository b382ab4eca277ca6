from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field, model_validator

from app.showroom.schemas.common import ApiModel


class UserCreateRequest(ApiModel):
    username: str = Field(min_length=3, max_length=150)
    password: str = Field(min_length=6)
    role: Literal["admin", "showroom"] = "showroom"
    showroom_name: str | None = None

    @model_validator(mode="after")
    def require_showroom_name(self):
        if self.role == "showroom" and not (self.showroom_name or "").strip():
            raise ValueError("showroomName is required for showroom accounts")
        return self


class AdminUserResponse(ApiModel):
    id: UUID
    username: str
    role: str
    showroom_name: str | None
    is_active: bool
    created_at: datetime


class AdminUserListResponse(ApiModel):
    rows: list[AdminUserResponse]
    total: int


class ShowroomDeleteResponse(ApiModel):
    message: str
    user_id: UUID
    vehicles_deleted: dict[str, int]

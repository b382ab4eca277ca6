from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from app.showroom.schemas.common import ApiModel


class VehicleCreateRequest(ApiModel):
    vehicle_type: str = Field(min_length=1)
    brand: str = Field(min_length=2, max_length=120)
    model: str = Field(min_length=1, max_length=120)
    price: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    color: str | None = Field(None, max_length=60)
    engine_number: str = Field(min_length=1, max_length=120)
    chassis_number: str = Field(min_length=1, max_length=120)
    partner: str | None = Field(None, max_length=255)
    partner_cnic: str = Field(alias="partnerCNIC")
    showroom_id: str | None = None


class VehicleResponse(ApiModel):
    id: UUID
    vehicle_type: str
    brand: str
    model: str
    price: Decimal
    color: str | None
    status: str
    engine_number: str
    chassis_number: str
    partner: str | None
    partner_cnic: str | None = Field(alias="partnerCNIC")
    showroom_id: UUID
    showroom_name: str
    date_added: datetime


class VehicleCreateResponse(ApiModel):
    message: str
    vehicle: VehicleResponse


class VehicleListResponse(ApiModel):
    rows: list[VehicleResponse]

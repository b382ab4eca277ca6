from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from app.showroom.schemas.common import ApiModel


class StockMovementResponse(ApiModel):
    id: UUID
    vehicle_type: str
    vehicle_id: UUID | None
    sale_id: UUID | None
    brand: str
    model: str
    price: Decimal
    engine_number: str
    chassis_number: str
    customer_name: str | None
    customer_cnic: str | None = Field(alias="customerCNIC")
    status: str
    showroom_id: UUID
    showroom_name: str
    payment_type: str
    amount: Decimal
    action_by: UUID
    partner: str
    partner_cnic: str = Field(alias="partnerCNIC")
    created_at: datetime


class StockMovementListResponse(ApiModel):
    rows: list[StockMovementResponse]

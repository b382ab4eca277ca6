from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from app.showroom.core.constants import PaymentType
from app.showroom.schemas.common import ApiModel


class SaleCreateRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "vehicleType": "Bike",
                    "vehicleId": "6f1c1f7e-8b7e-4a55-9d53-0f4a2d7f7d10",
                    "paymentType": "Installment",
                    "customerName": "Ali",
                    "customerCNIC": "42101-1234567-1",
                    "advanceAmount": 100000,
                    "months": 10,
                }
            ]
        }
    }

    vehicle_type: str = Field(min_length=1)
    vehicle_id: str = Field(min_length=1)
    payment_type: PaymentType
    customer_name: str = Field(max_length=255)
    customer_cnic: str = Field(alias="customerCNIC")
    advance_amount: Decimal | None = Field(None, max_digits=14, decimal_places=2)
    months: int | None = None
    showroom_id: str | None = None


class SaleResponse(ApiModel):
    id: UUID
    vehicle_id: UUID
    vehicle_type: str
    brand: str
    model: str
    color: str | None
    price: Decimal
    total_amount: Decimal
    payment_type: str
    paid_amount: Decimal
    due_amount: Decimal
    months: int | None
    monthly_installment: Decimal
    customer_name: str
    customer_cnic: str = Field(alias="customerCNIC")
    engine_number: str
    chassis_number: str
    showroom_id: UUID
    showroom_name: str
    sold_by_user_id: UUID
    sale_date: datetime


class SaleReceipt(SaleResponse):
    vehicle_name: str
    per_month: Decimal


class SaleCreateResponse(ApiModel):
    success: bool = True
    sale: SaleReceipt
    message: str


class SaleListResponse(ApiModel):
    rows: list[SaleResponse]

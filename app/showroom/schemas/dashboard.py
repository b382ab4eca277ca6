from decimal import Decimal

from app.showroom.schemas.common import ApiModel


class CategoryStock(ApiModel):
    vehicle_type: str
    stock_in: int
    stock_out: int


class DashboardResponse(ApiModel):
    showroom_id: str | None
    total_sales: int
    total_revenue: Decimal
    current_stock: int
    categories: list[CategoryStock]

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from app.showroom.core.constants import VehicleStatus
from app.showroom.repos.sales import SaleQueryFilters, SaleRepository
from app.showroom.repos.vehicles import InventoryRepository


@dataclass
class CategoryCounts:
    vehicle_type: str
    stock_in: int
    stock_out: int


@dataclass
class DashboardSummary:
    showroom_id: str | None
    total_sales: int
    total_revenue: Decimal
    current_stock: int
    categories: list[CategoryCounts] = field(default_factory=list)


def build_dashboard(db, showroom_id: str | None) -> DashboardSummary:
    total_sales, total_revenue = SaleRepository(db).totals(SaleQueryFilters(showroom_id=showroom_id))
    categories = []
    for inventory in InventoryRepository.all_categories(db):
        counts = inventory.count_by_status(showroom_id)
        categories.append(
            CategoryCounts(
                vehicle_type=inventory.category.value,
                stock_in=counts[VehicleStatus.STOCK_IN.value],
                stock_out=counts[VehicleStatus.STOCK_OUT.value],
            )
        )
    return DashboardSummary(
        showroom_id=showroom_id,
        total_sales=total_sales,
        total_revenue=total_revenue,
        current_stock=sum(item.stock_in for item in categories),
        categories=categories,
    )

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select

from app.showroom.db.models import Sale


@dataclass(frozen=True)
class SaleQueryFilters:
    showroom_id: str | None = None
    vehicle_type: str | None = None
    payment_type: str | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None


class SaleRepository:
    """Sale ledger. Rows are only ever appended."""

    def __init__(self, db):
        self.db = db

    def append(self, sale: Sale) -> Sale:
        self.db.add(sale)
        self.db.flush()
        return sale

    def get_by_id(self, sale_id) -> Sale | None:
        return self.db.get(Sale, sale_id)

    def list_sales(self, filters: SaleQueryFilters, *, limit: int | None = None) -> list[Sale]:
        query = self._apply_filters(select(Sale), filters).order_by(Sale.sale_date.desc())
        if limit:
            query = query.limit(limit)
        return self.db.execute(query).scalars().all()

    def totals(self, filters: SaleQueryFilters) -> tuple[int, Decimal]:
        query = self._apply_filters(
            select(func.count(Sale.id), func.coalesce(func.sum(Sale.total_amount), 0)),
            filters,
        )
        count, revenue = self.db.execute(query).one()
        return int(count or 0), Decimal(str(revenue or 0))

    @staticmethod
    def _apply_filters(query, filters: SaleQueryFilters):
        if filters.showroom_id:
            query = query.where(Sale.showroom_id == filters.showroom_id)
        if filters.vehicle_type:
            query = query.where(Sale.vehicle_type == filters.vehicle_type)
        if filters.payment_type:
            query = query.where(Sale.payment_type == filters.payment_type)
        if filters.from_date:
            query = query.where(Sale.sale_date >= filters.from_date)
        if filters.to_date:
            query = query.where(Sale.sale_date <= filters.to_date)
        return query

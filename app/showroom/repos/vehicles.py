from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, func, or_, select, update

from app.showroom.core.constants import VehicleCategory, VehicleStatus
from app.showroom.db.models import VEHICLE_MODELS, VehicleColumns, vehicle_model_for


@dataclass(frozen=True)
class VehicleQueryFilters:
    showroom_id: str | None = None
    status: str | None = None
    q: str | None = None


class InventoryRepository:
    """Vehicle stock for one category table."""

    def __init__(self, db, category: VehicleCategory):
        self.db = db
        self.category = category
        self.model = vehicle_model_for(category)

    @classmethod
    def all_categories(cls, db) -> list["InventoryRepository"]:
        return [cls(db, category) for category in VEHICLE_MODELS]

    def get_by_id(self, vehicle_id) -> VehicleColumns | None:
        return self.db.get(self.model, vehicle_id)

    def find_duplicate(self, engine_number: str, chassis_number: str) -> VehicleColumns | None:
        stmt = select(self.model).where(
            or_(
                self.model.engine_number == engine_number,
                self.model.chassis_number == chassis_number,
            )
        )
        return self.db.execute(stmt).scalars().first()

    def add(self, vehicle: VehicleColumns) -> VehicleColumns:
        self.db.add(vehicle)
        self.db.flush()
        return vehicle

    def claim_for_sale(self, vehicle_id, *, remove: bool = False) -> bool:
        """Take a StockIn vehicle out of stock with a compare-and-set write.

        Returns False when another writer already moved it out of StockIn.
        """
        if remove:
            stmt = delete(self.model).where(
                self.model.id == vehicle_id,
                self.model.status == VehicleStatus.STOCK_IN.value,
            )
        else:
            stmt = (
                update(self.model)
                .where(
                    self.model.id == vehicle_id,
                    self.model.status == VehicleStatus.STOCK_IN.value,
                )
                .values(status=VehicleStatus.STOCK_OUT.value, updated_at=datetime.utcnow())
            )
        result = self.db.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount == 1

    def set_status(self, vehicle_id, status: VehicleStatus) -> None:
        self.db.execute(
            update(self.model)
            .where(self.model.id == vehicle_id)
            .values(status=status.value, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )

    def delete(self, vehicle_id) -> None:
        self.db.execute(
            delete(self.model)
            .where(self.model.id == vehicle_id)
            .execution_options(synchronize_session=False)
        )

    def delete_by_showroom(self, showroom_id) -> int:
        result = self.db.execute(
            delete(self.model)
            .where(self.model.showroom_id == showroom_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    def list_by_tenant(self, filters: VehicleQueryFilters, *, limit: int | None = None) -> list[VehicleColumns]:
        query = select(self.model)
        if filters.showroom_id:
            query = query.where(self.model.showroom_id == filters.showroom_id)
        if filters.status:
            query = query.where(self.model.status == filters.status)
        if filters.q:
            like = f"%{filters.q}%"
            query = query.where(
                or_(
                    self.model.brand.ilike(like),
                    self.model.model.ilike(like),
                    self.model.engine_number.ilike(like),
                    self.model.chassis_number.ilike(like),
                )
            )
        query = query.order_by(self.model.date_added.desc())
        if limit:
            query = query.limit(limit)
        return self.db.execute(query).scalars().all()

    def count_by_status(self, showroom_id=None) -> dict[str, int]:
        query = select(self.model.status, func.count(self.model.id)).group_by(self.model.status)
        if showroom_id:
            query = query.where(self.model.showroom_id == showroom_id)
        counts = {status.value: 0 for status in VehicleStatus}
        for status, count in self.db.execute(query).all():
            counts[status] = int(count)
        return counts

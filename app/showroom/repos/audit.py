from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select

from app.showroom.db.models import AuditEvent


@dataclass(frozen=True)
class AuditEventFilters:
    showroom_id: str | None = None
    status: str | None = None
    vehicle_type: str | None = None
    sale_id: str | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None


class AuditTrailRepository:
    """Append-only movement log. Appends join the caller's transaction."""

    def __init__(self, db):
        self.db = db

    def append(self, event: AuditEvent) -> AuditEvent:
        self.db.add(event)
        self.db.flush()
        return event

    def list_events(self, filters: AuditEventFilters, *, limit: int | None = None) -> list[AuditEvent]:
        query = select(AuditEvent)
        if filters.showroom_id:
            query = query.where(AuditEvent.showroom_id == filters.showroom_id)
        if filters.status:
            query = query.where(AuditEvent.status == filters.status)
        if filters.vehicle_type:
            query = query.where(AuditEvent.vehicle_type == filters.vehicle_type)
        if filters.sale_id:
            query = query.where(AuditEvent.sale_id == filters.sale_id)
        if filters.from_date:
            query = query.where(AuditEvent.created_at >= filters.from_date)
        if filters.to_date:
            query = query.where(AuditEvent.created_at <= filters.to_date)
        query = query.order_by(AuditEvent.created_at.desc())
        if limit:
            query = query.limit(limit)
        return self.db.execute(query).scalars().all()

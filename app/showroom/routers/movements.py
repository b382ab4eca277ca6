from datetime import datetime

from fastapi import APIRouter, Depends, Query

from app.showroom.core.constants import VehicleStatus
from app.showroom.core.context import RequestContext
from app.showroom.core.deps import require_request_context
from app.showroom.core.scope import resolve_showroom_filter
from app.showroom.db.session import get_db
from app.showroom.repos.audit import AuditEventFilters, AuditTrailRepository
from app.showroom.schemas.errors import ERROR_RESPONSES
from app.showroom.schemas.movements import StockMovementListResponse, StockMovementResponse
from app.showroom.services.stock import parse_category

router = APIRouter()


@router.get(
    "/stock-movements",
    response_model=StockMovementListResponse,
    summary="Stock-in and stock-out history",
    responses=ERROR_RESPONSES,
)
def list_stock_movements(
    vehicle_type: str | None = Query(None, alias="vehicleType"),
    status: VehicleStatus | None = Query(None),
    showroom_id: str | None = Query(None, alias="showroomId"),
    from_date: datetime | None = Query(None, alias="fromDate"),
    to_date: datetime | None = Query(None, alias="toDate"),
    limit: int | None = Query(None, ge=1, le=1000),
    context: RequestContext = Depends(require_request_context),
    db=Depends(get_db),
):
    filters = AuditEventFilters(
        showroom_id=resolve_showroom_filter(context, showroom_id),
        status=status.value if status else None,
        vehicle_type=parse_category(vehicle_type).value if vehicle_type else None,
        from_date=from_date,
        to_date=to_date,
    )
    rows = AuditTrailRepository(db).list_events(filters, limit=limit)
    return StockMovementListResponse(rows=[StockMovementResponse.model_validate(row) for row in rows])

from fastapi import APIRouter, Depends, Query

from app.showroom.core.context import RequestContext
from app.showroom.core.deps import require_request_context
from app.showroom.core.scope import resolve_showroom_filter
from app.showroom.db.session import get_db
from app.showroom.schemas.dashboard import CategoryStock, DashboardResponse
from app.showroom.schemas.errors import ERROR_RESPONSES
from app.showroom.services.dashboard import build_dashboard

router = APIRouter()


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Stock and sales summary",
    responses={401: ERROR_RESPONSES[401], 403: ERROR_RESPONSES[403]},
)
def dashboard(
    showroom_id: str | None = Query(None, alias="showroomId"),
    context: RequestContext = Depends(require_request_context),
    db=Depends(get_db),
):
    summary = build_dashboard(db, resolve_showroom_filter(context, showroom_id))
    return DashboardResponse(
        showroom_id=summary.showroom_id,
        total_sales=summary.total_sales,
        total_revenue=summary.total_revenue,
        current_stock=summary.current_stock,
        categories=[
            CategoryStock(vehicle_type=item.vehicle_type, stock_in=item.stock_in, stock_out=item.stock_out)
            for item in summary.categories
        ],
    )

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.showroom.core.config import Settings
from app.showroom.core.constants import VehicleStatus
from app.showroom.core.context import RequestContext
from app.showroom.core.deps import get_settings, require_request_context
from app.showroom.core.error_catalog import ErrorCatalog
from app.showroom.core.metrics import metrics
from app.showroom.core.scope import resolve_showroom_filter
from app.showroom.db.models import VehicleColumns
from app.showroom.db.session import get_db
from app.showroom.repos.vehicles import InventoryRepository, VehicleQueryFilters
from app.showroom.schemas.errors import ERROR_RESPONSES
from app.showroom.schemas.vehicles import (
    VehicleCreateRequest,
    VehicleCreateResponse,
    VehicleListResponse,
    VehicleResponse,
)
from app.showroom.services.idempotency import IdempotencyService, extract_idempotency_key
from app.showroom.services.stock import StockInWorkflow, parse_category

router = APIRouter()


def _vehicle_response(vehicle: VehicleColumns) -> VehicleResponse:
    return VehicleResponse(
        id=vehicle.id,
        vehicle_type=vehicle.category.value,
        brand=vehicle.brand,
        model=vehicle.model,
        price=vehicle.price,
        color=vehicle.color,
        status=vehicle.status,
        engine_number=vehicle.engine_number,
        chassis_number=vehicle.chassis_number,
        partner=vehicle.partner,
        partner_cnic=vehicle.partner_cnic,
        showroom_id=vehicle.showroom_id,
        showroom_name=vehicle.showroom_name,
        date_added=vehicle.date_added,
    )


@router.post(
    "/vehicles",
    response_model=VehicleCreateResponse,
    status_code=201,
    summary="Stock in a vehicle",
    responses=ERROR_RESPONSES,
)
def create_vehicle(
    request: Request,
    payload: VehicleCreateRequest,
    context: RequestContext = Depends(require_request_context),
    settings: Settings = Depends(get_settings),
    db=Depends(get_db),
):
    idempotency = None
    idempotency_key = extract_idempotency_key(request.headers)
    if idempotency_key:
        request_hash = IdempotencyService.fingerprint(payload.model_dump(mode="json"))
        idempotency, replay = IdempotencyService(db).start(
            owner_id=context.user_id,
            endpoint=str(request.url.path),
            method=request.method,
            idempotency_key=idempotency_key,
            request_hash=request_hash,
        )
        if replay:
            metrics.increment_idempotency_replay()
            return JSONResponse(
                status_code=replay.status_code,
                content=replay.response_body,
                headers={"X-Idempotency-Result": ErrorCatalog.IDEMPOTENCY_REPLAY.code},
            )
        request.state.idempotency = idempotency

    vehicle = StockInWorkflow(db, settings).stock_in(context, payload)
    response = VehicleCreateResponse(
        message=f"{vehicle.category.value} added successfully",
        vehicle=_vehicle_response(vehicle),
    )
    if idempotency is not None:
        idempotency.record_success(status_code=201, response_body=response.model_dump(mode="json", by_alias=True))
    return response


@router.get("/vehicles", response_model=VehicleListResponse, summary="List stocked vehicles", responses=ERROR_RESPONSES)
def list_vehicles(
    vehicle_type: str | None = Query(None, alias="vehicleType"),
    status: VehicleStatus | None = Query(None),
    showroom_id: str | None = Query(None, alias="showroomId"),
    q: str | None = Query(None),
    limit: int | None = Query(None, ge=1),
    context: RequestContext = Depends(require_request_context),
    settings: Settings = Depends(get_settings),
    db=Depends(get_db),
):
    limit = min(limit or settings.VEHICLE_LIST_DEFAULT_LIMIT, settings.VEHICLE_LIST_MAX_LIMIT)
    filters = VehicleQueryFilters(
        showroom_id=resolve_showroom_filter(context, showroom_id),
        status=status.value if status else None,
        q=q.strip() if q and q.strip() else None,
    )
    if vehicle_type:
        inventories = [InventoryRepository(db, parse_category(vehicle_type))]
    else:
        inventories = InventoryRepository.all_categories(db)

    rows: list[VehicleColumns] = []
    for inventory in inventories:
        rows.extend(inventory.list_by_tenant(filters, limit=limit))
    rows.sort(key=lambda vehicle: vehicle.date_added, reverse=True)
    return VehicleListResponse(rows=[_vehicle_response(vehicle) for vehicle in rows[:limit]])

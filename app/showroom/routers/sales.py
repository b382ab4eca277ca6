from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.showroom.core.config import Settings
from app.showroom.core.constants import PaymentType
from app.showroom.core.context import RequestContext
from app.showroom.core.deps import get_settings, require_request_context
from app.showroom.core.error_catalog import AppError, ErrorCatalog
from app.showroom.core.metrics import metrics
from app.showroom.core.ids import parse_uuid
from app.showroom.core.scope import resolve_showroom_filter
from app.showroom.db.session import get_db
from app.showroom.repos.sales import SaleQueryFilters, SaleRepository
from app.showroom.schemas.errors import ERROR_RESPONSES
from app.showroom.schemas.sales import (
    SaleCreateRequest,
    SaleCreateResponse,
    SaleListResponse,
    SaleReceipt,
    SaleResponse,
)
from app.showroom.services.idempotency import IdempotencyService, extract_idempotency_key
from app.showroom.services.sales import SaleResult, SaleWorkflow
from app.showroom.services.stock import parse_category

router = APIRouter()


def _sale_receipt(result: SaleResult) -> SaleReceipt:
    base = SaleResponse.model_validate(result.sale)
    return SaleReceipt(**base.model_dump(), vehicle_name=result.vehicle_name, per_month=result.per_month)


@router.post(
    "/sales",
    response_model=SaleCreateResponse,
    status_code=201,
    summary="Sell a stocked vehicle",
    responses=ERROR_RESPONSES,
)
def create_sale(
    request: Request,
    payload: SaleCreateRequest,
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

    result = SaleWorkflow(db, settings).submit_sale(context, payload)
    response = SaleCreateResponse(sale=_sale_receipt(result), message="Sale completed successfully")
    if idempotency is not None:
        idempotency.record_success(status_code=201, response_body=response.model_dump(mode="json", by_alias=True))
    return response


@router.get("/sales", response_model=SaleListResponse, summary="List sales", responses=ERROR_RESPONSES)
def list_sales(
    vehicle_type: str | None = Query(None, alias="vehicleType"),
    payment_type: PaymentType | None = Query(None, alias="paymentType"),
    showroom_id: str | None = Query(None, alias="showroomId"),
    from_date: datetime | None = Query(None, alias="fromDate"),
    to_date: datetime | None = Query(None, alias="toDate"),
    limit: int | None = Query(None, ge=1, le=1000),
    context: RequestContext = Depends(require_request_context),
    db=Depends(get_db),
):
    category = parse_category(vehicle_type) if vehicle_type else None
    filters = SaleQueryFilters(
        showroom_id=resolve_showroom_filter(context, showroom_id),
        vehicle_type=category.value if category else None,
        payment_type=payment_type.value if payment_type else None,
        from_date=from_date,
        to_date=to_date,
    )
    rows = SaleRepository(db).list_sales(filters, limit=limit)
    return SaleListResponse(rows=[SaleResponse.model_validate(row) for row in rows])


@router.get(
    "/sales/{sale_id}",
    response_model=SaleResponse,
    summary="Get one sale",
    responses={401: ERROR_RESPONSES[401], 404: ERROR_RESPONSES[404]},
)
def get_sale(
    sale_id: str,
    context: RequestContext = Depends(require_request_context),
    db=Depends(get_db),
):
    parsed = parse_uuid(sale_id)
    sale = SaleRepository(db).get_by_id(parsed) if parsed else None
    # Another showroom's sale is reported as missing.
    if sale is None or (not context.is_admin and str(sale.showroom_id) != context.showroom_id):
        raise AppError(ErrorCatalog.SALE_NOT_FOUND, details={"sale_id": sale_id})
    return SaleResponse.model_validate(sale)

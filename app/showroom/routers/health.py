from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from app.showroom.core.error_catalog import ErrorCatalog
from app.showroom.core.errors import error_response

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    trace_id = getattr(request.state, "trace_id", "")
    return {"status": "ok", "trace_id": trace_id}


@router.get("/ready")
def ready(request: Request):
    trace_id = getattr(request.state, "trace_id", "")
    try:
        request.app.state.database.ping()
    except (SQLAlchemyError, RuntimeError) as exc:
        return error_response(
            code=ErrorCatalog.DB_UNAVAILABLE.code,
            message=ErrorCatalog.DB_UNAVAILABLE.message,
            details=str(exc),
            trace_id=trace_id,
            status_code=ErrorCatalog.DB_UNAVAILABLE.status_code,
        )
    return {"status": "ready", "trace_id": trace_id}

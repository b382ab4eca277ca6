from app.showroom.core.context import RequestContext
from app.showroom.core.error_catalog import AppError, ErrorCatalog
from app.showroom.core.ids import parse_uuid


def resolve_showroom_scope(context: RequestContext, requested_showroom_id: str | None) -> str | None:
    """Return the showroom id a query must be filtered by.

    Admins get whatever they asked for (``None`` meaning every showroom).
    Showroom accounts are pinned to their own id and may not name another.
    """
    if context.is_admin:
        return requested_showroom_id or None
    if not context.showroom_id:
        raise AppError(ErrorCatalog.PERMISSION_DENIED)
    if requested_showroom_id and requested_showroom_id != context.showroom_id:
        raise AppError(ErrorCatalog.CROSS_TENANT_ACCESS_DENIED)
    return context.showroom_id


def enforce_vehicle_scope(
    context: RequestContext,
    vehicle_showroom_id: str,
    *,
    requested_showroom_id: str | None = None,
) -> None:
    if context.is_admin:
        if requested_showroom_id and requested_showroom_id != vehicle_showroom_id:
            raise AppError(
                ErrorCatalog.SHOWROOM_SCOPE_MISMATCH,
                details={"showroom_id": requested_showroom_id},
            )
        return
    if vehicle_showroom_id != context.showroom_id:
        raise AppError(ErrorCatalog.SHOWROOM_SCOPE_MISMATCH)


def resolve_showroom_filter(context: RequestContext, requested_showroom_id: str | None) -> str | None:
    """Like ``resolve_showroom_scope`` but also rejects ids that are not UUIDs."""
    showroom_id = resolve_showroom_scope(context, requested_showroom_id)
    if showroom_id is not None and parse_uuid(showroom_id) is None:
        raise AppError(
            ErrorCatalog.VALIDATION_ERROR,
            details={"field": "showroomId", "message": "showroomId must be a UUID"},
        )
    return showroom_id

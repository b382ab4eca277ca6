from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.showroom.core.config import Settings
from app.showroom.core.constants import NO_PAYMENT, VehicleCategory, VehicleStatus, is_valid_cnic
from app.showroom.core.context import SHOWROOM_ROLE, RequestContext
from app.showroom.core.error_catalog import AppError, ErrorCatalog
from app.showroom.core.ids import parse_uuid
from app.showroom.core.logging import log_json
from app.showroom.core.scope import resolve_showroom_scope
from app.showroom.db.models import AuditEvent, User, VehicleColumns, vehicle_model_for
from app.showroom.repos.audit import AuditTrailRepository
from app.showroom.repos.users import UserRepository
from app.showroom.repos.vehicles import InventoryRepository
from app.showroom.schemas.vehicles import VehicleCreateRequest
from app.showroom.services.partners import resolve_partner

logger = logging.getLogger("showroom.stock")


def parse_category(value: str | None) -> VehicleCategory:
    category = VehicleCategory.parse(value)
    if category is None:
        raise AppError(
            ErrorCatalog.INVALID_VEHICLE_TYPE,
            details={"vehicle_type": value, "available_types": [item.value for item in VehicleCategory]},
        )
    return category


class StockInWorkflow:
    def __init__(self, db, settings: Settings):
        self.db = db
        self.settings = settings
        self.users = UserRepository(db)
        self.audit = AuditTrailRepository(db)

    def _target_showroom(self, caller: RequestContext, requested_showroom_id: str | None) -> User:
        showroom_id = resolve_showroom_scope(caller, requested_showroom_id)
        if showroom_id is None:
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"field": "showroomId", "message": "showroomId is required when stocking as admin"},
            )
        user_id = parse_uuid(showroom_id)
        showroom = self.users.get_by_id(user_id) if user_id else None
        if showroom is None or showroom.role != SHOWROOM_ROLE or not showroom.is_active:
            raise AppError(ErrorCatalog.SHOWROOM_NOT_FOUND, details={"showroom_id": showroom_id})
        return showroom

    def stock_in(self, caller: RequestContext, request: VehicleCreateRequest) -> VehicleColumns:
        category = parse_category(request.vehicle_type)
        partner_cnic = request.partner_cnic.strip()
        if not is_valid_cnic(partner_cnic):
            raise AppError(ErrorCatalog.INVALID_PARTNER_CNIC, details={"partner_cnic": request.partner_cnic})
        brand = request.brand.strip()
        if len(brand) < 2:
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"field": "brand", "message": "brand must be at least 2 characters"},
            )
        showroom = self._target_showroom(caller, request.showroom_id)

        inventory = InventoryRepository(self.db, category)
        engine_number = request.engine_number.strip()
        chassis_number = request.chassis_number.strip()
        if inventory.find_duplicate(engine_number, chassis_number) is not None:
            raise AppError(
                ErrorCatalog.DUPLICATE_VEHICLE,
                details={"engine_number": engine_number, "chassis_number": chassis_number},
            )

        partner = resolve_partner(
            request.partner,
            partner_cnic,
            showroom.showroom_name,
            placeholder_cnic=self.settings.PARTNER_CNIC_PLACEHOLDER,
        )
        now = datetime.utcnow()
        model = vehicle_model_for(category)
        vehicle = model(
            brand=brand,
            model=request.model.strip(),
            price=request.price,
            color=request.color,
            status=VehicleStatus.STOCK_IN.value,
            engine_number=engine_number,
            chassis_number=chassis_number,
            partner=(request.partner or "").strip() or None,
            partner_cnic=partner_cnic,
            showroom_id=showroom.id,
            showroom_name=showroom.showroom_name,
            date_added=now,
        )
        try:
            inventory.add(vehicle)
            self.audit.append(
                AuditEvent(
                    vehicle_type=category.value,
                    vehicle_id=vehicle.id,
                    brand=vehicle.brand,
                    model=vehicle.model,
                    price=vehicle.price,
                    engine_number=engine_number,
                    chassis_number=chassis_number,
                    customer_name=None,
                    customer_cnic=None,
                    status=VehicleStatus.STOCK_IN.value,
                    showroom_id=showroom.id,
                    showroom_name=showroom.showroom_name,
                    payment_type=NO_PAYMENT,
                    amount=Decimal("0"),
                    action_by=parse_uuid(caller.user_id),
                    partner=partner.name,
                    partner_cnic=partner.cnic,
                    created_at=now,
                )
            )
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise AppError(
                ErrorCatalog.DUPLICATE_VEHICLE,
                details={"engine_number": engine_number, "chassis_number": chassis_number},
            ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Stock-in rolled back after storage failure")
            raise AppError(ErrorCatalog.STORAGE_FAILURE, details={"type": exc.__class__.__name__}) from exc

        log_json(
            logger,
            {
                "event": "vehicle_stocked",
                "vehicle_type": category.value,
                "vehicle_id": str(vehicle.id),
                "showroom_id": str(showroom.id),
                "user_id": caller.user_id,
                "trace_id": caller.trace_id,
            },
        )
        return vehicle

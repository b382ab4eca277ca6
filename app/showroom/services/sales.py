from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from app.showroom.core.config import Settings
from app.showroom.core.constants import PaymentType, VehicleCategory, VehicleStatus, is_valid_cnic
from app.showroom.core.context import RequestContext
from app.showroom.core.error_catalog import AppError, ErrorCatalog
from app.showroom.core.errors import is_lock_timeout
from app.showroom.core.ids import parse_uuid
from app.showroom.core.logging import log_json
from app.showroom.core.metrics import metrics
from app.showroom.core.scope import enforce_vehicle_scope, resolve_showroom_scope
from app.showroom.db.models import AuditEvent, Sale
from app.showroom.repos.audit import AuditTrailRepository
from app.showroom.repos.sales import SaleRepository
from app.showroom.repos.users import UserRepository
from app.showroom.repos.vehicles import InventoryRepository
from app.showroom.schemas.sales import SaleCreateRequest
from app.showroom.services.partners import resolve_partner
from app.showroom.services.payments import compute_payment_split, validate_installment_terms

logger = logging.getLogger("showroom.sales")


@dataclass
class SaleResult:
    sale: Sale
    vehicle_name: str
    per_month: Decimal


class SaleWorkflow:
    """Turns one StockIn vehicle into a completed sale.

    The vehicle claim, the sale row and the stock-out movement are written in
    one transaction; nothing is kept if any of them fails.
    """

    def __init__(self, db, settings: Settings):
        self.db = db
        self.settings = settings
        self.users = UserRepository(db)
        self.ledger = SaleRepository(db)
        self.audit = AuditTrailRepository(db)

    def submit_sale(self, caller: RequestContext, request: SaleCreateRequest) -> SaleResult:
        try:
            result = self._submit(caller, request)
        except AppError as exc:
            metrics.increment_sale_rejected(exc.error.code)
            log_json(
                logger,
                {
                    "event": "sale_rejected",
                    "code": exc.error.code,
                    "vehicle_type": request.vehicle_type,
                    "vehicle_id": request.vehicle_id,
                    "user_id": caller.user_id,
                    "trace_id": caller.trace_id,
                },
                level=logging.WARNING,
            )
            raise
        sale = result.sale
        metrics.increment_sale_completed(sale.vehicle_type, sale.payment_type)
        log_json(
            logger,
            {
                "event": "sale_completed",
                "sale_id": str(sale.id),
                "vehicle_type": sale.vehicle_type,
                "vehicle_id": str(sale.vehicle_id),
                "showroom_id": str(sale.showroom_id),
                "payment_type": sale.payment_type,
                "total_amount": sale.total_amount,
                "user_id": caller.user_id,
                "trace_id": caller.trace_id,
            },
        )
        return result

    def _submit(self, caller: RequestContext, request: SaleCreateRequest) -> SaleResult:
        category = VehicleCategory.parse(request.vehicle_type)
        if category is None:
            raise AppError(
                ErrorCatalog.INVALID_VEHICLE_TYPE,
                details={
                    "vehicle_type": request.vehicle_type,
                    "available_types": [item.value for item in VehicleCategory],
                },
            )
        customer_name = request.customer_name.strip()
        if not customer_name:
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"field": "customerName", "message": "customerName is required"},
            )
        customer_cnic = request.customer_cnic.strip()
        if not is_valid_cnic(customer_cnic):
            raise AppError(ErrorCatalog.INVALID_CNIC, details={"customer_cnic": request.customer_cnic})
        resolve_showroom_scope(caller, request.showroom_id)

        inventory = InventoryRepository(self.db, category)
        vehicle_id = parse_uuid(request.vehicle_id)
        vehicle = inventory.get_by_id(vehicle_id) if vehicle_id else None
        if vehicle is None:
            raise AppError(
                ErrorCatalog.VEHICLE_NOT_FOUND,
                details={"vehicle_type": category.value, "vehicle_id": request.vehicle_id},
            )
        if vehicle.status != VehicleStatus.STOCK_IN.value:
            raise AppError(
                ErrorCatalog.VEHICLE_NOT_AVAILABLE,
                details={"vehicle_id": str(vehicle.id), "current_status": vehicle.status},
            )
        enforce_vehicle_scope(
            caller,
            str(vehicle.showroom_id),
            requested_showroom_id=request.showroom_id if caller.is_admin else None,
        )

        showroom = self.users.get_by_id(vehicle.showroom_id)
        if showroom is None or not showroom.is_active:
            raise AppError(ErrorCatalog.SHOWROOM_NOT_FOUND, details={"showroom_id": str(vehicle.showroom_id)})
        showroom_name = showroom.showroom_name or vehicle.showroom_name

        payment_type = PaymentType(request.payment_type)
        if payment_type == PaymentType.INSTALLMENT:
            validate_installment_terms(
                vehicle.price,
                request.advance_amount,
                request.months,
                max_months=self.settings.SALE_MAX_INSTALLMENT_MONTHS,
            )
        split = compute_payment_split(
            vehicle.price,
            payment_type,
            advance_amount=request.advance_amount,
            months=request.months,
        )
        partner = resolve_partner(
            vehicle.partner,
            vehicle.partner_cnic,
            showroom_name,
            placeholder_cnic=self.settings.PARTNER_CNIC_PLACEHOLDER,
        )

        now = datetime.utcnow()
        sale = Sale(
            vehicle_id=vehicle.id,
            vehicle_type=category.value,
            brand=vehicle.brand,
            model=vehicle.model,
            color=vehicle.color,
            price=vehicle.price,
            total_amount=split.total_amount,
            payment_type=payment_type.value,
            paid_amount=split.paid_amount,
            due_amount=split.due_amount,
            months=split.months,
            monthly_installment=split.monthly_installment,
            customer_name=customer_name,
            customer_cnic=customer_cnic,
            engine_number=vehicle.engine_number,
            chassis_number=vehicle.chassis_number,
            showroom_id=showroom.id,
            showroom_name=showroom_name,
            sold_by_user_id=parse_uuid(caller.user_id),
            sale_date=now,
        )
        movement = AuditEvent(
            vehicle_type=category.value,
            vehicle_id=vehicle.id,
            brand=vehicle.brand,
            model=vehicle.model,
            price=vehicle.price,
            engine_number=vehicle.engine_number,
            chassis_number=vehicle.chassis_number,
            customer_name=customer_name,
            customer_cnic=customer_cnic,
            status=VehicleStatus.STOCK_OUT.value,
            showroom_id=showroom.id,
            showroom_name=showroom_name,
            payment_type=payment_type.value,
            amount=split.paid_amount,
            action_by=parse_uuid(caller.user_id),
            partner=partner.name,
            partner_cnic=partner.cnic,
            created_at=now,
        )
        vehicle_name = vehicle.display_name

        try:
            # The claim is the first write so a concurrent sale of the same
            # vehicle loses here, before any sale row exists.
            claimed = inventory.claim_for_sale(vehicle.id, remove=self.settings.SOLD_VEHICLE_POLICY == "delete")
            if not claimed:
                raise AppError(ErrorCatalog.VEHICLE_NOT_AVAILABLE, details={"vehicle_id": str(vehicle.id)})
            self.ledger.append(sale)
            movement.sale_id = sale.id
            self.audit.append(movement)
            self.db.commit()
        except AppError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            if is_lock_timeout(exc):
                metrics.increment_lock_wait_timeout()
                raise AppError(ErrorCatalog.LOCK_TIMEOUT, details={"vehicle_id": str(vehicle_id)}) from exc
            logger.exception("Sale rolled back after storage failure", extra={"vehicle_id": str(vehicle_id)})
            raise AppError(ErrorCatalog.STORAGE_FAILURE, details={"type": exc.__class__.__name__}) from exc

        return SaleResult(sale=sale, vehicle_name=vehicle_name, per_month=split.monthly_installment)

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from sqlalchemy import and_, exists, select

from app.showroom.core.constants import PaymentType, VehicleStatus
from app.showroom.core.context import SHOWROOM_ROLE
from app.showroom.core.metrics import metrics
from app.showroom.db.models import VEHICLE_MODELS, AuditEvent, Sale, User


SEVERITY_CRITICAL = "CRITICAL"
SEVERITY_WARN = "WARN"
ZERO = Decimal("0")


@dataclass(frozen=True)
class IntegrityFinding:
    check_id: str
    severity: str
    showroom_id: str
    message: str
    entity: str
    entity_id: str | None
    details: dict


def resolve_showrooms(db, showroom: str) -> list[str]:
    if showroom.lower() != "all":
        return [showroom]
    rows = db.execute(select(User.id).where(User.role == SHOWROOM_ROLE).order_by(User.username)).all()
    return [str(row.id) for row in rows]


def check_sold_vehicle_in_stock(db, showroom_id: str) -> list[IntegrityFinding]:
    """A sale whose vehicle is still StockIn means the claim never happened."""
    findings = []
    for category, model in VEHICLE_MODELS.items():
        rows = db.execute(
            select(Sale.id, Sale.vehicle_id)
            .join(model, model.id == Sale.vehicle_id)
            .where(Sale.showroom_id == showroom_id)
            .where(Sale.vehicle_type == category.value)
            .where(model.status == VehicleStatus.STOCK_IN.value)
        ).all()
        for row in rows:
            findings.append(
                IntegrityFinding(
                    check_id="sold_vehicle_in_stock",
                    severity=SEVERITY_CRITICAL,
                    showroom_id=showroom_id,
                    message="Sold vehicle is still StockIn.",
                    entity="sales",
                    entity_id=str(row.id),
                    details={"vehicle_type": category.value, "vehicle_id": str(row.vehicle_id)},
                )
            )
    if findings:
        metrics.increment_invariant_violation("sold_vehicle_in_stock", len(findings))
    return findings


def _split_problem(row) -> str | None:
    total = Decimal(str(row.total_amount))
    paid = Decimal(str(row.paid_amount))
    due = Decimal(str(row.due_amount))
    monthly = Decimal(str(row.monthly_installment))
    if paid + due != total:
        return "paid + due != total"
    if row.payment_type != PaymentType.INSTALLMENT.value:
        if due != ZERO or monthly != ZERO:
            return "non-installment sale carries a balance"
        return None
    if not row.months or row.months < 1:
        return "installment sale without months"
    expected = (due / Decimal(row.months)).to_integral_value(rounding=ROUND_CEILING)
    if monthly != expected:
        return "monthly installment is not ceil(due / months)"
    return None


def check_payment_split(db, showroom_id: str) -> list[IntegrityFinding]:
    rows = db.execute(
        select(
            Sale.id,
            Sale.payment_type,
            Sale.total_amount,
            Sale.paid_amount,
            Sale.due_amount,
            Sale.months,
            Sale.monthly_installment,
        ).where(Sale.showroom_id == showroom_id)
    ).all()
    findings = []
    for row in rows:
        problem = _split_problem(row)
        if problem is None:
            continue
        findings.append(
            IntegrityFinding(
                check_id="payment_split",
                severity=SEVERITY_CRITICAL,
                showroom_id=showroom_id,
                message=f"Sale payment split inconsistent: {problem}.",
                entity="sales",
                entity_id=str(row.id),
                details={
                    "payment_type": row.payment_type,
                    "total_amount": str(row.total_amount),
                    "paid_amount": str(row.paid_amount),
                    "due_amount": str(row.due_amount),
                    "months": row.months,
                    "monthly_installment": str(row.monthly_installment),
                },
            )
        )
    if findings:
        metrics.increment_invariant_violation("payment_split", len(findings))
    return findings


def check_missing_stock_out_event(db, showroom_id: str) -> list[IntegrityFinding]:
    has_event = exists().where(
        and_(
            AuditEvent.sale_id == Sale.id,
            AuditEvent.status == VehicleStatus.STOCK_OUT.value,
        )
    )
    rows = db.execute(
        select(Sale.id, Sale.vehicle_type, Sale.vehicle_id)
        .where(Sale.showroom_id == showroom_id)
        .where(~has_event)
    ).all()
    findings = [
        IntegrityFinding(
            check_id="missing_stock_out_event",
            severity=SEVERITY_WARN,
            showroom_id=showroom_id,
            message="Sale has no stock-out audit event.",
            entity="sales",
            entity_id=str(row.id),
            details={"vehicle_type": row.vehicle_type, "vehicle_id": str(row.vehicle_id)},
        )
        for row in rows
    ]
    if findings:
        metrics.increment_invariant_violation("missing_stock_out_event", len(findings))
    return findings


def run_integrity_checks(db, showroom_id: str) -> list[IntegrityFinding]:
    findings: list[IntegrityFinding] = []
    findings.extend(check_sold_vehicle_in_stock(db, showroom_id))
    findings.extend(check_payment_split(db, showroom_id))
    findings.extend(check_missing_stock_out_event(db, showroom_id))
    return findings

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

from app.showroom.core.constants import PaymentType
from app.showroom.core.error_catalog import AppError, ErrorCatalog

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PaymentSplit:
    total_amount: Decimal
    paid_amount: Decimal
    due_amount: Decimal
    months: int | None
    monthly_installment: Decimal


def to_money(value) -> Decimal:
    """Quantize to the two decimal places the money columns store."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_installment_terms(
    price,
    advance_amount,
    months: int | None,
    *,
    max_months: int | None,
) -> None:
    """Reject installment terms outside ``0 < advance <= price`` and ``1 <= months <= max``."""
    details = {"advance_amount": advance_amount, "months": months}
    if advance_amount is None or months is None:
        raise AppError(
            ErrorCatalog.INVALID_PAYMENT_TERMS,
            details={**details, "message": "advanceAmount and months are required for Installment"},
        )
    # Compared at stored precision: an advance that rounds to 0.00 is no advance.
    advance = to_money(advance_amount)
    if advance <= ZERO or advance > to_money(price):
        raise AppError(
            ErrorCatalog.INVALID_PAYMENT_TERMS,
            details={**details, "message": "advanceAmount must be greater than 0 and at most the vehicle price"},
        )
    if months < 1 or (max_months is not None and months > max_months):
        raise AppError(
            ErrorCatalog.INVALID_PAYMENT_TERMS,
            details={**details, "message": "months is out of range", "max_months": max_months},
        )


def compute_payment_split(
    total_amount,
    payment_type: PaymentType,
    *,
    advance_amount=None,
    months: int | None = None,
) -> PaymentSplit:
    total = to_money(total_amount)
    if payment_type != PaymentType.INSTALLMENT:
        return PaymentSplit(
            total_amount=total,
            paid_amount=total,
            due_amount=ZERO,
            months=None,
            monthly_installment=ZERO,
        )
    paid = to_money(advance_amount)
    due = total - paid
    monthly = (due / Decimal(months)).to_integral_value(rounding=ROUND_CEILING).quantize(CENTS)
    return PaymentSplit(
        total_amount=total,
        paid_amount=paid,
        due_amount=due,
        months=months,
        monthly_installment=monthly,
    )

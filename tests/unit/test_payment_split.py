from decimal import Decimal

import pytest

from app.showroom.core.constants import PaymentType
from app.showroom.core.error_catalog import AppError
from app.showroom.services.payments import compute_payment_split, validate_installment_terms


@pytest.mark.parametrize("payment_type", [PaymentType.CASH, PaymentType.CARD])
def test_full_payment_types_settle_in_full(payment_type):
    split = compute_payment_split("495000", payment_type, advance_amount="1000", months=12)

    assert split.paid_amount == Decimal("495000")
    assert split.due_amount == Decimal("0")
    assert split.months is None
    assert split.monthly_installment == Decimal("0")


def test_installment_split():
    split = compute_payment_split(Decimal("500000"), PaymentType.INSTALLMENT, advance_amount="200000", months=10)

    assert split.total_amount == Decimal("500000")
    assert split.paid_amount == Decimal("200000")
    assert split.due_amount == Decimal("300000")
    assert split.months == 10
    assert split.monthly_installment == Decimal("30000")


def test_monthly_installment_rounds_up():
    split = compute_payment_split("100000", PaymentType.INSTALLMENT, advance_amount="1", months=7)

    assert split.due_amount == Decimal("99999")
    assert split.monthly_installment == Decimal("14286")


def test_full_advance_leaves_nothing_due():
    split = compute_payment_split("300000", PaymentType.INSTALLMENT, advance_amount="300000", months=3)

    assert split.due_amount == Decimal("0")
    assert split.monthly_installment == Decimal("0")


@pytest.mark.parametrize(
    ("advance", "months"),
    [
        (None, 12),
        ("1000", None),
        ("0", 12),
        ("-5", 12),
        ("500001", 12),
        ("1000", 0),
        ("1000", 61),
    ],
)
def test_invalid_installment_terms(advance, months):
    with pytest.raises(AppError) as exc_info:
        validate_installment_terms(Decimal("500000"), advance, months, max_months=60)

    assert exc_info.value.error.code == "INVALID_PAYMENT_TERMS"


def test_month_cap_can_be_lifted():
    validate_installment_terms(Decimal("500000"), "1000", 600, max_months=None)


def test_split_amounts_are_whole_cents():
    split = compute_payment_split("600000", PaymentType.INSTALLMENT, advance_amount="2.675", months=7)

    assert split.paid_amount == Decimal("2.68")
    assert split.paid_amount + split.due_amount == split.total_amount
    assert str(split.monthly_installment) == "85714.00"
    for amount in (split.total_amount, split.paid_amount, split.due_amount, split.monthly_installment):
        assert amount.as_tuple().exponent == -2


def test_advance_rounding_to_zero_is_rejected():
    with pytest.raises(AppError) as exc_info:
        validate_installment_terms(Decimal("600000"), "0.001", 7, max_months=60)

    assert exc_info.value.error.code == "INVALID_PAYMENT_TERMS"

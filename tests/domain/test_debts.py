"""Tests for the debt amortization rules."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from steady.domain.exceptions import InvalidAmountError, InvalidDebtTotalError
from steady.domain.models import (
    Account,
    Debt,
    DebtStatus,
    InstallmentPlan,
)
from steady.domain.services.debts import (
    apply_payment,
    clamp_paid_amount,
    derive_debt_status,
    installment_value,
    mark_installment_paid,
    normalize_installments,
    paid_percentage,
    refresh_debt_status,
    remaining_installments,
    summarize_debts,
)


TODAY = date(2024, 6, 1)


def _debt(
    total="1000",
    paid="400",
    plan=InstallmentPlan(total=6, paid=2),
    due=None,
    status=DebtStatus.ABERTA,
    account=Account.PESSOAL,
    record_id="d1",
):
    return Debt(
        id=record_id,
        account=account,
        name="Carro",
        creditor="Banco",
        total_amount=Decimal(total),
        paid_amount=Decimal(paid),
        start_date=date(2024, 1, 1),
        status=status,
        due_date=due,
        installments=plan,
    )


def test_installment_value_of_reference_debt():
    """1000 total, 400 paid, 2 of 6 installments: 150 per installment."""
    debt = _debt()

    assert debt.remaining_amount == Decimal("600")
    assert remaining_installments(debt) == 4
    assert installment_value(debt) == Decimal("150")


def test_mark_installment_paid_on_reference_debt():
    """Marking one installment pays half of the debt and keeps it open."""
    updated = mark_installment_paid(_debt(), TODAY)

    assert updated.installments == InstallmentPlan(total=6, paid=3)
    assert updated.paid_amount == Decimal("500")
    assert updated.status is DebtStatus.ABERTA


def test_mark_last_installment_settles_debt():
    """The last installment pays the full total."""
    updated = mark_installment_paid(
        _debt(paid="900", plan=InstallmentPlan(total=6, paid=5)),
        TODAY,
    )

    assert updated.paid_amount == Decimal("1000")
    assert updated.status is DebtStatus.PAGA


def test_mark_installment_paid_rounds_to_cents():
    """Uneven splits are stored as whole cents."""
    first = mark_installment_paid(
        _debt(paid="0", plan=InstallmentPlan(total=3, paid=0)),
        TODAY,
    )
    second = mark_installment_paid(first, TODAY)

    assert first.paid_amount == Decimal("333.33")
    assert second.paid_amount == Decimal("666.67")
    assert installment_value(second) == Decimal("333.33")


def test_mark_installment_without_plan_pays_in_full():
    """A debt without installments is settled in one go."""
    updated = mark_installment_paid(_debt(plan=None), TODAY)

    assert updated.paid_amount == Decimal("1000")
    assert updated.installments is None
    assert updated.status is DebtStatus.PAGA


def test_apply_payment_caps_at_total_and_counts_installment():
    """Payments add up to the total and mark one installment."""
    partial = apply_payment(_debt(), Decimal("100"), TODAY)
    overpaid = apply_payment(_debt(), "5000", TODAY)

    assert partial.paid_amount == Decimal("500")
    assert partial.installments.paid == 3
    assert partial.status is DebtStatus.ABERTA
    assert overpaid.paid_amount == Decimal("1000")
    assert overpaid.status is DebtStatus.PAGA


def test_apply_payment_keeps_installment_count_capped():
    """The paid installment count never exceeds the plan total."""
    debt = _debt(paid="100", plan=InstallmentPlan(total=2, paid=2))

    updated = apply_payment(debt, "50", TODAY)

    assert updated.installments.paid == 2


@pytest.mark.parametrize("amount", ["0", "-10", None, "abc"])
def test_apply_payment_rejects_non_positive_amounts(amount):
    """Zero, negative or unreadable payments are refused."""
    with pytest.raises(InvalidAmountError):
        apply_payment(_debt(), amount, TODAY)


@pytest.mark.parametrize("total", ["0", "-5"])
def test_degenerate_debt_raises_on_mutations_and_is_undefined(total):
    """A debt without a positive total has no installment math."""
    debt = _debt(total=total, paid="0")

    assert installment_value(debt) is None
    assert paid_percentage(debt) is None
    with pytest.raises(InvalidDebtTotalError):
        apply_payment(debt, "10", TODAY)
    with pytest.raises(InvalidDebtTotalError):
        mark_installment_paid(debt, TODAY)


def test_derive_debt_status():
    """Paid beats overdue, overdue needs a past due date."""
    due = date(2024, 1, 1)
    now = date(2024, 6, 1)

    assert derive_debt_status(Decimal("10"), Decimal("10"), due, now) is (
        DebtStatus.PAGA
    )
    assert derive_debt_status(Decimal("5"), Decimal("10"), due, now) is (
        DebtStatus.ATRASADA
    )
    assert derive_debt_status(Decimal("5"), Decimal("10"), now, now) is (
        DebtStatus.ABERTA
    )
    assert derive_debt_status(Decimal("5"), Decimal("10"), None, now) is (
        DebtStatus.ABERTA
    )


def test_refresh_debt_status_fixes_stale_status():
    """Loaded debts get a status consistent with their amounts."""
    logger = MagicMock()
    overdue = _debt(due=date(2024, 1, 1), status=DebtStatus.ABERTA)
    settled = _debt(paid="1500", status=DebtStatus.ATRASADA)

    refreshed_overdue = refresh_debt_status(overdue, TODAY, logger=logger)
    refreshed_settled = refresh_debt_status(settled, TODAY, logger=logger)

    assert refreshed_overdue.status is DebtStatus.ATRASADA
    assert refreshed_settled.status is DebtStatus.PAGA
    assert refreshed_settled.paid_amount == Decimal("1000")
    assert logger.info.call_count == 2


def test_clamp_and_normalize_bounds():
    """Paid amounts and installment counts stay within their totals."""
    assert clamp_paid_amount(Decimal("-3"), Decimal("10")) == Decimal("0")
    assert clamp_paid_amount(Decimal("30"), Decimal("10")) == Decimal("10")
    assert normalize_installments(InstallmentPlan(total=0, paid=0)) is None
    assert normalize_installments(InstallmentPlan(total=3, paid=7)) == (
        InstallmentPlan(total=3, paid=3)
    )


def test_paid_percentage():
    """Paid share is expressed in percent."""
    assert paid_percentage(_debt()) == Decimal("40")


def test_summarize_debts_filters_accounts():
    """Portfolio totals only include the selected account."""
    debts = [
        _debt(record_id="d1", account=Account.PESSOAL),
        _debt(record_id="d2", total="500", paid="100", account=Account.NEGOCIO),
    ]

    everything = summarize_debts(debts)
    business = summarize_debts(debts, "negocio")

    assert everything.total_amount == Decimal("1500")
    assert everything.total_paid == Decimal("500")
    assert everything.total_remaining == Decimal("1000")
    assert everything.debt_count == 2
    assert business.total_remaining == Decimal("400")
    assert business.debt_count == 1


def test_summarize_debts_bounds_overpaid_debts():
    """An overpaid debt counts as settled, never as a negative balance."""
    summary = summarize_debts([_debt(paid="1500"), _debt(record_id="d2")])

    assert summary.total_paid == Decimal("1400")
    assert summary.total_remaining == Decimal("600")

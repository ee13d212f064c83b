"""Debt amortization rules: installment values, payments and status."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
import logging
from logging import Logger

from steady.domain.exceptions import InvalidAmountError, InvalidDebtTotalError
from steady.domain.models import (
    AccountFilter,
    Debt,
    DebtPortfolioSummary,
    DebtStatus,
    InstallmentPlan,
)
from steady.utils.decimal_utils import coerce_amount, coerce_decimal


_module_logger = logging.getLogger(__name__)
_CENTS = Decimal("0.01")


def derive_debt_status(
    paid_amount: Decimal,
    total_amount: Decimal,
    due_date: date | None,
    today: date,
) -> DebtStatus:
    """Return the status implied by the paid amount and due date.

    Args:
        paid_amount: Amount already paid.
        total_amount: Amount owed in total.
        due_date: Optional due date.
        today: Current date.

    Returns:
        DebtStatus: ``paga`` once paid reaches total, ``atrasada`` when the
        due date has passed, ``aberta`` otherwise.
    """
    if paid_amount >= total_amount:
        return DebtStatus.PAGA
    if due_date is not None and due_date < today:
        return DebtStatus.ATRASADA
    return DebtStatus.ABERTA


def clamp_paid_amount(paid_amount, total_amount) -> Decimal:
    """Bound a paid amount to ``[0, total]``."""
    paid = coerce_amount(paid_amount)
    total = coerce_decimal(total_amount)
    if total <= 0:
        return paid
    return min(paid, total)


def normalize_installments(plan: InstallmentPlan | None) -> InstallmentPlan | None:
    """Drop empty plans and bound the paid count to ``[0, total]``."""
    if plan is None or plan.total <= 0:
        return None
    paid = min(max(plan.paid, 0), plan.total)
    if paid == plan.paid:
        return plan
    return InstallmentPlan(total=plan.total, paid=paid)


def refresh_debt_status(
    debt: Debt,
    today: date,
    *,
    logger: Logger | None = None,
) -> Debt:
    """Return the debt with bounded counters and a recomputed status.

    Args:
        debt: Debt as read from the store.
        today: Current date.
        logger: Logger used for warnings.

    Returns:
        Debt: Copy whose status reflects its paid amount and due date.
    """
    log = logger or _module_logger
    total = coerce_decimal(debt.total_amount)
    if total <= 0:
        log.warning(f"Debt {debt.id} has an invalid total amount: {total}")
    paid = clamp_paid_amount(debt.paid_amount, total)
    status = derive_debt_status(paid, total, debt.due_date, today)
    if status != debt.status:
        log.info(
            f"Debt {debt.id} status recomputed: {debt.status} -> {status}"
        )
    return replace(
        debt,
        total_amount=total,
        paid_amount=paid,
        status=status,
        installments=normalize_installments(debt.installments),
    )


def remaining_installments(debt: Debt) -> int | None:
    """Return how many installments are left, or None without a plan."""
    plan = normalize_installments(debt.installments)
    if plan is None:
        return None
    return plan.remaining


def installment_value(debt: Debt) -> Decimal | None:
    """Return the amount due for the next installment.

    Without an installment plan, or with every installment already marked,
    the whole remaining balance is due.

    Returns:
        Decimal | None: Amount due, or None when the debt total is invalid.
    """
    total = coerce_decimal(debt.total_amount)
    if total <= 0:
        return None
    remaining = total - clamp_paid_amount(debt.paid_amount, total)
    installments_left = remaining_installments(debt)
    if installments_left:
        return remaining / installments_left
    return remaining


def paid_percentage(debt: Debt) -> Decimal | None:
    """Return the paid share of the debt in percent, or None if undefined."""
    total = coerce_decimal(debt.total_amount)
    if total <= 0:
        return None
    return clamp_paid_amount(debt.paid_amount, total) / total * 100


def apply_payment(debt: Debt, amount, today: date) -> Debt:
    """Apply a payment to a debt.

    The paid amount grows by ``amount`` up to the total. When the debt has
    an installment plan, one more installment is marked as paid whatever
    the payment size.

    Args:
        debt: Debt receiving the payment.
        amount: Payment amount, must be positive.
        today: Current date, used to derive the new status.

    Returns:
        Debt: Updated copy with a recomputed status.

    Raises:
        InvalidAmountError: If the payment is not positive.
        InvalidDebtTotalError: If the debt total is zero or negative.
    """
    total = _require_valid_total(debt)
    payment = coerce_decimal(amount)
    if payment <= 0:
        raise InvalidAmountError(f"Payment must be positive: {amount!r}")
    paid = min(clamp_paid_amount(debt.paid_amount, total) + payment, total)
    plan = normalize_installments(debt.installments)
    if plan is not None:
        plan = InstallmentPlan(
            total=plan.total,
            paid=min(plan.paid + 1, plan.total),
        )
    return replace(
        debt,
        paid_amount=paid,
        installments=plan,
        status=derive_debt_status(paid, total, debt.due_date, today),
    )


def mark_installment_paid(debt: Debt, today: date) -> Debt:
    """Mark the next installment as paid.

    The paid amount becomes the value of the installments marked so far,
    ``total * paid_installments / total_installments``, rounded half up to
    cents. A debt without an installment plan is settled in full.

    Raises:
        InvalidDebtTotalError: If the debt total is zero or negative.
    """
    total = _require_valid_total(debt)
    plan = normalize_installments(debt.installments)
    if plan is None:
        paid = total
    else:
        plan = InstallmentPlan(
            total=plan.total,
            paid=min(plan.paid + 1, plan.total),
        )
        paid = min(total * plan.paid / plan.total, total).quantize(
            _CENTS, rounding=ROUND_HALF_UP
        )
    return replace(
        debt,
        paid_amount=paid,
        installments=plan,
        status=derive_debt_status(paid, total, debt.due_date, today),
    )


def summarize_debts(
    debts: Iterable[Debt],
    account_filter: AccountFilter | str = AccountFilter.ALL,
) -> DebtPortfolioSummary:
    """Sum totals, paid amounts and remaining balances of the debts."""
    selected = AccountFilter(account_filter)
    total_amount = Decimal("0")
    total_paid = Decimal("0")
    count = 0
    for debt in debts:
        if not selected.matches(debt.account):
            continue
        total = coerce_amount(debt.total_amount)
        total_amount += total
        total_paid += clamp_paid_amount(debt.paid_amount, total)
        count += 1
    return DebtPortfolioSummary(
        total_amount=total_amount,
        total_paid=total_paid,
        total_remaining=total_amount - total_paid,
        debt_count=count,
    )


def _require_valid_total(debt: Debt) -> Decimal:
    total = coerce_decimal(debt.total_amount)
    if total <= 0:
        raise InvalidDebtTotalError(debt.id, debt.total_amount)
    return total


__all__ = [
    "derive_debt_status",
    "clamp_paid_amount",
    "normalize_installments",
    "refresh_debt_status",
    "remaining_installments",
    "installment_value",
    "paid_percentage",
    "apply_payment",
    "mark_installment_paid",
    "summarize_debts",
]

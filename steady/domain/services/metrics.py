"""Domain service reducing a ledger snapshot into period metrics."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
import logging
from logging import Logger

from steady.domain.models import (
    AccountFilter,
    Expense,
    ExpenseKind,
    ExpenseStatus,
    Income,
    IncomeKind,
    Metrics,
)
from steady.domain.services.periods import is_in_period
from steady.domain.services.validation import validate_amount


_module_logger = logging.getLogger(__name__)


def compute_metrics(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    account_filter: AccountFilter | str,
    reference_date: date,
    *,
    logger: Logger | None = None,
) -> Metrics:
    """Compute current-month totals and the projected end-of-month balance.

    Period totals only count records dated in the month of
    ``reference_date``. The projection components (recurring incomes,
    fixed or recurring expenses, pending expenses) are summed over every
    record passing the account filter, whatever its date. Each predicate
    is applied on its own, so an expense that is both pending and fixed
    is subtracted twice from the projection.

    Args:
        incomes: Income records of the snapshot.
        expenses: Expense records of the snapshot.
        account_filter: ``all`` or the account to keep.
        reference_date: Any date inside the reference month.
        logger: Logger used for warnings about unreadable records.

    Returns:
        Metrics: Period totals, balance and projected balance.
    """
    log = logger or _module_logger
    selected = AccountFilter(account_filter)
    month, year = reference_date.month, reference_date.year

    total_incomes = Decimal("0")
    recurring_incomes = Decimal("0")
    for income in incomes:
        if not selected.matches(income.account):
            continue
        amount = validate_amount(income.id, income.amount, log)
        if is_in_period(income.date, month, year):
            total_incomes += amount
        elif not isinstance(income.date, date):
            log.warning(f"Income {income.id} has no readable date")
        if income.kind == IncomeKind.RECORRENTE:
            recurring_incomes += amount

    total_expenses = Decimal("0")
    fixed_expenses = Decimal("0")
    pending_expenses = Decimal("0")
    for expense in expenses:
        if not selected.matches(expense.account):
            continue
        amount = validate_amount(expense.id, expense.amount, log)
        if is_in_period(expense.date, month, year):
            total_expenses += amount
        elif not isinstance(expense.date, date):
            log.warning(f"Expense {expense.id} has no readable date")
        if expense.kind == ExpenseKind.FIXO or expense.recurring:
            fixed_expenses += amount
        if expense.status == ExpenseStatus.PENDENTE:
            pending_expenses += amount

    balance = total_incomes - total_expenses
    projected_balance = (
        balance + recurring_incomes - fixed_expenses - pending_expenses
    )
    return Metrics(
        total_incomes=total_incomes,
        total_expenses=total_expenses,
        balance=balance,
        projected_balance=projected_balance,
        recurring_incomes=recurring_incomes,
        fixed_expenses=fixed_expenses,
        pending_expenses=pending_expenses,
    )


__all__ = ["compute_metrics"]

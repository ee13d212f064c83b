"""Domain service merging incomes, expenses and debts into transactions."""

from collections.abc import Iterable
from datetime import date
import logging
from logging import Logger

from steady.domain.models import (
    AccountFilter,
    Debt,
    DebtStatus,
    Expense,
    Income,
    Transaction,
    TransactionKind,
)
from steady.domain.services.debts import (
    clamp_paid_amount,
    installment_value,
    normalize_installments,
)
from steady.domain.services.periods import period_key
from steady.domain.services.validation import validate_amount
from steady.utils.decimal_utils import coerce_decimal


_module_logger = logging.getLogger(__name__)

GENERIC_DEBT_LABEL = "Dívida"


def unify_transactions(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    debts: Iterable[Debt],
    account_filter: AccountFilter | str,
    reference_month: int,
    reference_year: int,
    *,
    logger: Logger | None = None,
) -> list[Transaction]:
    """Return one chronological view over incomes, expenses and debts.

    Incomes and expenses map one to one. Each debt still due in the
    reference month contributes a single installment transaction. The
    result is sorted by date, newest first; entries sharing a date keep
    the incomes, expenses, debts order.

    Args:
        incomes: Income records of the snapshot.
        expenses: Expense records of the snapshot.
        debts: Debt records of the snapshot.
        account_filter: ``all`` or the account to keep.
        reference_month: Month (1-12) debts are projected into.
        reference_year: Year debts are projected into.
        logger: Logger used for warnings about skipped records.

    Returns:
        list[Transaction]: New list, sorted by date descending.
    """
    log = logger or _module_logger
    selected = AccountFilter(account_filter)
    reference = (reference_year, reference_month)
    transactions: list[Transaction] = []

    for income in incomes:
        if not selected.matches(income.account):
            continue
        if not _has_date(income.date, "Income", income.id, log):
            continue
        transactions.append(income_transaction(income, log))

    for expense in expenses:
        if not selected.matches(expense.account):
            continue
        if not _has_date(expense.date, "Expense", expense.id, log):
            continue
        transactions.append(expense_transaction(expense, log))

    for debt in debts:
        if not selected.matches(debt.account):
            continue
        if not is_debt_due_in_period(debt, reference):
            continue
        display_date = debt.due_date or debt.start_date
        if not _has_date(display_date, "Debt", debt.id, log):
            continue
        transactions.append(debt_installment_transaction(debt))

    transactions.sort(key=lambda item: item.date, reverse=True)
    return transactions


def income_transaction(income: Income, logger: Logger) -> Transaction:
    """Map an income to a transaction."""
    label = income.source
    if income.project:
        label = f"{label} - {income.project}"
    return Transaction(
        record_id=income.id,
        kind=TransactionKind.INCOME,
        amount=validate_amount(income.id, income.amount, logger),
        date=income.date,
        label=label,
        account=income.account,
        badge=_value(income.kind),
    )


def expense_transaction(expense: Expense, logger: Logger) -> Transaction:
    """Map an expense to a transaction carrying its payment status."""
    label = expense.category
    if expense.description:
        label = f"{label} - {expense.description}"
    return Transaction(
        record_id=expense.id,
        kind=TransactionKind.EXPENSE,
        amount=validate_amount(expense.id, expense.amount, logger),
        date=expense.date,
        label=label,
        account=expense.account,
        badge=_value(expense.kind),
        status=expense.status,
    )


def is_debt_due_in_period(debt: Debt, reference: tuple[int, int]) -> bool:
    """Return True when the debt should show an installment this period.

    Args:
        debt: Debt to evaluate.
        reference: ``(year, month)`` of the reference period.

    Returns:
        bool: False for paid or settled debts, debts whose due month is
        before the reference, and debts without a due date that start
        after the reference.
    """
    if debt.status == DebtStatus.PAGA:
        return False
    total = coerce_decimal(debt.total_amount)
    if total - clamp_paid_amount(debt.paid_amount, total) <= 0:
        return False
    if isinstance(debt.due_date, date):
        return period_key(debt.due_date) >= reference
    if isinstance(debt.start_date, date):
        return period_key(debt.start_date) <= reference
    return True


def debt_installment_transaction(debt: Debt) -> Transaction:
    """Synthesize the installment transaction of an open debt."""
    total = coerce_decimal(debt.total_amount)
    remaining = total - clamp_paid_amount(debt.paid_amount, total)
    amount = installment_value(debt)
    if amount is None:
        amount = remaining
    plan = normalize_installments(debt.installments)
    if plan is not None:
        label = f"{debt.name} - Parcela {plan.paid + 1}/{plan.total}"
        badge = f"{plan.paid}/{plan.total}"
    else:
        label = f"{debt.name} - {GENERIC_DEBT_LABEL}"
        badge = None
    status = DebtStatus.ATRASADA if debt.status == DebtStatus.ATRASADA else None
    return Transaction(
        record_id=debt.id,
        kind=TransactionKind.DEBT,
        amount=amount,
        date=debt.due_date or debt.start_date,
        label=label,
        account=debt.account,
        badge=badge,
        status=status,
        from_debt=True,
    )


def _has_date(value, record_type: str, record_id: str, logger: Logger) -> bool:
    if isinstance(value, date):
        return True
    logger.warning(f"{record_type} {record_id} skipped: no readable date")
    return False


def _value(kind) -> str:
    return getattr(kind, "value", kind)


__all__ = [
    "unify_transactions",
    "income_transaction",
    "expense_transaction",
    "is_debt_due_in_period",
    "debt_installment_transaction",
]

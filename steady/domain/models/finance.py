"""Domain models for derived ledger aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .enums import Account, DebtStatus, ExpenseStatus, TransactionKind


@dataclass(frozen=True)
class Metrics:
    """Current-period metrics of a ledger snapshot.

    Attributes:
        total_incomes: Incomes dated in the reference month.
        total_expenses: Expenses dated in the reference month.
        balance: total_incomes minus total_expenses.
        projected_balance: End-of-month estimate.
        recurring_incomes: Recurring incomes over the whole filtered set.
        fixed_expenses: Fixed or recurring expenses over the whole set.
        pending_expenses: Pending expenses over the whole set.
    """

    total_incomes: Decimal
    total_expenses: Decimal
    balance: Decimal
    projected_balance: Decimal
    recurring_incomes: Decimal = Decimal("0")
    fixed_expenses: Decimal = Decimal("0")
    pending_expenses: Decimal = Decimal("0")


@dataclass(frozen=True)
class Transaction:
    """Unified view of an income, expense or debt installment."""

    record_id: str
    kind: TransactionKind
    amount: Decimal
    date: date
    label: str
    account: Account
    badge: str | None = None
    status: ExpenseStatus | DebtStatus | None = None
    from_debt: bool = False

    @property
    def signed_amount(self) -> Decimal:
        """Return the amount signed by direction (incomes positive)."""
        if self.kind is TransactionKind.INCOME:
            return self.amount
        return -self.amount


@dataclass(frozen=True)
class DebtPortfolioSummary:
    """Totals over a set of debts."""

    total_amount: Decimal
    total_paid: Decimal
    total_remaining: Decimal
    debt_count: int


__all__ = ["Metrics", "Transaction", "DebtPortfolioSummary"]

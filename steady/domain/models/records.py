"""Domain models for persisted ledger records."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .enums import (
    Account,
    DebtStatus,
    ExpenseKind,
    ExpenseStatus,
    IncomeKind,
)


@dataclass(frozen=True)
class Income:
    """Money received into an account.

    Attributes:
        id: Store identifier.
        account: Owning account.
        amount: Non-negative amount.
        date: Date the income was received.
        source: Source label (employer, client, ...).
        kind: Whether the income recurs.
        project: Optional project label.
    """

    id: str
    account: Account
    amount: Decimal
    date: date
    source: str
    kind: IncomeKind
    project: str | None = None


@dataclass(frozen=True)
class Expense:
    """Money spent from an account."""

    id: str
    account: Account
    amount: Decimal
    date: date
    category: str
    kind: ExpenseKind
    status: ExpenseStatus
    recurring: bool = False
    description: str | None = None


@dataclass(frozen=True)
class InstallmentPlan:
    """Installment counters of a debt.

    Attributes:
        total: Number of installments agreed with the creditor.
        paid: Number of installments marked as paid.
    """

    total: int
    paid: int = 0

    @property
    def remaining(self) -> int:
        """Return the number of installments still to pay."""
        return self.total - self.paid


@dataclass(frozen=True)
class Debt:
    """Debt paid off over time, optionally in installments.

    Attributes:
        id: Store identifier.
        account: Owning account.
        name: Debt name.
        creditor: Who the money is owed to.
        total_amount: Amount owed in total.
        paid_amount: Amount already paid.
        start_date: Date the debt started.
        status: Stored or derived debt status.
        due_date: Optional due date.
        interest_rate: Interest rate in percent, informational only.
        installments: Optional installment plan.
        notes: Optional free text.
    """

    id: str
    account: Account
    name: str
    creditor: str
    total_amount: Decimal
    paid_amount: Decimal
    start_date: date
    status: DebtStatus
    due_date: date | None = None
    interest_rate: Decimal = Decimal("0")
    installments: InstallmentPlan | None = None
    notes: str | None = None

    @property
    def remaining_amount(self) -> Decimal:
        """Return total minus paid."""
        return self.total_amount - self.paid_amount


__all__ = ["Income", "Expense", "InstallmentPlan", "Debt"]

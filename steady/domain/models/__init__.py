"""Domain models package."""

from .enums import (
    Account,
    AccountFilter,
    DebtStatus,
    ExpenseKind,
    ExpenseStatus,
    IncomeKind,
    RecordKind,
    TransactionKind,
)
from .finance import DebtPortfolioSummary, Metrics, Transaction
from .profile import Profile
from .records import Debt, Expense, Income, InstallmentPlan

__all__ = [
    "Account",
    "AccountFilter",
    "DebtStatus",
    "ExpenseKind",
    "ExpenseStatus",
    "IncomeKind",
    "RecordKind",
    "TransactionKind",
    "Income",
    "Expense",
    "InstallmentPlan",
    "Debt",
    "Metrics",
    "Transaction",
    "DebtPortfolioSummary",
    "Profile",
]

"""Domain package for ledger rules and core models."""

from .exceptions import (
    InvalidAmountError,
    InvalidDebtTotalError,
    InvalidRecordError,
    LedgerError,
    RecordNotFoundError,
    RecordStoreError,
)
from .models import (
    Account,
    AccountFilter,
    Debt,
    DebtPortfolioSummary,
    DebtStatus,
    Expense,
    ExpenseKind,
    ExpenseStatus,
    Income,
    IncomeKind,
    InstallmentPlan,
    Metrics,
    Profile,
    RecordKind,
    Transaction,
    TransactionKind,
)
from .services import (
    apply_payment,
    compute_metrics,
    derive_debt_status,
    mark_installment_paid,
    refresh_debt_status,
    summarize_debts,
    unify_transactions,
)

__all__ = [
    "InvalidAmountError",
    "InvalidDebtTotalError",
    "InvalidRecordError",
    "LedgerError",
    "RecordNotFoundError",
    "RecordStoreError",
    "Account",
    "AccountFilter",
    "Debt",
    "DebtPortfolioSummary",
    "DebtStatus",
    "Expense",
    "ExpenseKind",
    "ExpenseStatus",
    "Income",
    "IncomeKind",
    "InstallmentPlan",
    "Metrics",
    "Profile",
    "RecordKind",
    "Transaction",
    "TransactionKind",
    "apply_payment",
    "compute_metrics",
    "derive_debt_status",
    "mark_installment_paid",
    "refresh_debt_status",
    "summarize_debts",
    "unify_transactions",
]

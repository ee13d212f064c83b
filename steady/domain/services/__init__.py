"""Domain services package."""

from .debts import (
    apply_payment,
    clamp_paid_amount,
    derive_debt_status,
    installment_value,
    mark_installment_paid,
    paid_percentage,
    refresh_debt_status,
    remaining_installments,
    summarize_debts,
)
from .metrics import compute_metrics
from .transactions import unify_transactions
from .validation import parse_amount, parse_date, parse_installment_count

__all__ = [
    "apply_payment",
    "clamp_paid_amount",
    "derive_debt_status",
    "installment_value",
    "mark_installment_paid",
    "paid_percentage",
    "refresh_debt_status",
    "remaining_installments",
    "summarize_debts",
    "compute_metrics",
    "unify_transactions",
    "parse_amount",
    "parse_date",
    "parse_installment_count",
]

"""Closed enumerations for ledger record fields."""

from enum import Enum


class Account(str, Enum):
    """Ledger partition owning a record."""

    PESSOAL = "pessoal"
    NEGOCIO = "negocio"


class AccountFilter(str, Enum):
    """Account selection applied to snapshots before aggregation."""

    ALL = "all"
    PESSOAL = "pessoal"
    NEGOCIO = "negocio"

    def matches(self, account: Account | str) -> bool:
        """Return True when a record owned by ``account`` passes the filter.

        Args:
            account: Account owning the record.

        Returns:
            bool: True for every account under ``ALL``, else on exact match.
        """
        if self is AccountFilter.ALL:
            return True
        return getattr(account, "value", account) == self.value


class IncomeKind(str, Enum):
    """Recurrence of an income."""

    RECORRENTE = "recorrente"
    PONTUAL = "pontual"


class ExpenseKind(str, Enum):
    """Whether an expense is fixed or variable."""

    FIXO = "fixo"
    VARIAVEL = "variavel"


class ExpenseStatus(str, Enum):
    """Payment status of an expense."""

    PAGO = "pago"
    PENDENTE = "pendente"


class DebtStatus(str, Enum):
    """States of the debt amortization state machine."""

    ABERTA = "aberta"
    PAGA = "paga"
    ATRASADA = "atrasada"


class TransactionKind(str, Enum):
    """Origin of a unified transaction."""

    INCOME = "income"
    EXPENSE = "expense"
    DEBT = "debt"


class RecordKind(str, Enum):
    """Persisted record kinds served by the record store."""

    INCOME = "income"
    EXPENSE = "expense"
    DEBT = "debt"


__all__ = [
    "Account",
    "AccountFilter",
    "IncomeKind",
    "ExpenseKind",
    "ExpenseStatus",
    "DebtStatus",
    "TransactionKind",
    "RecordKind",
]

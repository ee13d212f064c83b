"""Use cases registering incomes and expenses and settling expenses."""

from collections.abc import Mapping
from datetime import date
from typing import Any, Callable

from steady.application.ports.record_store import RecordStorePort
from steady.domain.models import (
    Account,
    Expense,
    ExpenseKind,
    ExpenseStatus,
    Income,
    IncomeKind,
    RecordKind,
)
from steady.domain.services.validation import (
    optional_text,
    parse_amount,
    parse_choice,
    parse_date,
    parse_flag,
    require_text,
)
from steady.infrastructure.logging.logger import get_app_logger


class RegisterIncomeUseCase:
    """Validate an income form and insert it into the record store."""

    def __init__(
        self,
        record_store: RecordStorePort,
        logger=None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port persisting ledger records.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Optional callable returning the current date.
        """
        self._record_store = record_store
        self._logger = logger or get_app_logger()
        self._today = today or date.today

    def execute(self, fields: Mapping[str, Any]) -> Income:
        """Insert a new income.

        Args:
            fields: Raw form values: account, amount, date (defaults to
                today), source, kind and optional project.

        Returns:
            Income: The stored income.

        Raises:
            InvalidAmountError: If the amount is not a number >= 0.
            InvalidRecordError: If another field cannot be read.
        """
        values = {
            "account": parse_choice(Account, fields.get("account"), "account"),
            "amount": parse_amount(fields.get("amount")),
            "date": parse_date(fields.get("date") or self._today()),
            "source": require_text(fields.get("source"), "source"),
            "kind": parse_choice(IncomeKind, fields.get("kind"), "kind"),
            "project": optional_text(fields.get("project")),
        }
        income = self._record_store.insert(RecordKind.INCOME, values)
        self._logger.info(
            f"Income registered: id={income.id}, amount={income.amount}"
        )
        return income


class RegisterExpenseUseCase:
    """Validate an expense form and insert it into the record store."""

    def __init__(
        self,
        record_store: RecordStorePort,
        logger=None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._record_store = record_store
        self._logger = logger or get_app_logger()
        self._today = today or date.today

    def execute(self, fields: Mapping[str, Any]) -> Expense:
        """Insert a new expense; status defaults to ``pendente``.

        Raises:
            InvalidAmountError: If the amount is not a number >= 0.
            InvalidRecordError: If another field cannot be read.
        """
        values = {
            "account": parse_choice(Account, fields.get("account"), "account"),
            "amount": parse_amount(fields.get("amount")),
            "date": parse_date(fields.get("date") or self._today()),
            "category": require_text(fields.get("category"), "category"),
            "kind": parse_choice(ExpenseKind, fields.get("kind"), "kind"),
            "status": parse_choice(
                ExpenseStatus,
                fields.get("status") or ExpenseStatus.PENDENTE,
                "status",
            ),
            "recurring": parse_flag(fields.get("recurring", False)),
            "description": optional_text(fields.get("description")),
        }
        expense = self._record_store.insert(RecordKind.EXPENSE, values)
        self._logger.info(
            f"Expense registered: id={expense.id}, amount={expense.amount}"
        )
        return expense


class MarkExpensePaidUseCase:
    """Settle a pending expense."""

    def __init__(self, record_store: RecordStorePort, logger=None) -> None:
        self._record_store = record_store
        self._logger = logger or get_app_logger()

    def execute(self, expense_id: str) -> Expense:
        """Set the expense status to ``pago`` and return the stored record."""
        expense = self._record_store.update(
            RecordKind.EXPENSE,
            expense_id,
            {"status": ExpenseStatus.PAGO},
        )
        self._logger.info(f"Expense {expense_id} marked as paid")
        return expense


__all__ = [
    "RegisterIncomeUseCase",
    "RegisterExpenseUseCase",
    "MarkExpensePaidUseCase",
]

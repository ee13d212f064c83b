"""Aggregation facade consumed by the dashboard.

The facade owns the last fetched snapshot and nothing else. Queries are
pure computations over that snapshot; mutations go through a use case,
then re-fetch only the record kind they touched.
"""

import asyncio
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Callable

from steady.application.ports.record_store import RecordStorePort
from steady.application.snapshot import (
    FetchSequencer,
    LedgerSnapshot,
    RefreshResult,
)
from steady.application.use_cases import (
    ApplyDebtPaymentUseCase,
    DeleteRecordUseCase,
    MarkExpensePaidUseCase,
    MarkInstallmentPaidUseCase,
    RegisterExpenseUseCase,
    RegisterIncomeUseCase,
    SaveDebtUseCase,
)
from steady.domain.exceptions import RecordNotFoundError, RecordStoreError
from steady.domain.models import (
    AccountFilter,
    Debt,
    DebtPortfolioSummary,
    Expense,
    Income,
    Metrics,
    RecordKind,
    Transaction,
)
from steady.domain.services.debts import refresh_debt_status, summarize_debts
from steady.domain.services.metrics import compute_metrics
from steady.domain.services.transactions import unify_transactions
from steady.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class LedgerFacade:
    """Composition root for the ledger engine."""

    def __init__(
        self,
        record_store: RecordStorePort,
        logger=None,
        usage_logger=None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            record_store: Port serving ledger records.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording user actions.
            today: Optional callable returning the current date.
        """
        self._record_store = record_store
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._today = today or date.today
        self._snapshot = LedgerSnapshot()
        self._sequencer = FetchSequencer()

        self._register_income = RegisterIncomeUseCase(
            record_store, logger=self._logger, today=self._today
        )
        self._register_expense = RegisterExpenseUseCase(
            record_store, logger=self._logger, today=self._today
        )
        self._mark_expense_paid = MarkExpensePaidUseCase(
            record_store, logger=self._logger
        )
        self._save_debt = SaveDebtUseCase(
            record_store, logger=self._logger, today=self._today
        )
        self._apply_payment = ApplyDebtPaymentUseCase(
            record_store, logger=self._logger, today=self._today
        )
        self._mark_installment = MarkInstallmentPaidUseCase(
            record_store, logger=self._logger, today=self._today
        )
        self._delete_record = DeleteRecordUseCase(
            record_store, logger=self._logger
        )

    @property
    def snapshot(self) -> LedgerSnapshot:
        """Return the current snapshot."""
        return self._snapshot

    async def refresh(
        self,
        kinds: Iterable[RecordKind] | None = None,
    ) -> RefreshResult:
        """Re-fetch records of the given kinds (all kinds by default).

        Fetches run concurrently. Each kind is replaced as soon as its own
        fetch resolves; a failed fetch keeps that kind's previous records
        and does not affect the others.

        Args:
            kinds: Record kinds to refresh.

        Returns:
            RefreshResult: Refreshed, discarded and failed kinds.
        """
        requested = tuple(dict.fromkeys(kinds or tuple(RecordKind)))
        outcomes = await asyncio.gather(
            *(self._refresh_kind(kind) for kind in requested),
            return_exceptions=True,
        )

        refreshed: list[RecordKind] = []
        discarded: list[RecordKind] = []
        errors: dict[RecordKind, RecordStoreError] = {}
        unexpected: BaseException | None = None
        for kind, outcome in zip(requested, outcomes):
            if isinstance(outcome, RecordStoreError):
                errors[kind] = outcome
            elif isinstance(outcome, BaseException):
                unexpected = unexpected or outcome
            elif outcome:
                refreshed.append(kind)
            else:
                discarded.append(kind)
        if unexpected is not None:
            raise unexpected
        return RefreshResult(
            refreshed=tuple(refreshed),
            discarded=tuple(discarded),
            errors=errors,
        )

    async def _refresh_kind(self, kind: RecordKind) -> bool:
        sequence = self._sequencer.issue(kind)
        try:
            records = await asyncio.to_thread(self._record_store.list, kind)
        except RecordStoreError as exc:
            self._logger.error(f"Refreshing {kind.value} records failed: {exc}")
            raise
        if not self._sequencer.accept(kind, sequence):
            self._logger.info(
                f"Discarded superseded {kind.value} fetch #{sequence}"
            )
            return False
        if kind is RecordKind.DEBT:
            today = self._today()
            records = [
                refresh_debt_status(debt, today, logger=self._logger)
                for debt in records
            ]
        self._snapshot = self._snapshot.with_records(kind, records)
        return True

    def detach(self) -> None:
        """Stop installing fetch results, e.g. once the user navigated away."""
        self._sequencer.detach()

    def metrics(
        self,
        account_filter: AccountFilter | str | None = None,
    ) -> Metrics:
        """Return the current-month metrics of the snapshot."""
        return compute_metrics(
            self._snapshot.incomes,
            self._snapshot.expenses,
            _resolve_filter(account_filter),
            self._today(),
            logger=self._logger,
        )

    def transactions(
        self,
        account_filter: AccountFilter | str | None = None,
    ) -> list[Transaction]:
        """Return the unified transactions of the current month view."""
        today = self._today()
        return unify_transactions(
            self._snapshot.incomes,
            self._snapshot.expenses,
            self._snapshot.debts,
            _resolve_filter(account_filter),
            today.month,
            today.year,
            logger=self._logger,
        )

    def debts(
        self,
        account_filter: AccountFilter | str | None = None,
    ) -> list[Debt]:
        """Return the snapshot debts owned by the selected account."""
        selected = _resolve_filter(account_filter)
        return [
            debt
            for debt in self._snapshot.debts
            if selected.matches(debt.account)
        ]

    def debt_summary(
        self,
        account_filter: AccountFilter | str | None = None,
    ) -> DebtPortfolioSummary:
        """Return totals over the snapshot debts."""
        return summarize_debts(
            self._snapshot.debts, _resolve_filter(account_filter)
        )

    def find_debt(self, debt_id: str) -> Debt:
        """Return a snapshot debt by id.

        Raises:
            RecordNotFoundError: If the snapshot has no such debt.
        """
        for debt in self._snapshot.debts:
            if debt.id == debt_id:
                return debt
        raise RecordNotFoundError(
            f"No debt with id {debt_id} in the snapshot",
            kind=RecordKind.DEBT,
            operation="find",
        )

    async def register_income(self, fields: Mapping[str, Any]) -> Income:
        """Insert an income and refresh incomes."""
        income = await asyncio.to_thread(self._register_income.execute, fields)
        self._usage_logger.info(f"Income added: {income.id}")
        await self.refresh([RecordKind.INCOME])
        return income

    async def register_expense(self, fields: Mapping[str, Any]) -> Expense:
        """Insert an expense and refresh expenses."""
        expense = await asyncio.to_thread(
            self._register_expense.execute, fields
        )
        self._usage_logger.info(f"Expense added: {expense.id}")
        await self.refresh([RecordKind.EXPENSE])
        return expense

    async def save_debt(
        self,
        fields: Mapping[str, Any],
        debt_id: str | None = None,
    ) -> Debt:
        """Insert or edit a debt and refresh debts."""
        debt = await asyncio.to_thread(self._save_debt.execute, fields, debt_id)
        action = "added" if debt_id is None else "edited"
        self._usage_logger.info(f"Debt {action}: {debt.id}")
        await self.refresh([RecordKind.DEBT])
        return debt

    async def apply_debt_payment(self, debt_id: str, amount: Decimal) -> Debt:
        """Apply a payment to a snapshot debt and refresh debts."""
        debt = self.find_debt(debt_id)
        stored = await asyncio.to_thread(
            self._apply_payment.execute, debt, amount
        )
        self._usage_logger.info(f"Payment of {amount} on debt {debt_id}")
        await self.refresh([RecordKind.DEBT])
        return stored

    async def mark_installment_paid(self, debt_id: str) -> Debt:
        """Mark the next installment of a snapshot debt as paid."""
        debt = self.find_debt(debt_id)
        stored = await asyncio.to_thread(self._mark_installment.execute, debt)
        self._usage_logger.info(f"Installment paid on debt {debt_id}")
        await self.refresh([RecordKind.DEBT])
        return stored

    async def mark_expense_paid(self, expense_id: str) -> Expense:
        """Settle a pending expense and refresh expenses."""
        expense = await asyncio.to_thread(
            self._mark_expense_paid.execute, expense_id
        )
        self._usage_logger.info(f"Expense paid: {expense_id}")
        await self.refresh([RecordKind.EXPENSE])
        return expense

    async def delete_record(
        self,
        kind: RecordKind | str,
        record_id: str,
    ) -> None:
        """Delete a record and refresh its kind."""
        record_kind = RecordKind(kind)
        await asyncio.to_thread(
            self._delete_record.execute, record_kind, record_id
        )
        self._usage_logger.info(f"Deleted {record_kind.value} {record_id}")
        await self.refresh([record_kind])


def _resolve_filter(account_filter) -> AccountFilter:
    if account_filter is None:
        return AccountFilter.ALL
    return AccountFilter(account_filter)


__all__ = ["LedgerFacade"]

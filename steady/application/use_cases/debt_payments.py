"""Use cases applying payments to debts."""

from datetime import date
from typing import Any, Callable

from steady.application.ports.record_store import RecordStorePort
from steady.domain.models import Debt, RecordKind
from steady.domain.services.debts import apply_payment, mark_installment_paid
from steady.infrastructure.logging.logger import get_app_logger


def debt_payment_fields(debt: Debt) -> dict[str, Any]:
    """Return the fields a payment changes on a debt.

    Args:
        debt: Debt after the payment was applied.

    Returns:
        dict[str, Any]: Paid amount, status and paid installment count.
    """
    fields: dict[str, Any] = {
        "paid_amount": debt.paid_amount,
        "status": debt.status,
    }
    if debt.installments is not None:
        fields["installments_paid"] = debt.installments.paid
    return fields


class ApplyDebtPaymentUseCase:
    """Apply a payment of a given amount to a debt and persist it."""

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

    def execute(self, debt: Debt, amount) -> Debt:
        """Apply ``amount`` to ``debt``.

        Args:
            debt: Debt as held in the current snapshot.
            amount: Positive payment amount.

        Returns:
            Debt: The stored debt after the payment.

        Raises:
            InvalidAmountError: If the amount is not positive.
            InvalidDebtTotalError: If the debt total is zero or negative.
            RecordStoreError: If the store rejects the update.
        """
        updated = apply_payment(debt, amount, self._today())
        stored = self._record_store.update(
            RecordKind.DEBT,
            debt.id,
            debt_payment_fields(updated),
        )
        self._logger.info(
            f"Payment of {amount} applied to debt {debt.id}: "
            f"paid={updated.paid_amount}, status={updated.status.value}"
        )
        return stored


class MarkInstallmentPaidUseCase:
    """Mark the next installment of a debt as paid and persist it."""

    def __init__(
        self,
        record_store: RecordStorePort,
        logger=None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._record_store = record_store
        self._logger = logger or get_app_logger()
        self._today = today or date.today

    def execute(self, debt: Debt) -> Debt:
        """Mark one more installment of ``debt`` as paid.

        Raises:
            InvalidDebtTotalError: If the debt total is zero or negative.
            RecordStoreError: If the store rejects the update.
        """
        updated = mark_installment_paid(debt, self._today())
        stored = self._record_store.update(
            RecordKind.DEBT,
            debt.id,
            debt_payment_fields(updated),
        )
        installments = updated.installments
        progress = (
            f"{installments.paid}/{installments.total}"
            if installments is not None
            else "settled"
        )
        self._logger.info(
            f"Installment marked on debt {debt.id}: {progress}, "
            f"paid={updated.paid_amount}, status={updated.status.value}"
        )
        return stored


__all__ = [
    "debt_payment_fields",
    "ApplyDebtPaymentUseCase",
    "MarkInstallmentPaidUseCase",
]

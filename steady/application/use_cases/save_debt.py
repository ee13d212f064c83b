"""Use case creating or editing a debt with a derived status."""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Callable

from steady.application.ports.record_store import RecordStorePort
from steady.domain.exceptions import InvalidDebtTotalError
from steady.domain.models import Account, Debt, RecordKind
from steady.domain.services.debts import clamp_paid_amount, derive_debt_status
from steady.domain.services.validation import (
    optional_text,
    parse_amount,
    parse_choice,
    parse_date,
    parse_installment_count,
    require_text,
)
from steady.infrastructure.logging.logger import get_app_logger


class SaveDebtUseCase:
    """Validate a debt form, derive its status and persist it.

    The status submitted with the form is ignored: it is always derived
    from the paid amount, the total and the due date.
    """

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

    def execute(
        self,
        fields: Mapping[str, Any],
        debt_id: str | None = None,
    ) -> Debt:
        """Insert a new debt, or update ``debt_id`` when given.

        Args:
            fields: Raw form values: account, name, creditor, total_amount,
                paid_amount, start_date, due_date, interest_rate,
                installments_total, installments_paid and notes.
            debt_id: Identifier of the debt to edit.

        Returns:
            Debt: The stored debt.

        Raises:
            InvalidAmountError: If an amount is not a number >= 0.
            InvalidDebtTotalError: If the total is zero.
            InvalidRecordError: If another field cannot be read.
        """
        values = self._build_values(fields, debt_id)
        if debt_id is None:
            debt = self._record_store.insert(RecordKind.DEBT, values)
        else:
            debt = self._record_store.update(RecordKind.DEBT, debt_id, values)
        self._logger.info(
            f"Debt saved: id={debt.id}, paid={debt.paid_amount}/"
            f"{debt.total_amount}, status={debt.status.value}"
        )
        return debt

    def _build_values(
        self,
        fields: Mapping[str, Any],
        debt_id: str | None,
    ) -> dict[str, Any]:
        total = parse_amount(fields.get("total_amount"))
        if total <= 0:
            raise InvalidDebtTotalError(debt_id or "new", total)
        raw_paid = parse_amount(fields.get("paid_amount") or Decimal("0"))
        paid = clamp_paid_amount(raw_paid, total)
        if paid != raw_paid:
            self._logger.warning(
                f"Paid amount {raw_paid} exceeds total {total}; capped"
            )
        raw_due = fields.get("due_date")
        due_date = parse_date(raw_due) if raw_due else None

        installments_total = parse_installment_count(
            fields.get("installments_total")
        )
        installments_paid = (
            parse_installment_count(fields.get("installments_paid")) or 0
        )
        if installments_total:
            installments_paid = min(installments_paid, installments_total)
        else:
            installments_total = None
            installments_paid = 0

        return {
            "account": parse_choice(Account, fields.get("account"), "account"),
            "name": require_text(fields.get("name"), "name"),
            "creditor": require_text(fields.get("creditor"), "creditor"),
            "total_amount": total,
            "paid_amount": paid,
            "start_date": parse_date(
                fields.get("start_date") or self._today()
            ),
            "due_date": due_date,
            "interest_rate": parse_amount(
                fields.get("interest_rate") or Decimal("0")
            ),
            "status": derive_debt_status(
                paid,
                total,
                due_date,
                self._today(),
            ),
            "installments_total": installments_total,
            "installments_paid": installments_paid,
            "notes": optional_text(fields.get("notes")),
        }


__all__ = ["SaveDebtUseCase"]

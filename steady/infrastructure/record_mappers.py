"""Conversions between ledger table rows and domain records."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from sqlalchemy import Table

from steady.domain.exceptions import InvalidRecordError
from steady.domain.models import (
    Account,
    Debt,
    DebtStatus,
    Expense,
    ExpenseKind,
    ExpenseStatus,
    Income,
    IncomeKind,
    InstallmentPlan,
    RecordKind,
)
from steady.domain.services.validation import parse_date
from steady.infrastructure.tables import MANAGED_COLUMNS
from steady.utils.decimal_utils import coerce_decimal


def row_to_record(kind: RecordKind, row: Mapping[str, Any]):
    """Build the domain record of a table row.

    Args:
        kind: Record kind the row belongs to.
        row: Column mapping of the row.

    Returns:
        Income | Expense | Debt: Domain record.

    Raises:
        InvalidRecordError: If a date or enum column cannot be read.
    """
    if kind is RecordKind.INCOME:
        return income_from_row(row)
    if kind is RecordKind.EXPENSE:
        return expense_from_row(row)
    return debt_from_row(row)


def income_from_row(row: Mapping[str, Any]) -> Income:
    return Income(
        id=str(row["id"]),
        account=_enum(Account, row["account"], "account"),
        amount=coerce_decimal(row["amount"]),
        date=parse_date(row["date"]),
        source=row["source"] or "",
        kind=_enum(IncomeKind, row["kind"], "kind"),
        project=row.get("project") or None,
    )


def expense_from_row(row: Mapping[str, Any]) -> Expense:
    return Expense(
        id=str(row["id"]),
        account=_enum(Account, row["account"], "account"),
        amount=coerce_decimal(row["amount"]),
        date=parse_date(row["date"]),
        category=row["category"] or "",
        kind=_enum(ExpenseKind, row["kind"], "kind"),
        status=_enum(ExpenseStatus, row["status"], "status"),
        recurring=bool(row.get("recurring")),
        description=row.get("description") or None,
    )


def debt_from_row(row: Mapping[str, Any]) -> Debt:
    installments = None
    installments_total = row.get("installments_total")
    if installments_total:
        installments = InstallmentPlan(
            total=int(installments_total),
            paid=int(row.get("installments_paid") or 0),
        )
    due_date = row.get("due_date")
    return Debt(
        id=str(row["id"]),
        account=_enum(Account, row["account"], "account"),
        name=row["name"] or "",
        creditor=row["creditor"] or "",
        total_amount=coerce_decimal(row["total_amount"]),
        paid_amount=coerce_decimal(row["paid_amount"]),
        start_date=parse_date(row["start_date"]),
        status=_enum(DebtStatus, row["status"], "status"),
        due_date=parse_date(due_date) if due_date else None,
        interest_rate=coerce_decimal(row.get("interest_rate")),
        installments=installments,
        notes=row.get("notes") or None,
    )


def serialize_fields(
    table: Table,
    fields: Mapping[str, Any],
) -> dict[str, Any]:
    """Return column values ready to be written to ``table``.

    Enum members are stored as their string values.

    Args:
        table: Destination table.
        fields: Field values keyed by column name.

    Returns:
        dict[str, Any]: Values keyed by column name.

    Raises:
        InvalidRecordError: If a field does not name a writable column.
    """
    writable = set(table.c.keys()) - MANAGED_COLUMNS
    values: dict[str, Any] = {}
    for key, value in fields.items():
        if key not in writable:
            raise InvalidRecordError(
                f"Unknown field '{key}' for table {table.name}"
            )
        values[key] = value.value if isinstance(value, Enum) else value
    return values


def _enum(enum_cls, value, field: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidRecordError(
            f"Invalid {field} value: {value!r}"
        ) from exc


__all__ = [
    "row_to_record",
    "income_from_row",
    "expense_from_row",
    "debt_from_row",
    "serialize_fields",
]

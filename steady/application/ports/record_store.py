"""Application port for ledger record persistence."""

from collections.abc import Mapping
from typing import Any, Protocol

from steady.domain.models import Debt, Expense, Income, RecordKind


Record = Income | Expense | Debt


class RecordStorePort(Protocol):
    """Port exposing CRUD access to incomes, expenses and debts.

    Every operation may raise ``RecordStoreError`` on transport or
    validation failures; ``RecordNotFoundError`` signals an unknown id.
    """

    def list(
        self,
        kind: RecordKind,
        filters: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        """Return the records of a kind matching the exact-match filters."""

    def insert(self, kind: RecordKind, fields: Mapping[str, Any]) -> Record:
        """Insert a record and return it as stored."""

    def update(
        self,
        kind: RecordKind,
        record_id: str,
        fields: Mapping[str, Any],
    ) -> Record:
        """Update some fields of a record and return it as stored."""

    def delete(self, kind: RecordKind, record_id: str) -> None:
        """Delete a record."""


__all__ = ["Record", "RecordStorePort"]

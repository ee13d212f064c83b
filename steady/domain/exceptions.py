"""Domain-specific exceptions."""


class LedgerError(Exception):
    """Base exception for the ledger engine."""


class InvalidAmountError(LedgerError, ValueError):
    """An amount is not a finite, non-negative number."""


class InvalidRecordError(LedgerError, ValueError):
    """A record field cannot be read (bad date, enum value or count)."""


class InvalidDebtTotalError(LedgerError, ValueError):
    """A debt total is zero or negative, so per-installment math is undefined."""

    def __init__(self, debt_id: str, total) -> None:
        super().__init__(
            f"Debt {debt_id} has an invalid total amount: {total}"
        )
        self.debt_id = debt_id
        self.total = total


class RecordStoreError(LedgerError):
    """The record store failed to serve a request."""

    def __init__(self, message: str, kind=None, operation: str | None = None):
        super().__init__(message)
        self.kind = kind
        self.operation = operation


class RecordNotFoundError(RecordStoreError):
    """No record exists with the requested id."""


__all__ = [
    "LedgerError",
    "InvalidAmountError",
    "InvalidRecordError",
    "InvalidDebtTotalError",
    "RecordStoreError",
    "RecordNotFoundError",
]

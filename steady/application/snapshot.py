"""In-memory snapshot of ledger records and its refresh bookkeeping."""

from dataclasses import dataclass, field, replace

from steady.domain.exceptions import RecordStoreError
from steady.domain.models import Debt, Expense, Income, RecordKind


_SNAPSHOT_FIELDS = {
    RecordKind.INCOME: "incomes",
    RecordKind.EXPENSE: "expenses",
    RecordKind.DEBT: "debts",
}


@dataclass(frozen=True)
class LedgerSnapshot:
    """Records of each kind as last fetched from the store."""

    incomes: tuple[Income, ...] = ()
    expenses: tuple[Expense, ...] = ()
    debts: tuple[Debt, ...] = ()

    def with_records(self, kind: RecordKind, records) -> "LedgerSnapshot":
        """Return a snapshot whose records of ``kind`` are replaced."""
        return replace(self, **{_SNAPSHOT_FIELDS[kind]: tuple(records)})


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of a snapshot refresh, per record kind.

    Attributes:
        refreshed: Kinds whose records were replaced.
        discarded: Kinds whose fetch completed but was superseded.
        errors: Store errors of the kinds that failed to load.
    """

    refreshed: tuple[RecordKind, ...] = ()
    discarded: tuple[RecordKind, ...] = ()
    errors: dict[RecordKind, RecordStoreError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Return True when no fetch failed."""
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the first store error, if any."""
        for error in self.errors.values():
            raise error


class FetchSequencer:
    """Decide which completed fetches may replace snapshot records.

    Every fetch gets a sequence number per record kind. A completed fetch
    is installed only when no fetch of the same kind issued after it has
    already been installed, and while the consumer is still attached.
    """

    def __init__(self) -> None:
        self._issued: dict[RecordKind, int] = {}
        self._installed: dict[RecordKind, int] = {}
        self._detached = False

    def issue(self, kind: RecordKind) -> int:
        """Return the sequence number of a new fetch of ``kind``."""
        sequence = self._issued.get(kind, 0) + 1
        self._issued[kind] = sequence
        return sequence

    def accept(self, kind: RecordKind, sequence: int) -> bool:
        """Record a completed fetch and say whether to install it."""
        if self._detached:
            return False
        if sequence <= self._installed.get(kind, 0):
            return False
        self._installed[kind] = sequence
        return True

    def detach(self) -> None:
        """Discard every fetch completing from now on."""
        self._detached = True


__all__ = ["LedgerSnapshot", "RefreshResult", "FetchSequencer"]

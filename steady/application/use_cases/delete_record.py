"""Use case deleting a ledger record."""

from steady.application.ports.record_store import RecordStorePort
from steady.domain.models import RecordKind
from steady.infrastructure.logging.logger import get_app_logger


class DeleteRecordUseCase:
    """Delete an income, expense or debt."""

    def __init__(self, record_store: RecordStorePort, logger=None) -> None:
        self._record_store = record_store
        self._logger = logger or get_app_logger()

    def execute(self, kind: RecordKind | str, record_id: str) -> None:
        """Delete the record ``record_id`` of the given kind."""
        record_kind = RecordKind(kind)
        self._record_store.delete(record_kind, record_id)
        self._logger.info(f"Deleted {record_kind.value} {record_id}")


__all__ = ["DeleteRecordUseCase"]

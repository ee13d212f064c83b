"""SQLAlchemy-backed record store for incomes, expenses and debts."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any
import uuid

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from steady.application.ports.database import DatabaseEnginePort
from steady.application.ports.record_store import Record, RecordStorePort
from steady.domain.exceptions import (
    InvalidRecordError,
    RecordNotFoundError,
    RecordStoreError,
)
from steady.domain.models import RecordKind
from steady.infrastructure.logging.logger import get_app_logger
from steady.infrastructure.record_mappers import row_to_record, serialize_fields
from steady.infrastructure.tables import ORDERING, TABLES, metadata


def _new_id() -> str:
    return str(uuid.uuid4())


class SqlAlchemyRecordStore(RecordStorePort):
    """Record store backed by the ledger tables.

    Rows that cannot be mapped to a domain record are skipped with a
    warning so one bad row never hides the rest of a listing.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        logger=None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional callable generating record ids.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or _new_id

    def prepare(self) -> None:
        """Create the ledger tables when they do not exist."""
        engine = self._db_port.get_ledger_engine()
        try:
            metadata.create_all(engine)
        except SQLAlchemyError as exc:
            raise RecordStoreError(
                f"Could not create ledger tables: {exc}",
                operation="prepare",
            ) from exc
        self._logger.info("Ledger tables are ready")

    def insert(self, kind: RecordKind, fields: Mapping[str, Any]) -> Record:
        """Insert a record and return it as stored.

        Args:
            kind: Record kind to insert.
            fields: Column values; ``id`` is generated when absent.

        Returns:
            Record: The stored domain record.
        """
        table = TABLES[kind]
        values = self._serialize(kind, fields, "insert")
        values.setdefault("id", self._id_factory())
        try:
            with self._db_port.get_ledger_engine().begin() as conn:
                conn.execute(insert(table).values(**values))
                record = self._fetch_one(conn, kind, values["id"])
        except SQLAlchemyError as exc:
            raise self._store_error(kind, "insert", exc) from exc
        self._logger.info(f"Inserted {kind.value} {values['id']}")
        return record

    def update(
        self,
        kind: RecordKind,
        record_id: str,
        fields: Mapping[str, Any],
    ) -> Record:
        """Update some fields of a record and return it as stored.

        Args:
            kind: Record kind to update.
            record_id: Identifier of the record.
            fields: Column values to change.

        Returns:
            Record: The stored domain record.

        Raises:
            RecordNotFoundError: If no record has this id.
        """
        table = TABLES[kind]
        values = self._serialize(kind, fields, "update")
        values.pop("id", None)
        try:
            with self._db_port.get_ledger_engine().begin() as conn:
                if values:
                    result = conn.execute(
                        update(table)
                        .where(table.c.id == record_id)
                        .values(**values)
                    )
                    if result.rowcount == 0:
                        raise RecordNotFoundError(
                            f"No {kind.value} with id {record_id}",
                            kind=kind,
                            operation="update",
                        )
                record = self._fetch_one(conn, kind, record_id)
        except SQLAlchemyError as exc:
            raise self._store_error(kind, "update", exc) from exc
        self._logger.info(
            f"Updated {kind.value} {record_id}: {sorted(values)}"
        )
        return record

    def delete(self, kind: RecordKind, record_id: str) -> None:
        """Delete a record.

        Raises:
            RecordNotFoundError: If no record has this id.
        """
        table = TABLES[kind]
        try:
            with self._db_port.get_ledger_engine().begin() as conn:
                result = conn.execute(
                    delete(table).where(table.c.id == record_id)
                )
        except SQLAlchemyError as exc:
            raise self._store_error(kind, "delete", exc) from exc
        if result.rowcount == 0:
            raise RecordNotFoundError(
                f"No {kind.value} with id {record_id}",
                kind=kind,
                operation="delete",
            )
        self._logger.info(f"Deleted {kind.value} {record_id}")

    def list(
        self,
        kind: RecordKind,
        filters: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        """Return the records of a kind matching exact-match filters.

        Incomes and expenses come newest first by date, debts newest first
        by creation time.

        Args:
            kind: Record kind to list.
            filters: Optional column values records must equal.

        Returns:
            list[Record]: Domain records; unreadable rows are skipped.
        """
        table = TABLES[kind]
        statement = select(table)
        criteria = self._serialize(kind, filters or {}, "list")
        for column, value in criteria.items():
            statement = statement.where(table.c[column] == value)
        statement = statement.order_by(ORDERING[kind])
        try:
            with self._db_port.get_ledger_engine().connect() as conn:
                rows = conn.execute(statement).mappings().all()
        except SQLAlchemyError as exc:
            raise self._store_error(kind, "list", exc) from exc

        records = []
        for row in rows:
            try:
                records.append(row_to_record(kind, row))
            except InvalidRecordError as exc:
                self._logger.warning(
                    f"Skipped {kind.value} {row.get('id')}: {exc}"
                )
        self._logger.info(f"Fetched {len(records)} {kind.value} records")
        return records

    def _fetch_one(
        self,
        conn: Connection,
        kind: RecordKind,
        record_id: str,
    ) -> Record:
        table = TABLES[kind]
        row = (
            conn.execute(select(table).where(table.c.id == record_id))
            .mappings()
            .first()
        )
        if row is None:
            raise RecordNotFoundError(
                f"No {kind.value} with id {record_id}",
                kind=kind,
            )
        try:
            return row_to_record(kind, row)
        except InvalidRecordError as exc:
            raise RecordStoreError(
                f"Stored {kind.value} {record_id} is unreadable: {exc}",
                kind=kind,
            ) from exc

    @staticmethod
    def _serialize(
        kind: RecordKind,
        fields: Mapping[str, Any],
        operation: str,
    ) -> dict[str, Any]:
        try:
            return serialize_fields(TABLES[kind], fields)
        except InvalidRecordError as exc:
            raise RecordStoreError(
                str(exc),
                kind=kind,
                operation=operation,
            ) from exc

    @staticmethod
    def _store_error(
        kind: RecordKind,
        operation: str,
        exc: SQLAlchemyError,
    ) -> RecordStoreError:
        return RecordStoreError(
            f"Record store {operation} failed for {kind.value}: {exc}",
            kind=kind,
            operation=operation,
        )


__all__ = ["SqlAlchemyRecordStore"]

"""Composition root for wiring infrastructure adapters."""

from steady.application.facade import LedgerFacade
from steady.application.ports.database import DatabaseEnginePort
from steady.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from steady.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from steady.infrastructure.profile_cache import ProfileCache
from steady.infrastructure.record_store import SqlAlchemyRecordStore
from steady.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_record_store(
    db_port: DatabaseEnginePort | None = None,
) -> SqlAlchemyRecordStore:
    """Return the record store backed by the ledger database."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyRecordStore(resolved_db, logger=get_app_logger())


def build_profile_cache(
    settings: LedgerSettings | None = None,
) -> ProfileCache:
    """Return a profile cache using the configured time-to-live."""
    resolved_settings = settings or LedgerSettings.from_env()
    return ProfileCache(
        ttl=resolved_settings.profile_cache_ttl,
        logger=get_app_logger(),
    )


def build_facade(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerFacade:
    """Return the ledger facade wired to the record store."""
    return LedgerFacade(
        build_record_store(db_port),
        logger=get_app_logger(),
        usage_logger=get_usage_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_record_store",
    "build_profile_cache",
    "build_facade",
]

"""CLI adapter creating the ledger tables.

This module wires the record store to the configured database and
provides a command-line entry point for preparing a fresh ledger.
"""

from steady.infrastructure.container import (
    build_database_adapter,
    build_record_store,
)
from steady.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create the incomes, expenses and debts tables."""
    logger = get_app_logger()
    record_store = build_record_store(build_database_adapter())

    record_store.prepare()

    logger.info("Ledger database initialized")
    print("Ledger tables are ready.")


if __name__ == "__main__":  # pragma: no cover
    main()

"""CLI adapter printing the current-month ledger summary.

The summary loads a fresh snapshot through the facade and prints the
metrics, the debt totals and the unified transactions.
"""

import asyncio

from steady.application.facade import LedgerFacade
from steady.infrastructure.container import build_facade
from steady.infrastructure.logging.logger import get_app_logger
from steady.infrastructure.settings import LedgerSettings


def _format_money(value) -> str:
    return f"R$ {value:,.2f}"


def _print_summary(facade: LedgerFacade, account_filter) -> None:
    metrics = facade.metrics(account_filter)
    summary = facade.debt_summary(account_filter)

    print(f"Account filter: {account_filter.value}")
    print(f"Incomes: {_format_money(metrics.total_incomes)}")
    print(f"Expenses: {_format_money(metrics.total_expenses)}")
    print(f"Balance: {_format_money(metrics.balance)}")
    print(f"Projected balance: {_format_money(metrics.projected_balance)}")
    print(
        f"Debts: {summary.debt_count} tracked, "
        f"{_format_money(summary.total_remaining)} remaining"
    )

    transactions = facade.transactions(account_filter)
    print(f"Transactions: {len(transactions)}")
    for item in transactions:
        status = f" [{item.status.value}]" if item.status else ""
        print(
            f"  {item.date.isoformat()}  {item.kind.value:<7}  "
            f"{_format_money(item.signed_amount):>16}  {item.label}{status}"
        )


def main() -> None:
    """Refresh the ledger snapshot and print its summary."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    facade = build_facade()

    result = asyncio.run(facade.refresh())
    for kind, error in result.errors.items():
        logger.error(f"Could not load {kind.value} records: {error}")
        print(f"Warning: {kind.value} records could not be loaded.")

    _print_summary(facade, settings.account_filter)


if __name__ == "__main__":  # pragma: no cover
    main()

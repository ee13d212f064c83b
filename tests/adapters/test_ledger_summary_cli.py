"""Tests for the ledger_summary_cli adapter."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from steady.adapters import ledger_summary_cli
from steady.application.facade import LedgerFacade
from steady.domain.exceptions import RecordStoreError
from steady.domain.models import (
    Account,
    AccountFilter,
    Expense,
    ExpenseKind,
    ExpenseStatus,
    Income,
    IncomeKind,
    RecordKind,
)
from steady.infrastructure.settings import LedgerSettings


class _Store:
    def __init__(self, failures=None):
        self.failures = failures or {}

    def list(self, kind, filters=None):
        if kind in self.failures:
            raise self.failures[kind]
        if kind is RecordKind.INCOME:
            return [
                Income(
                    id="i1",
                    account=Account.PESSOAL,
                    amount=Decimal("1000"),
                    date=date(2024, 6, 2),
                    source="Salário",
                    kind=IncomeKind.PONTUAL,
                )
            ]
        if kind is RecordKind.EXPENSE:
            return [
                Expense(
                    id="e1",
                    account=Account.PESSOAL,
                    amount=Decimal("300"),
                    date=date(2024, 6, 3),
                    category="Mercado",
                    kind=ExpenseKind.VARIAVEL,
                    status=ExpenseStatus.PENDENTE,
                )
            ]
        return []


def _wire(monkeypatch, store):
    fake_logger = MagicMock()
    facade = LedgerFacade(
        store,
        logger=MagicMock(),
        usage_logger=MagicMock(),
        today=lambda: date(2024, 6, 15),
    )
    monkeypatch.setattr(ledger_summary_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(ledger_summary_cli, "build_facade", lambda: facade)
    monkeypatch.setattr(
        ledger_summary_cli.LedgerSettings,
        "from_env",
        classmethod(lambda cls: LedgerSettings(AccountFilter.PESSOAL)),
    )
    return fake_logger


def test_main_prints_metrics_and_transactions(monkeypatch, capsys):
    _wire(monkeypatch, _Store())

    ledger_summary_cli.main()

    out = capsys.readouterr().out
    assert "Account filter: pessoal" in out
    assert "Balance: R$ 700.00" in out
    assert "Projected balance: R$ 400.00" in out
    assert "Transactions: 2" in out
    assert "Mercado [pendente]" in out


def test_main_reports_failed_kinds(monkeypatch, capsys):
    fake_logger = _wire(
        monkeypatch,
        _Store({RecordKind.DEBT: RecordStoreError("offline")}),
    )

    ledger_summary_cli.main()

    fake_logger.error.assert_called_once()
    assert "debt records could not be loaded" in capsys.readouterr().out

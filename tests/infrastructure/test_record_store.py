"""Tests for the SQLAlchemy record store."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from steady.domain.exceptions import RecordNotFoundError, RecordStoreError
from steady.domain.models import (
    Account,
    DebtStatus,
    ExpenseKind,
    ExpenseStatus,
    Income,
    IncomeKind,
    InstallmentPlan,
    RecordKind,
)
from steady.domain.services.debts import installment_value, mark_installment_paid
from steady.infrastructure.record_store import SqlAlchemyRecordStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    ids = iter(f"id-{n}" for n in range(1, 100))
    record_store = SqlAlchemyRecordStore(
        db_port,
        logger=MagicMock(),
        id_factory=lambda: next(ids),
    )
    record_store.prepare()
    return record_store


def _income_fields(**overrides):
    fields = {
        "account": Account.PESSOAL,
        "amount": Decimal("120.50"),
        "date": date(2024, 6, 1),
        "source": "Cliente",
        "kind": IncomeKind.PONTUAL,
    }
    fields.update(overrides)
    return fields


def test_insert_returns_domain_record(store):
    income = store.insert(RecordKind.INCOME, _income_fields(project="Site"))

    assert income == Income(
        id="id-1",
        account=Account.PESSOAL,
        amount=Decimal("120.50"),
        date=date(2024, 6, 1),
        source="Cliente",
        kind=IncomeKind.PONTUAL,
        project="Site",
    )


def test_list_orders_by_date_and_applies_filters(store):
    store.insert(RecordKind.INCOME, _income_fields(date=date(2024, 5, 1)))
    store.insert(
        RecordKind.INCOME,
        _income_fields(date=date(2024, 6, 2), account=Account.NEGOCIO),
    )
    store.insert(RecordKind.INCOME, _income_fields(date=date(2024, 6, 1)))

    everything = store.list(RecordKind.INCOME)
    business = store.list(RecordKind.INCOME, {"account": Account.NEGOCIO})

    assert [income.id for income in everything] == ["id-2", "id-3", "id-1"]
    assert [income.id for income in business] == ["id-2"]


def test_expense_round_trip_keeps_status_and_flags(store):
    expense = store.insert(
        RecordKind.EXPENSE,
        {
            "account": "negocio",
            "amount": Decimal("99.90"),
            "date": date(2024, 6, 3),
            "category": "Software",
            "kind": ExpenseKind.FIXO,
            "status": ExpenseStatus.PENDENTE,
            "recurring": True,
        },
    )

    updated = store.update(
        RecordKind.EXPENSE,
        expense.id,
        {"status": ExpenseStatus.PAGO},
    )

    assert updated.status is ExpenseStatus.PAGO
    assert updated.recurring is True
    assert updated.account is Account.NEGOCIO
    assert updated.description is None


def test_debt_round_trip_builds_installment_plan(store):
    debt = store.insert(
        RecordKind.DEBT,
        {
            "account": Account.PESSOAL,
            "name": "Notebook",
            "creditor": "Loja",
            "total_amount": Decimal("1000"),
            "paid_amount": Decimal("400"),
            "start_date": date(2024, 1, 1),
            "due_date": None,
            "status": DebtStatus.ABERTA,
            "installments_total": 6,
            "installments_paid": 2,
        },
    )
    plain = store.insert(
        RecordKind.DEBT,
        {
            "account": Account.PESSOAL,
            "name": "Empréstimo",
            "creditor": "Amigo",
            "total_amount": Decimal("300"),
            "start_date": date(2024, 2, 1),
            "status": DebtStatus.ABERTA,
        },
    )

    assert debt.installments == InstallmentPlan(total=6, paid=2)
    assert debt.remaining_amount == Decimal("600")
    assert plain.installments is None
    assert plain.paid_amount == Decimal("0")
    assert len(store.list(RecordKind.DEBT)) == 2


def test_installment_payment_survives_round_trip(store):
    """Paid amounts rounded to cents are stored without loss."""
    debt = store.insert(
        RecordKind.DEBT,
        {
            "account": Account.PESSOAL,
            "name": "Geladeira",
            "creditor": "Loja",
            "total_amount": Decimal("1000"),
            "start_date": date(2024, 1, 1),
            "status": DebtStatus.ABERTA,
            "installments_total": 3,
            "installments_paid": 0,
        },
    )
    marked = mark_installment_paid(debt, date(2024, 2, 1))

    stored = store.update(
        RecordKind.DEBT,
        debt.id,
        {
            "paid_amount": marked.paid_amount,
            "installments_paid": marked.installments.paid,
        },
    )

    assert stored.paid_amount == marked.paid_amount == Decimal("333.33")
    assert installment_value(stored) == installment_value(marked)


def test_update_and_delete_unknown_ids_raise_not_found(store):
    with pytest.raises(RecordNotFoundError):
        store.update(RecordKind.INCOME, "missing", {"source": "X"})
    with pytest.raises(RecordNotFoundError):
        store.delete(RecordKind.INCOME, "missing")


def test_delete_removes_record(store):
    income = store.insert(RecordKind.INCOME, _income_fields())

    store.delete(RecordKind.INCOME, income.id)

    assert store.list(RecordKind.INCOME) == []


def test_unknown_fields_are_rejected(store):
    with pytest.raises(RecordStoreError) as exc_info:
        store.insert(RecordKind.INCOME, _income_fields(valor=10))

    assert exc_info.value.kind is RecordKind.INCOME
    assert exc_info.value.operation == "insert"


def test_managed_columns_are_not_writable(store):
    with pytest.raises(RecordStoreError):
        store.update(RecordKind.INCOME, "id-1", {"created_at": None})


def test_constraint_violations_become_store_errors(store):
    with pytest.raises(RecordStoreError):
        store.insert(RecordKind.INCOME, _income_fields(amount=Decimal("-1")))


def test_unreadable_rows_are_skipped():
    good_row = {
        "id": "ok",
        "account": "pessoal",
        "amount": Decimal("1"),
        "date": date(2024, 6, 1),
        "source": "Cliente",
        "kind": "pontual",
        "project": None,
    }
    bad_row = dict(good_row, id="bad", kind="mensal")
    engine = MagicMock()
    conn = engine.connect.return_value.__enter__.return_value
    conn.execute.return_value.mappings.return_value.all.return_value = [
        good_row,
        bad_row,
    ]
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    logger = MagicMock()
    store = SqlAlchemyRecordStore(db_port, logger=logger)

    incomes = store.list(RecordKind.INCOME)

    assert [income.id for income in incomes] == ["ok"]
    logger.warning.assert_called_once()


def test_engine_failures_are_wrapped():
    engine = MagicMock()
    engine.connect.side_effect = OperationalError("SELECT", {}, Exception())
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    store = SqlAlchemyRecordStore(db_port, logger=MagicMock())

    with pytest.raises(RecordStoreError) as exc_info:
        store.list(RecordKind.EXPENSE)

    assert exc_info.value.operation == "list"
    assert isinstance(exc_info.value.__cause__, OperationalError)

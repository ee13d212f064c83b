"""SQLAlchemy table definitions for the ledger records."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

from steady.domain.models import RecordKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


metadata = MetaData()

ACCOUNT_CHECK = "account IN ('pessoal', 'negocio')"

incomes_table = Table(
    "incomes",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("account", String(16), nullable=False),
    Column("amount", Numeric(14, 2), nullable=False),
    Column("date", Date, nullable=False),
    Column("source", String(255), nullable=False),
    Column("kind", String(16), nullable=False),
    Column("project", String(255)),
    Column("created_at", DateTime(timezone=True), default=_utcnow),
    CheckConstraint("amount >= 0", name="ck_incomes_amount"),
    CheckConstraint(ACCOUNT_CHECK, name="ck_incomes_account"),
    CheckConstraint(
        "kind IN ('recorrente', 'pontual')",
        name="ck_incomes_kind",
    ),
)

expenses_table = Table(
    "expenses",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("account", String(16), nullable=False),
    Column("amount", Numeric(14, 2), nullable=False),
    Column("date", Date, nullable=False),
    Column("category", String(255), nullable=False),
    Column("kind", String(16), nullable=False),
    Column("status", String(16), nullable=False, default="pendente"),
    Column("recurring", Boolean, nullable=False, default=False),
    Column("description", Text),
    Column("created_at", DateTime(timezone=True), default=_utcnow),
    CheckConstraint("amount >= 0", name="ck_expenses_amount"),
    CheckConstraint(ACCOUNT_CHECK, name="ck_expenses_account"),
    CheckConstraint("kind IN ('fixo', 'variavel')", name="ck_expenses_kind"),
    CheckConstraint(
        "status IN ('pago', 'pendente')",
        name="ck_expenses_status",
    ),
)

debts_table = Table(
    "debts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("account", String(16), nullable=False),
    Column("name", String(255), nullable=False),
    Column("creditor", String(255), nullable=False),
    Column("total_amount", Numeric(14, 2), nullable=False),
    Column("paid_amount", Numeric(14, 2), nullable=False, default=0),
    Column("start_date", Date, nullable=False),
    Column("due_date", Date),
    Column("interest_rate", Numeric(7, 4), nullable=False, default=0),
    Column("status", String(16), nullable=False, default="aberta"),
    Column("installments_total", Integer),
    Column("installments_paid", Integer, default=0),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), default=_utcnow),
    Column(
        "updated_at",
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    ),
    CheckConstraint(ACCOUNT_CHECK, name="ck_debts_account"),
    CheckConstraint(
        "status IN ('aberta', 'paga', 'atrasada')",
        name="ck_debts_status",
    ),
)

TABLES = {
    RecordKind.INCOME: incomes_table,
    RecordKind.EXPENSE: expenses_table,
    RecordKind.DEBT: debts_table,
}

ORDERING = {
    RecordKind.INCOME: incomes_table.c.date.desc(),
    RecordKind.EXPENSE: expenses_table.c.date.desc(),
    RecordKind.DEBT: debts_table.c.created_at.desc(),
}

MANAGED_COLUMNS = frozenset({"created_at", "updated_at"})


__all__ = [
    "metadata",
    "incomes_table",
    "expenses_table",
    "debts_table",
    "TABLES",
    "ORDERING",
    "MANAGED_COLUMNS",
]

"""Tests for the debt use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from steady.application.use_cases import (
    ApplyDebtPaymentUseCase,
    DeleteRecordUseCase,
    MarkInstallmentPaidUseCase,
    SaveDebtUseCase,
    debt_payment_fields,
)
from steady.domain.exceptions import InvalidAmountError, InvalidDebtTotalError
from steady.domain.models import (
    Account,
    Debt,
    DebtStatus,
    InstallmentPlan,
    RecordKind,
)


def _today():
    return date(2024, 6, 1)


def _debt(plan=InstallmentPlan(total=6, paid=2)):
    return Debt(
        id="d1",
        account=Account.PESSOAL,
        name="Carro",
        creditor="Banco",
        total_amount=Decimal("1000"),
        paid_amount=Decimal("400"),
        start_date=date(2024, 1, 1),
        status=DebtStatus.ABERTA,
        installments=plan,
    )


def _debt_form(**overrides):
    form = {
        "account": "pessoal",
        "name": "Carro",
        "creditor": "Banco",
        "total_amount": "1000",
        "paid_amount": "200",
        "start_date": "2024-01-10",
        "installments_total": "10",
        "installments_paid": "2",
        "status": "paga",
    }
    form.update(overrides)
    return form


def test_save_debt_derives_status_and_inserts():
    """The submitted status is ignored in favour of the derived one."""
    store = MagicMock()
    use_case = SaveDebtUseCase(store, logger=MagicMock(), today=_today)

    use_case.execute(_debt_form(due_date="2024-03-01"))

    kind, values = store.insert.call_args.args
    assert kind is RecordKind.DEBT
    assert values["status"] is DebtStatus.ATRASADA
    assert values["account"] is Account.PESSOAL
    assert values["total_amount"] == Decimal("1000")
    assert values["paid_amount"] == Decimal("200")
    assert values["installments_total"] == 10
    assert values["installments_paid"] == 2
    assert values["due_date"] == date(2024, 3, 1)
    assert values["interest_rate"] == Decimal("0")


def test_save_debt_updates_when_id_is_given():
    store = MagicMock()
    use_case = SaveDebtUseCase(store, logger=MagicMock(), today=_today)

    use_case.execute(_debt_form(paid_amount="1000"), debt_id="d7")

    store.insert.assert_not_called()
    kind, debt_id, values = store.update.call_args.args
    assert (kind, debt_id) == (RecordKind.DEBT, "d7")
    assert values["status"] is DebtStatus.PAGA


def test_save_debt_caps_paid_amount_and_counts():
    """Paid amounts and installment counts are bounded by their totals."""
    store = MagicMock()
    logger = MagicMock()
    use_case = SaveDebtUseCase(store, logger=logger, today=_today)

    use_case.execute(
        _debt_form(
            paid_amount="1500",
            installments_total="4",
            installments_paid="9",
        )
    )

    values = store.insert.call_args.args[1]
    assert values["paid_amount"] == Decimal("1000")
    assert values["installments_paid"] == 4
    logger.warning.assert_called_once()


def test_save_debt_without_installments():
    """Blank or zero installment totals mean no plan."""
    store = MagicMock()
    use_case = SaveDebtUseCase(store, logger=MagicMock(), today=_today)

    use_case.execute(_debt_form(installments_total="", installments_paid=""))

    values = store.insert.call_args.args[1]
    assert values["installments_total"] is None
    assert values["installments_paid"] == 0


def test_save_debt_rejects_zero_total():
    store = MagicMock()
    use_case = SaveDebtUseCase(store, logger=MagicMock(), today=_today)

    with pytest.raises(InvalidDebtTotalError):
        use_case.execute(_debt_form(total_amount="0"))

    store.insert.assert_not_called()


def test_apply_debt_payment_persists_changed_fields():
    store = MagicMock()
    use_case = ApplyDebtPaymentUseCase(store, logger=MagicMock(), today=_today)

    result = use_case.execute(_debt(), Decimal("150"))

    store.update.assert_called_once_with(
        RecordKind.DEBT,
        "d1",
        {
            "paid_amount": Decimal("550"),
            "status": DebtStatus.ABERTA,
            "installments_paid": 3,
        },
    )
    assert result is store.update.return_value


def test_apply_debt_payment_rejects_zero():
    store = MagicMock()
    use_case = ApplyDebtPaymentUseCase(store, logger=MagicMock(), today=_today)

    with pytest.raises(InvalidAmountError):
        use_case.execute(_debt(), "0")

    store.update.assert_not_called()


def test_mark_installment_paid_persists_fields():
    store = MagicMock()
    use_case = MarkInstallmentPaidUseCase(
        store,
        logger=MagicMock(),
        today=_today,
    )

    use_case.execute(_debt())

    store.update.assert_called_once_with(
        RecordKind.DEBT,
        "d1",
        {
            "paid_amount": Decimal("500"),
            "status": DebtStatus.ABERTA,
            "installments_paid": 3,
        },
    )


def test_debt_payment_fields_without_plan():
    fields = debt_payment_fields(_debt(plan=None))

    assert set(fields) == {"paid_amount", "status"}


def test_delete_record_accepts_kind_strings():
    store = MagicMock()
    use_case = DeleteRecordUseCase(store, logger=MagicMock())

    use_case.execute("expense", "e1")

    store.delete.assert_called_once_with(RecordKind.EXPENSE, "e1")

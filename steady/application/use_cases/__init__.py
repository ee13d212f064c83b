"""Application use cases package."""

from .debt_payments import (
    ApplyDebtPaymentUseCase,
    MarkInstallmentPaidUseCase,
    debt_payment_fields,
)
from .delete_record import DeleteRecordUseCase
from .register_entries import (
    MarkExpensePaidUseCase,
    RegisterExpenseUseCase,
    RegisterIncomeUseCase,
)
from .save_debt import SaveDebtUseCase

__all__ = [
    "ApplyDebtPaymentUseCase",
    "MarkInstallmentPaidUseCase",
    "debt_payment_fields",
    "DeleteRecordUseCase",
    "MarkExpensePaidUseCase",
    "RegisterExpenseUseCase",
    "RegisterIncomeUseCase",
    "SaveDebtUseCase",
]

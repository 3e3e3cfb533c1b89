"""Concrete repository implementations using SQLModel."""

from .account import SQLModelAccountRepository
from .borrowing import SQLModelBorrowingRepository
from .budget import SQLModelBudgetRepository
from .fixed_expense import SQLModelFixedExpenseRepository
from .possible_expense import SQLModelPossibleExpenseRepository
from .target_savings import SQLModelTargetSavingsRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelAccountRepository",
    "SQLModelBorrowingRepository",
    "SQLModelBudgetRepository",
    "SQLModelFixedExpenseRepository",
    "SQLModelPossibleExpenseRepository",
    "SQLModelTargetSavingsRepository",
    "SQLModelTransactionRepository",
]

"""Repository protocol definitions for domain layer."""

from .account import AccountRepository
from .borrowing import BorrowingRepository
from .budget import BudgetRepository
from .fixed_expense import FixedExpenseRepository
from .possible_expense import PossibleExpenseRepository
from .target_savings import TargetSavingsRepository
from .transaction import TransactionRepository

__all__ = [
    "AccountRepository",
    "BorrowingRepository",
    "BudgetRepository",
    "FixedExpenseRepository",
    "PossibleExpenseRepository",
    "TargetSavingsRepository",
    "TransactionRepository",
]

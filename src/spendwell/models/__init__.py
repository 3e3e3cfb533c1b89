"""SQLModel table exports."""

from .account import Account
from .borrowing import Borrowing
from .budget import Budget
from .fixed_expense import FixedExpense
from .possible_expense import PossibleExpense
from .target_savings import TargetSavings
from .transaction import Transaction
from .user import User

__all__ = [
    "Account",
    "Borrowing",
    "Budget",
    "FixedExpense",
    "PossibleExpense",
    "TargetSavings",
    "Transaction",
    "User",
]

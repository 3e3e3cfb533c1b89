"""Blueprint exports."""

from . import (
    accounts,
    borrowings,
    budgets,
    dashboard,
    fixed_expenses,
    possible_expenses,
    target_savings,
    transactions,
)

__all__ = [
    "accounts",
    "borrowings",
    "budgets",
    "dashboard",
    "fixed_expenses",
    "possible_expenses",
    "target_savings",
    "transactions",
]

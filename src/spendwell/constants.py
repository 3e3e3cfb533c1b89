"""Enumerated values accepted by the ledger."""

from __future__ import annotations

ACCOUNT_TYPES = ("bank", "cash", "credit", "mobile")
CURRENCIES = ("USD", "EUR", "GBP", "JPY", "CAD", "AUD")

INCOME = "income"
EXPENSE = "expense"
TRANSFER = "transfer"
TRANSACTION_KINDS = (INCOME, EXPENSE, TRANSFER)
# Transfers are recorded only by the account transfer operation.
POSTABLE_KINDS = (INCOME, EXPENSE)

BORROWED = "borrowed"
LENT = "lent"
BORROWING_DIRECTIONS = (BORROWED, LENT)

# Categories stamped on synthetic transactions.
CATEGORY_BORROWED = "Borrowed Money"
CATEGORY_LENT = "Lent Money"
CATEGORY_REPAYMENT = "Loan Repayment"
CATEGORY_COLLECTION = "Loan Collection"
CATEGORY_TRANSFER = "Account Transfer"

UNKNOWN_ACCOUNT = "Unknown Account"
DEFAULT_TARGET_COLOR = "#3B82F6"
DEFAULT_TRANSACTION_LIMIT = 100

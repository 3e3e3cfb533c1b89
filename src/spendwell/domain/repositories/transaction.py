"""Transaction repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Repository for managing transaction entities."""

    def get_by_id(self, transaction_id: int, *, user_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        ...

    def search(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[str] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        limit: Optional[int] = None,
        user_id: int,
    ) -> list[Transaction]:
        """Filtered listing, newest first."""
        ...

    def sum_amount(
        self, *, kind: str, start_date: date, end_date: date, user_id: int
    ) -> float:
        """Total amount of ``kind`` transactions dated within the range."""
        ...

    def spent_by_category(
        self, *, start_date: date, end_date: date, user_id: int
    ) -> dict[str, float]:
        """Expense totals keyed by category within the range."""
        ...

    def create(self, transaction: Transaction, *, user_id: int) -> Transaction:
        ...

    def update(self, transaction: Transaction, *, user_id: int) -> Transaction:
        ...

    def delete(self, transaction_id: int, *, user_id: int) -> None:
        ...

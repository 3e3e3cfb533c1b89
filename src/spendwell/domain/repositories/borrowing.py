"""Borrowing repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.borrowing import Borrowing


class BorrowingRepository(Protocol):
    """Repository for borrow/lend records."""

    def get_by_id(self, borrowing_id: int, *, user_id: int) -> Optional[Borrowing]:
        ...

    def get_unscoped(self, borrowing_id: int) -> Optional[Borrowing]:
        ...

    def search(
        self,
        *,
        direction: Optional[str] = None,
        is_paid: Optional[bool] = None,
        person_name: Optional[str] = None,
        user_id: int,
    ) -> list[Borrowing]:
        """Active records matching the filters, newest first."""
        ...

    def create(self, borrowing: Borrowing, *, user_id: int) -> Borrowing:
        ...

    def update(self, borrowing: Borrowing, *, user_id: int) -> Borrowing:
        ...

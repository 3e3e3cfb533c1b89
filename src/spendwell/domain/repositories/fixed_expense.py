"""Fixed expense repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.fixed_expense import FixedExpense


class FixedExpenseRepository(Protocol):
    def get_by_id(self, expense_id: int, *, user_id: int) -> Optional[FixedExpense]:
        ...

    def search(
        self,
        *,
        is_active: Optional[bool] = None,
        is_paid: Optional[bool] = None,
        category: Optional[str] = None,
        user_id: int,
    ) -> list[FixedExpense]:
        """Bills ordered by due day."""
        ...

    def create(self, expense: FixedExpense, *, user_id: int) -> FixedExpense:
        ...

    def update(self, expense: FixedExpense, *, user_id: int) -> FixedExpense:
        ...

    def delete(self, expense_id: int, *, user_id: int) -> None:
        ...

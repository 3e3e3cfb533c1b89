"""Possible expense repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.possible_expense import PossibleExpense


class PossibleExpenseRepository(Protocol):
    def get_by_id(self, plan_id: int, *, user_id: int) -> Optional[PossibleExpense]:
        ...

    def list_all(self, *, user_id: int, category: Optional[str] = None) -> list[PossibleExpense]:
        """Plans, newest first."""
        ...

    def create(self, plan: PossibleExpense, *, user_id: int) -> PossibleExpense:
        ...

    def update(self, plan: PossibleExpense, *, user_id: int) -> PossibleExpense:
        ...

    def delete(self, plan_id: int, *, user_id: int) -> None:
        ...

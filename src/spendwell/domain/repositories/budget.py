"""Budget repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.budget import Budget


class BudgetRepository(Protocol):
    """Repository for monthly category budgets."""

    def get_by_id(self, budget_id: int, *, user_id: int) -> Optional[Budget]:
        ...

    def find(self, *, category: str, month: str, user_id: int) -> Optional[Budget]:
        """Budget for the (category, month) pair, if any."""
        ...

    def list_all(self, *, user_id: int, month: Optional[str] = None) -> list[Budget]:
        ...

    def create(self, budget: Budget, *, user_id: int) -> Budget:
        ...

    def update(self, budget: Budget, *, user_id: int) -> Budget:
        ...

    def delete(self, budget_id: int, *, user_id: int) -> None:
        ...

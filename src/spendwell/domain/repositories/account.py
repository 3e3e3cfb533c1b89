"""Account repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.account import Account


class AccountRepository(Protocol):
    """Repository for managing account entities."""

    def get_by_id(self, account_id: int, *, user_id: int) -> Optional[Account]:
        """Retrieve an account owned by ``user_id``."""
        ...

    def get_unscoped(self, account_id: int) -> Optional[Account]:
        """Retrieve an account regardless of owner (used to tell 403 from 404)."""
        ...

    def list_all(self, *, user_id: int, is_active: Optional[bool] = None) -> list[Account]:
        """List accounts ordered by name."""
        ...

    def names_by_id(self, *, user_id: int) -> dict[int, str]:
        """Map account ids to display names."""
        ...

    def total_balance(self, *, user_id: int) -> float:
        """Sum of balances over active accounts."""
        ...

    def create(self, account: Account, *, user_id: int) -> Account:
        ...

    def update(self, account: Account, *, user_id: int) -> Account:
        ...

    def delete(self, account_id: int, *, user_id: int) -> None:
        ...

    def apply_delta(self, account_id: int, delta: float, *, user_id: int) -> Optional[float]:
        """Atomically add ``delta`` to the balance; ``None`` when the row is gone."""
        ...

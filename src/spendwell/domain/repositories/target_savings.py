"""Savings target repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.target_savings import TargetSavings


class TargetSavingsRepository(Protocol):
    """Repository for savings targets and their running amounts."""

    def get_by_id(self, target_id: int, *, user_id: int) -> Optional[TargetSavings]:
        ...

    def list_all(self, *, user_id: int, active_only: bool = False) -> list[TargetSavings]:
        """Targets, newest first."""
        ...

    def list_for_deduction(self, *, user_id: int) -> list[TargetSavings]:
        """Active targets by current amount desc, then newest first."""
        ...

    def committed_total(self, *, user_id: int) -> float:
        """Sum of ``target_amount`` over active targets."""
        ...

    def saved_total(self, *, user_id: int) -> float:
        """Sum of ``current_amount`` over active targets."""
        ...

    def deduct(self, target_id: int, amount: float, *, user_id: int) -> None:
        """Subtract ``amount`` from one target, flooring at zero."""
        ...

    def add_to_active(self, amount: float, *, user_id: int) -> int:
        """Add ``amount`` to every active target; returns the rows touched."""
        ...

    def create(self, target: TargetSavings, *, user_id: int) -> TargetSavings:
        ...

    def update(self, target: TargetSavings, *, user_id: int) -> TargetSavings:
        ...

    def delete(self, target_id: int, *, user_id: int) -> None:
        ...

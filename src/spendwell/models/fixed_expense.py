"""Recurring bill reminders."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class FixedExpense(SQLModel, table=True):
    """A bill due on the same day every month; tracking only, never posted."""

    __tablename__: ClassVar[str] = "fixed_expense"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=128)
    amount: float = Field(nullable=False)
    category: str = Field(default="", max_length=64)
    due_day: int = Field(nullable=False, ge=1, le=31)
    account_id: int = Field(nullable=False, index=True)
    is_paid: bool = Field(default=False, nullable=False)
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

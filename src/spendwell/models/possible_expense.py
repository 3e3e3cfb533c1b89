"""Planned expenses that may later be converted into real transactions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class PossibleExpense(SQLModel, table=True):
    __tablename__: ClassVar[str] = "possible_expense"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=128)
    expected_amount: float = Field(nullable=False)
    category: str = Field(default="", max_length=64)
    account_id: int = Field(nullable=False, index=True)
    notes: str = Field(default="", max_length=500)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

"""Borrow/lend records and their settlement linkage."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Borrowing(SQLModel, table=True):
    """Money borrowed from, or lent to, another person."""

    __tablename__: ClassVar[str] = "borrowing"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    person_name: str = Field(nullable=False, max_length=128, index=True)
    direction: str = Field(nullable=False, max_length=16)
    amount: float = Field(nullable=False)
    account_id: int = Field(nullable=False, index=True)
    account_name: str = Field(default="", max_length=128)
    description: str = Field(default="", max_length=255)
    transaction_date: date = Field(default_factory=date.today, nullable=False)
    due_date: Optional[date] = Field(default=None)
    is_paid: bool = Field(default=False, nullable=False)
    paid_date: Optional[datetime] = Field(default=None)
    repayment_transaction_id: Optional[int] = Field(default=None)
    is_active: bool = Field(default=True, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

"""SQLModel definition for ledger transactions."""

from __future__ import annotations

import datetime as dt
from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Transaction(SQLModel, table=True):
    """A dated income, expense or transfer posted against one account."""

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    # Plain column: accounts may be deleted while their history stays.
    account_id: int = Field(nullable=False, index=True)
    kind: str = Field(nullable=False, max_length=16, index=True)
    amount: float = Field(nullable=False, description="Always positive; kind gives the sign")
    description: str = Field(default="", max_length=255)
    category: str = Field(default="", max_length=64, index=True)
    date: dt.date = Field(nullable=False, index=True)
    time: Optional[str] = Field(default=None, max_length=16)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

"""Account model holding the running balance."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Account(SQLModel, table=True):
    """A money container (bank, cash, credit card, mobile wallet).

    ``balance`` is only ever written through :mod:`spendwell.services.balances`
    after creation and may go negative.
    """

    __tablename__: ClassVar[str] = "account"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=128)
    account_type: str = Field(default="bank", max_length=16)
    balance: float = Field(default=0.0, nullable=False)
    currency: str = Field(default="USD", max_length=3)
    is_active: bool = Field(default=True, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

"""Savings target model."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants import DEFAULT_TARGET_COLOR


class TargetSavings(SQLModel, table=True):
    """A savings goal whose ``current_amount`` is driven by posted expenses."""

    __tablename__: ClassVar[str] = "target_savings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    account_id: int = Field(nullable=False, index=True)
    title: str = Field(nullable=False, max_length=128)
    target_amount: float = Field(nullable=False)
    current_amount: float = Field(default=0.0, nullable=False)
    monthly_target: Optional[float] = Field(default=None)
    start_date: date = Field(default_factory=date.today, nullable=False)
    target_date: Optional[date] = Field(default=None)
    description: str = Field(default="", max_length=255)
    color: str = Field(default=DEFAULT_TARGET_COLOR, max_length=16)
    is_active: bool = Field(default=True, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def progress_percentage(self) -> float:
        if self.target_amount <= 0:
            return 0.0
        return round(min(self.current_amount / self.target_amount * 100, 100.0), 2)

    @property
    def remaining_amount(self) -> float:
        return round(max(self.target_amount - self.current_amount, 0.0), 2)

    @property
    def is_target_exceeded(self) -> bool:
        return self.current_amount > self.target_amount

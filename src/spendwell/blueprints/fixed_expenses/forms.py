"""Fixed expense payload validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ...forms import JSONForm


@dataclass(slots=True)
class FixedExpenseForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {
        "title": "title",
        "amount": "amount",
        "category": "category",
        "due_date": "due_day",
        "account_id": "account_id",
        "is_paid": "is_paid",
        "is_active": "is_active",
    }

    title: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    due_day: Optional[int] = None
    account_id: Optional[int] = None
    is_paid: Optional[bool] = None
    is_active: Optional[bool] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.title = self._text("title", max_length=128)
        self.amount = self._amount("amount")
        self.category = self._text("category", max_length=64)
        self.due_day = self._int("due_date", minimum=1, maximum=31)
        self.account_id = self._int("account_id", minimum=1)
        self.is_paid = self._bool("is_paid")
        self.is_active = self._bool("is_active")
        return not self.errors

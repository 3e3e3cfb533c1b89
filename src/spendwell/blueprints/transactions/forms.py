"""Transaction payload validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from ...constants import POSTABLE_KINDS
from ...forms import JSONForm


@dataclass(slots=True)
class TransactionForm(JSONForm):
    """Represents transaction input prior to validation."""

    FIELDS: ClassVar[dict[str, str]] = {
        "account_id": "account_id",
        "type": "kind",
        "amount": "amount",
        "description": "description",
        "category": "category",
        "date": "date",
        "time": "time",
    }

    account_id: Optional[int] = None
    kind: Optional[str] = None
    amount: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[date] = None
    time: Optional[str] = None

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()
        self.account_id = self._int("account_id", minimum=1)
        self.kind = self._choice("type", POSTABLE_KINDS)
        self.amount = self._amount("amount")
        self.description = self._text("description")
        self.category = self._text("category", max_length=64)
        self.date = self._date("date", required=True)
        self.time = self._text("time", required=False, max_length=16) or None
        return not self.errors

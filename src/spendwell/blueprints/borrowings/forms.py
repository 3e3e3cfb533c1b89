"""Borrowing payload validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from ...constants import BORROWING_DIRECTIONS
from ...forms import JSONForm


@dataclass(slots=True)
class BorrowingForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {
        "person_name": "person_name",
        "type": "direction",
        "amount": "amount",
        "account_id": "account_id",
        "description": "description",
        "transaction_date": "transaction_date",
        "due_date": "due_date",
    }

    person_name: Optional[str] = None
    direction: Optional[str] = None
    amount: Optional[float] = None
    account_id: Optional[int] = None
    description: str = ""
    transaction_date: Optional[date] = None
    due_date: Optional[date] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.person_name = self._text("person_name", max_length=128)
        self.direction = self._choice("type", BORROWING_DIRECTIONS)
        self.amount = self._amount("amount")
        self.description = self._text("description", required=False) or ""
        self.transaction_date = self._date("transaction_date")
        self.due_date = self._date("due_date")
        if self.partial:
            if "account_id" in self.raw_data:
                self._add_error("account_id", "The linked account cannot be changed.")
        else:
            self.account_id = self._int("account_id", minimum=1)
        return not self.errors


@dataclass(slots=True)
class PaidStatusForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {"is_paid": "is_paid"}

    is_paid: Optional[bool] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.is_paid = self._bool("is_paid", required=True)
        return not self.errors

"""Possible expense payload validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from ...forms import JSONForm


@dataclass(slots=True)
class PossibleExpenseForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {
        "title": "title",
        "expected_amount": "expected_amount",
        "category": "category",
        "account_id": "account_id",
        "notes": "notes",
    }

    title: Optional[str] = None
    expected_amount: Optional[float] = None
    category: Optional[str] = None
    account_id: Optional[int] = None
    notes: str = ""

    def validate(self) -> bool:
        self.errors.clear()
        self.title = self._text("title", max_length=128)
        self.expected_amount = self._amount("expected_amount")
        self.category = self._text("category", max_length=64)
        self.account_id = self._int("account_id", minimum=1)
        self.notes = self._text("notes", required=False, max_length=500) or ""
        return not self.errors


@dataclass(slots=True)
class ConversionForm(JSONForm):
    """Optional actual values used when a plan becomes a transaction."""

    FIELDS: ClassVar[dict[str, str]] = {
        "actual_amount": "amount",
        "description": "description",
        "date": "txn_date",
    }

    amount: Optional[float] = None
    description: Optional[str] = None
    txn_date: Optional[date] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.amount = self._amount("actual_amount", required=False)
        self.description = self._text("description", required=False) or None
        self.txn_date = self._date("date")
        return not self.errors

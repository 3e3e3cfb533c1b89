"""Savings target payload validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from ...constants import TRANSACTION_KINDS
from ...forms import JSONForm


@dataclass(slots=True)
class TargetSavingsForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {
        "account_id": "account_id",
        "title": "title",
        "target_amount": "target_amount",
        "monthly_target": "monthly_target",
        "start_date": "start_date",
        "target_date": "target_date",
        "description": "description",
        "color": "color",
        "is_active": "is_active",
    }

    account_id: Optional[int] = None
    title: Optional[str] = None
    target_amount: Optional[float] = None
    monthly_target: Optional[float] = None
    start_date: Optional[date] = None
    target_date: Optional[date] = None
    description: str = ""
    color: Optional[str] = None
    is_active: Optional[bool] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.account_id = self._int("account_id", minimum=1)
        self.title = self._text("title", max_length=128)
        self.target_amount = self._amount("target_amount")
        self.monthly_target = self._amount("monthly_target", required=False, minimum=0)
        self.start_date = self._date("start_date")
        self.target_date = self._date("target_date")
        self.description = self._text("description", required=False) or ""
        self.color = self._text("color", required=False, max_length=16) or None
        self.is_active = self._bool("is_active")
        if self.partial and "start_date" in self.raw_data:
            self._add_error("start_date", "Start date cannot be changed.")
        return not self.errors


@dataclass(slots=True)
class SpendingCheckForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {"amount": "amount", "type": "kind"}

    amount: Optional[float] = None
    kind: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.amount = self._amount("amount")
        self.kind = self._choice("type", TRANSACTION_KINDS)
        return not self.errors

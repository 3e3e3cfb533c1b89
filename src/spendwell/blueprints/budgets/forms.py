"""Budget payload validation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Optional

from ...forms import JSONForm

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass(slots=True)
class BudgetForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {"category": "category", "month": "month", "amount": "amount"}

    category: Optional[str] = None
    month: Optional[str] = None
    amount: Optional[float] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.category = self._text("category", max_length=64)
        self.month = self._text("month", max_length=7)
        if self.month and not _MONTH_RE.match(self.month):
            self._add_error("month", "Month must use the YYYY-MM format.")
        self.amount = self._amount("amount")
        return not self.errors

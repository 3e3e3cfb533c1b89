"""Account payload validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ...constants import ACCOUNT_TYPES, CURRENCIES
from ...forms import JSONForm


@dataclass(slots=True)
class AccountForm(JSONForm):
    """Create/update payload for an account. ``balance`` is only accepted on create."""

    FIELDS: ClassVar[dict[str, str]] = {
        "name": "name",
        "type": "account_type",
        "balance": "balance",
        "currency": "currency",
        "is_active": "is_active",
    }

    name: Optional[str] = None
    account_type: Optional[str] = "bank"
    balance: Optional[float] = 0.0
    currency: Optional[str] = "USD"
    is_active: Optional[bool] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", max_length=128)
        self.account_type = self._choice("type", ACCOUNT_TYPES, required=False) or "bank"
        self.currency = self._choice("currency", CURRENCIES, required=False) or "USD"
        self.is_active = self._bool("is_active")
        if self.partial:
            if "balance" in self.raw_data:
                self._add_error("balance", "Balance changes only through transactions.")
        else:
            balance = self._amount("balance", required=False, minimum=float("-inf"))
            self.balance = balance if balance is not None else 0.0
        return not self.errors


@dataclass(slots=True)
class TransferForm(JSONForm):
    FIELDS: ClassVar[dict[str, str]] = {
        "from_account_id": "from_account_id",
        "to_account_id": "to_account_id",
        "amount": "amount",
        "description": "description",
    }

    from_account_id: Optional[int] = None
    to_account_id: Optional[int] = None
    amount: Optional[float] = None
    description: str = ""

    def validate(self) -> bool:
        self.errors.clear()
        self.from_account_id = self._int("from_account_id", minimum=1)
        self.to_account_id = self._int("to_account_id", minimum=1)
        self.amount = self._amount("amount")
        self.description = self._text("description", required=False) or ""
        return not self.errors

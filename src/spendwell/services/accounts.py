"""Account management and fund transfers."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..constants import ACCOUNT_TYPES, CATEGORY_TRANSFER, CURRENCIES, TRANSFER
from ..context import LedgerContext
from ..errors import ValidationError, account_not_found, operation
from ..logging_config import get_logger
from ..models.account import Account
from ..models.transaction import Transaction
from .balances import apply_delta, positive_amount, round_money
from .periods import current_time_label

logger = get_logger("services.accounts")

# Balance is deliberately absent: only the balance helpers move it.
_UPDATABLE_FIELDS = ("name", "account_type", "currency", "is_active")


def _check_choices(*, account_type: Optional[str] = None, currency: Optional[str] = None) -> None:
    errors: dict[str, list[str]] = {}
    if account_type is not None and account_type not in ACCOUNT_TYPES:
        errors["type"] = [f"Type must be one of: {', '.join(ACCOUNT_TYPES)}."]
    if currency is not None and currency not in CURRENCIES:
        errors["currency"] = [f"Currency must be one of: {', '.join(CURRENCIES)}."]
    if errors:
        raise ValidationError("Validation failed", errors)


@operation("create account")
def create_account(
    ctx: LedgerContext,
    *,
    user_id: int,
    name: str,
    account_type: str = "bank",
    balance: float = 0.0,
    currency: str = "USD",
) -> Account:
    _check_choices(account_type=account_type, currency=currency)
    account = ctx.account_repo.create(
        Account(
            user_id=user_id,
            name=name,
            account_type=account_type,
            balance=round_money(balance),
            currency=currency,
        ),
        user_id=user_id,
    )
    logger.info("Account created", extra={"user_id": user_id, "account_id": account.id})
    return account


@operation("fetch accounts")
def list_accounts(
    ctx: LedgerContext, *, user_id: int, is_active: Optional[bool] = None
) -> list[Account]:
    return ctx.account_repo.list_all(user_id=user_id, is_active=is_active)


@operation("fetch account")
def get_account(ctx: LedgerContext, account_id: int, *, user_id: int) -> Account:
    account = ctx.account_repo.get_by_id(account_id, user_id=user_id)
    if account is None:
        raise account_not_found()
    return account


@operation("update account")
def update_account(ctx: LedgerContext, account_id: int, *, user_id: int, **changes: Any) -> Account:
    account = ctx.account_repo.get_by_id(account_id, user_id=user_id)
    if account is None:
        raise account_not_found()
    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Validation failed", {name: ["Field cannot be updated."] for name in unknown}
        )
    _check_choices(account_type=changes.get("account_type"), currency=changes.get("currency"))
    for name, value in changes.items():
        setattr(account, name, value)
    return ctx.account_repo.update(account, user_id=user_id)


@operation("delete account")
def delete_account(ctx: LedgerContext, account_id: int, *, user_id: int) -> None:
    """Hard-delete an account. Its transactions and records stay behind."""

    if ctx.account_repo.get_by_id(account_id, user_id=user_id) is None:
        raise account_not_found()
    ctx.account_repo.delete(account_id, user_id=user_id)
    logger.info("Account deleted", extra={"user_id": user_id, "account_id": account_id})


@operation("transfer funds")
def transfer_funds(
    ctx: LedgerContext,
    *,
    user_id: int,
    from_account_id: int,
    to_account_id: int,
    amount: float,
    description: str = "",
) -> Transaction:
    """Move money between two of the user's accounts.

    A single ``transfer`` transaction is recorded on the source account; it
    has no balance effect of its own since both legs are applied here.
    """

    source = ctx.account_repo.get_by_id(from_account_id, user_id=user_id)
    target = ctx.account_repo.get_by_id(to_account_id, user_id=user_id)
    if source is None or target is None:
        raise account_not_found()
    if from_account_id == to_account_id:
        raise ValidationError("Cannot transfer to the same account")
    amount = positive_amount(amount)
    if source.balance < amount:
        raise ValidationError("Insufficient funds in source account")

    apply_delta(ctx, from_account_id, -amount, user_id=user_id)
    apply_delta(ctx, to_account_id, amount, user_id=user_id)

    txn = ctx.transaction_repo.create(
        Transaction(
            user_id=user_id,
            account_id=from_account_id,
            kind=TRANSFER,
            amount=amount,
            description=(
                f"Transfer from {source.name} to {target.name}: "
                f"{description or 'Fund transfer'}"
            ),
            category=CATEGORY_TRANSFER,
            date=date.today(),
            time=current_time_label(),
        ),
        user_id=user_id,
    )
    logger.info(
        "Funds transferred",
        extra={
            "user_id": user_id,
            "from_account_id": from_account_id,
            "to_account_id": to_account_id,
            "amount": amount,
        },
    )
    return txn

"""Balance mutation and the signed-effect rules shared by every writer.

``apply_delta`` is the only code path that changes ``Account.balance`` after
an account is created. Callers describe *what* happened (an income, a lent
sum, a reversal) through the effect helpers and hand the resulting delta
here.
"""

from __future__ import annotations

from typing import Optional

from ..constants import BORROWED, EXPENSE, INCOME, LENT, TRANSFER
from ..context import LedgerContext
from ..errors import NotFoundError, ValidationError
from ..logging_config import get_logger

logger = get_logger("services.balances")


def round_money(amount: float) -> float:
    """Round to cents."""

    return round(float(amount), 2)


def positive_amount(amount: Optional[float]) -> float:
    """Round to cents; the rounded amount must stay above zero."""

    rounded = round_money(amount) if amount is not None else 0.0
    if rounded <= 0:
        raise ValidationError("Validation failed", {"amount": ["Amount must be positive."]})
    return rounded


def signed_effect(kind: str, amount: float) -> float:
    """Balance effect of a transaction of ``kind``."""

    if kind == INCOME:
        return round_money(amount)
    if kind == EXPENSE:
        return round_money(-amount)
    if kind == TRANSFER:
        return 0.0
    raise ValueError(f"Unknown transaction kind: {kind!r}")


def borrowing_effect(direction: str, amount: float) -> float:
    """Balance effect of borrowing (money in) or lending (money out)."""

    if direction == BORROWED:
        return round_money(amount)
    if direction == LENT:
        return round_money(-amount)
    raise ValueError(f"Unknown borrowing direction: {direction!r}")


def net_delta(old_effect: float, new_effect: float) -> float:
    """Delta that turns an applied ``old_effect`` into ``new_effect``."""

    return round_money(new_effect - old_effect)


def apply_delta(ctx: LedgerContext, account_id: int, delta: float, *, user_id: int) -> float:
    """Add ``delta`` to an account balance and return the new balance.

    Raises:
        NotFoundError: the account no longer exists (or is not the caller's).
    """

    delta = round_money(delta)
    new_balance = ctx.account_repo.apply_delta(account_id, delta, user_id=user_id)
    if new_balance is None:
        raise NotFoundError("Account not found")
    logger.info(
        "Balance adjusted",
        extra={"account_id": account_id, "delta": delta, "balance": new_balance},
    )
    return new_balance


def apply_delta_lenient(
    ctx: LedgerContext, account_id: int, delta: float, *, user_id: int, reason: str
) -> Optional[float]:
    """Apply a delta on update/delete paths where the account may have vanished.

    A missing account is logged and skipped; the caller carries on.
    """

    if not delta:
        return None
    try:
        return apply_delta(ctx, account_id, delta, user_id=user_id)
    except NotFoundError:
        logger.warning(
            "Account missing while adjusting balance; skipped",
            extra={"account_id": account_id, "delta": delta, "reason": reason},
        )
        return None

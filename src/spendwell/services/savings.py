"""Savings targets: overspend deduction, progress tracking and reporting.

Savings targets are reservations against the user's total balance. Posting an
expense runs two steps, in order:

1. :func:`evaluate_overspend` compares the total balance of active accounts
   with the sum of active ``target_amount`` values and, when the balance fell
   short, pulls the shortfall out of saved amounts (largest first).
2. :func:`apply_expense_progress` adds the expense amount to *every* active
   target's ``current_amount``.

Both steps run as best-effort side effects of transaction creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..constants import DEFAULT_TARGET_COLOR, EXPENSE
from ..context import LedgerContext
from ..errors import ValidationError, account_not_found, not_found, operation
from ..logging_config import get_logger
from ..models.target_savings import TargetSavings
from .balances import round_money
from .periods import month_bounds

logger = get_logger("services.savings")

_UPDATABLE_FIELDS = (
    "title",
    "target_amount",
    "monthly_target",
    "target_date",
    "description",
    "color",
    "is_active",
    "account_id",
)


@dataclass(slots=True)
class TargetAnalysis:
    """A target with its current-month spending context."""

    target: TargetSavings
    current_month_spending: float
    is_over_monthly_target: bool
    monthly_remaining: Optional[float]
    total_balance: float
    available_for_spending: float


@dataclass(slots=True)
class SavingsOverview:
    total_target_amount: float
    total_current_savings: float
    total_balance: float
    available_for_spending: float
    savings_progress: float
    targets: list[TargetSavings] = field(default_factory=list)


@dataclass(slots=True)
class SpendingWarning:
    has_warning: bool
    warnings: list[dict[str, Any]] = field(default_factory=list)


def _available_for_spending(ctx: LedgerContext, *, user_id: int) -> tuple[float, float, float]:
    """Return (total balance, total saved, spendable) for the user."""

    total_balance = ctx.account_repo.total_balance(user_id=user_id)
    saved = ctx.target_repo.saved_total(user_id=user_id)
    return total_balance, saved, round_money(max(total_balance - saved, 0.0))


@operation("evaluate overspend")
def evaluate_overspend(ctx: LedgerContext, *, user_id: int) -> float:
    """Deduct from savings when balances no longer cover committed targets.

    Returns the deficit handed to :func:`deduct_from_savings` (0 when none).
    """

    total_balance = ctx.account_repo.total_balance(user_id=user_id)
    committed = ctx.target_repo.committed_total(user_id=user_id)
    deficit = round_money(committed - total_balance)
    if deficit <= 0:
        return 0.0

    logger.info(
        "Overspend detected",
        extra={"user_id": user_id, "deficit": deficit, "total_balance": total_balance},
    )
    deduct_from_savings(ctx, deficit, user_id=user_id)
    return deficit


@operation("deduct from savings")
def deduct_from_savings(ctx: LedgerContext, deficit: float, *, user_id: int) -> float:
    """Take ``deficit`` out of active targets, largest saved amount first.

    Each target gives up at most what it holds, so no target drops below zero.
    Whatever cannot be covered is dropped. Returns the total deducted.
    """

    remaining = round_money(deficit)
    deducted = 0.0
    for target in ctx.target_repo.list_for_deduction(user_id=user_id):
        if remaining <= 0:
            break
        take = round_money(min(target.current_amount, remaining))
        if take <= 0:
            # Ordered by current amount, so every later target is empty too.
            break
        ctx.target_repo.deduct(target.id, take, user_id=user_id)
        remaining = round_money(remaining - take)
        deducted = round_money(deducted + take)

    if remaining > 0:
        logger.info(
            "Savings exhausted before deficit was covered",
            extra={"user_id": user_id, "uncovered": remaining},
        )
    return deducted


@operation("update savings progress")
def apply_expense_progress(ctx: LedgerContext, amount: float, *, user_id: int) -> int:
    """Add an expense amount to every active target; returns targets touched."""

    touched = ctx.target_repo.add_to_active(round_money(amount), user_id=user_id)
    logger.info(
        "Savings progress updated",
        extra={"user_id": user_id, "amount": amount, "targets": touched},
    )
    return touched


@operation("create target savings")
def create_target(
    ctx: LedgerContext,
    *,
    user_id: int,
    account_id: int,
    title: str,
    target_amount: float,
    monthly_target: Optional[float] = None,
    start_date: Optional[date] = None,
    target_date: Optional[date] = None,
    description: str = "",
    color: Optional[str] = None,
) -> TargetSavings:
    if ctx.account_repo.get_by_id(account_id, user_id=user_id) is None:
        raise account_not_found()

    target = TargetSavings(
        user_id=user_id,
        account_id=account_id,
        title=title,
        target_amount=round_money(target_amount),
        current_amount=0.0,
        monthly_target=round_money(monthly_target) if monthly_target is not None else None,
        start_date=start_date or date.today(),
        target_date=target_date,
        description=description,
        color=color or DEFAULT_TARGET_COLOR,
    )
    created = ctx.target_repo.create(target, user_id=user_id)
    logger.info("Target savings created", extra={"user_id": user_id, "target_id": created.id})
    return created


@operation("list target savings")
def list_targets(
    ctx: LedgerContext, *, user_id: int, active_only: bool = False
) -> list[TargetSavings]:
    return ctx.target_repo.list_all(user_id=user_id, active_only=active_only)


@operation("get target savings")
def get_target_analysis(
    ctx: LedgerContext, target_id: int, *, user_id: int, today: Optional[date] = None
) -> TargetAnalysis:
    """Return a target plus this month's spending measured against it."""

    target = ctx.target_repo.get_by_id(target_id, user_id=user_id)
    if target is None:
        raise not_found("Target savings")

    today = today or date.today()
    start, end = month_bounds(today.year, today.month)
    spending = ctx.transaction_repo.sum_amount(
        kind=EXPENSE, start_date=start, end_date=end, user_id=user_id
    )
    total_balance = ctx.account_repo.total_balance(user_id=user_id)

    monthly_remaining: Optional[float] = None
    over_monthly = False
    if target.monthly_target:
        over_monthly = spending > target.monthly_target
        monthly_remaining = round_money(max(target.monthly_target - spending, 0.0))

    return TargetAnalysis(
        target=target,
        current_month_spending=spending,
        is_over_monthly_target=over_monthly,
        monthly_remaining=monthly_remaining,
        total_balance=total_balance,
        available_for_spending=round_money(total_balance - target.target_amount),
    )


@operation("update target savings")
def update_target(
    ctx: LedgerContext, target_id: int, *, user_id: int, **changes: Any
) -> TargetSavings:
    """Update target configuration. ``current_amount`` is not editable here."""

    target = ctx.target_repo.get_by_id(target_id, user_id=user_id)
    if target is None:
        raise not_found("Target savings")

    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Validation failed",
            {name: ["Field cannot be updated."] for name in unknown},
        )
    if "account_id" in changes and changes["account_id"] != target.account_id:
        if ctx.account_repo.get_by_id(changes["account_id"], user_id=user_id) is None:
            raise account_not_found()

    for name, value in changes.items():
        if name in ("target_amount", "monthly_target") and value is not None:
            value = round_money(value)
        setattr(target, name, value)
    return ctx.target_repo.update(target, user_id=user_id)


@operation("delete target savings")
def delete_target(ctx: LedgerContext, target_id: int, *, user_id: int) -> None:
    if ctx.target_repo.get_by_id(target_id, user_id=user_id) is None:
        raise not_found("Target savings")
    ctx.target_repo.delete(target_id, user_id=user_id)
    logger.info("Target savings deleted", extra={"user_id": user_id, "target_id": target_id})


@operation("get savings overview")
def savings_overview(ctx: LedgerContext, *, user_id: int) -> SavingsOverview:
    targets = ctx.target_repo.list_all(user_id=user_id, active_only=True)
    total_target = round_money(sum(t.target_amount for t in targets))
    total_balance, saved, available = _available_for_spending(ctx, user_id=user_id)
    progress = round_money(saved / total_target * 100) if total_target > 0 else 0.0
    return SavingsOverview(
        total_target_amount=total_target,
        total_current_savings=saved,
        total_balance=total_balance,
        available_for_spending=available,
        savings_progress=progress,
        targets=targets,
    )


@operation("check target savings warning")
def check_spending_warning(
    ctx: LedgerContext, *, user_id: int, amount: float, kind: str
) -> SpendingWarning:
    """Warn when a prospective expense would eat into saved money."""

    if kind != EXPENSE:
        return SpendingWarning(has_warning=False)

    total_balance, _, available = _available_for_spending(ctx, user_id=user_id)
    amount = round_money(amount)
    if amount <= available:
        return SpendingWarning(has_warning=False)

    return SpendingWarning(
        has_warning=True,
        warnings=[
            {
                "type": "overall",
                "total_balance": total_balance,
                "available_for_spending": available,
                "spending_amount": amount,
                "excess": round_money(amount - available),
            }
        ],
    )

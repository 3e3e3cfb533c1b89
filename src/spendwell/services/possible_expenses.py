"""Planned expenses and their conversion into posted transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..constants import EXPENSE, UNKNOWN_ACCOUNT
from ..context import LedgerContext
from ..errors import ValidationError, account_not_found, not_found, operation
from ..logging_config import get_logger
from ..models.account import Account
from ..models.possible_expense import PossibleExpense
from ..models.transaction import Transaction
from .balances import apply_delta_lenient, positive_amount, round_money, signed_effect
from .periods import current_time_label

logger = get_logger("services.possible_expenses")

_UPDATABLE_FIELDS = ("title", "expected_amount", "category", "account_id", "notes")


@dataclass(slots=True)
class ConversionResult:
    transaction: Transaction
    account_name: str
    account: Optional[Account]


@operation("create possible expense")
def create_plan(
    ctx: LedgerContext,
    *,
    user_id: int,
    title: str,
    expected_amount: float,
    category: str,
    account_id: int,
    notes: str = "",
) -> PossibleExpense:
    if ctx.account_repo.get_by_id(account_id, user_id=user_id) is None:
        raise account_not_found()
    plan = ctx.possible_expense_repo.create(
        PossibleExpense(
            user_id=user_id,
            title=title,
            expected_amount=round_money(expected_amount),
            category=category,
            account_id=account_id,
            notes=notes,
        ),
        user_id=user_id,
    )
    logger.info("Possible expense created", extra={"user_id": user_id, "plan_id": plan.id})
    return plan


@operation("fetch possible expenses")
def list_plans(
    ctx: LedgerContext, *, user_id: int, category: Optional[str] = None
) -> list[PossibleExpense]:
    return ctx.possible_expense_repo.list_all(user_id=user_id, category=category)


@operation("fetch possible expenses by category")
def plans_by_category(ctx: LedgerContext, category: str, *, user_id: int) -> dict[str, Any]:
    """Plans in one category, largest expected amount first, with their total."""

    plans = ctx.possible_expense_repo.list_all(user_id=user_id, category=category)
    plans.sort(key=lambda plan: plan.expected_amount, reverse=True)
    return {
        "category": category,
        "expenses": plans,
        "total": round_money(sum(plan.expected_amount for plan in plans)),
        "count": len(plans),
    }


@operation("update possible expense")
def update_plan(
    ctx: LedgerContext, plan_id: int, *, user_id: int, **changes: Any
) -> PossibleExpense:
    plan = ctx.possible_expense_repo.get_by_id(plan_id, user_id=user_id)
    if plan is None:
        raise not_found("Possible expense")
    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Validation failed", {name: ["Field cannot be updated."] for name in unknown}
        )
    if "account_id" in changes and changes["account_id"] != plan.account_id:
        if ctx.account_repo.get_by_id(changes["account_id"], user_id=user_id) is None:
            raise account_not_found()
    if "expected_amount" in changes:
        changes["expected_amount"] = round_money(changes["expected_amount"])
    for name, value in changes.items():
        setattr(plan, name, value)
    return ctx.possible_expense_repo.update(plan, user_id=user_id)


@operation("delete possible expense")
def delete_plan(ctx: LedgerContext, plan_id: int, *, user_id: int) -> None:
    if ctx.possible_expense_repo.get_by_id(plan_id, user_id=user_id) is None:
        raise not_found("Possible expense")
    ctx.possible_expense_repo.delete(plan_id, user_id=user_id)


@operation("convert possible expense")
def convert_plan(
    ctx: LedgerContext,
    plan_id: int,
    *,
    user_id: int,
    amount: Optional[float] = None,
    description: Optional[str] = None,
    txn_date: Optional[date] = None,
) -> ConversionResult:
    """Post a plan as a real expense and consume the plan.

    Actual amount, description and date fall back to the plan's expected
    amount, its title and today. Savings targets are not touched.
    """

    plan = ctx.possible_expense_repo.get_by_id(plan_id, user_id=user_id)
    if plan is None:
        raise not_found("Possible expense")
    final_amount = positive_amount(amount if amount is not None else plan.expected_amount)

    txn = ctx.transaction_repo.create(
        Transaction(
            user_id=user_id,
            account_id=plan.account_id,
            kind=EXPENSE,
            amount=final_amount,
            description=description or plan.title,
            category=plan.category,
            date=txn_date or date.today(),
            time=current_time_label(),
        ),
        user_id=user_id,
    )
    apply_delta_lenient(
        ctx,
        plan.account_id,
        signed_effect(EXPENSE, final_amount),
        user_id=user_id,
        reason="possible expense conversion",
    )
    ctx.possible_expense_repo.delete(plan_id, user_id=user_id)

    account = ctx.account_repo.get_by_id(plan.account_id, user_id=user_id)
    logger.info(
        "Possible expense converted",
        extra={
            "user_id": user_id,
            "plan_id": plan_id,
            "transaction_id": txn.id,
            "amount": final_amount,
        },
    )
    return ConversionResult(
        transaction=txn,
        account_name=account.name if account else UNKNOWN_ACCOUNT,
        account=account,
    )

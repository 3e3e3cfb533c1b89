"""Recurring bills: reminders only, they never move balances."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..context import LedgerContext
from ..errors import ValidationError, account_not_found, not_found, operation
from ..logging_config import get_logger
from ..models.fixed_expense import FixedExpense
from .balances import round_money

logger = get_logger("services.fixed_expenses")

_UPDATABLE_FIELDS = ("title", "amount", "category", "due_day", "account_id", "is_paid", "is_active")


@dataclass(slots=True)
class UpcomingExpense:
    expense: FixedExpense
    due_date: date
    days_until_due: int


def _check_due_day(due_day: int) -> None:
    if not 1 <= due_day <= 31:
        raise ValidationError(
            "Validation failed", {"due_date": ["Due day must be between 1 and 31."]}
        )


def next_due_date(due_day: int, *, today: date) -> date:
    """The next date on or after ``today`` falling on ``due_day``.

    Short months clamp to their last day, so a bill due on the 31st falls on
    the 30th in April.
    """

    year, month = today.year, today.month
    for _ in range(2):
        last_day = calendar.monthrange(year, month)[1]
        candidate = date(year, month, min(due_day, last_day))
        if candidate >= today:
            return candidate
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return candidate


@operation("create fixed expense")
def create_fixed_expense(
    ctx: LedgerContext,
    *,
    user_id: int,
    title: str,
    amount: float,
    category: str,
    due_day: int,
    account_id: int,
) -> FixedExpense:
    _check_due_day(due_day)
    if ctx.account_repo.get_by_id(account_id, user_id=user_id) is None:
        raise account_not_found()
    expense = ctx.fixed_expense_repo.create(
        FixedExpense(
            user_id=user_id,
            title=title,
            amount=round_money(amount),
            category=category,
            due_day=due_day,
            account_id=account_id,
        ),
        user_id=user_id,
    )
    logger.info("Fixed expense created", extra={"user_id": user_id, "expense_id": expense.id})
    return expense


@operation("fetch fixed expenses")
def list_fixed_expenses(
    ctx: LedgerContext,
    *,
    user_id: int,
    is_active: Optional[bool] = None,
    is_paid: Optional[bool] = None,
    category: Optional[str] = None,
) -> list[FixedExpense]:
    return ctx.fixed_expense_repo.search(
        is_active=is_active, is_paid=is_paid, category=category, user_id=user_id
    )


@operation("update fixed expense")
def update_fixed_expense(
    ctx: LedgerContext, expense_id: int, *, user_id: int, **changes: Any
) -> FixedExpense:
    expense = ctx.fixed_expense_repo.get_by_id(expense_id, user_id=user_id)
    if expense is None:
        raise not_found("Fixed expense")
    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Validation failed", {name: ["Field cannot be updated."] for name in unknown}
        )
    if "due_day" in changes:
        _check_due_day(changes["due_day"])
    if "account_id" in changes and changes["account_id"] != expense.account_id:
        if ctx.account_repo.get_by_id(changes["account_id"], user_id=user_id) is None:
            raise account_not_found()
    if "amount" in changes:
        changes["amount"] = round_money(changes["amount"])
    for name, value in changes.items():
        setattr(expense, name, value)
    return ctx.fixed_expense_repo.update(expense, user_id=user_id)


@operation("delete fixed expense")
def delete_fixed_expense(ctx: LedgerContext, expense_id: int, *, user_id: int) -> None:
    if ctx.fixed_expense_repo.get_by_id(expense_id, user_id=user_id) is None:
        raise not_found("Fixed expense")
    ctx.fixed_expense_repo.delete(expense_id, user_id=user_id)


@operation("mark fixed expense as paid")
def mark_paid(ctx: LedgerContext, expense_id: int, *, user_id: int) -> FixedExpense:
    expense = ctx.fixed_expense_repo.get_by_id(expense_id, user_id=user_id)
    if expense is None:
        raise not_found("Fixed expense")
    expense.is_paid = True
    return ctx.fixed_expense_repo.update(expense, user_id=user_id)


@operation("fetch upcoming expenses")
def upcoming_expenses(
    ctx: LedgerContext, *, user_id: int, days: int = 30, today: Optional[date] = None
) -> list[UpcomingExpense]:
    """Active unpaid bills whose next due date falls within ``days``."""

    today = today or date.today()
    upcoming = []
    for expense in ctx.fixed_expense_repo.search(is_active=True, is_paid=False, user_id=user_id):
        due = next_due_date(expense.due_day, today=today)
        remaining = (due - today).days
        if remaining <= days:
            upcoming.append(UpcomingExpense(expense=expense, due_date=due, days_until_due=remaining))
    upcoming.sort(key=lambda item: item.due_date)
    return upcoming

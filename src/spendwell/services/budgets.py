"""Monthly category budgets measured against posted expenses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..constants import EXPENSE
from ..context import LedgerContext
from ..errors import ValidationError, not_found, operation
from ..logging_config import get_logger
from ..models.budget import Budget
from .balances import round_money
from .periods import month_bounds, parse_month_key

logger = get_logger("services.budgets")

WARNING_THRESHOLD = 80.0

_UPDATABLE_FIELDS = ("category", "month", "amount")


@dataclass(slots=True)
class BudgetUsage:
    """A budget with its spending for the budget month."""

    budget: Budget
    total_spent: float
    transaction_count: int = 0

    @property
    def remaining(self) -> float:
        return round_money(self.budget.amount - self.total_spent)

    @property
    def percentage_used(self) -> float:
        if self.budget.amount <= 0:
            return 0.0
        return round_money(self.total_spent / self.budget.amount * 100)

    @property
    def status(self) -> str:
        if self.percentage_used > 100:
            return "exceeded"
        if self.percentage_used > WARNING_THRESHOLD:
            return "warning"
        return "good"


def _duplicate_error(category: str, month: str) -> ValidationError:
    return ValidationError(f"Budget already exists for {category} in {month}")


@operation("create budget")
def create_budget(
    ctx: LedgerContext, *, user_id: int, category: str, month: str, amount: float
) -> Budget:
    parse_month_key(month)
    if ctx.budget_repo.find(category=category, month=month, user_id=user_id) is not None:
        raise _duplicate_error(category, month)
    budget = ctx.budget_repo.create(
        Budget(user_id=user_id, category=category, month=month, amount=round_money(amount)),
        user_id=user_id,
    )
    logger.info(
        "Budget created",
        extra={"user_id": user_id, "budget_id": budget.id, "category": category, "month": month},
    )
    return budget


def _spending_for_month(ctx: LedgerContext, month: str, *, user_id: int) -> dict[str, list[float]]:
    start, end = month_bounds(*parse_month_key(month))
    spent: dict[str, list[float]] = {}
    for txn in ctx.transaction_repo.search(
        start_date=start, end_date=end, kind=EXPENSE, user_id=user_id
    ):
        spent.setdefault(txn.category, []).append(txn.amount)
    return spent


@operation("fetch budgets")
def list_budgets(
    ctx: LedgerContext, *, user_id: int, month: Optional[str] = None
) -> list[Budget] | list[BudgetUsage]:
    """All budgets, or the month's budgets with their spending when ``month`` is given."""

    budgets = ctx.budget_repo.list_all(user_id=user_id, month=month)
    if not month:
        return budgets
    return budgets_with_spending(ctx, month, user_id=user_id, budgets=budgets)


def budgets_with_spending(
    ctx: LedgerContext,
    month: str,
    *,
    user_id: int,
    budgets: Optional[list[Budget]] = None,
) -> list[BudgetUsage]:
    if budgets is None:
        budgets = ctx.budget_repo.list_all(user_id=user_id, month=month)
    spent = _spending_for_month(ctx, month, user_id=user_id)
    return [
        BudgetUsage(
            budget=budget,
            total_spent=round_money(sum(spent.get(budget.category, []))),
            transaction_count=len(spent.get(budget.category, [])),
        )
        for budget in budgets
    ]


@operation("update budget")
def update_budget(ctx: LedgerContext, budget_id: int, *, user_id: int, **changes: Any) -> Budget:
    budget = ctx.budget_repo.get_by_id(budget_id, user_id=user_id)
    if budget is None:
        raise not_found("Budget")
    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Validation failed", {name: ["Field cannot be updated."] for name in unknown}
        )
    if "month" in changes:
        parse_month_key(changes["month"])

    category = changes.get("category", budget.category)
    month = changes.get("month", budget.month)
    if (category, month) != (budget.category, budget.month):
        clash = ctx.budget_repo.find(category=category, month=month, user_id=user_id)
        if clash is not None and clash.id != budget.id:
            raise _duplicate_error(category, month)
    if "amount" in changes:
        changes["amount"] = round_money(changes["amount"])

    for name, value in changes.items():
        setattr(budget, name, value)
    return ctx.budget_repo.update(budget, user_id=user_id)


@operation("delete budget")
def delete_budget(ctx: LedgerContext, budget_id: int, *, user_id: int) -> None:
    if ctx.budget_repo.get_by_id(budget_id, user_id=user_id) is None:
        raise not_found("Budget")
    ctx.budget_repo.delete(budget_id, user_id=user_id)


@operation("fetch budget analytics")
def budget_analytics(ctx: LedgerContext, *, user_id: int, month: Optional[str]) -> dict[str, Any]:
    """Per-budget usage with an exceeded/warning/good status and month totals."""

    if not month:
        raise ValidationError("Month parameter is required", {"month": ["This field is required."]})

    usages = budgets_with_spending(ctx, month, user_id=user_id)
    total_budget = round_money(sum(u.budget.amount for u in usages))
    total_spent = round_money(sum(u.total_spent for u in usages))
    return {
        "month": month,
        "total_budget": total_budget,
        "total_spent": total_spent,
        "total_remaining": round_money(total_budget - total_spent),
        "overall_percentage_used": (
            round_money(total_spent / total_budget * 100) if total_budget > 0 else 0.0
        ),
        "budgets": usages,
    }

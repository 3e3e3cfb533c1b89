"""Month dashboard: one read-only snapshot assembled from concurrent loaders."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..constants import DEFAULT_TRANSACTION_LIMIT, EXPENSE, INCOME
from ..context import LedgerContext
from ..errors import operation
from ..logging_config import get_logger
from ..models.account import Account
from ..models.fixed_expense import FixedExpense
from ..models.possible_expense import PossibleExpense
from .balances import round_money
from .budgets import BudgetUsage, budgets_with_spending
from .periods import month_bounds, month_key
from .transactions import TransactionRow, list_transactions

logger = get_logger("services.dashboard")

TOP_CATEGORY_COUNT = 5


@dataclass(slots=True)
class DashboardData:
    month: str
    accounts: list[Account]
    transactions: list[dict[str, Any]]
    fixed_expenses: list[FixedExpense]
    possible_expenses: list[PossibleExpense]
    budgets: list[BudgetUsage]
    analytics: dict[str, Any] = field(default_factory=dict)


def resolve_month(
    month: Optional[int] = None, year: Optional[int] = None, *, today: Optional[date] = None
) -> tuple[int, int]:
    """Fill a missing month or year from today's date."""

    today = today or date.today()
    return (year or today.year), (month or today.month)


def _empty_analytics() -> dict[str, Any]:
    return {"category_breakdown": {}, "top_categories": [], "monthly_trend": []}


def month_analytics(
    ctx: LedgerContext, *, user_id: int, start: date, end: date
) -> dict[str, Any]:
    """Expense breakdown by category plus the per-day income/expense trend."""

    rows = ctx.transaction_repo.search(start_date=start, end_date=end, user_id=user_id)

    breakdown: dict[str, float] = {}
    trend: dict[date, dict[str, float]] = {}
    for txn in rows:
        day = trend.setdefault(txn.date, {"income": 0.0, "expenses": 0.0})
        if txn.kind == EXPENSE:
            breakdown[txn.category] = round_money(breakdown.get(txn.category, 0.0) + txn.amount)
            day["expenses"] = round_money(day["expenses"] + txn.amount)
        elif txn.kind == INCOME:
            day["income"] = round_money(day["income"] + txn.amount)

    ranked = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)
    total_expenses = sum(breakdown.values())
    return {
        "category_breakdown": dict(ranked),
        "top_categories": [
            {
                "category": category,
                "amount": amount,
                "percentage": round_money(amount / total_expenses * 100) if total_expenses else 0.0,
            }
            for category, amount in ranked[:TOP_CATEGORY_COUNT]
        ],
        "monthly_trend": [
            {
                "date": day.isoformat(),
                "income": totals["income"],
                "expenses": totals["expenses"],
                "savings": round_money(totals["income"] - totals["expenses"]),
            }
            for day, totals in sorted(trend.items())
        ],
    }


def _time_sort_key(label: Optional[str]) -> str:
    if not label:
        return ""
    try:
        return datetime.strptime(label.strip(), "%I:%M %p").strftime("%H:%M")
    except ValueError:
        return label


def group_by_date(rows: list[TransactionRow]) -> list[dict[str, Any]]:
    """Bucket transactions per day; newest day first, latest time first within a day."""

    groups: dict[date, list[TransactionRow]] = {}
    for row in rows:
        groups.setdefault(row.transaction.date, []).append(row)
    return [
        {
            "date": day.isoformat(),
            "transactions": sorted(
                groups[day],
                key=lambda row: _time_sort_key(row.transaction.time),
                reverse=True,
            ),
        }
        for day in sorted(groups, reverse=True)
    ]


@operation("load dashboard")
def build_dashboard(
    ctx: LedgerContext,
    *,
    user_id: int,
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> DashboardData:
    """Load every dashboard section concurrently and combine the results.

    Each loader opens its own sessions through the repositories. A failing
    analytics loader degrades to empty analytics; any other loader failure
    fails the whole request.
    """

    year, month = resolve_month(month, year)
    start, end = month_bounds(year, month)
    key = month_key(start)

    def _analytics() -> dict[str, Any]:
        try:
            return month_analytics(ctx, user_id=user_id, start=start, end=end)
        except Exception:
            logger.warning(
                "Analytics calculation failed; returning empty analytics",
                exc_info=True,
                extra={"user_id": user_id, "month": key},
            )
            return _empty_analytics()

    loaders: dict[str, Callable[[], Any]] = {
        "accounts": lambda: ctx.account_repo.list_all(user_id=user_id, is_active=True),
        "transactions": lambda: list_transactions(
            ctx,
            user_id=user_id,
            start_date=start,
            end_date=end,
            limit=DEFAULT_TRANSACTION_LIMIT,
        ),
        "fixed_expenses": lambda: ctx.fixed_expense_repo.search(user_id=user_id),
        "possible_expenses": lambda: ctx.possible_expense_repo.list_all(user_id=user_id),
        "budgets": lambda: budgets_with_spending(ctx, key, user_id=user_id),
        "analytics": _analytics,
    }
    with ThreadPoolExecutor(
        max_workers=min(ctx.dashboard_workers, len(loaders)),
        thread_name_prefix="dashboard",
    ) as pool:
        futures = {name: pool.submit(loader) for name, loader in loaders.items()}
        results = {name: future.result() for name, future in futures.items()}

    accounts: list[Account] = results["accounts"]
    rows: list[TransactionRow] = results["transactions"]
    income = round_money(sum(r.transaction.amount for r in rows if r.transaction.kind == INCOME))
    expenses = round_money(sum(r.transaction.amount for r in rows if r.transaction.kind == EXPENSE))

    analytics = {
        "total_balance": round_money(sum(account.balance for account in accounts)),
        "monthly_income": income,
        "monthly_expenses": expenses,
        "savings_rate": round_money((income - expenses) / income * 100) if income > 0 else 0.0,
        **results["analytics"],
    }
    return DashboardData(
        month=key,
        accounts=accounts,
        transactions=group_by_date(rows),
        fixed_expenses=results["fixed_expenses"],
        possible_expenses=results["possible_expenses"],
        budgets=results["budgets"],
        analytics=analytics,
    )

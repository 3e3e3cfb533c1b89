"""Tests for the month dashboard snapshot."""

from __future__ import annotations

from datetime import date

import pytest

from spendwell.services import dashboard
from spendwell.services.budgets import create_budget
from spendwell.services.transactions import create_transaction


def _post(ctx, user, account, kind, amount, category, day, time):
    create_transaction(
        ctx,
        user_id=user.id,
        account_id=account.id,
        kind=kind,
        amount=amount,
        description=category,
        category=category,
        txn_date=day,
        time=time,
    )


@pytest.fixture
def populated(ctx, user, account_factory, plan_factory, fixed_expense_factory):
    account = account_factory(name="Main", balance=2000.0)
    account_factory(name="Closed", balance=999.0, is_active=False)
    _post(ctx, user, account, "income", 1000.0, "Salary", date(2024, 3, 1), "09:00 AM")
    _post(ctx, user, account, "expense", 300.0, "Rent", date(2024, 3, 1), "01:30 PM")
    _post(ctx, user, account, "expense", 50.0, "Food", date(2024, 3, 5), "08:15 AM")
    _post(ctx, user, account, "expense", 150.0, "Food", date(2024, 3, 5), "07:45 PM")
    _post(ctx, user, account, "expense", 70.0, "Food", date(2024, 2, 27), "12:00 PM")
    create_budget(ctx, user_id=user.id, category="Food", month="2024-03", amount=250.0)
    plan_factory(account)
    fixed_expense_factory(account)
    return account


def test_dashboard_combines_sections(ctx, user, populated):
    data = dashboard.build_dashboard(ctx, user_id=user.id, month=3, year=2024)

    assert data.month == "2024-03"
    assert [a.name for a in data.accounts] == ["Main"]
    assert len(data.fixed_expenses) == 1
    assert len(data.possible_expenses) == 1
    assert data.budgets[0].total_spent == 200.0
    assert data.analytics["monthly_income"] == 1000.0
    assert data.analytics["monthly_expenses"] == 500.0
    assert data.analytics["savings_rate"] == 50.0
    # 2000 + 1000 - 300 - 50 - 150 - 70
    assert data.analytics["total_balance"] == 2430.0


def test_dashboard_groups_by_day_latest_time_first(ctx, user, populated):
    data = dashboard.build_dashboard(ctx, user_id=user.id, month=3, year=2024)

    assert [group["date"] for group in data.transactions] == ["2024-03-05", "2024-03-01"]
    first_day = data.transactions[0]["transactions"]
    assert [row.transaction.time for row in first_day] == ["07:45 PM", "08:15 AM"]
    second_day = data.transactions[1]["transactions"]
    assert [row.transaction.category for row in second_day] == ["Rent", "Salary"]


def test_dashboard_category_analytics(ctx, user, populated):
    analytics = dashboard.build_dashboard(ctx, user_id=user.id, month=3, year=2024).analytics

    assert analytics["category_breakdown"] == {"Rent": 300.0, "Food": 200.0}
    assert analytics["top_categories"][0] == {"category": "Rent", "amount": 300.0, "percentage": 60.0}
    assert [point["date"] for point in analytics["monthly_trend"]] == ["2024-03-01", "2024-03-05"]
    assert analytics["monthly_trend"][0]["savings"] == 700.0


def test_analytics_failure_degrades_to_empty(ctx, user, populated, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("aggregation failed")

    monkeypatch.setattr(dashboard, "month_analytics", _boom)

    data = dashboard.build_dashboard(ctx, user_id=user.id, month=3, year=2024)

    assert data.analytics["category_breakdown"] == {}
    assert data.analytics["top_categories"] == []
    assert data.analytics["monthly_income"] == 1000.0


def test_resolve_month_fills_from_today():
    assert dashboard.resolve_month(None, None, today=date(2024, 7, 9)) == (2024, 7)
    assert dashboard.resolve_month(2, None, today=date(2024, 7, 9)) == (2024, 2)

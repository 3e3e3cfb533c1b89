"""Dashboard route."""

from __future__ import annotations

from flask import request

from ...constants import UNKNOWN_ACCOUNT
from ...extensions import get_context
from ...forms import parse_int_arg
from ...responses import current_user_id, respond
from ...serializers import (
    account_to_dict,
    budget_usage_to_dict,
    fixed_expense_to_dict,
    possible_expense_to_dict,
    transaction_to_dict,
)
from ...services.dashboard import build_dashboard
from . import bp


@bp.get("")
def dashboard():
    """Month snapshot: accounts, grouped transactions, plans, budgets and analytics."""

    ctx = get_context()
    user_id = current_user_id()
    data = build_dashboard(
        ctx,
        user_id=user_id,
        month=parse_int_arg("month", request.args.get("month")),
        year=parse_int_arg("year", request.args.get("year")),
    )
    names = ctx.account_repo.names_by_id(user_id=user_id)
    return respond(
        {
            "month": data.month,
            "accounts": [account_to_dict(account) for account in data.accounts],
            "transactions": [
                {
                    "date": group["date"],
                    "transactions": [
                        transaction_to_dict(row.transaction, row.account_name)
                        for row in group["transactions"]
                    ],
                }
                for group in data.transactions
            ],
            "fixed_expenses": [
                fixed_expense_to_dict(expense, names.get(expense.account_id, UNKNOWN_ACCOUNT))
                for expense in data.fixed_expenses
            ],
            "possible_expenses": [
                possible_expense_to_dict(plan, names.get(plan.account_id, UNKNOWN_ACCOUNT))
                for plan in data.possible_expenses
            ],
            "budgets": [budget_usage_to_dict(usage) for usage in data.budgets],
            "analytics": data.analytics,
        }
    )

"""Budget routes."""

from __future__ import annotations

from flask import request

from ...extensions import get_context
from ...responses import current_user_id, json_body, respond
from ...serializers import budget_to_dict, budget_usage_to_dict
from ...services import budgets as budget_service
from ...services.budgets import BudgetUsage
from . import bp
from .forms import BudgetForm


@bp.get("")
def list_budgets():
    items = budget_service.list_budgets(
        get_context(), user_id=current_user_id(), month=request.args.get("month") or None
    )
    return respond(
        [
            budget_usage_to_dict(item) if isinstance(item, BudgetUsage) else budget_to_dict(item)
            for item in items
        ]
    )


@bp.post("")
def create_budget():
    form = BudgetForm.from_mapping(json_body())
    form.validate_or_raise()
    budget = budget_service.create_budget(
        get_context(),
        user_id=current_user_id(),
        category=form.category,
        month=form.month,
        amount=form.amount,
    )
    return respond(budget_to_dict(budget), message="Budget created successfully", status=201)


@bp.get("/analytics")
def analytics():
    data = budget_service.budget_analytics(
        get_context(), user_id=current_user_id(), month=request.args.get("month") or None
    )
    data["budgets"] = [budget_usage_to_dict(usage) for usage in data["budgets"]]
    return respond(data)


@bp.put("/<int:budget_id>")
def update_budget(budget_id: int):
    form = BudgetForm.from_mapping(json_body(), partial=True)
    form.validate_or_raise()
    budget = budget_service.update_budget(
        get_context(), budget_id, user_id=current_user_id(), **form.changes()
    )
    return respond(budget_to_dict(budget), message="Budget updated successfully")


@bp.delete("/<int:budget_id>")
def delete_budget(budget_id: int):
    budget_service.delete_budget(get_context(), budget_id, user_id=current_user_id())
    return respond(message="Budget deleted successfully")

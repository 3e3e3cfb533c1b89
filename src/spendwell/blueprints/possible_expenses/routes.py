"""Possible expense routes."""

from __future__ import annotations

from flask import request

from ...constants import UNKNOWN_ACCOUNT
from ...extensions import get_context
from ...responses import current_user_id, json_body, respond
from ...serializers import account_to_dict, possible_expense_to_dict, transaction_to_dict
from ...services import possible_expenses as plan_service
from . import bp
from .forms import ConversionForm, PossibleExpenseForm


@bp.get("")
def list_plans():
    ctx = get_context()
    user_id = current_user_id()
    plans = plan_service.list_plans(
        ctx, user_id=user_id, category=request.args.get("category") or None
    )
    names = ctx.account_repo.names_by_id(user_id=user_id)
    return respond(
        [possible_expense_to_dict(plan, names.get(plan.account_id, UNKNOWN_ACCOUNT)) for plan in plans]
    )


@bp.post("")
def create_plan():
    form = PossibleExpenseForm.from_mapping(json_body())
    form.validate_or_raise()
    plan = plan_service.create_plan(
        get_context(),
        user_id=current_user_id(),
        title=form.title,
        expected_amount=form.expected_amount,
        category=form.category,
        account_id=form.account_id,
        notes=form.notes,
    )
    return respond(
        possible_expense_to_dict(plan), message="Possible expense created successfully", status=201
    )


@bp.get("/category/<path:category>")
def plans_by_category(category: str):
    result = plan_service.plans_by_category(get_context(), category, user_id=current_user_id())
    result["expenses"] = [possible_expense_to_dict(plan) for plan in result["expenses"]]
    return respond(result)


@bp.put("/<int:plan_id>")
def update_plan(plan_id: int):
    form = PossibleExpenseForm.from_mapping(json_body(), partial=True)
    form.validate_or_raise()
    plan = plan_service.update_plan(
        get_context(), plan_id, user_id=current_user_id(), **form.changes()
    )
    return respond(possible_expense_to_dict(plan), message="Possible expense updated successfully")


@bp.delete("/<int:plan_id>")
def delete_plan(plan_id: int):
    plan_service.delete_plan(get_context(), plan_id, user_id=current_user_id())
    return respond(message="Possible expense deleted successfully")


@bp.post("/<int:plan_id>/convert")
def convert_plan(plan_id: int):
    form = ConversionForm.from_mapping(json_body())
    form.validate_or_raise()
    result = plan_service.convert_plan(
        get_context(),
        plan_id,
        user_id=current_user_id(),
        amount=form.amount,
        description=form.description,
        txn_date=form.txn_date,
    )
    return respond(
        {
            "transaction": transaction_to_dict(result.transaction, result.account_name),
            "account": account_to_dict(result.account) if result.account else None,
        },
        message="Possible expense converted to transaction successfully",
    )

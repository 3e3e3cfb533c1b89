"""Fixed expense routes."""

from __future__ import annotations

from flask import request

from ...constants import UNKNOWN_ACCOUNT
from ...extensions import get_context
from ...forms import parse_bool_arg, parse_int_arg
from ...responses import current_user_id, json_body, respond
from ...serializers import fixed_expense_to_dict
from ...services import fixed_expenses as fixed_expense_service
from . import bp
from .forms import FixedExpenseForm


@bp.get("")
def list_fixed_expenses():
    ctx = get_context()
    user_id = current_user_id()
    expenses = fixed_expense_service.list_fixed_expenses(
        ctx,
        user_id=user_id,
        is_active=parse_bool_arg(request.args.get("is_active")),
        is_paid=parse_bool_arg(request.args.get("is_paid")),
        category=request.args.get("category") or None,
    )
    names = ctx.account_repo.names_by_id(user_id=user_id)
    return respond(
        [
            fixed_expense_to_dict(expense, names.get(expense.account_id, UNKNOWN_ACCOUNT))
            for expense in expenses
        ]
    )


@bp.post("")
def create_fixed_expense():
    form = FixedExpenseForm.from_mapping(json_body())
    form.validate_or_raise()
    expense = fixed_expense_service.create_fixed_expense(
        get_context(),
        user_id=current_user_id(),
        title=form.title,
        amount=form.amount,
        category=form.category,
        due_day=form.due_day,
        account_id=form.account_id,
    )
    return respond(
        fixed_expense_to_dict(expense), message="Fixed expense created successfully", status=201
    )


@bp.get("/upcoming")
def upcoming():
    ctx = get_context()
    user_id = current_user_id()
    days = parse_int_arg("days", request.args.get("days"))
    items = fixed_expense_service.upcoming_expenses(
        ctx, user_id=user_id, days=days if days is not None else 30
    )
    names = ctx.account_repo.names_by_id(user_id=user_id)
    return respond(
        [
            {
                **fixed_expense_to_dict(
                    item.expense, names.get(item.expense.account_id, UNKNOWN_ACCOUNT)
                ),
                "next_due_date": item.due_date.isoformat(),
                "days_until_due": item.days_until_due,
            }
            for item in items
        ]
    )


@bp.put("/<int:expense_id>")
def update_fixed_expense(expense_id: int):
    form = FixedExpenseForm.from_mapping(json_body(), partial=True)
    form.validate_or_raise()
    expense = fixed_expense_service.update_fixed_expense(
        get_context(), expense_id, user_id=current_user_id(), **form.changes()
    )
    return respond(fixed_expense_to_dict(expense), message="Fixed expense updated successfully")


@bp.patch("/<int:expense_id>/paid")
def mark_paid(expense_id: int):
    expense = fixed_expense_service.mark_paid(get_context(), expense_id, user_id=current_user_id())
    return respond(fixed_expense_to_dict(expense), message="Fixed expense marked as paid")


@bp.delete("/<int:expense_id>")
def delete_fixed_expense(expense_id: int):
    fixed_expense_service.delete_fixed_expense(get_context(), expense_id, user_id=current_user_id())
    return respond(message="Fixed expense deleted successfully")

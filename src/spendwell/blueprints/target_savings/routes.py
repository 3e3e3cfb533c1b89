"""Savings target routes."""

from __future__ import annotations

from dataclasses import asdict

from flask import request

from ...extensions import get_context
from ...forms import parse_bool_arg
from ...responses import current_user_id, json_body, respond
from ...serializers import target_to_dict
from ...services import savings as savings_service
from . import bp
from .forms import SpendingCheckForm, TargetSavingsForm


@bp.get("")
def list_targets():
    targets = savings_service.list_targets(
        get_context(),
        user_id=current_user_id(),
        active_only=bool(parse_bool_arg(request.args.get("active_only"))),
    )
    return respond([target_to_dict(target) for target in targets])


@bp.post("")
def create_target():
    form = TargetSavingsForm.from_mapping(json_body())
    form.validate_or_raise()
    target = savings_service.create_target(
        get_context(),
        user_id=current_user_id(),
        account_id=form.account_id,
        title=form.title,
        target_amount=form.target_amount,
        monthly_target=form.monthly_target,
        start_date=form.start_date,
        target_date=form.target_date,
        description=form.description,
        color=form.color,
    )
    return respond(target_to_dict(target), message="Target savings created successfully", status=201)


@bp.get("/overview")
def overview():
    result = savings_service.savings_overview(get_context(), user_id=current_user_id())
    return respond(
        {
            "total_target_amount": result.total_target_amount,
            "total_current_savings": result.total_current_savings,
            "total_balance": result.total_balance,
            "available_for_spending": result.available_for_spending,
            "savings_progress": result.savings_progress,
            "targets": [target_to_dict(target) for target in result.targets],
        }
    )


@bp.post("/check-warning")
def check_warning():
    form = SpendingCheckForm.from_mapping(json_body())
    form.validate_or_raise()
    result = savings_service.check_spending_warning(
        get_context(), user_id=current_user_id(), amount=form.amount, kind=form.kind
    )
    return respond(asdict(result))


@bp.get("/<int:target_id>")
def get_target(target_id: int):
    analysis = savings_service.get_target_analysis(
        get_context(), target_id, user_id=current_user_id()
    )
    return respond(
        {
            **target_to_dict(analysis.target),
            "current_month_spending": analysis.current_month_spending,
            "is_over_monthly_target": analysis.is_over_monthly_target,
            "monthly_remaining": analysis.monthly_remaining,
            "total_balance": analysis.total_balance,
            "available_for_spending": analysis.available_for_spending,
        }
    )


@bp.put("/<int:target_id>")
def update_target(target_id: int):
    form = TargetSavingsForm.from_mapping(json_body(), partial=True)
    form.validate_or_raise()
    target = savings_service.update_target(
        get_context(), target_id, user_id=current_user_id(), **form.changes()
    )
    return respond(target_to_dict(target), message="Target savings updated successfully")


@bp.delete("/<int:target_id>")
def delete_target(target_id: int):
    savings_service.delete_target(get_context(), target_id, user_id=current_user_id())
    return respond(message="Target savings deleted successfully")

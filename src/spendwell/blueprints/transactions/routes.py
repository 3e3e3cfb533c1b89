"""Transaction routes."""

from __future__ import annotations

from datetime import date

from flask import request

from ...constants import DEFAULT_TRANSACTION_LIMIT
from ...extensions import get_context
from ...forms import parse_date_arg, parse_int_arg
from ...responses import current_user_id, json_body, respond
from ...serializers import transaction_to_dict
from ...services import transactions as transaction_service
from . import bp
from .forms import TransactionForm


@bp.get("")
def list_transactions():
    args = request.args
    rows = transaction_service.list_transactions(
        get_context(),
        user_id=current_user_id(),
        start_date=parse_date_arg("start_date", args.get("start_date")),
        end_date=parse_date_arg("end_date", args.get("end_date")),
        kind=args.get("type") or None,
        category=args.get("category") or None,
        account_id=parse_int_arg("account_id", args.get("account_id")),
        limit=parse_int_arg("limit", args.get("limit")) or DEFAULT_TRANSACTION_LIMIT,
    )
    return respond([transaction_to_dict(row.transaction, row.account_name) for row in rows])


@bp.post("")
def create_transaction():
    form = TransactionForm.from_mapping(json_body())
    form.validate_or_raise()
    outcome = transaction_service.create_transaction(
        get_context(),
        user_id=current_user_id(),
        account_id=form.account_id,
        kind=form.kind,
        amount=form.amount,
        description=form.description,
        category=form.category,
        txn_date=form.date,
        time=form.time,
    )
    data = transaction_to_dict(outcome.transaction, outcome.account_name)
    if outcome.side_effects:
        data["side_effects"] = [effect.to_dict() for effect in outcome.side_effects]
    return respond(data, message="Transaction created successfully", status=201)


@bp.get("/analytics")
def analytics():
    data = transaction_service.transaction_analytics(
        get_context(),
        user_id=current_user_id(),
        start_date=parse_date_arg("start_date", request.args.get("start_date")),
        end_date=parse_date_arg("end_date", request.args.get("end_date")),
    )
    return respond(data)


@bp.get("/summary")
def summary():
    today = date.today()
    data = transaction_service.monthly_summary(
        get_context(),
        user_id=current_user_id(),
        year=parse_int_arg("year", request.args.get("year")) or today.year,
        month=parse_int_arg("month", request.args.get("month")) or today.month,
    )
    return respond(data)


@bp.get("/<int:transaction_id>")
def get_transaction(transaction_id: int):
    row = transaction_service.get_transaction(
        get_context(), transaction_id, user_id=current_user_id()
    )
    return respond(transaction_to_dict(row.transaction, row.account_name))


@bp.put("/<int:transaction_id>")
def update_transaction(transaction_id: int):
    form = TransactionForm.from_mapping(json_body(), partial=True)
    form.validate_or_raise()
    txn = transaction_service.update_transaction(
        get_context(), transaction_id, user_id=current_user_id(), **form.changes()
    )
    return respond(transaction_to_dict(txn), message="Transaction updated successfully")


@bp.delete("/<int:transaction_id>")
def delete_transaction(transaction_id: int):
    transaction_service.delete_transaction(get_context(), transaction_id, user_id=current_user_id())
    return respond(message="Transaction deleted successfully")

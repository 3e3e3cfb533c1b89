"""Account routes."""

from __future__ import annotations

from flask import request

from ...extensions import get_context
from ...forms import parse_bool_arg
from ...responses import current_user_id, json_body, respond
from ...serializers import account_to_dict, transaction_to_dict
from ...services import accounts as account_service
from . import bp
from .forms import AccountForm, TransferForm


@bp.get("")
def list_accounts():
    accounts = account_service.list_accounts(
        get_context(),
        user_id=current_user_id(),
        is_active=parse_bool_arg(request.args.get("is_active")),
    )
    return respond([account_to_dict(account) for account in accounts])


@bp.post("")
def create_account():
    form = AccountForm.from_mapping(json_body())
    form.validate_or_raise()
    account = account_service.create_account(
        get_context(),
        user_id=current_user_id(),
        name=form.name,
        account_type=form.account_type,
        balance=form.balance,
        currency=form.currency,
    )
    return respond(account_to_dict(account), message="Account created successfully", status=201)


@bp.get("/<int:account_id>")
def get_account(account_id: int):
    account = account_service.get_account(get_context(), account_id, user_id=current_user_id())
    return respond(account_to_dict(account))


@bp.put("/<int:account_id>")
def update_account(account_id: int):
    form = AccountForm.from_mapping(json_body(), partial=True)
    form.validate_or_raise()
    account = account_service.update_account(
        get_context(), account_id, user_id=current_user_id(), **form.changes()
    )
    return respond(account_to_dict(account), message="Account updated successfully")


@bp.delete("/<int:account_id>")
def delete_account(account_id: int):
    account_service.delete_account(get_context(), account_id, user_id=current_user_id())
    return respond(message="Account deleted successfully")


@bp.post("/transfer")
def transfer():
    form = TransferForm.from_mapping(json_body())
    form.validate_or_raise()
    ctx = get_context()
    user_id = current_user_id()
    txn = account_service.transfer_funds(
        ctx,
        user_id=user_id,
        from_account_id=form.from_account_id,
        to_account_id=form.to_account_id,
        amount=form.amount,
        description=form.description,
    )
    source = account_service.get_account(ctx, form.from_account_id, user_id=user_id)
    target = account_service.get_account(ctx, form.to_account_id, user_id=user_id)
    return respond(
        {
            "transaction": transaction_to_dict(txn, source.name),
            "from_account": account_to_dict(source),
            "to_account": account_to_dict(target),
        },
        message="Transfer completed successfully",
    )

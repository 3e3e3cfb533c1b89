"""Borrow/lend routes."""

from __future__ import annotations

from dataclasses import asdict

from flask import request

from ...extensions import get_context
from ...forms import parse_bool_arg
from ...responses import current_user_id, json_body, respond
from ...serializers import borrowing_to_dict, transaction_to_dict
from ...services import borrowings as borrowing_service
from . import bp
from .forms import BorrowingForm, PaidStatusForm


@bp.get("")
def list_borrowings():
    records = borrowing_service.list_borrowings(
        get_context(),
        user_id=current_user_id(),
        direction=request.args.get("type") or None,
        is_paid=parse_bool_arg(request.args.get("is_paid")),
        person_name=request.args.get("person_name") or None,
    )
    return respond([borrowing_to_dict(record) for record in records])


@bp.post("")
def create_borrowing():
    form = BorrowingForm.from_mapping(json_body())
    form.validate_or_raise()
    outcome = borrowing_service.create_borrowing(
        get_context(),
        user_id=current_user_id(),
        person_name=form.person_name,
        direction=form.direction,
        amount=form.amount,
        account_id=form.account_id,
        description=form.description,
        transaction_date=form.transaction_date,
        due_date=form.due_date,
    )
    return respond(
        {
            "borrowing": borrowing_to_dict(outcome.borrowing),
            "transaction": transaction_to_dict(outcome.transaction),
        },
        message="Borrowing record created successfully",
        status=201,
    )


@bp.get("/summary")
def summary():
    result = borrowing_service.borrowing_summary(get_context(), user_id=current_user_id())
    return respond(asdict(result))


@bp.get("/person/<path:person_name>")
def person_summary(person_name: str):
    return respond(
        borrowing_service.person_summary(get_context(), person_name, user_id=current_user_id())
    )


@bp.put("/<int:borrowing_id>")
def update_borrowing(borrowing_id: int):
    form = BorrowingForm.from_mapping(json_body(), partial=True)
    form.validate_or_raise()
    record = borrowing_service.update_borrowing(
        get_context(), borrowing_id, user_id=current_user_id(), **form.changes()
    )
    return respond(borrowing_to_dict(record), message="Borrowing record updated successfully")


@bp.patch("/<int:borrowing_id>/paid")
def toggle_paid(borrowing_id: int):
    form = PaidStatusForm.from_mapping(json_body())
    form.validate_or_raise()
    record = borrowing_service.toggle_paid(
        get_context(), borrowing_id, user_id=current_user_id(), is_paid=form.is_paid
    )
    message = "Marked as paid" if record.is_paid else "Marked as unpaid"
    return respond(borrowing_to_dict(record), message=message)


@bp.delete("/<int:borrowing_id>")
def delete_borrowing(borrowing_id: int):
    borrowing_service.delete_borrowing(get_context(), borrowing_id, user_id=current_user_id())
    return respond(message="Borrowing record deleted successfully")

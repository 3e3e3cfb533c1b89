"""Borrow/lend records and their settlement.

A record moves between two states, unpaid and paid. Creating it applies the
borrowing effect to the linked account and writes a mirror transaction for the
history. Marking it paid posts a settlement transaction and applies the
inverse effect; marking it unpaid again removes the settlement and restores
the original effect. Mirror and settlement rows are bookkeeping. The balance
is always moved through :func:`spendwell.services.balances.apply_delta`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional

from ..constants import (
    BORROWED,
    BORROWING_DIRECTIONS,
    CATEGORY_BORROWED,
    CATEGORY_COLLECTION,
    CATEGORY_LENT,
    CATEGORY_REPAYMENT,
    EXPENSE,
    INCOME,
)
from ..context import LedgerContext
from ..errors import (
    NotFoundError,
    ValidationError,
    access_denied,
    account_not_found,
    not_found,
    operation,
)
from ..logging_config import get_logger
from ..models.borrowing import Borrowing
from ..models.transaction import Transaction
from .balances import (
    apply_delta,
    apply_delta_lenient,
    borrowing_effect,
    net_delta,
    positive_amount,
    round_money,
)
from .periods import current_time_label

logger = get_logger("services.borrowings")

_UPDATABLE_FIELDS = (
    "person_name",
    "direction",
    "amount",
    "description",
    "transaction_date",
    "due_date",
)


@dataclass(slots=True)
class BorrowingOutcome:
    borrowing: Borrowing
    transaction: Transaction


@dataclass(slots=True)
class BorrowingSummary:
    total_borrowed: float
    total_lent: float
    net_amount: float
    active_count: int
    total_count: int


def _with_suffix(text: str, description: str) -> str:
    return f"{text} - {description}" if description else text


def _mirror_details(direction: str, person: str, description: str) -> tuple[str, str, str]:
    """Kind, category and description for the transaction mirroring a new record."""

    if direction == BORROWED:
        return INCOME, CATEGORY_BORROWED, _with_suffix(f"Borrowed from {person}", description)
    return EXPENSE, CATEGORY_LENT, _with_suffix(f"Lent to {person}", description)


def _settlement_details(direction: str, person: str, description: str) -> tuple[str, str, str]:
    """Kind, category and description for the repayment or collection."""

    if direction == BORROWED:
        return EXPENSE, CATEGORY_REPAYMENT, _with_suffix(f"Repayment to {person}", description)
    return INCOME, CATEGORY_COLLECTION, _with_suffix(f"Collection from {person}", description)


def _check_direction(direction: str) -> None:
    if direction not in BORROWING_DIRECTIONS:
        raise ValidationError(
            "Validation failed",
            {"type": [f"Type must be one of: {', '.join(BORROWING_DIRECTIONS)}."]},
        )


def _load_owned(ctx: LedgerContext, borrowing_id: int, *, user_id: int) -> Borrowing:
    record = ctx.borrowing_repo.get_by_id(borrowing_id, user_id=user_id)
    if record is not None:
        return record
    if ctx.borrowing_repo.get_unscoped(borrowing_id) is not None:
        raise access_denied("borrowing record")
    raise not_found("Borrowing record")


@operation("create borrowing record")
def create_borrowing(
    ctx: LedgerContext,
    *,
    user_id: int,
    person_name: str,
    direction: str,
    amount: float,
    account_id: int,
    description: str = "",
    transaction_date: Optional[date] = None,
    due_date: Optional[date] = None,
) -> BorrowingOutcome:
    _check_direction(direction)
    amount = positive_amount(amount)

    account = ctx.account_repo.get_unscoped(account_id)
    if account is None:
        raise account_not_found()
    if account.user_id != user_id:
        raise access_denied("account")

    occurred = transaction_date or date.today()
    record = ctx.borrowing_repo.create(
        Borrowing(
            user_id=user_id,
            person_name=person_name,
            direction=direction,
            amount=amount,
            account_id=account_id,
            account_name=account.name,
            description=description,
            transaction_date=occurred,
            due_date=due_date,
        ),
        user_id=user_id,
    )

    kind, category, text = _mirror_details(direction, person_name, description)
    mirror = ctx.transaction_repo.create(
        Transaction(
            user_id=user_id,
            account_id=account_id,
            kind=kind,
            amount=amount,
            description=text,
            category=category,
            date=occurred,
            time=current_time_label(),
        ),
        user_id=user_id,
    )
    apply_delta(ctx, account_id, borrowing_effect(direction, amount), user_id=user_id)

    logger.info(
        "Borrowing record created",
        extra={
            "user_id": user_id,
            "borrowing_id": record.id,
            "direction": direction,
            "amount": amount,
            "account_id": account_id,
        },
    )
    return BorrowingOutcome(borrowing=record, transaction=mirror)


@operation("update borrowing record")
def update_borrowing(
    ctx: LedgerContext, borrowing_id: int, *, user_id: int, **changes: Any
) -> Borrowing:
    """Apply field changes; amount or direction changes move the balance.

    The old effect is reversed and the new one applied as two separate
    adjustments, both derived from the same effect rules used at creation.
    """

    record = _load_owned(ctx, borrowing_id, user_id=user_id)
    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Validation failed", {name: ["Field cannot be updated."] for name in unknown}
        )
    if "direction" in changes:
        _check_direction(changes["direction"])
    if "amount" in changes:
        changes["amount"] = positive_amount(changes["amount"])

    if "amount" in changes or "direction" in changes:
        old_effect = borrowing_effect(record.direction, record.amount)
        new_effect = borrowing_effect(
            changes.get("direction", record.direction), changes.get("amount", record.amount)
        )
        apply_delta_lenient(
            ctx,
            record.account_id,
            net_delta(old_effect, 0.0),
            user_id=user_id,
            reason="borrowing update reversal",
        )
        apply_delta_lenient(
            ctx,
            record.account_id,
            net_delta(0.0, new_effect),
            user_id=user_id,
            reason="borrowing update",
        )

    for name, value in changes.items():
        setattr(record, name, value)
    updated = ctx.borrowing_repo.update(record, user_id=user_id)
    logger.info(
        "Borrowing record updated",
        extra={"user_id": user_id, "borrowing_id": borrowing_id, "fields": sorted(changes)},
    )
    return updated


@operation("update paid status")
def toggle_paid(
    ctx: LedgerContext, borrowing_id: int, *, user_id: int, is_paid: bool
) -> Borrowing:
    """Move a record between unpaid and paid.

    Repeating the current state is a no-op for balances: a settlement is only
    created when none is referenced, and only removed when one is.
    """

    record = _load_owned(ctx, borrowing_id, user_id=user_id)
    if ctx.account_repo.get_by_id(record.account_id, user_id=user_id) is None:
        raise NotFoundError("Linked account not found")

    original_effect = borrowing_effect(record.direction, record.amount)
    if is_paid:
        if record.repayment_transaction_id is None:
            kind, category, text = _settlement_details(
                record.direction, record.person_name, record.description
            )
            settlement = ctx.transaction_repo.create(
                Transaction(
                    user_id=user_id,
                    account_id=record.account_id,
                    kind=kind,
                    amount=record.amount,
                    description=text,
                    category=category,
                    date=date.today(),
                    time=current_time_label(),
                ),
                user_id=user_id,
            )
            apply_delta(ctx, record.account_id, -original_effect, user_id=user_id)
            record.repayment_transaction_id = settlement.id
        record.is_paid = True
        record.paid_date = datetime.now(timezone.utc)
    else:
        if record.repayment_transaction_id is not None:
            settlement_id = record.repayment_transaction_id
            if ctx.transaction_repo.get_by_id(settlement_id, user_id=user_id) is not None:
                ctx.transaction_repo.delete(settlement_id, user_id=user_id)
            apply_delta(ctx, record.account_id, original_effect, user_id=user_id)
            record.repayment_transaction_id = None
        record.is_paid = False
        record.paid_date = None

    updated = ctx.borrowing_repo.update(record, user_id=user_id)
    logger.info(
        "Borrowing paid status changed",
        extra={"user_id": user_id, "borrowing_id": borrowing_id, "is_paid": is_paid},
    )
    return updated


@operation("delete borrowing record")
def delete_borrowing(ctx: LedgerContext, borrowing_id: int, *, user_id: int) -> None:
    """Soft-delete a record, reversing its effect first when still unpaid."""

    record = _load_owned(ctx, borrowing_id, user_id=user_id)
    if not record.is_paid:
        apply_delta_lenient(
            ctx,
            record.account_id,
            net_delta(borrowing_effect(record.direction, record.amount), 0.0),
            user_id=user_id,
            reason="borrowing delete",
        )
    record.is_active = False
    ctx.borrowing_repo.update(record, user_id=user_id)
    logger.info("Borrowing record deleted", extra={"user_id": user_id, "borrowing_id": borrowing_id})


@operation("fetch borrowing records")
def list_borrowings(
    ctx: LedgerContext,
    *,
    user_id: int,
    direction: Optional[str] = None,
    is_paid: Optional[bool] = None,
    person_name: Optional[str] = None,
) -> list[Borrowing]:
    return ctx.borrowing_repo.search(
        direction=direction, is_paid=is_paid, person_name=person_name, user_id=user_id
    )


def _summarize(records: list[Borrowing]) -> BorrowingSummary:
    unpaid = [r for r in records if not r.is_paid]
    borrowed = round_money(sum(r.amount for r in unpaid if r.direction == BORROWED))
    lent = round_money(sum(r.amount for r in unpaid if r.direction != BORROWED))
    return BorrowingSummary(
        total_borrowed=borrowed,
        total_lent=lent,
        net_amount=round_money(borrowed - lent),
        active_count=len(unpaid),
        total_count=len(records),
    )


@operation("fetch borrowing summary")
def borrowing_summary(ctx: LedgerContext, *, user_id: int) -> BorrowingSummary:
    """Outstanding totals over active records."""

    return _summarize(ctx.borrowing_repo.search(user_id=user_id))


@operation("fetch person summary")
def person_summary(ctx: LedgerContext, person_name: str, *, user_id: int) -> dict[str, Any]:
    records = ctx.borrowing_repo.search(person_name=person_name, user_id=user_id)
    summary = _summarize(records)
    return {
        "person_name": person_name,
        "total_borrowed": summary.total_borrowed,
        "total_lent": summary.total_lent,
        "net_amount": summary.net_amount,
        "transactions": summary.total_count,
    }

"""Transaction lifecycle: posting, editing and removing ledger entries.

Every non-transfer transaction has its signed effect applied to its account
exactly once. Edits apply only the difference between the old and new effect
and deletions reverse the stored effect. Posting an expense also runs the
savings side effects from :mod:`spendwell.services.savings`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..constants import (
    DEFAULT_TRANSACTION_LIMIT,
    EXPENSE,
    POSTABLE_KINDS,
    TRANSACTION_KINDS,
    TRANSFER,
    UNKNOWN_ACCOUNT,
)
from ..context import LedgerContext
from ..errors import ValidationError, account_not_found, not_found, operation
from ..logging_config import get_logger
from ..models.transaction import Transaction
from . import savings
from .balances import (
    apply_delta,
    apply_delta_lenient,
    net_delta,
    positive_amount,
    round_money,
    signed_effect,
)
from .effects import SideEffect, attempt
from .periods import current_time_label, month_bounds

logger = get_logger("services.transactions")

_UPDATABLE_FIELDS = ("account_id", "kind", "amount", "description", "category", "date", "time")


@dataclass(slots=True)
class TransactionRow:
    """A transaction annotated with its account's display name."""

    transaction: Transaction
    account_name: str


@dataclass(slots=True)
class TransactionOutcome:
    """Result of posting a transaction, including best-effort side effects."""

    transaction: Transaction
    account_name: str
    side_effects: list[SideEffect] = field(default_factory=list)


def _check_kind(kind: str) -> None:
    if kind not in POSTABLE_KINDS:
        raise ValidationError(
            "Validation failed",
            {"type": [f"Type must be one of: {', '.join(POSTABLE_KINDS)}."]},
        )


def _reject_transfer(txn: Transaction) -> None:
    if txn.kind == TRANSFER:
        raise ValidationError("Transfer records cannot be changed or deleted")


@operation("create transaction")
def create_transaction(
    ctx: LedgerContext,
    *,
    user_id: int,
    account_id: int,
    kind: str,
    amount: float,
    description: str,
    category: str,
    txn_date: date,
    time: Optional[str] = None,
) -> TransactionOutcome:
    """Post a transaction and apply its balance effect.

    For expenses, the overspend check and the savings progress update run
    afterwards; their failures are reported in ``side_effects`` only.
    """

    _check_kind(kind)
    amount = positive_amount(amount)
    account = ctx.account_repo.get_by_id(account_id, user_id=user_id)
    if account is None:
        raise account_not_found()

    created = ctx.transaction_repo.create(
        Transaction(
            user_id=user_id,
            account_id=account_id,
            kind=kind,
            amount=amount,
            description=description,
            category=category,
            date=txn_date,
            time=time or current_time_label(),
        ),
        user_id=user_id,
    )

    effect = signed_effect(kind, created.amount)
    if effect:
        apply_delta(ctx, account_id, effect, user_id=user_id)

    side_effects: list[SideEffect] = []
    if kind == EXPENSE:
        side_effects.append(
            attempt("savings_deduction", savings.evaluate_overspend, ctx, user_id=user_id)
        )
        side_effects.append(
            attempt(
                "savings_progress",
                savings.apply_expense_progress,
                ctx,
                created.amount,
                user_id=user_id,
            )
        )

    logger.info(
        "Transaction created",
        extra={
            "user_id": user_id,
            "transaction_id": created.id,
            "kind": kind,
            "amount": created.amount,
            "account_id": account_id,
        },
    )
    return TransactionOutcome(
        transaction=created, account_name=account.name, side_effects=side_effects
    )


@operation("update transaction")
def update_transaction(
    ctx: LedgerContext, transaction_id: int, *, user_id: int, **changes: Any
) -> Transaction:
    """Apply field changes; balance moves only by the net change in effect."""

    txn = ctx.transaction_repo.get_by_id(transaction_id, user_id=user_id)
    if txn is None:
        raise not_found("Transaction")
    _reject_transfer(txn)

    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Validation failed", {name: ["Field cannot be updated."] for name in unknown}
        )
    if "kind" in changes:
        _check_kind(changes["kind"])
    if "amount" in changes:
        changes["amount"] = positive_amount(changes["amount"])

    old_account = txn.account_id
    new_account = changes.get("account_id", old_account)
    if new_account != old_account and ctx.account_repo.get_by_id(new_account, user_id=user_id) is None:
        raise account_not_found()

    old_effect = signed_effect(txn.kind, txn.amount)
    new_effect = signed_effect(changes.get("kind", txn.kind), changes.get("amount", txn.amount))

    if new_account == old_account:
        apply_delta_lenient(
            ctx,
            old_account,
            net_delta(old_effect, new_effect),
            user_id=user_id,
            reason="transaction update",
        )
    else:
        apply_delta_lenient(
            ctx, old_account, net_delta(old_effect, 0.0), user_id=user_id, reason="transaction move"
        )
        apply_delta(ctx, new_account, new_effect, user_id=user_id)

    for name, value in changes.items():
        setattr(txn, name, value)
    updated = ctx.transaction_repo.update(txn, user_id=user_id)
    logger.info(
        "Transaction updated",
        extra={"user_id": user_id, "transaction_id": transaction_id, "fields": sorted(changes)},
    )
    return updated


@operation("delete transaction")
def delete_transaction(ctx: LedgerContext, transaction_id: int, *, user_id: int) -> None:
    """Reverse the stored effect and remove the transaction.

    Savings amounts moved when the expense was posted are left as they are.
    """

    txn = ctx.transaction_repo.get_by_id(transaction_id, user_id=user_id)
    if txn is None:
        raise not_found("Transaction")
    _reject_transfer(txn)

    apply_delta_lenient(
        ctx,
        txn.account_id,
        net_delta(signed_effect(txn.kind, txn.amount), 0.0),
        user_id=user_id,
        reason="transaction delete",
    )
    ctx.transaction_repo.delete(transaction_id, user_id=user_id)
    logger.info(
        "Transaction deleted", extra={"user_id": user_id, "transaction_id": transaction_id}
    )


@operation("get transaction")
def get_transaction(ctx: LedgerContext, transaction_id: int, *, user_id: int) -> TransactionRow:
    txn = ctx.transaction_repo.get_by_id(transaction_id, user_id=user_id)
    if txn is None:
        raise not_found("Transaction")
    names = ctx.account_repo.names_by_id(user_id=user_id)
    return TransactionRow(transaction=txn, account_name=names.get(txn.account_id, UNKNOWN_ACCOUNT))


@operation("list transactions")
def list_transactions(
    ctx: LedgerContext,
    *,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    kind: Optional[str] = None,
    category: Optional[str] = None,
    account_id: Optional[int] = None,
    limit: int = DEFAULT_TRANSACTION_LIMIT,
) -> list[TransactionRow]:
    """Newest first; rows whose account is gone show ``Unknown Account``."""

    rows = ctx.transaction_repo.search(
        start_date=start_date,
        end_date=end_date,
        kind=kind,
        category=category,
        account_id=account_id,
        limit=limit,
        user_id=user_id,
    )
    names = ctx.account_repo.names_by_id(user_id=user_id)
    return [
        TransactionRow(transaction=txn, account_name=names.get(txn.account_id, UNKNOWN_ACCOUNT))
        for txn in rows
    ]


@operation("get transaction analytics")
def transaction_analytics(
    ctx: LedgerContext,
    *,
    user_id: int,
    start_date: Optional[date],
    end_date: Optional[date],
) -> dict[str, dict[str, Any]]:
    """Group totals by kind, then by category within each kind."""

    if start_date is None or end_date is None:
        raise ValidationError(
            "Start date and end date are required",
            {
                key: ["This field is required."]
                for key, value in (("start_date", start_date), ("end_date", end_date))
                if value is None
            },
        )

    rows = ctx.transaction_repo.search(start_date=start_date, end_date=end_date, user_id=user_id)
    grouped: dict[str, dict[str, list[float]]] = {}
    for txn in rows:
        grouped.setdefault(txn.kind, {}).setdefault(txn.category, []).append(txn.amount)

    analytics: dict[str, dict[str, Any]] = {}
    for kind, categories in grouped.items():
        breakdown = [
            {"category": category, "total": round_money(sum(amounts)), "count": len(amounts)}
            for category, amounts in categories.items()
        ]
        breakdown.sort(key=lambda item: item["total"], reverse=True)
        analytics[kind] = {
            "total_amount": round_money(sum(item["total"] for item in breakdown)),
            "total_count": sum(item["count"] for item in breakdown),
            "categories": breakdown,
        }
    return analytics


@operation("get monthly summary")
def monthly_summary(ctx: LedgerContext, *, user_id: int, year: int, month: int) -> dict[str, Any]:
    start, end = month_bounds(year, month)
    rows = ctx.transaction_repo.search(start_date=start, end_date=end, user_id=user_id)
    totals = {kind: 0.0 for kind in TRANSACTION_KINDS}
    for txn in rows:
        totals[txn.kind] = round_money(totals.get(txn.kind, 0.0) + txn.amount)
    return {
        **totals,
        "net": round_money(totals["income"] - totals["expense"]),
        "count": len(rows),
    }

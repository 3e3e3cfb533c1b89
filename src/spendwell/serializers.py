"""Model and result conversion into JSON-ready dictionaries."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from .models import (
    Account,
    Borrowing,
    Budget,
    FixedExpense,
    PossibleExpense,
    TargetSavings,
    Transaction,
)


def _iso(value: date | datetime | None) -> Optional[str]:
    return value.isoformat() if value is not None else None


def account_to_dict(account: Account) -> dict[str, Any]:
    return {
        "id": account.id,
        "name": account.name,
        "type": account.account_type,
        "balance": account.balance,
        "currency": account.currency,
        "is_active": account.is_active,
        "created_at": _iso(account.created_at),
    }


def transaction_to_dict(txn: Transaction, account_name: Optional[str] = None) -> dict[str, Any]:
    data = {
        "id": txn.id,
        "account_id": txn.account_id,
        "type": txn.kind,
        "amount": txn.amount,
        "description": txn.description,
        "category": txn.category,
        "date": _iso(txn.date),
        "time": txn.time,
        "created_at": _iso(txn.created_at),
    }
    if account_name is not None:
        data["account_name"] = account_name
    return data


def borrowing_to_dict(record: Borrowing) -> dict[str, Any]:
    return {
        "id": record.id,
        "person_name": record.person_name,
        "type": record.direction,
        "amount": record.amount,
        "account_id": record.account_id,
        "account_name": record.account_name,
        "description": record.description,
        "transaction_date": _iso(record.transaction_date),
        "due_date": _iso(record.due_date),
        "is_paid": record.is_paid,
        "paid_date": _iso(record.paid_date),
        "repayment_transaction_id": record.repayment_transaction_id,
        "created_at": _iso(record.created_at),
    }


def target_to_dict(target: TargetSavings) -> dict[str, Any]:
    return {
        "id": target.id,
        "account_id": target.account_id,
        "title": target.title,
        "target_amount": target.target_amount,
        "current_amount": target.current_amount,
        "monthly_target": target.monthly_target,
        "start_date": _iso(target.start_date),
        "target_date": _iso(target.target_date),
        "description": target.description,
        "color": target.color,
        "is_active": target.is_active,
        "progress_percentage": target.progress_percentage,
        "remaining_amount": target.remaining_amount,
        "is_target_exceeded": target.is_target_exceeded,
        "created_at": _iso(target.created_at),
    }


def budget_to_dict(budget: Budget) -> dict[str, Any]:
    return {
        "id": budget.id,
        "category": budget.category,
        "month": budget.month,
        "amount": budget.amount,
        "created_at": _iso(budget.created_at),
    }


def budget_usage_to_dict(usage) -> dict[str, Any]:
    return {
        **budget_to_dict(usage.budget),
        "total_spent": usage.total_spent,
        "remaining": usage.remaining,
        "percentage_used": usage.percentage_used,
        "transaction_count": usage.transaction_count,
        "status": usage.status,
    }


def fixed_expense_to_dict(
    expense: FixedExpense, account_name: Optional[str] = None
) -> dict[str, Any]:
    data = {
        "id": expense.id,
        "title": expense.title,
        "amount": expense.amount,
        "category": expense.category,
        "due_date": expense.due_day,
        "account_id": expense.account_id,
        "is_paid": expense.is_paid,
        "is_active": expense.is_active,
        "created_at": _iso(expense.created_at),
    }
    if account_name is not None:
        data["account_name"] = account_name
    return data


def possible_expense_to_dict(
    plan: PossibleExpense, account_name: Optional[str] = None
) -> dict[str, Any]:
    data = {
        "id": plan.id,
        "title": plan.title,
        "expected_amount": plan.expected_amount,
        "category": plan.category,
        "account_id": plan.account_id,
        "notes": plan.notes,
        "created_at": _iso(plan.created_at),
    }
    if account_name is not None:
        data["account_name"] = account_name
    return data

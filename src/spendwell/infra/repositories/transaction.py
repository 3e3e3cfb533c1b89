"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...constants import EXPENSE
from ...models.transaction import Transaction


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: int, *, user_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def search(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[str] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        limit: Optional[int] = None,
        user_id: int,
    ) -> list[Transaction]:
        """Filtered listing ordered by date, then creation time, newest first."""
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.user_id == user_id)

            if start_date:
                statement = statement.where(Transaction.date >= start_date)
            if end_date:
                statement = statement.where(Transaction.date <= end_date)
            if kind:
                statement = statement.where(Transaction.kind == kind)
            if category:
                statement = statement.where(Transaction.category == category)
            if account_id:
                statement = statement.where(Transaction.account_id == account_id)

            statement = statement.order_by(
                Transaction.date.desc(),  # type: ignore
                Transaction.created_at.desc(),  # type: ignore
                Transaction.id.desc(),  # type: ignore
            )
            if limit:
                statement = statement.limit(limit)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def sum_amount(
        self, *, kind: str, start_date: date, end_date: date, user_id: int
    ) -> float:
        with self.session_factory() as session:
            total = session.exec(
                select(func.coalesce(func.sum(Transaction.amount), 0.0))
                .where(Transaction.user_id == user_id)
                .where(Transaction.kind == kind)
                .where(Transaction.date >= start_date)
                .where(Transaction.date <= end_date)
            ).one()
            return round(float(total), 2)

    def spent_by_category(
        self, *, start_date: date, end_date: date, user_id: int
    ) -> dict[str, float]:
        """Expense totals keyed by category within ``[start_date, end_date]``."""
        with self.session_factory() as session:
            rows = session.exec(
                select(Transaction.category, func.sum(Transaction.amount))
                .where(Transaction.user_id == user_id)
                .where(Transaction.kind == EXPENSE)
                .where(Transaction.date >= start_date)
                .where(Transaction.date <= end_date)
                .group_by(Transaction.category)
            ).all()
            return {category: round(float(total or 0.0), 2) for category, total in rows}

    def create(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            transaction.user_id = user_id
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Update an existing transaction."""
        with self.session_factory() as session:
            transaction.user_id = user_id
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete(self, transaction_id: int, *, user_id: int) -> None:
        """Delete a transaction by ID."""
        with self.session_factory() as session:
            transaction = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if transaction:
                session.delete(transaction)
                session.commit()

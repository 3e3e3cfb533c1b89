"""SQLModel implementation of FixedExpense repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.fixed_expense import FixedExpense


class SQLModelFixedExpenseRepository:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, expense_id: int, *, user_id: int) -> Optional[FixedExpense]:
        with self.session_factory() as session:
            obj = session.exec(
                select(FixedExpense)
                .where(FixedExpense.id == expense_id)
                .where(FixedExpense.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def search(
        self,
        *,
        is_active: Optional[bool] = None,
        is_paid: Optional[bool] = None,
        category: Optional[str] = None,
        user_id: int,
    ) -> list[FixedExpense]:
        """Bills ordered by due day."""
        with self.session_factory() as session:
            statement = select(FixedExpense).where(FixedExpense.user_id == user_id)
            if is_active is not None:
                statement = statement.where(FixedExpense.is_active == is_active)
            if is_paid is not None:
                statement = statement.where(FixedExpense.is_paid == is_paid)
            if category:
                statement = statement.where(FixedExpense.category == category)
            statement = statement.order_by(FixedExpense.due_day, FixedExpense.id)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, expense: FixedExpense, *, user_id: int) -> FixedExpense:
        with self.session_factory() as session:
            expense.user_id = user_id
            session.add(expense)
            session.commit()
            session.refresh(expense)
            session.expunge(expense)
            return expense

    def update(self, expense: FixedExpense, *, user_id: int) -> FixedExpense:
        with self.session_factory() as session:
            expense.user_id = user_id
            session.add(expense)
            session.commit()
            session.refresh(expense)
            session.expunge(expense)
            return expense

    def delete(self, expense_id: int, *, user_id: int) -> None:
        with self.session_factory() as session:
            expense = session.exec(
                select(FixedExpense)
                .where(FixedExpense.id == expense_id)
                .where(FixedExpense.user_id == user_id)
            ).first()
            if expense:
                session.delete(expense)
                session.commit()

"""SQLModel implementation of Budget repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.budget import Budget


class SQLModelBudgetRepository:
    """SQLModel-based budget repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, budget_id: int, *, user_id: int) -> Optional[Budget]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Budget).where(Budget.id == budget_id).where(Budget.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def find(self, *, category: str, month: str, user_id: int) -> Optional[Budget]:
        """Return the budget for a category in a month."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Budget)
                .where(Budget.user_id == user_id)
                .where(Budget.category == category)
                .where(Budget.month == month)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, month: Optional[str] = None) -> list[Budget]:
        with self.session_factory() as session:
            statement = select(Budget).where(Budget.user_id == user_id)
            if month:
                statement = statement.where(Budget.month == month)
            statement = statement.order_by(Budget.month.desc(), Budget.category)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, budget: Budget, *, user_id: int) -> Budget:
        with self.session_factory() as session:
            budget.user_id = user_id
            session.add(budget)
            session.commit()
            session.refresh(budget)
            session.expunge(budget)
            return budget

    def update(self, budget: Budget, *, user_id: int) -> Budget:
        with self.session_factory() as session:
            budget.user_id = user_id
            session.add(budget)
            session.commit()
            session.refresh(budget)
            session.expunge(budget)
            return budget

    def delete(self, budget_id: int, *, user_id: int) -> None:
        with self.session_factory() as session:
            budget = session.exec(
                select(Budget).where(Budget.id == budget_id).where(Budget.user_id == user_id)
            ).first()
            if budget:
                session.delete(budget)
                session.commit()

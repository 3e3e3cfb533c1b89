"""SQLModel implementation of PossibleExpense repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.possible_expense import PossibleExpense


class SQLModelPossibleExpenseRepository:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, plan_id: int, *, user_id: int) -> Optional[PossibleExpense]:
        with self.session_factory() as session:
            obj = session.exec(
                select(PossibleExpense)
                .where(PossibleExpense.id == plan_id)
                .where(PossibleExpense.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, category: Optional[str] = None) -> list[PossibleExpense]:
        with self.session_factory() as session:
            statement = select(PossibleExpense).where(PossibleExpense.user_id == user_id)
            if category:
                statement = statement.where(PossibleExpense.category == category)
            statement = statement.order_by(
                PossibleExpense.created_at.desc(),  # type: ignore
                PossibleExpense.id.desc(),  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, plan: PossibleExpense, *, user_id: int) -> PossibleExpense:
        with self.session_factory() as session:
            plan.user_id = user_id
            session.add(plan)
            session.commit()
            session.refresh(plan)
            session.expunge(plan)
            return plan

    def update(self, plan: PossibleExpense, *, user_id: int) -> PossibleExpense:
        with self.session_factory() as session:
            plan.user_id = user_id
            session.add(plan)
            session.commit()
            session.refresh(plan)
            session.expunge(plan)
            return plan

    def delete(self, plan_id: int, *, user_id: int) -> None:
        with self.session_factory() as session:
            plan = session.exec(
                select(PossibleExpense)
                .where(PossibleExpense.id == plan_id)
                .where(PossibleExpense.user_id == user_id)
            ).first()
            if plan:
                session.delete(plan)
                session.commit()

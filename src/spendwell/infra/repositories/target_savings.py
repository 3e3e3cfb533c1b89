"""SQLModel implementation of the savings target repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import Numeric, case, cast, func, update
from sqlmodel import Session, select

from ...models.target_savings import TargetSavings


def _cents(expression):
    return func.round(cast(expression, Numeric(14, 2)), 2)


class SQLModelTargetSavingsRepository:
    """SQLModel-based savings target repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, target_id: int, *, user_id: int) -> Optional[TargetSavings]:
        with self.session_factory() as session:
            obj = session.exec(
                select(TargetSavings)
                .where(TargetSavings.id == target_id)
                .where(TargetSavings.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, active_only: bool = False) -> list[TargetSavings]:
        with self.session_factory() as session:
            statement = select(TargetSavings).where(TargetSavings.user_id == user_id)
            if active_only:
                statement = statement.where(TargetSavings.is_active == True)  # noqa: E712
            statement = statement.order_by(
                TargetSavings.created_at.desc(),  # type: ignore
                TargetSavings.id.desc(),  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_deduction(self, *, user_id: int) -> list[TargetSavings]:
        """Active targets, largest saved amount first; ties go to the newest."""
        with self.session_factory() as session:
            statement = (
                select(TargetSavings)
                .where(TargetSavings.user_id == user_id)
                .where(TargetSavings.is_active == True)  # noqa: E712
                .order_by(
                    TargetSavings.current_amount.desc(),  # type: ignore
                    TargetSavings.created_at.desc(),  # type: ignore
                    TargetSavings.id.desc(),  # type: ignore
                )
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def committed_total(self, *, user_id: int) -> float:
        return self._active_sum(TargetSavings.target_amount, user_id=user_id)

    def saved_total(self, *, user_id: int) -> float:
        return self._active_sum(TargetSavings.current_amount, user_id=user_id)

    def _active_sum(self, column, *, user_id: int) -> float:
        with self.session_factory() as session:
            total = session.exec(
                select(func.coalesce(func.sum(column), 0.0))
                .where(TargetSavings.user_id == user_id)
                .where(TargetSavings.is_active == True)  # noqa: E712
            ).one()
            return round(float(total), 2)

    def deduct(self, target_id: int, amount: float, *, user_id: int) -> None:
        """Subtract ``amount`` from one target, never below zero."""
        remaining = TargetSavings.current_amount - amount
        with self.session_factory() as session:
            session.exec(  # type: ignore[call-overload]
                update(TargetSavings)
                .where(TargetSavings.id == target_id)
                .where(TargetSavings.user_id == user_id)
                .values(current_amount=case((remaining < 0, 0.0), else_=_cents(remaining)))
            )
            session.commit()

    def add_to_active(self, amount: float, *, user_id: int) -> int:
        """Add ``amount`` to every active target in a single statement."""
        with self.session_factory() as session:
            result = session.exec(  # type: ignore[call-overload]
                update(TargetSavings)
                .where(TargetSavings.user_id == user_id)
                .where(TargetSavings.is_active == True)  # noqa: E712
                .values(current_amount=_cents(TargetSavings.current_amount + amount))
            )
            session.commit()
            return result.rowcount

    def create(self, target: TargetSavings, *, user_id: int) -> TargetSavings:
        with self.session_factory() as session:
            target.user_id = user_id
            session.add(target)
            session.commit()
            session.refresh(target)
            session.expunge(target)
            return target

    def update(self, target: TargetSavings, *, user_id: int) -> TargetSavings:
        with self.session_factory() as session:
            target.user_id = user_id
            session.add(target)
            session.commit()
            session.refresh(target)
            session.expunge(target)
            return target

    def delete(self, target_id: int, *, user_id: int) -> None:
        with self.session_factory() as session:
            target = session.exec(
                select(TargetSavings)
                .where(TargetSavings.id == target_id)
                .where(TargetSavings.user_id == user_id)
            ).first()
            if target:
                session.delete(target)
                session.commit()

"""SQLModel implementation of Borrowing repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...models.borrowing import Borrowing


class SQLModelBorrowingRepository:
    """SQLModel-based borrowing repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, borrowing_id: int, *, user_id: int) -> Optional[Borrowing]:
        """Retrieve an active borrowing record owned by ``user_id``."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Borrowing)
                .where(Borrowing.id == borrowing_id)
                .where(Borrowing.user_id == user_id)
                .where(Borrowing.is_active == True)  # noqa: E712
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_unscoped(self, borrowing_id: int) -> Optional[Borrowing]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Borrowing)
                .where(Borrowing.id == borrowing_id)
                .where(Borrowing.is_active == True)  # noqa: E712
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def search(
        self,
        *,
        direction: Optional[str] = None,
        is_paid: Optional[bool] = None,
        person_name: Optional[str] = None,
        user_id: int,
    ) -> list[Borrowing]:
        """Active records matching the filters, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Borrowing)
                .where(Borrowing.user_id == user_id)
                .where(Borrowing.is_active == True)  # noqa: E712
            )
            if direction:
                statement = statement.where(Borrowing.direction == direction)
            if is_paid is not None:
                statement = statement.where(Borrowing.is_paid == is_paid)
            if person_name:
                statement = statement.where(
                    func.lower(Borrowing.person_name).contains(
                        person_name.strip().lower(), autoescape=True
                    )
                )
            statement = statement.order_by(
                Borrowing.created_at.desc(),  # type: ignore
                Borrowing.id.desc(),  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, borrowing: Borrowing, *, user_id: int) -> Borrowing:
        with self.session_factory() as session:
            borrowing.user_id = user_id
            session.add(borrowing)
            session.commit()
            session.refresh(borrowing)
            session.expunge(borrowing)
            return borrowing

    def update(self, borrowing: Borrowing, *, user_id: int) -> Borrowing:
        with self.session_factory() as session:
            borrowing.user_id = user_id
            session.add(borrowing)
            session.commit()
            session.refresh(borrowing)
            session.expunge(borrowing)
            return borrowing

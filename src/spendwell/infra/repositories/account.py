"""SQLModel implementation of Account repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import Numeric, cast, func, update
from sqlmodel import Session, select

from ...models.account import Account


class SQLModelAccountRepository:
    """SQLModel-based account repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, account_id: int, *, user_id: int) -> Optional[Account]:
        """Retrieve an account by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Account).where(Account.id == account_id).where(Account.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_unscoped(self, account_id: int) -> Optional[Account]:
        """Retrieve an account whoever owns it."""
        with self.session_factory() as session:
            obj = session.get(Account, account_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, is_active: Optional[bool] = None) -> list[Account]:
        """List accounts ordered by name."""
        with self.session_factory() as session:
            statement = select(Account).where(Account.user_id == user_id)
            if is_active is not None:
                statement = statement.where(Account.is_active == is_active)
            statement = statement.order_by(Account.name)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def names_by_id(self, *, user_id: int) -> dict[int, str]:
        with self.session_factory() as session:
            rows = session.exec(
                select(Account.id, Account.name).where(Account.user_id == user_id)
            ).all()
            return {account_id: name for account_id, name in rows}

    def total_balance(self, *, user_id: int) -> float:
        """Sum balances of the user's active accounts."""
        with self.session_factory() as session:
            total = session.exec(
                select(func.coalesce(func.sum(Account.balance), 0.0))
                .where(Account.user_id == user_id)
                .where(Account.is_active == True)  # noqa: E712
            ).one()
            return round(float(total), 2)

    def create(self, account: Account, *, user_id: int) -> Account:
        """Create a new account."""
        with self.session_factory() as session:
            account.user_id = user_id
            session.add(account)
            session.commit()
            session.refresh(account)
            session.expunge(account)
            return account

    def update(self, account: Account, *, user_id: int) -> Account:
        """Update an existing account."""
        with self.session_factory() as session:
            account.user_id = user_id
            session.add(account)
            session.commit()
            session.refresh(account)
            session.expunge(account)
            return account

    def delete(self, account_id: int, *, user_id: int) -> None:
        """Delete an account by ID."""
        with self.session_factory() as session:
            account = session.exec(
                select(Account).where(Account.id == account_id).where(Account.user_id == user_id)
            ).first()
            if account:
                session.delete(account)
                session.commit()

    def apply_delta(self, account_id: int, delta: float, *, user_id: int) -> Optional[float]:
        """Add ``delta`` to the stored balance in one UPDATE and return the result.

        Returns ``None`` when no row matched (account deleted or not owned).
        """
        with self.session_factory() as session:
            result = session.exec(  # type: ignore[call-overload]
                update(Account)
                .where(Account.id == account_id)
                .where(Account.user_id == user_id)
                .values(balance=func.round(cast(Account.balance + delta, Numeric(14, 2)), 2))
            )
            if result.rowcount == 0:
                session.rollback()
                return None
            balance = session.exec(select(Account.balance).where(Account.id == account_id)).one()
            session.commit()
            return round(float(balance), 2)

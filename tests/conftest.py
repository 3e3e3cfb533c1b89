"""Pytest configuration and shared fixtures for Spendwell tests.

This module provides database fixtures, test data factories, and helper utilities
for testing services, repositories and routes without touching the real app database.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine, select

# Import all models to ensure they're registered with SQLModel metadata
from spendwell.context import build_context
from spendwell.models import (
    Account,
    Borrowing,
    FixedExpense,
    PossibleExpense,
    TargetSavings,
    Transaction,
    User,
)

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Each test gets a fresh database with all tables created. The file is removed
    after the test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    # Dashboard loaders query from worker threads.
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Create a session factory for repositories that expect Callable[[], Session].

    The factory exposes the bootstrapped default user as ``factory.user``.
    """

    def factory():
        """Create a new Session with expire_on_commit disabled."""
        return Session(db_engine, expire_on_commit=False)

    with factory() as session:
        existing = session.exec(select(User).limit(1)).first()
        if existing is None:
            existing = User(email="tester@example.com", name="Tester")
            session.add(existing)
            session.commit()
            session.refresh(existing)
        factory.user = existing  # type: ignore[attr-defined]

    return factory


@pytest.fixture
def ctx(session_factory):
    """Ledger context wired to the test database."""

    return build_context(session_factory, dashboard_workers=4)


@pytest.fixture
def user(session_factory) -> User:
    return session_factory.user


@pytest.fixture
def other_user(session_factory) -> User:
    """A second user for ownership checks."""

    with session_factory() as session:
        intruder = User(email="intruder@example.com", name="Intruder")
        session.add(intruder)
        session.commit()
        session.refresh(intruder)
        return intruder


def _persist(session_factory, obj):
    with session_factory() as session:
        session.add(obj)
        session.commit()
        session.refresh(obj)
        session.expunge(obj)
        return obj


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def account_factory(session_factory, user):
    """Factory for creating test accounts with an opening balance.

    Returns:
        Callable: Function that creates and persists Account instances
    """

    def _create_account(
        name: str = "Checking",
        balance: float = 0.0,
        account_type: str = "bank",
        currency: str = "USD",
        is_active: bool = True,
        owner: User | None = None,
    ) -> Account:
        owner = owner or user
        return _persist(
            session_factory,
            Account(
                user_id=owner.id,
                name=name,
                balance=balance,
                account_type=account_type,
                currency=currency,
                is_active=is_active,
            ),
        )

    return _create_account


@pytest.fixture
def target_factory(session_factory, user):
    """Factory for creating savings targets with a preset saved amount."""

    def _create_target(
        account: Account,
        title: str = "Emergency fund",
        target_amount: float = 1000.0,
        current_amount: float = 0.0,
        monthly_target: float | None = None,
        is_active: bool = True,
        owner: User | None = None,
    ) -> TargetSavings:
        owner = owner or user
        return _persist(
            session_factory,
            TargetSavings(
                user_id=owner.id,
                account_id=account.id,
                title=title,
                target_amount=target_amount,
                current_amount=current_amount,
                monthly_target=monthly_target,
                is_active=is_active,
            ),
        )

    return _create_target


@pytest.fixture
def plan_factory(session_factory, user):
    """Factory for creating possible expenses."""

    def _create_plan(
        account: Account,
        title: str = "New headphones",
        expected_amount: float = 75.0,
        category: str = "Shopping",
        notes: str = "",
        owner: User | None = None,
    ) -> PossibleExpense:
        owner = owner or user
        return _persist(
            session_factory,
            PossibleExpense(
                user_id=owner.id,
                account_id=account.id,
                title=title,
                expected_amount=expected_amount,
                category=category,
                notes=notes,
            ),
        )

    return _create_plan


@pytest.fixture
def fixed_expense_factory(session_factory, user):
    def _create_fixed_expense(
        account: Account,
        title: str = "Rent",
        amount: float = 900.0,
        category: str = "Housing",
        due_day: int = 1,
        is_paid: bool = False,
        is_active: bool = True,
    ) -> FixedExpense:
        return _persist(
            session_factory,
            FixedExpense(
                user_id=user.id,
                account_id=account.id,
                title=title,
                amount=amount,
                category=category,
                due_day=due_day,
                is_paid=is_paid,
                is_active=is_active,
            ),
        )

    return _create_fixed_expense


# =============================================================================
# Read-back helpers
# =============================================================================


@pytest.fixture
def balance_of(session_factory):
    """Return the stored balance of an account."""

    def _balance(account_id: int) -> float:
        with session_factory() as session:
            return session.get(Account, account_id).balance

    return _balance


@pytest.fixture
def saved_of(session_factory):
    """Return the stored ``current_amount`` of a savings target."""

    def _saved(target_id: int) -> float:
        with session_factory() as session:
            return session.get(TargetSavings, target_id).current_amount

    return _saved


@pytest.fixture
def rows_of(session_factory):
    """Return every stored row of a model for the default user."""

    def _rows(model):
        with session_factory() as session:
            rows = list(session.exec(select(model)).all())
            session.expunge_all()
            return rows

    return _rows


# =============================================================================
# Flask application fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "spendwell.db"
    monkeypatch.setenv("SPENDWELL_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SPENDWELL_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("SPENDWELL_DEV_MODE", "true")

    from spendwell import create_app

    application = create_app("testing")
    ledger = application.extensions["spendwell"]
    with ledger.session_factory() as session:
        session.add(User(email="api@example.com", name="API user"))
        session.add(User(email="other@example.com", name="Other user"))
    return application


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def auth_headers():
    return {"X-User-Id": "1"}


@pytest.fixture()
def other_headers():
    return {"X-User-Id": "2"}


# =============================================================================
# Assertion Helpers
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"


def today() -> date:
    return date.today()

"""Repository wiring shared by the HTTP layer, services and tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sqlmodel import Session

from .domain.repositories import (
    AccountRepository,
    BorrowingRepository,
    BudgetRepository,
    FixedExpenseRepository,
    PossibleExpenseRepository,
    TargetSavingsRepository,
    TransactionRepository,
)
from .infra.repositories import (
    SQLModelAccountRepository,
    SQLModelBorrowingRepository,
    SQLModelBudgetRepository,
    SQLModelFixedExpenseRepository,
    SQLModelPossibleExpenseRepository,
    SQLModelTargetSavingsRepository,
    SQLModelTransactionRepository,
)


@dataclass
class LedgerContext:
    """Bundle of repositories bound to one session factory.

    Services only rely on the repository protocols, so any implementation
    honouring them can be swapped in.
    """

    session_factory: Callable[[], Session]
    account_repo: AccountRepository
    transaction_repo: TransactionRepository
    borrowing_repo: BorrowingRepository
    target_repo: TargetSavingsRepository
    budget_repo: BudgetRepository
    fixed_expense_repo: FixedExpenseRepository
    possible_expense_repo: PossibleExpenseRepository
    dashboard_workers: int = 6


def build_context(
    session_factory: Callable[[], Session], *, dashboard_workers: int = 6
) -> LedgerContext:
    """Instantiate every SQLModel repository against ``session_factory``."""

    return LedgerContext(
        session_factory=session_factory,
        account_repo=SQLModelAccountRepository(session_factory),
        transaction_repo=SQLModelTransactionRepository(session_factory),
        borrowing_repo=SQLModelBorrowingRepository(session_factory),
        target_repo=SQLModelTargetSavingsRepository(session_factory),
        budget_repo=SQLModelBudgetRepository(session_factory),
        fixed_expense_repo=SQLModelFixedExpenseRepository(session_factory),
        possible_expense_repo=SQLModelPossibleExpenseRepository(session_factory),
        dashboard_workers=dashboard_workers,
    )

"""LedgerContext wiring against the repository protocols."""

from __future__ import annotations

import inspect

import pytest

from spendwell.context import LedgerContext, build_context
from spendwell.domain.repositories import (
    AccountRepository,
    BorrowingRepository,
    BudgetRepository,
    FixedExpenseRepository,
    PossibleExpenseRepository,
    TargetSavingsRepository,
    TransactionRepository,
)

PROTOCOL_FIELDS = {
    "account_repo": AccountRepository,
    "transaction_repo": TransactionRepository,
    "borrowing_repo": BorrowingRepository,
    "target_repo": TargetSavingsRepository,
    "budget_repo": BudgetRepository,
    "fixed_expense_repo": FixedExpenseRepository,
    "possible_expense_repo": PossibleExpenseRepository,
}


def _protocol_methods(protocol) -> set[str]:
    return {
        name
        for name, member in vars(protocol).items()
        if inspect.isfunction(member) and not name.startswith("_")
    }


@pytest.mark.parametrize(("attr", "protocol"), sorted(PROTOCOL_FIELDS.items()))
def test_repositories_implement_their_protocol(session_factory, attr, protocol):
    ctx = build_context(session_factory)
    repo = getattr(ctx, attr)

    methods = _protocol_methods(protocol)
    assert methods
    for name in methods:
        impl = getattr(repo, name, None)
        assert callable(impl), f"{type(repo).__name__} lacks {name}"
        expected = inspect.signature(getattr(protocol, name))
        actual = inspect.signature(getattr(type(repo), name))
        assert list(actual.parameters) == list(expected.parameters), name


def test_build_context_shares_session_factory(session_factory):
    ctx = build_context(session_factory, dashboard_workers=2)

    assert isinstance(ctx, LedgerContext)
    assert ctx.dashboard_workers == 2
    for attr in PROTOCOL_FIELDS:
        assert getattr(ctx, attr).session_factory is session_factory

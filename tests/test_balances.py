"""Tests for the signed-effect rules and the balance mutator."""

from __future__ import annotations

import pytest

from spendwell.errors import NotFoundError
from spendwell.services.balances import (
    apply_delta,
    apply_delta_lenient,
    borrowing_effect,
    net_delta,
    round_money,
    signed_effect,
)
from tests.conftest import assert_float_equal


@pytest.mark.parametrize(
    ("kind", "amount", "expected"),
    [
        ("income", 120.0, 120.0),
        ("expense", 45.5, -45.5),
        ("transfer", 300.0, 0.0),
    ],
)
def test_signed_effect(kind, amount, expected):
    assert signed_effect(kind, amount) == expected


def test_signed_effect_rejects_unknown_kind():
    with pytest.raises(ValueError):
        signed_effect("refund", 10.0)


def test_borrowing_effect_direction():
    assert borrowing_effect("borrowed", 200.0) == 200.0
    assert borrowing_effect("lent", 200.0) == -200.0


def test_net_delta_moves_old_effect_to_new():
    # expense 50 edited to income 30: +50 to undo, +30 to apply
    assert net_delta(-50.0, 30.0) == 80.0
    assert net_delta(-50.0, -50.0) == 0.0


def test_round_money_keeps_cents():
    assert round_money(0.1 + 0.2) == 0.3


def test_apply_delta_updates_balance(ctx, user, account_factory, balance_of):
    account = account_factory(balance=100.0)

    new_balance = apply_delta(ctx, account.id, -35.25, user_id=user.id)

    assert_float_equal(new_balance, 64.75)
    assert_float_equal(balance_of(account.id), 64.75)


def test_apply_delta_sequence_has_no_drift(ctx, user, account_factory, balance_of):
    account = account_factory(balance=0.0)

    for _ in range(10):
        apply_delta(ctx, account.id, 0.1, user_id=user.id)

    assert balance_of(account.id) == 1.0


def test_apply_delta_missing_account_raises(ctx, user):
    with pytest.raises(NotFoundError) as exc_info:
        apply_delta(ctx, 9999, 10.0, user_id=user.id)

    assert exc_info.value.message == "Account not found"
    assert exc_info.value.status_code == 404


def test_apply_delta_ignores_other_users_account(
    ctx, user, other_user, account_factory, balance_of
):
    foreign = account_factory(balance=50.0, owner=other_user)

    with pytest.raises(NotFoundError):
        apply_delta(ctx, foreign.id, 10.0, user_id=user.id)

    assert balance_of(foreign.id) == 50.0


def test_apply_delta_lenient_skips_missing_account(ctx, user, caplog):
    caplog.set_level("WARNING", logger="spendwell")

    assert apply_delta_lenient(ctx, 9999, 10.0, user_id=user.id, reason="test") is None
    assert "Account missing while adjusting balance" in caplog.text


def test_apply_delta_lenient_zero_delta_is_noop(ctx, user, account_factory, balance_of):
    account = account_factory(balance=20.0)

    assert apply_delta_lenient(ctx, account.id, 0.0, user_id=user.id, reason="test") is None
    assert balance_of(account.id) == 20.0

"""Tests for account management and transfers."""

from __future__ import annotations

import pytest

from spendwell.errors import NotFoundError, ValidationError
from spendwell.models import Account, Transaction
from spendwell.services import accounts as svc
from tests.conftest import assert_float_equal


def test_create_account_rounds_opening_balance(ctx, user):
    account = svc.create_account(
        ctx, user_id=user.id, name="Savings", account_type="mobile", balance=100.456
    )

    assert account.id is not None
    assert account.balance == 100.46
    assert account.is_active is True


def test_create_rejects_unknown_type(ctx, user):
    with pytest.raises(ValidationError) as exc_info:
        svc.create_account(ctx, user_id=user.id, name="Bad", account_type="vault")

    assert "type" in exc_info.value.errors


def test_update_cannot_touch_balance(ctx, user, account_factory):
    account = account_factory(balance=10.0)

    with pytest.raises(ValidationError):
        svc.update_account(ctx, account.id, user_id=user.id, balance=1_000_000.0)


def test_update_name_and_active_flag(ctx, user, account_factory):
    account = account_factory(name="Old")

    updated = svc.update_account(ctx, account.id, user_id=user.id, name="New", is_active=False)

    assert (updated.name, updated.is_active) == ("New", False)


def test_list_filters_active(ctx, user, other_user, account_factory):
    account_factory(name="Open")
    account_factory(name="Closed", is_active=False)
    account_factory(name="Theirs", owner=other_user)

    names = [a.name for a in svc.list_accounts(ctx, user_id=user.id, is_active=True)]

    assert names == ["Open"]


def test_get_other_users_account(ctx, user, other_user, account_factory):
    foreign = account_factory(owner=other_user)

    with pytest.raises(NotFoundError):
        svc.get_account(ctx, foreign.id, user_id=user.id)


def test_delete_account_keeps_transactions(ctx, user, account_factory, rows_of):
    account = account_factory(balance=50.0)
    svc.transfer_funds(
        ctx,
        user_id=user.id,
        from_account_id=account.id,
        to_account_id=account_factory(name="Other").id,
        amount=10.0,
    )

    svc.delete_account(ctx, account.id, user_id=user.id)

    assert [a.name for a in rows_of(Account)] == ["Other"]
    assert len(rows_of(Transaction)) == 1


class TestTransfer:
    def test_moves_money_and_records_one_transfer(self, ctx, user, account_factory, balance_of, rows_of):
        source = account_factory(name="Checking", balance=500.0)
        target = account_factory(name="Savings", balance=100.0)

        txn = svc.transfer_funds(
            ctx,
            user_id=user.id,
            from_account_id=source.id,
            to_account_id=target.id,
            amount=125.5,
            description="monthly",
        )

        assert_float_equal(balance_of(source.id), 374.5)
        assert_float_equal(balance_of(target.id), 225.5)
        assert txn.kind == "transfer"
        assert txn.category == "Account Transfer"
        assert txn.description == "Transfer from Checking to Savings: monthly"
        assert len(rows_of(Transaction)) == 1

    def test_same_account(self, ctx, user, account_factory):
        account = account_factory(balance=500.0)

        with pytest.raises(ValidationError) as exc_info:
            svc.transfer_funds(
                ctx,
                user_id=user.id,
                from_account_id=account.id,
                to_account_id=account.id,
                amount=10.0,
            )

        assert exc_info.value.message == "Cannot transfer to the same account"

    def test_insufficient_funds(self, ctx, user, account_factory, balance_of):
        source = account_factory(balance=20.0)
        target = account_factory(name="Savings")

        with pytest.raises(ValidationError) as exc_info:
            svc.transfer_funds(
                ctx,
                user_id=user.id,
                from_account_id=source.id,
                to_account_id=target.id,
                amount=20.01,
            )

        assert exc_info.value.message == "Insufficient funds in source account"
        assert balance_of(source.id) == 20.0

    def test_foreign_destination(self, ctx, user, other_user, account_factory):
        source = account_factory(balance=500.0)
        foreign = account_factory(owner=other_user)

        with pytest.raises(NotFoundError):
            svc.transfer_funds(
                ctx,
                user_id=user.id,
                from_account_id=source.id,
                to_account_id=foreign.id,
                amount=1.0,
            )

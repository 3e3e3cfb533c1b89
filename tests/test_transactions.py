"""Tests for the transaction lifecycle and its balance bookkeeping."""

from __future__ import annotations

from datetime import date

import pytest

from spendwell.constants import UNKNOWN_ACCOUNT
from spendwell.errors import NotFoundError, ValidationError
from spendwell.models import Transaction
from spendwell.services import savings
from spendwell.services import transactions as svc
from spendwell.services.accounts import delete_account, transfer_funds
from tests.conftest import assert_float_equal


def _post(ctx, user, account, kind="expense", amount=10.0, **overrides):
    values = {
        "user_id": user.id,
        "account_id": account.id,
        "kind": kind,
        "amount": amount,
        "description": f"{kind} {amount}",
        "category": "General",
        "txn_date": date(2024, 3, 15),
    }
    values.update(overrides)
    return svc.create_transaction(ctx, **values)


class TestCreate:
    def test_income_adds_to_balance(self, ctx, user, account_factory, balance_of):
        account = account_factory(balance=100.0)

        outcome = _post(ctx, user, account, kind="income", amount=50.0)

        assert outcome.account_name == account.name
        assert outcome.transaction.id is not None
        assert outcome.side_effects == []
        assert_float_equal(balance_of(account.id), 150.0)

    def test_expense_subtracts_and_runs_side_effects(
        self, ctx, user, account_factory, balance_of
    ):
        account = account_factory(balance=100.0)

        outcome = _post(ctx, user, account, amount=40.0)

        assert_float_equal(balance_of(account.id), 60.0)
        assert [effect.name for effect in outcome.side_effects] == [
            "savings_deduction",
            "savings_progress",
        ]
        assert all(effect.succeeded for effect in outcome.side_effects)

    def test_default_time_label(self, ctx, user, account_factory):
        account = account_factory(balance=100.0)

        outcome = _post(ctx, user, account)

        assert outcome.transaction.time.endswith(("AM", "PM"))

    def test_explicit_time_is_kept(self, ctx, user, account_factory):
        account = account_factory(balance=100.0)

        outcome = _post(ctx, user, account, time="07:45 AM")

        assert outcome.transaction.time == "07:45 AM"

    def test_other_users_account_is_not_found(
        self, ctx, user, other_user, account_factory, rows_of
    ):
        foreign = account_factory(owner=other_user, balance=100.0)

        with pytest.raises(NotFoundError):
            _post(ctx, user, foreign)

        assert rows_of(Transaction) == []

    def test_rejects_unknown_kind(self, ctx, user, account_factory):
        account = account_factory()

        with pytest.raises(ValidationError):
            _post(ctx, user, account, kind="refund")

    def test_side_effect_failure_keeps_primary_effect(
        self, ctx, user, account_factory, balance_of, rows_of, monkeypatch
    ):
        account = account_factory(balance=100.0)

        def _boom(*args, **kwargs):
            raise RuntimeError("savings store offline")

        monkeypatch.setattr(savings, "evaluate_overspend", _boom)

        outcome = _post(ctx, user, account, amount=30.0)

        deduction, progress = outcome.side_effects
        assert deduction.succeeded is False
        assert "offline" in deduction.error
        assert progress.succeeded is True
        assert_float_equal(balance_of(account.id), 70.0)
        assert len(rows_of(Transaction)) == 1

    def test_progress_failure_keeps_balance_and_deduction(
        self, ctx, user, account_factory, target_factory, balance_of, saved_of, monkeypatch
    ):
        account = account_factory(balance=100.0)
        target = target_factory(account, target_amount=150.0, current_amount=80.0)

        def _boom(*args, **kwargs):
            raise RuntimeError("progress writer offline")

        monkeypatch.setattr(savings, "apply_expense_progress", _boom)

        outcome = _post(ctx, user, account, amount=30.0)

        deduction, progress = outcome.side_effects
        assert deduction.succeeded is True
        assert_float_equal(deduction.result, 80.0)
        assert progress.succeeded is False
        assert "offline" in progress.error
        assert_float_equal(balance_of(account.id), 70.0)
        assert saved_of(target.id) == 0.0

    def test_rejects_transfer_kind(self, ctx, user, account_factory, balance_of, rows_of):
        account = account_factory(balance=300.0)

        with pytest.raises(ValidationError) as exc_info:
            _post(ctx, user, account, kind="transfer", amount=50.0)

        assert "type" in exc_info.value.errors
        assert_float_equal(balance_of(account.id), 300.0)
        assert rows_of(Transaction) == []

    def test_amount_rounding_to_zero_is_rejected(self, ctx, user, account_factory, rows_of):
        account = account_factory(balance=100.0)

        with pytest.raises(ValidationError) as exc_info:
            _post(ctx, user, account, amount=0.004)

        assert "amount" in exc_info.value.errors
        assert rows_of(Transaction) == []


class TestUpdate:
    def test_amount_change_applies_net_delta(self, ctx, user, account_factory, balance_of):
        account = account_factory(balance=100.0)
        txn = _post(ctx, user, account, amount=20.0).transaction

        svc.update_transaction(ctx, txn.id, user_id=user.id, amount=35.0)

        assert_float_equal(balance_of(account.id), 65.0)

    def test_kind_flip_applies_both_sides(self, ctx, user, account_factory, balance_of):
        account = account_factory(balance=100.0)
        txn = _post(ctx, user, account, amount=50.0).transaction

        updated = svc.update_transaction(
            ctx, txn.id, user_id=user.id, kind="income", amount=30.0
        )

        assert updated.kind == "income"
        assert_float_equal(balance_of(account.id), 130.0)

    def test_description_only_leaves_balance(self, ctx, user, account_factory, balance_of):
        account = account_factory(balance=100.0)
        txn = _post(ctx, user, account, amount=20.0).transaction

        updated = svc.update_transaction(ctx, txn.id, user_id=user.id, description="Lunch")

        assert updated.description == "Lunch"
        assert_float_equal(balance_of(account.id), 80.0)

    def test_update_does_not_touch_savings(
        self, ctx, user, account_factory, target_factory, saved_of
    ):
        account = account_factory(balance=5000.0)
        txn = _post(ctx, user, account, amount=20.0).transaction
        target = target_factory(account, current_amount=100.0)

        svc.update_transaction(ctx, txn.id, user_id=user.id, amount=80.0)

        assert saved_of(target.id) == 100.0

    def test_moving_account_reverses_and_reapplies(
        self, ctx, user, account_factory, balance_of
    ):
        first = account_factory(name="First", balance=100.0)
        second = account_factory(name="Second", balance=100.0)
        txn = _post(ctx, user, first, amount=25.0).transaction

        svc.update_transaction(ctx, txn.id, user_id=user.id, account_id=second.id)

        assert_float_equal(balance_of(first.id), 100.0)
        assert_float_equal(balance_of(second.id), 75.0)

    def test_unknown_transaction(self, ctx, user):
        with pytest.raises(NotFoundError):
            svc.update_transaction(ctx, 404, user_id=user.id, amount=5.0)

    def test_rejects_unknown_field(self, ctx, user, account_factory):
        account = account_factory(balance=100.0)
        txn = _post(ctx, user, account).transaction

        with pytest.raises(ValidationError) as exc_info:
            svc.update_transaction(ctx, txn.id, user_id=user.id, user_id_override=3)

        assert "user_id_override" in exc_info.value.errors


    def test_cannot_switch_to_transfer(self, ctx, user, account_factory, balance_of):
        account = account_factory(balance=100.0)
        txn = _post(ctx, user, account, amount=40.0).transaction

        with pytest.raises(ValidationError):
            svc.update_transaction(ctx, txn.id, user_id=user.id, kind="transfer")

        assert_float_equal(balance_of(account.id), 60.0)

    def test_amount_rounding_to_zero_is_rejected(self, ctx, user, account_factory, balance_of):
        account = account_factory(balance=100.0)
        txn = _post(ctx, user, account, amount=40.0).transaction

        with pytest.raises(ValidationError):
            svc.update_transaction(ctx, txn.id, user_id=user.id, amount=0.001)

        assert_float_equal(balance_of(account.id), 60.0)


class TestDelete:
    def test_create_then_delete_restores_balance(self, ctx, user, account_factory, balance_of):
        account = account_factory(balance=123.45)

        txn = _post(ctx, user, account, amount=23.45).transaction
        svc.delete_transaction(ctx, txn.id, user_id=user.id)

        assert balance_of(account.id) == 123.45

    def test_delete_income_reverses(self, ctx, user, account_factory, balance_of, rows_of):
        account = account_factory(balance=10.0)
        txn = _post(ctx, user, account, kind="income", amount=90.0).transaction

        svc.delete_transaction(ctx, txn.id, user_id=user.id)

        assert_float_equal(balance_of(account.id), 10.0)
        assert rows_of(Transaction) == []

    def test_delete_after_account_removed(self, ctx, user, account_factory, rows_of):
        account = account_factory(balance=10.0)
        txn = _post(ctx, user, account, amount=5.0).transaction
        delete_account(ctx, account.id, user_id=user.id)

        svc.delete_transaction(ctx, txn.id, user_id=user.id)

        assert rows_of(Transaction) == []

    def test_other_user_cannot_delete(self, ctx, user, other_user, account_factory):
        account = account_factory(balance=10.0)
        txn = _post(ctx, user, account, amount=5.0).transaction

        with pytest.raises(NotFoundError):
            svc.delete_transaction(ctx, txn.id, user_id=other_user.id)

    def test_delete_leaves_savings_untouched(
        self, ctx, user, account_factory, target_factory, balance_of, saved_of
    ):
        account = account_factory(balance=5000.0)
        target = target_factory(account, target_amount=1000.0, current_amount=100.0)
        txn = _post(ctx, user, account, amount=40.0).transaction
        assert saved_of(target.id) == 140.0

        svc.delete_transaction(ctx, txn.id, user_id=user.id)

        assert saved_of(target.id) == 140.0
        assert_float_equal(balance_of(account.id), 5000.0)


class TestTransferRecords:
    @pytest.fixture
    def transfer(self, ctx, user, account_factory):
        source = account_factory(name="Checking", balance=500.0)
        destination = account_factory(name="Wallet", balance=0.0)
        txn = transfer_funds(
            ctx,
            user_id=user.id,
            from_account_id=source.id,
            to_account_id=destination.id,
            amount=200.0,
        )
        return source, destination, txn

    def test_delete_is_rejected(self, ctx, user, transfer, balance_of, rows_of):
        source, destination, txn = transfer

        with pytest.raises(ValidationError) as exc_info:
            svc.delete_transaction(ctx, txn.id, user_id=user.id)

        assert exc_info.value.message == "Transfer records cannot be changed or deleted"
        assert len(rows_of(Transaction)) == 1
        assert_float_equal(balance_of(source.id), 300.0)
        assert_float_equal(balance_of(destination.id), 200.0)

    @pytest.mark.parametrize(
        "changes",
        [{"kind": "expense"}, {"amount": 50.0}, {"description": "renamed"}],
    )
    def test_update_is_rejected(self, ctx, user, transfer, balance_of, changes):
        source, destination, txn = transfer

        with pytest.raises(ValidationError):
            svc.update_transaction(ctx, txn.id, user_id=user.id, **changes)

        assert_float_equal(balance_of(source.id), 300.0)
        assert_float_equal(balance_of(destination.id), 200.0)


def test_balance_tracks_net_set_of_transactions(ctx, user, account_factory, balance_of):
    account = account_factory(balance=500.0)

    salary = _post(ctx, user, account, kind="income", amount=1200.0).transaction
    rent = _post(ctx, user, account, amount=800.0).transaction
    coffee = _post(ctx, user, account, amount=4.5).transaction
    groceries = _post(ctx, user, account, amount=62.3).transaction

    svc.update_transaction(ctx, rent.id, user_id=user.id, amount=750.0)
    svc.update_transaction(ctx, salary.id, user_id=user.id, amount=1250.0)
    svc.delete_transaction(ctx, coffee.id, user_id=user.id)
    svc.update_transaction(ctx, groceries.id, user_id=user.id, kind="income")

    # 500 + 1250 - 750 + 62.30
    assert_float_equal(balance_of(account.id), 1062.3)


def test_list_orders_newest_first_with_account_name(ctx, user, account_factory):
    account = account_factory(name="Wallet", balance=100.0)
    _post(ctx, user, account, amount=1.0, txn_date=date(2024, 3, 1))
    _post(ctx, user, account, amount=2.0, txn_date=date(2024, 3, 20))
    _post(ctx, user, account, amount=3.0, txn_date=date(2024, 3, 20))

    rows = svc.list_transactions(ctx, user_id=user.id)

    assert [row.transaction.amount for row in rows] == [3.0, 2.0, 1.0]
    assert {row.account_name for row in rows} == {"Wallet"}


def test_list_filters(ctx, user, account_factory):
    account = account_factory(balance=100.0)
    _post(ctx, user, account, kind="income", amount=10.0, category="Salary")
    _post(ctx, user, account, amount=5.0, category="Food", txn_date=date(2024, 4, 2))

    expenses = svc.list_transactions(ctx, user_id=user.id, kind="expense")
    march = svc.list_transactions(
        ctx, user_id=user.id, start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)
    )
    limited = svc.list_transactions(ctx, user_id=user.id, limit=1)

    assert [row.transaction.category for row in expenses] == ["Food"]
    assert [row.transaction.category for row in march] == ["Salary"]
    assert len(limited) == 1


def test_list_falls_back_to_unknown_account(ctx, user, account_factory):
    account = account_factory(balance=100.0)
    _post(ctx, user, account, amount=5.0)
    delete_account(ctx, account.id, user_id=user.id)

    rows = svc.list_transactions(ctx, user_id=user.id)

    assert rows[0].account_name == UNKNOWN_ACCOUNT


def test_analytics_groups_by_kind_and_category(ctx, user, account_factory):
    account = account_factory(balance=1000.0)
    _post(ctx, user, account, amount=10.0, category="Food")
    _post(ctx, user, account, amount=15.0, category="Food")
    _post(ctx, user, account, amount=40.0, category="Travel")
    _post(ctx, user, account, kind="income", amount=500.0, category="Salary")

    data = svc.transaction_analytics(
        ctx, user_id=user.id, start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)
    )

    assert data["expense"]["total_amount"] == 65.0
    assert data["expense"]["total_count"] == 3
    assert data["expense"]["categories"][0] == {"category": "Travel", "total": 40.0, "count": 1}
    assert data["income"]["categories"] == [{"category": "Salary", "total": 500.0, "count": 1}]


def test_analytics_requires_dates(ctx, user):
    with pytest.raises(ValidationError) as exc_info:
        svc.transaction_analytics(ctx, user_id=user.id, start_date=None, end_date=None)

    assert set(exc_info.value.errors) == {"start_date", "end_date"}


def test_monthly_summary(ctx, user, account_factory):
    account = account_factory(balance=1000.0)
    _post(ctx, user, account, kind="income", amount=300.0)
    _post(ctx, user, account, amount=120.0)

    summary = svc.monthly_summary(ctx, user_id=user.id, year=2024, month=3)

    assert summary["income"] == 300.0
    assert summary["expense"] == 120.0
    assert summary["net"] == 180.0
    assert summary["count"] == 2

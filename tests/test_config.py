"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from spendwell import create_app
from spendwell.config import BaseConfig, DevConfig, TestConfig


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    for name in (
        "SPENDWELL_SECRET_KEY",
        "SPENDWELL_DEV_MODE",
        "SPENDWELL_DATABASE_URL",
        "SPENDWELL_DASHBOARD_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SPENDWELL_DATA_DIR", str(tmp_path))


def test_defaults_use_sqlite_under_data_dir(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == tmp_path.resolve()
    assert config.DATABASE_URL == f"sqlite:///{tmp_path.resolve() / 'spendwell.db'}"
    assert config.DASHBOARD_WORKERS == 6
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_database_url_override(monkeypatch):
    monkeypatch.setenv("SPENDWELL_DATABASE_URL", "postgresql://ledger@db/spendwell")

    config = BaseConfig()

    assert config.DATABASE_URL == "postgresql://ledger@db/spendwell"
    assert config.sqlalchemy_engine_options() == {"pool_pre_ping": True}


def test_non_dev_mode_requires_secret(monkeypatch):
    monkeypatch.setenv("SPENDWELL_DEV_MODE", "false")

    with pytest.raises(ValueError, match="SPENDWELL_SECRET_KEY"):
        BaseConfig()

    monkeypatch.setenv("SPENDWELL_SECRET_KEY", "s3cret")
    assert BaseConfig().DEV_MODE is False


@pytest.mark.parametrize("value", ["0", "-2"])
def test_dashboard_workers_must_be_positive(monkeypatch, value):
    monkeypatch.setenv("SPENDWELL_DASHBOARD_WORKERS", value)

    with pytest.raises(ValueError):
        BaseConfig()


def test_dashboard_workers_must_be_a_number(monkeypatch):
    monkeypatch.setenv("SPENDWELL_DASHBOARD_WORKERS", "lots")

    with pytest.raises(ValueError, match="whole number"):
        BaseConfig()


def test_environment_classes():
    assert DevConfig().DEBUG is True
    testing = TestConfig()
    assert testing.TESTING is True
    assert testing.DEV_MODE is True


def test_create_app_registers_api(tmp_path):
    app = create_app("testing")

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/api/accounts" in rules
    assert "/api/target-savings/overview" in rules
    assert "/api/dashboard" in rules
    assert app.config["TESTING"] is True
    assert (tmp_path / "spendwell.db").exists()


def test_sqlite_connections_enforce_foreign_keys():
    app = create_app("testing")

    with app.extensions["spendwell.engine"].connect() as connection:
        assert connection.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
        assert connection.exec_driver_sql("PRAGMA journal_mode").scalar() == "wal"

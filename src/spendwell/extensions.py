"""Database and extension wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .context import LedgerContext, build_context
from .infra.database import create_db_engine, create_session_factory, init_database

EXTENSION_KEY = "spendwell"


def init_db(app: Flask) -> LedgerContext:
    """Create the engine, ensure the schema and attach a ledger context to the app."""

    config: BaseConfig = app.config["SPENDWELL_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)
    ctx = build_context(
        create_session_factory(engine), dashboard_workers=config.DASHBOARD_WORKERS
    )
    app.extensions[EXTENSION_KEY] = ctx
    app.extensions[f"{EXTENSION_KEY}.engine"] = engine
    # TODO(@migrations): replace create_all with Alembic revisions once the schema settles.
    return ctx


def get_context() -> LedgerContext:
    """Return the ledger context of the active application."""

    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError as exc:  # pragma: no cover - misconfigured app
        raise RuntimeError("Database not initialized; call init_db(app) first") from exc


def get_engine():
    """Return the engine bound to the active application."""

    return current_app.extensions[f"{EXTENSION_KEY}.engine"]

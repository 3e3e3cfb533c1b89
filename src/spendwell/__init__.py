"""Spendwell application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "spendwell.blueprints.accounts"
    yield "spendwell.blueprints.transactions"
    yield "spendwell.blueprints.borrowings"
    yield "spendwell.blueprints.target_savings"
    yield "spendwell.blueprints.budgets"
    yield "spendwell.blueprints.fixed_expenses"
    yield "spendwell.blueprints.possible_expenses"
    yield "spendwell.blueprints.dashboard"


def create_app(config: str | BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance.

    ``config`` is either an environment name (see ``_CONFIG_MAP``) or a
    ready-made config object.
    """

    app = Flask(__name__, instance_relative_config=True)
    if isinstance(config, BaseConfig):
        config_obj = config
    else:
        config_obj = _resolve_config(config)()
    app.config.from_object(config_obj)
    app.config["SPENDWELL_CONFIG"] = config_obj

    from .logging_config import setup_logging

    setup_logging(config_obj)

    # Imported lazily so model metadata is only built once an app exists.
    from .extensions import init_db
    from .responses import register_error_handlers

    init_db(app)
    register_error_handlers(app)
    _register_blueprints(app)

    @app.get("/api/health")
    def health():
        return {"success": True, "message": f"{config_obj.APP_NAME} API is running"}

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["create_app", "BaseConfig", "DevConfig", "TestConfig"]

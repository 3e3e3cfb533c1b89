"""Possible expenses blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("possible_expenses", __name__, url_prefix="/api/possible-expenses")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]

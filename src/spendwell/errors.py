"""Failure types raised by ledger services and the helpers that build them."""

from __future__ import annotations

import functools
from typing import Any, Callable, Mapping, Optional, TypeVar

from .logging_config import get_logger

logger = get_logger("errors")

F = TypeVar("F", bound=Callable[..., Any])


class LedgerError(ValueError):
    """Base class for expected, caller-facing failures.

    Subclasses carry the HTTP status the JSON layer answers with, so the
    services never need to know about Flask.
    """

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Invalid input or a rule violation (duplicate budget, same-account transfer)."""

    def __init__(self, message: str, errors: Optional[Mapping[str, list[str]]] = None) -> None:
        super().__init__(message)
        self.errors: dict[str, list[str]] = dict(errors or {})


class NotFoundError(LedgerError):
    """Entity absent, or not owned by the caller."""

    status_code = 404


class ForbiddenError(LedgerError):
    """Entity exists but belongs to another user."""

    status_code = 403


class InternalFailure(RuntimeError):
    """Unexpected fault inside an operation; the cause is logged, not exposed."""

    status_code = 500

    def __init__(self, operation: str) -> None:
        super().__init__(f"Error while trying to {operation}")
        self.operation = operation
        self.message = str(self)


def operation(name: str) -> Callable[[F], F]:
    """Tag a service entry point so unexpected faults surface as ``InternalFailure``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (LedgerError, InternalFailure):
                raise
            except Exception as exc:
                logger.exception(
                    "Operation failed: %s", name, extra={"operation": name}
                )
                raise InternalFailure(name) from exc

        return wrapper  # type: ignore[return-value]

    return decorator


def not_found(entity: str) -> NotFoundError:
    return NotFoundError(f"{entity} not found")


def account_not_found() -> NotFoundError:
    return NotFoundError("Account not found")


def access_denied(entity: str) -> ForbiddenError:
    return ForbiddenError(f"Access denied: {entity} does not belong to you")


class AuthenticationRequired(LedgerError):
    """Request reached the API without an authenticated user id."""

    status_code = 401

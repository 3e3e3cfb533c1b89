"""Result channel for non-critical side effects.

Side effects such as savings deductions must never fail the primary
operation. Each attempt is recorded as a :class:`SideEffect` so callers and
logs can see what ran and what did not.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..logging_config import get_logger

logger = get_logger("services.effects")


@dataclass(slots=True)
class SideEffect:
    """Outcome of one best-effort step."""

    name: str
    succeeded: bool
    result: Any = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "succeeded": self.succeeded,
            "result": self.result,
            "error": self.error,
        }


def attempt(name: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> SideEffect:
    """Run ``func`` and capture its outcome instead of raising."""

    try:
        result = func(*args, **kwargs)
    except Exception as exc:
        logger.warning(
            "Side effect failed: %s",
            name,
            exc_info=True,
            extra={"side_effect": name},
        )
        return SideEffect(name=name, succeeded=False, error=str(exc) or type(exc).__name__)
    return SideEffect(name=name, succeeded=True, result=result)

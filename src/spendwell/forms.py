"""Base class for JSON request forms.

Forms bind a request mapping, validate it into typed attributes and collect
per-field error messages. In ``partial`` mode (updates) only the keys present
in the payload are validated and reported by :meth:`JSONForm.changes`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar, Iterable, Optional

from .errors import ValidationError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(slots=True)
class JSONForm:
    """Shared binding and parsing helpers for JSON payloads."""

    # Payload key -> attribute name.
    FIELDS: ClassVar[dict[str, str]] = {}

    partial: bool = False
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, Any] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]], *, partial: bool = False):
        """Create a form populated from request data."""

        form = cls(partial=partial)
        form.load(data or {})
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Keep only the keys this form knows about."""

        self.raw_data = {key: data[key] for key in self.FIELDS if key in data}

    def validate(self) -> bool:  # pragma: no cover - overridden
        raise NotImplementedError

    def validate_or_raise(self) -> None:
        if not self.validate():
            raise ValidationError("Validation failed", self.errors)

    def changes(self) -> dict[str, Any]:
        """Typed values for the keys present in the payload."""

        return {
            attr: getattr(self, attr) for key, attr in self.FIELDS.items() if key in self.raw_data
        }

    def _add_error(self, field_name: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field_name, []).append(message)

    def _raw(self, key: str) -> Any:
        value = self.raw_data.get(key)
        if isinstance(value, str):
            value = value.strip()
        return None if value == "" else value

    def _missing(self, key: str, required: bool) -> bool:
        """True when the value is absent; records an error if it was required."""

        if self._raw(key) is not None:
            return False
        if required and not (self.partial and key not in self.raw_data):
            self._add_error(key, "This field is required.")
        return True

    def _text(self, key: str, *, required: bool = True, max_length: int = 255) -> Optional[str]:
        if self._missing(key, required):
            return None if required else ""
        value = str(self._raw(key))
        if len(value) > max_length:
            self._add_error(key, f"Must be {max_length} characters or fewer.")
        return value

    def _amount(self, key: str, *, required: bool = True, minimum: float = 0.01) -> Optional[float]:
        if self._missing(key, required):
            return None
        raw = self._raw(key)
        if isinstance(raw, bool):
            self._add_error(key, "Enter a valid number.")
            return None
        try:
            value = float(raw)
        except (TypeError, ValueError):
            self._add_error(key, "Enter a valid number.")
            return None
        if value < minimum:
            self._add_error(key, f"Must be at least {minimum:g}.")
            return None
        return round(value, 2)

    def _int(
        self,
        key: str,
        *,
        required: bool = True,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ) -> Optional[int]:
        if self._missing(key, required):
            return None
        raw = self._raw(key)
        if isinstance(raw, bool):
            self._add_error(key, "Must be a whole number.")
            return None
        try:
            value = int(raw)
        except (TypeError, ValueError):
            self._add_error(key, "Must be a whole number.")
            return None
        if minimum is not None and value < minimum:
            self._add_error(key, f"Must be at least {minimum}.")
        elif maximum is not None and value > maximum:
            self._add_error(key, f"Must be at most {maximum}.")
        return value

    def _date(self, key: str, *, required: bool = False) -> Optional[date]:
        if self._missing(key, required):
            return None
        raw = str(self._raw(key))
        try:
            if len(raw) == 10:
                return datetime.strptime(raw, "%Y-%m-%d").date()
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            self._add_error(key, "Enter a valid date (YYYY-MM-DD).")
            return None

    def _bool(self, key: str, *, required: bool = False) -> Optional[bool]:
        if self._missing(key, required):
            return None
        raw = self._raw(key)
        if isinstance(raw, bool):
            return raw
        lowered = str(raw).lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        self._add_error(key, "Must be true or false.")
        return None

    def _choice(self, key: str, choices: Iterable[str], *, required: bool = True) -> Optional[str]:
        if self._missing(key, required):
            return None
        value = str(self._raw(key))
        options = tuple(choices)
        if value not in options:
            self._add_error(key, f"Must be one of: {', '.join(options)}.")
            return None
        return value


def parse_bool_arg(value: Optional[str]) -> Optional[bool]:
    """Interpret an optional query-string flag."""

    if value is None or not value.strip():
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValidationError("Validation failed", {"query": [f"Invalid boolean value: {value!r}."]})


def parse_date_arg(name: str, value: Optional[str]) -> Optional[date]:
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(
            "Validation failed", {name: ["Enter a valid date (YYYY-MM-DD)."]}
        ) from exc


def parse_int_arg(name: str, value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValidationError("Validation failed", {name: ["Must be a whole number."]}) from exc

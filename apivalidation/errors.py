"""
Error types for apivalidation.

Field-level problems are reported as values (``Err``) carrying a
:class:`FieldError` or an aggregated :class:`ValidationErrors`. Mistakes in how
rules were declared raise :class:`BindingError`; rule documentation failures
surface from schema generation as :class:`SchemaError`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Union


class FieldError(ValueError):
    """A single rule's verdict that a value is invalid."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"FieldError({self.message!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldError):
            return self.message == other.message
        if isinstance(other, str):
            return self.message == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.message)


RuleError = Union[FieldError, "ValidationErrors"]


class ValidationErrors(ValueError, Mapping[str, RuleError]):
    """
    Keyed collection of field and element failures.

    Keys are field keys, sequence indexes or stringified mapping keys. Values
    are either a FieldError or a nested ValidationErrors for containers and
    collections.

    str() renders a flat, deterministic form sorted by key:
        "Fees: (1: (PaymentType: cannot be blank.).); Title: cannot be blank."
    """

    def __init__(self, errors: Mapping[str, RuleError] | None = None):
        self._errors: dict[str, RuleError] = dict(errors or {})
        super().__init__(str(self))

    def __getitem__(self, key: str) -> RuleError:
        return self._errors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        if not self._errors:
            return ""
        parts = []
        for key in sorted(self._errors):
            err = self._errors[key]
            if isinstance(err, ValidationErrors):
                parts.append(f"{key}: ({err})")
            else:
                parts.append(f"{key}: {err}")
        return "; ".join(parts) + "."

    def __repr__(self) -> str:
        return f"ValidationErrors({self._errors!r})"

    def to_dict(self) -> dict[str, Any]:
        """Nested plain-dict form suitable for JSON encoding."""
        out: dict[str, Any] = {}
        for key in sorted(self._errors):
            err = self._errors[key]
            if isinstance(err, ValidationErrors):
                out[key] = err.to_dict()
            else:
                out[key] = str(err)
        return out


class BindingError(TypeError):
    """A rule binding does not match the container it was declared on."""


class SchemaError(ValueError):
    """A rule could not describe itself onto a schema node."""

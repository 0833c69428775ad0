"""
The rule contract and helpers shared by the built-in rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sized
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from ..errors import FieldError, RuleError, SchemaError
from ..types import Err, Ok

if TYPE_CHECKING:
    from ..schema import SchemaAccumulator


class Rule(ABC):
    """
    A unit of validation logic plus its documentation.

    validate() receives the field value and returns Ok(value) or
    Err(FieldError | ValidationErrors). Most rules treat empty values as valid
    and leave emptiness to Required.

    describe() decorates the schema accumulator from static information only;
    it never sees live data.
    """

    @abstractmethod
    def validate(self, value: Any) -> Ok[Any] | Err[RuleError]: ...

    @abstractmethod
    def describe(self, name: str, acc: SchemaAccumulator) -> Ok[None] | Err[SchemaError]: ...

    def skips_rest(self) -> bool:
        """True when the remaining rules of the field must not run."""
        return False


class DocRule(Rule):
    """A documentation-only rule; validation always passes."""

    def validate(self, value: Any) -> Ok[Any]:
        return Ok(value)


def is_empty(value: Any) -> bool:
    """
    Check if a value is considered empty.

    None, empty strings and collections, numeric zero and False are empty.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def invalid(message: str, code: str | None = None) -> Err[FieldError]:
    return Err(FieldError(message, code))


def plain(value: Any) -> Any:
    """Strip Enum and scalar subclasses down to JSON-friendly builtins."""
    if isinstance(value, Enum):
        value = value.value
    for base in (bool, str, int, float):
        if isinstance(value, base):
            return base(value)
    return value


def quoted(values: Iterable[Any]) -> str:
    return ", ".join(f"'{plain(v)}'" for v in values)


def run_rules(rules: Iterable[Rule], value: Any) -> Ok[Any] | Err[RuleError]:
    """Apply rules in order, stopping at the first failure or active skip."""
    for rule in rules:
        if rule.skips_rest():
            break
        result = rule.validate(value)
        if isinstance(result, Err):
            return result
    return Ok(value)

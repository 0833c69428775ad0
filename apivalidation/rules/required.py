"""
Presence rules: Required, NotNil, Nil, Empty.
"""

from __future__ import annotations

from typing import Any

from ..schema import SchemaAccumulator
from ..types import Ok
from .base import Rule, invalid, is_empty


class RequiredRule(Rule):
    """
    Rejects empty values: None, "", empty collections, zero and False.

    Required.when(cond) only enforces (and documents) the requirement while
    cond holds.
    """

    def __init__(self, condition: bool = True):
        self.condition = condition

    def when(self, condition: bool) -> RequiredRule:
        return RequiredRule(bool(condition))

    def validate(self, value: Any):
        if self.condition and is_empty(value):
            return invalid("cannot be blank", "validation_required")
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        if self.condition:
            acc.require(name)
        return Ok()

    def __repr__(self) -> str:
        return "Required"


class NotNilRule(Rule):
    """Rejects None but accepts other empty values."""

    def validate(self, value: Any):
        if value is None:
            return invalid("is required", "validation_not_nil_required")
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.prop.nullable = False
        return Ok()

    def __repr__(self) -> str:
        return "NotNil"


class AbsentRule(Rule):
    """Requires the value to be None (Nil) or empty (Empty)."""

    def __init__(self, skip_nil: bool):
        self.skip_nil = skip_nil

    def validate(self, value: Any):
        if self.skip_nil:
            if not is_empty(value):
                return invalid("must be blank", "validation_empty")
        elif value is not None:
            return invalid("must be blank", "validation_nil")
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.add_description("empty" if self.skip_nil else "null")
        return Ok()

    def __repr__(self) -> str:
        return "Empty" if self.skip_nil else "Nil"


Required = RequiredRule()
NotNil = NotNilRule()
Nil = AbsentRule(skip_nil=False)
Empty = AbsentRule(skip_nil=True)

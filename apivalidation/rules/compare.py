"""
Membership and bound rules: In, KeyIn, Min, Max, Length.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sized
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel

from ..schema import SchemaAccumulator
from ..types import Ok
from .base import Rule, invalid, is_empty, plain, quoted


class In(Rule):
    """
    Value must be one of the given values.

    Enum members and scalar subclasses compare by their plain value, so
    In("ach", "cc") accepts both "ach" and PaymentMethod("ach").
    """

    def __init__(self, *values: Any):
        self.values = tuple(values)
        self._plain = [plain(v) for v in values]

    def validate(self, value: Any):
        if is_empty(value):
            return Ok(value)
        if value in self.values or plain(value) in self._plain:
            return Ok(value)
        return invalid(
            f"must be one of {quoted(self.values)} got '{plain(value)}'", "validation_in_invalid"
        )

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.prop.enum = list(self._plain)
        return Ok()

    def __repr__(self) -> str:
        return f"In({', '.join(repr(v) for v in self.values)})"


def _keys(value: Any) -> list[str] | None:
    if isinstance(value, Mapping):
        return [str(k) for k in value]
    if isinstance(value, BaseModel):
        return list(value.model_dump(by_alias=True))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [f.name for f in dataclasses.fields(value)]
    return None


class KeyIn(Rule):
    """Every key of a mapping (or serialized container) must be allowed."""

    def __init__(self, *keys: str):
        self.keys = tuple(keys)

    def validate(self, value: Any):
        if value is None:
            return Ok(value)
        keys = _keys(value)
        if keys is None:
            return invalid("must be a mapping", "validation_key_in_type")
        for key in keys:
            if key not in self.keys:
                return invalid(f"key '{key}' not allowed", "validation_key_in_invalid")
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.add_description(f"keys must be in ({','.join(self.keys)})")
        return Ok()


def _type_name(threshold: Any) -> str:
    return type(threshold).__name__


def _coerce(value: str, threshold: Any) -> Any:
    """Parse a numeric string the way the threshold's type would; raises ValueError."""
    if isinstance(threshold, bool):
        return value
    if isinstance(threshold, int):
        return int(value, 10)
    if isinstance(threshold, Decimal):
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise ValueError(value) from e
    if isinstance(threshold, float):
        return float(value)
    return value


class ThresholdRule(Rule):
    """
    Compares a value against a threshold.

    Numbers, Decimals, dates and datetimes compare natively. A string value is
    parsed using the threshold's type first, so Min(1) works on "12".
    """

    def __init__(self, threshold: Any, is_min: bool, exclusive: bool = False):
        self.threshold = threshold
        self.is_min = is_min
        self._exclusive = exclusive

    def exclusive(self) -> ThresholdRule:
        """A copy that excludes the threshold itself."""
        return type(self)(self.threshold, self.is_min, True)

    @property
    def message(self) -> str:
        if self.is_min:
            op = "be greater than" if self._exclusive else "be no less than"
        else:
            op = "be less than" if self._exclusive else "be no greater than"
        return f"must {op} {self.threshold}"

    def validate(self, value: Any):
        if is_empty(value):
            return Ok(value)
        subject = value
        if isinstance(value, str):
            try:
                subject = _coerce(value, self.threshold)
            except ValueError:
                expected = "an integer" if isinstance(self.threshold, int) else "a number"
                return invalid(f"must be {expected}", "validation_threshold_type")
        try:
            if self.is_min:
                ok = subject > self.threshold if self._exclusive else subject >= self.threshold
            else:
                ok = subject < self.threshold if self._exclusive else subject <= self.threshold
        except TypeError:
            return invalid(
                f"cannot compare {type(value).__name__} with {_type_name(self.threshold)}",
                "validation_threshold_type",
            )
        if ok:
            return Ok(value)
        kind = "min" if self.is_min else "max"
        if self._exclusive:
            kind += "_exclusive"
        return invalid(self.message, f"validation_{kind}_invalid")

    def describe(self, name: str, acc: SchemaAccumulator):
        prop = acc.prop
        if isinstance(self.threshold, (date, datetime)):
            bound = "> " if self.is_min else "< "
            acc.add_description(bound + self.threshold.isoformat())
            return Ok()
        if prop.type == "string":
            prop.format = _type_name(self.threshold)
        bound = float(self.threshold)
        if self.is_min:
            prop.minimum = bound
            if self._exclusive:
                prop.exclusive_minimum = True
        else:
            prop.maximum = bound
            if self._exclusive:
                prop.exclusive_maximum = True
        return Ok()

    def __repr__(self) -> str:
        name = "Min" if self.is_min else "Max"
        suffix = ".exclusive()" if self._exclusive else ""
        return f"{name}({self.threshold!r}){suffix}"


def Min(threshold: Any) -> ThresholdRule:
    """Value must be greater than or equal to threshold."""
    return ThresholdRule(threshold, is_min=True)


def Max(threshold: Any) -> ThresholdRule:
    """Value must be less than or equal to threshold."""
    return ThresholdRule(threshold, is_min=False)


class Length(Rule):
    """
    Length must lie within [lo, hi]; 0 leaves a side unbounded.

    Strings count characters. Length(0, 0) requires the value to be empty,
    which only a non-empty value can fail.
    """

    def __init__(self, lo: int, hi: int):
        self.lo = lo
        self.hi = hi

    @property
    def message(self) -> str:
        lo, hi = self.lo, self.hi
        if lo == 0 and hi == 0:
            return "the value must be empty"
        if lo == hi:
            return f"the length must be exactly {lo}"
        if lo == 0:
            return f"the length must be no more than {hi}"
        if hi == 0:
            return f"the length must be no less than {lo}"
        return f"the length must be between {lo} and {hi}"

    def validate(self, value: Any):
        if is_empty(value):
            return Ok(value)
        if not isinstance(value, Sized):
            return invalid("cannot get the length of " + type(value).__name__, "validation_length_type")
        n = len(value)
        lo, hi = self.lo, self.hi
        if (lo > 0 and n < lo) or (hi > 0 and n > hi) or (lo == 0 and hi == 0 and n > 0):
            code = "validation_length_empty_required" if lo == hi == 0 else "validation_length_out_of_range"
            return invalid(self.message, code)
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        prop = acc.prop
        lo = self.lo if self.lo > 0 else None
        hi = self.hi if self.hi > 0 else None
        if self.lo == 0 and self.hi == 0:
            hi = 0
        match prop.type:
            case "array":
                prop.min_items, prop.max_items = lo, hi
            case "object":
                prop.min_properties, prop.max_properties = lo, hi
            case _:
                prop.min_length, prop.max_length = lo, hi
        return Ok()

    def __repr__(self) -> str:
        return f"Length({self.lo}, {self.hi})"

"""
Sequence and mapping rules: Each and Unique.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import ValidationErrors
from ..schema import SchemaAccumulator
from ..types import Err, KeyFn, Ok
from .base import Rule, invalid, run_rules


class Each(Rule):
    """
    Applies rules to every element of a list, tuple, set or mapping values.

    Failures are collected into a ValidationErrors keyed by index (sequences)
    or stringified key (mappings). None elements are still passed to the
    rules, so Each(Required) rejects them.
    """

    def __init__(self, *rules: Rule):
        self.rules = tuple(rules)

    def validate(self, value: Any):
        if value is None:
            return Ok(value)
        if isinstance(value, Mapping):
            items = [(str(k), v) for k, v in value.items()]
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = [(str(i), v) for i, v in enumerate(value)]
        else:
            return invalid("must be an iterable (mapping, list or tuple)", "validation_each_iterable")
        errors = {}
        for key, element in items:
            result = run_rules(self.rules, element)
            if isinstance(result, Err):
                errors[key] = result.error
        if errors:
            return Err(ValidationErrors(errors))
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        target = acc.prop
        if target.type == "array" and target.items is not None:
            target = target.items
        inner = SchemaAccumulator(acc.parent, target)
        for rule in self.rules:
            result = rule.describe(name, inner)
            if isinstance(result, Err):
                return result
        return Ok()


class Unique(Rule):
    """
    Rejects sequences in which two elements share the same key.

        Unique(lambda fee: fee.payment_type, "payment types are unique")
    """

    def __init__(self, key: KeyFn, desc: str = ""):
        self.key = key
        self.desc = desc

    def validate(self, value: Any):
        if value is None:
            return Ok(value)
        if not isinstance(value, (list, tuple)):
            return invalid("must be a list", "validation_unique_type")
        hashed = set()
        unhashable = []
        for element in value:
            k = self.key(element)
            try:
                duplicate = k in hashed
                hashed.add(k)
            except TypeError:
                # Lists, dicts and other unhashable keys are compared by equality.
                duplicate = k in unhashable
                unhashable.append(k)
            if duplicate:
                return invalid("not unique", "validation_unique")
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.prop.unique_items = True
        return Ok()

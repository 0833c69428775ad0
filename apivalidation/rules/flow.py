"""
Rules that steer other rules: Custom, Skip, When.
"""

from __future__ import annotations

from typing import Any, Callable, Union

from ..errors import FieldError, SchemaError
from ..schema import Schema, SchemaAccumulator
from ..types import Err, Ok
from .base import Rule, plain, run_rules


class Custom(Rule):
    """
    Wraps a plain function as a rule.

    ``fn(value)`` returns None when the value is valid, otherwise a message
    string or an exception whose text becomes the message.

        def no_test_domains(email):
            if email.endswith("@example.com"):
                return "test domains are not allowed"

        Field("email", Custom(no_test_domains, "no test domains"))
    """

    def __init__(self, fn: Callable[[Any], Union[None, str, Exception]], desc: str = ""):
        self.fn = fn
        self.desc = desc

    def validate(self, value: Any):
        outcome = self.fn(value)
        if outcome is None:
            return Ok(value)
        if isinstance(outcome, FieldError):
            return Err(outcome)
        return Err(FieldError(str(outcome)))

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.add_description(self.desc)
        return Ok()


class Skip(Rule):
    """
    Stops the remaining rules of a field while active.

    Skip("optional for drafts").when(order.draft) skips only for drafts.
    """

    def __init__(self, desc: str = "", active: bool = True):
        self.desc = desc
        self.active = active

    def when(self, condition: bool) -> Skip:
        return Skip(self.desc, bool(condition))

    def skips_rest(self) -> bool:
        return self.active

    def validate(self, value: Any):
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.add_description(self.desc)
        return Ok()


class When(Rule):
    """
    Applies ``rules`` when the condition holds, the else_() rules otherwise.

    The schema gets a readable summary of both branches, for example
    "when paid by card: required, one of [visa, amex] else: empty".
    """

    def __init__(self, condition: bool, desc: str = "", *rules: Rule):
        self.condition = bool(condition)
        self.desc = desc
        self.rules = tuple(rules)
        self.else_rules: tuple[Rule, ...] = ()

    def else_(self, *rules: Rule) -> When:
        other = When(self.condition, self.desc, *self.rules)
        other.else_rules = tuple(rules)
        return other

    def validate(self, value: Any):
        return run_rules(self.rules if self.condition else self.else_rules, value)

    def describe(self, name: str, acc: SchemaAccumulator):
        try:
            when = summarize(name, self.rules)
            otherwise = summarize(name, self.else_rules)
        except SchemaError as e:
            return Err(e)
        if when:
            acc.add_description(f"when {self.desc}: {when}" if self.desc else when)
        if otherwise:
            acc.add_description("else: " + otherwise)
        return Ok()


def summarize(name: str, rules: tuple[Rule, ...]) -> str:
    """Describe rules onto a scratch schema and render what they set."""
    if not rules:
        return ""
    parent = Schema()
    prop = Schema()
    acc = SchemaAccumulator(parent, prop)
    for rule in rules:
        result = rule.describe(name, acc)
        if isinstance(result, Err):
            raise result.error

    parts = []
    if prop.description:
        parts.append(prop.description)
    if parent.required:
        parts.append("required")
    for label, bound in (
        ("min", prop.minimum),
        ("max", prop.maximum),
        ("min length", prop.min_length),
        ("max length", prop.max_length),
    ):
        if bound is not None:
            parts.append(f"{label} {bound:g}")
    if prop.enum:
        parts.append("one of [" + ", ".join(str(plain(v)) for v in prop.enum) + "]")
    if prop.unique_items:
        parts.append("unique")
    return ", ".join(parts)

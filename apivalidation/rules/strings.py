"""
String rules: predicates, decimal places, alphabetic checks, dates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..schema import SchemaAccumulator
from ..types import Ok
from .base import Rule, invalid, is_empty


class StringRule(Rule):
    """
    Applies a predicate to string values.

    ``message`` is the error text; ``desc`` is the schema description and
    defaults to the message.

        Slug = StringRule(lambda s: s.islower(), "must be lowercase")
    """

    def __init__(self, check: Callable[[str], bool], message: str, desc: Optional[str] = None):
        self.check = check
        self.message = message
        self.desc = message if desc is None else desc

    def validate(self, value: Any):
        if is_empty(value):
            return Ok(value)
        if not isinstance(value, str):
            return invalid("must be a string", "validation_is_string")
        if not self.check(value):
            return invalid(self.message, "validation_string_invalid")
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.add_description(self.desc)
        return Ok()


def DecimalMax(places: int) -> StringRule:
    """Limits the number of digits after the decimal point of a numeric string."""

    def check(s: str) -> bool:
        _, _, decimals = s.partition(".")
        return len(decimals) <= places

    return StringRule(check, f"no more than {places} decimals")


_NON_ALPHA = re.compile(r"[^a-zA-Z]")
_NON_DIGIT = re.compile(r"\D")
_CARD_DIGITS = 16


class AlphabeticRule(Rule):
    """
    Requires at least one letter.

    In card mode only strings made of exactly sixteen digits (separators
    ignored) are rejected; other letter-free strings pass.
    """

    def __init__(self, card_check: bool = False):
        self.card_check = card_check

    def validate(self, value: Any):
        if value is None:
            return Ok(value)
        if not isinstance(value, str):
            return invalid(f"expected string, got {type(value).__name__}", "validation_is_string")
        text = value.strip()
        if not text or _NON_ALPHA.sub("", text):
            return Ok(value)
        if self.card_check:
            if len(_NON_DIGIT.sub("", text)) != _CARD_DIGITS:
                return Ok(value)
            return invalid("must not be a credit card number", "validation_credit_card")
        return invalid("must contain at least one alphabetic character", "validation_has_alphabetic")

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.add_description("Must contain at least one alphabetic character.")
        return Ok()


def HasAlphabetic() -> AlphabeticRule:
    return AlphabeticRule()


def NonCreditCardNumber() -> AlphabeticRule:
    return AlphabeticRule(card_check=True)


@dataclass(frozen=True)
class Date(Rule):
    """
    String must parse with ``datetime.strptime(value, layout)``.

    min() and max() return new rules that also bound the parsed value:

        Date("%Y-%m-%d").min(date(2020, 1, 1))
    """

    layout: str
    lo: Optional[datetime] = None
    hi: Optional[datetime] = None

    def min(self, bound: date) -> Date:
        return replace(self, lo=_as_datetime(bound))

    def max(self, bound: date) -> Date:
        return replace(self, hi=_as_datetime(bound))

    def validate(self, value: Any):
        if is_empty(value):
            return Ok(value)
        if not isinstance(value, str):
            return invalid("must be a string", "validation_date_type")
        try:
            parsed = datetime.strptime(value, self.layout)
        except ValueError:
            return invalid("must be a valid date", "validation_date_invalid")
        if parsed.tzinfo is not None:
            parsed = parsed.replace(tzinfo=None)
        if (self.lo is not None and parsed < self.lo) or (self.hi is not None and parsed > self.hi):
            return invalid("the date is out of range", "validation_date_out_of_range")
        return Ok(value)

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.prop.format = self.layout
        if self.lo is not None:
            acc.add_description("> " + self.lo.isoformat(sep=" "))
        if self.hi is not None:
            acc.add_description("< " + self.hi.isoformat(sep=" "))
        return Ok()


def _as_datetime(bound: date) -> datetime:
    if isinstance(bound, datetime):
        return bound.replace(tzinfo=None)
    return datetime(bound.year, bound.month, bound.day)

"""
Tests for the built-in rules' validate() side.
"""

from datetime import date

import pytest

from apivalidation import (
    Custom,
    Date,
    DecimalMax,
    Each,
    Empty,
    Err,
    FieldError,
    HasAlphabetic,
    In,
    KeyIn,
    Length,
    Max,
    Min,
    Nil,
    NonCreditCardNumber,
    NotNil,
    Ok,
    Required,
    Skip,
    StringRule,
    Unique,
    ValidationErrors,
    When,
)
from apivalidation.rules import is_empty
from structstest import Address, Currency, PaymentMethod


class TestIsEmpty:
    @pytest.mark.parametrize("value", [None, "", [], {}, 0, 0.0, False, set()])
    def test_empty(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", ["a", [0], {"a": 1}, 1, -1.5, True, Address()])
    def test_not_empty(self, value):
        assert not is_empty(value)


class TestPresence:
    def test_required(self):
        assert isinstance(Required.validate("x"), Ok)
        result = Required.validate("")
        assert isinstance(result, Err)
        assert result.error == "cannot be blank"
        assert isinstance(Required.validate(None), Err)
        assert isinstance(Required.validate(0), Err)

    def test_required_when(self):
        assert isinstance(Required.when(False).validate(""), Ok)
        assert isinstance(Required.when(True).validate(""), Err)

    def test_not_nil(self):
        assert isinstance(NotNil.validate(""), Ok)
        result = NotNil.validate(None)
        assert isinstance(result, Err)
        assert result.error == "is required"

    def test_nil(self):
        assert isinstance(Nil.validate(None), Ok)
        assert isinstance(Nil.validate(""), Err)

    def test_empty(self):
        assert isinstance(Empty.validate(None), Ok)
        assert isinstance(Empty.validate(""), Ok)
        result = Empty.validate("x")
        assert isinstance(result, Err)
        assert result.error == "must be blank"

    def test_error_code(self):
        result = Required.validate(None)
        assert isinstance(result.error, FieldError)
        assert result.error.code == "validation_required"


class TestIn:
    def test_membership(self):
        rule = In("ach", "cc", "wire")
        assert isinstance(rule.validate("ach"), Ok)
        result = rule.validate("bitcoin")
        assert isinstance(result, Err)
        assert str(result.error) == "must be one of 'ach', 'cc', 'wire' got 'bitcoin'"

    def test_empty_is_valid(self):
        assert isinstance(In("a").validate(""), Ok)
        assert isinstance(In("a").validate(None), Ok)

    def test_plain_values(self):
        assert isinstance(In("ach").validate(PaymentMethod("ach")), Ok)
        assert isinstance(In("usd").validate(Currency.USD), Ok)
        assert isinstance(In(Currency.EUR).validate("eur"), Ok)

    def test_numbers(self):
        assert isinstance(In(1, 2).validate(2), Ok)
        assert isinstance(In(1, 2).validate(3), Err)


class TestKeyIn:
    def test_mapping(self):
        rule = KeyIn("a", "b")
        assert isinstance(rule.validate({"a": 1}), Ok)
        result = rule.validate({"a": 1, "c": 2})
        assert isinstance(result, Err)
        assert result.error == "key 'c' not allowed"

    def test_container(self):
        assert isinstance(KeyIn("street", "city").validate(Address()), Ok)
        assert isinstance(KeyIn("street").validate(Address()), Err)

    def test_not_a_mapping(self):
        assert isinstance(KeyIn("a").validate(5), Err)
        assert isinstance(KeyIn("a").validate(None), Ok)


class TestThreshold:
    def test_min(self):
        assert isinstance(Min(10).validate(10), Ok)
        result = Min(10).validate(5)
        assert isinstance(result, Err)
        assert result.error == "must be no less than 10"

    def test_max(self):
        assert isinstance(Max(5).validate(5), Ok)
        result = Max(5).validate(7)
        assert result.error == "must be no greater than 5"

    def test_exclusive(self):
        assert Min(10).exclusive().validate(10).error == "must be greater than 10"
        assert Max(10).exclusive().validate(10).error == "must be less than 10"
        assert isinstance(Min(10).exclusive().validate(11), Ok)

    def test_exclusive_is_a_copy(self):
        rule = Min(10)
        rule.exclusive()
        assert isinstance(rule.validate(10), Ok)

    def test_zero_is_skipped(self):
        assert isinstance(Min(18).validate(0), Ok)

    def test_numeric_strings(self):
        assert isinstance(Min(10).validate("12"), Ok)
        assert Max(5).validate("7").error == "must be no greater than 5"
        assert isinstance(Max(1.5).validate("1.25"), Ok)

    def test_unparseable_strings(self):
        assert Min(1).validate("abc").error == "must be an integer"
        assert Min(1.5).validate("abc").error == "must be a number"

    def test_dates(self):
        rule = Min(date(2020, 1, 1))
        assert isinstance(rule.validate(date(2021, 1, 1)), Ok)
        assert rule.validate(date(2019, 1, 1)).error == "must be no less than 2020-01-01"

    def test_incomparable(self):
        assert isinstance(Min(1).validate([1, 2]), Err)


class TestLength:
    def test_between(self):
        rule = Length(2, 5)
        assert isinstance(rule.validate("abc"), Ok)
        assert rule.validate("a").error == "the length must be between 2 and 5"
        assert isinstance(rule.validate(""), Ok)
        assert rule.validate(20200229).error == "must be a string"

    def test_messages(self):
        assert Length(3, 3).validate("a").error == "the length must be exactly 3"
        assert Length(0, 2).validate("abc").error == "the length must be no more than 2"
        assert Length(2, 0).validate("a").error == "the length must be no less than 2"
        assert Length(0, 0).validate("a").error == "the value must be empty"

    def test_collections(self):
        assert isinstance(Length(1, 2).validate([1, 2]), Ok)
        assert isinstance(Length(1, 2).validate([1, 2, 3]), Err)

    def test_unicode_counts_characters(self):
        assert isinstance(Length(1, 2).validate("né"), Ok)


class TestStrings:
    def test_string_rule(self):
        rule = StringRule(str.islower, "must be lowercase")
        assert isinstance(rule.validate("abc"), Ok)
        assert rule.validate("ABC").error == "must be lowercase"
        assert isinstance(rule.validate(""), Ok)
        assert isinstance(rule.validate(5), Err)

    def test_decimal_max(self):
        rule = DecimalMax(2)
        assert isinstance(rule.validate("1.23"), Ok)
        assert isinstance(rule.validate("12"), Ok)
        assert rule.validate("1.234").error == "no more than 2 decimals"

    def test_has_alphabetic(self):
        rule = HasAlphabetic()
        assert isinstance(rule.validate("12a"), Ok)
        assert isinstance(rule.validate("   "), Ok)
        assert rule.validate("1234").error == "must contain at least one alphabetic character"
        assert isinstance(rule.validate(5), Err)

    def test_non_credit_card_number(self):
        rule = NonCreditCardNumber()
        assert isinstance(rule.validate("1234"), Ok)
        assert isinstance(rule.validate("Main Street 4"), Ok)
        assert rule.validate("4111 1111 1111 1111").error == "must not be a credit card number"

    def test_date(self):
        rule = Date("%Y-%m-%d")
        assert isinstance(rule.validate("2020-02-29"), Ok)
        assert rule.validate("2020-13-01").error == "must be a valid date"
        assert isinstance(rule.validate(""), Ok)

    def test_date_requires_string(self):
        assert Date("%Y%m%d").validate(20200229).error == "must be a string"

    def test_date_range(self):
        rule = Date("%Y-%m-%d").min(date(2021, 1, 1)).max(date(2021, 12, 31))
        assert isinstance(rule.validate("2021-06-01"), Ok)
        assert rule.validate("2020-05-01").error == "the date is out of range"
        assert rule.validate("2022-01-01").error == "the date is out of range"

    def test_date_bounds_do_not_leak(self):
        base = Date("%Y-%m-%d")
        base.min(date(2021, 1, 1))
        assert isinstance(base.validate("2000-01-01"), Ok)


class TestCollections:
    def test_each(self):
        result = Each(Required).validate(["a", "", "b"])
        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationErrors)
        assert result.error == {"1": "cannot be blank"}

    def test_each_mapping(self):
        result = Each(Length(1, 2)).validate({"x": "ok", "y": "long"})
        assert result.error == {"y": "the length must be between 1 and 2"}

    def test_each_not_iterable(self):
        result = Each(Required).validate(5)
        assert result.error == "must be an iterable (mapping, list or tuple)"

    def test_each_none(self):
        assert isinstance(Each(Required).validate(None), Ok)

    def test_unique(self):
        rule = Unique(lambda x: x["type"], "unique types")
        assert isinstance(rule.validate([{"type": "ach"}, {"type": "cc"}]), Ok)
        result = rule.validate([{"type": "ach"}, {"type": "ach"}])
        assert isinstance(result, Err)
        assert result.error == "not unique"

    def test_unique_unhashable_keys(self):
        rule = Unique(lambda x: x["tags"])
        assert isinstance(rule.validate([{"tags": ["a"]}, {"tags": ["b"]}]), Ok)
        assert rule.validate([{"tags": ["a"]}, {"tags": ["a"]}]).error == "not unique"
        assert Unique(lambda x: x).validate([{"a": 1}, {"a": 1}]).error == "not unique"
        assert isinstance(Unique(lambda x: x).validate([{"a": 1}, "a", {"a": 2}]), Ok)

    def test_unique_requires_list(self):
        assert Unique(lambda x: x).validate("abc").error == "must be a list"
        assert isinstance(Unique(lambda x: x).validate([]), Ok)


class TestFlow:
    def test_custom(self):
        rule = Custom(lambda v: None if v % 2 == 0 else "must be even", "even numbers")
        assert isinstance(rule.validate(2), Ok)
        assert rule.validate(3).error == "must be even"

    def test_custom_exception(self):
        rule = Custom(lambda v: ValueError("bad value"))
        assert rule.validate(1).error == "bad value"

    def test_skip(self):
        assert Skip("drafts").skips_rest()
        assert not Skip("drafts").when(False).skips_rest()
        assert isinstance(Skip().validate("anything"), Ok)

    def test_when(self):
        assert isinstance(When(True, "card", Required).validate(""), Err)
        assert isinstance(When(False, "card", Required).validate(""), Ok)

    def test_when_else(self):
        rule = When(False, "card", Required).else_(Nil)
        assert rule.validate("x").error == "must be blank"
        assert isinstance(rule.validate(None), Ok)

    def test_when_stops_at_first_failure(self):
        rule = When(True, "", Required, Length(5, 10))
        assert rule.validate("").error == "cannot be blank"

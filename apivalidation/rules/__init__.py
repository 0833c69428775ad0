"""
Built-in rules.

Every rule validates a field value and describes itself onto a schema node:

    Field("amount", Required, Min(0.01).exclusive(), Describe("in dollars"))
"""

from .base import DocRule, Rule, is_empty
from .compare import In, KeyIn, Length, Max, Min, ThresholdRule
from .docs import Default, Deprecate, Describe, Example
from .flow import Custom, Skip, When
from .required import Empty, Nil, NotNil, Required
from .sequences import Each, Unique
from .strings import Date, DecimalMax, HasAlphabetic, NonCreditCardNumber, StringRule

__all__ = [
    # Contract
    "Rule",
    "DocRule",
    "is_empty",
    # Presence
    "Required",
    "NotNil",
    "Nil",
    "Empty",
    # Comparison
    "In",
    "KeyIn",
    "Length",
    "Min",
    "Max",
    "ThresholdRule",
    # Strings
    "StringRule",
    "DecimalMax",
    "HasAlphabetic",
    "NonCreditCardNumber",
    "Date",
    # Collections
    "Each",
    "Unique",
    # Flow
    "Custom",
    "Skip",
    "When",
    # Documentation
    "Describe",
    "Default",
    "Example",
    "Deprecate",
]

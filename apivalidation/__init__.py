"""
apivalidation - one rule set per type for validation and OpenAPI docs.

Usage:
    from pydantic import BaseModel
    from apivalidation import Field, Length, Required, Ruler, generate_schema, validate

    class Customer(BaseModel, Ruler):
        name: str
        email: str

        def rules(self):
            return [
                Field("name", Required, Length(1, 50)),
                Field("email", Required),
            ]

    result = validate(Customer(name="", email="a@b.co"))
    schema = generate_schema(Customer)
"""

from .check import missing_rules
from .context import Settings, get_settings, settings_context
from .declarators import (
    ContextNormalizer,
    ContextRuler,
    Normalizer,
    Ruler,
    Shape,
    ValueRuler,
    classify,
)
from .errors import BindingError, FieldError, SchemaError, ValidationErrors
from .fields import Field, FieldRules, TypeView
from .generate import SchemaGenerator, generate_schema
from .log import configure_logging
from .normalize import normalize
from .rules import (
    Custom,
    Date,
    DecimalMax,
    Default,
    Deprecate,
    Describe,
    DocRule,
    Each,
    Empty,
    Example,
    HasAlphabetic,
    In,
    KeyIn,
    Length,
    Max,
    Min,
    Nil,
    NonCreditCardNumber,
    NotNil,
    Required,
    Rule,
    Skip,
    StringRule,
    Unique,
    When,
)
from .scalars import RuledFloat, RuledInt, RuledStr
from .schema import Schema, SchemaAccumulator
from .transform import struct_multi, struct_string_func, struct_to_lower, struct_trim_space
from .types import Err, Ok
from .validate import decode_and_validate, validate, validate_struct, validate_with_context

__all__ = [
    # Result types
    "Ok",
    "Err",
    # Declarators
    "Ruler",
    "ContextRuler",
    "ValueRuler",
    "Normalizer",
    "ContextNormalizer",
    "Shape",
    "classify",
    "RuledStr",
    "RuledInt",
    "RuledFloat",
    # Bindings
    "Field",
    "FieldRules",
    "TypeView",
    # Traversals
    "validate",
    "validate_with_context",
    "validate_struct",
    "decode_and_validate",
    "normalize",
    "generate_schema",
    "SchemaGenerator",
    "missing_rules",
    # Schema
    "Schema",
    "SchemaAccumulator",
    # Errors
    "FieldError",
    "ValidationErrors",
    "BindingError",
    "SchemaError",
    # Rules
    "Rule",
    "DocRule",
    "Required",
    "NotNil",
    "Nil",
    "Empty",
    "In",
    "KeyIn",
    "Length",
    "Min",
    "Max",
    "StringRule",
    "DecimalMax",
    "HasAlphabetic",
    "NonCreditCardNumber",
    "Date",
    "Each",
    "Unique",
    "Custom",
    "Skip",
    "When",
    "Describe",
    "Default",
    "Example",
    "Deprecate",
    # Transforms
    "struct_trim_space",
    "struct_to_lower",
    "struct_string_func",
    "struct_multi",
    # Configuration
    "Settings",
    "get_settings",
    "settings_context",
    "configure_logging",
]

"""
Declarator base classes and shape classification.

A declarator is a capability a data type opts into by subclassing one of the
abstract bases below. Traversals never probe for methods by name: they
classify a value into a closed set of shapes and dispatch on that.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping as AbcMapping
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .fields import FieldRules
    from .rules.base import Rule


class Ruler(ABC):
    """
    Implemented by containers that declare rules for their fields.

        class Order(BaseModel, Ruler):
            id: str
            amount: float

            def rules(self):
                return [
                    Field("id", Required),
                    Field("amount", Min(0.01)),
                ]
    """

    @abstractmethod
    def rules(self) -> list[FieldRules]: ...

    @classmethod
    def schema_rules(cls) -> list[FieldRules] | None:
        """
        Type-level bindings for schema generation.

        None (the default) means derive them by running rules() against a
        zero-valued view of the type.
        """
        return None


class ContextRuler(ABC):
    """Like Ruler but receives a context mapping (for conditional rules)."""

    @abstractmethod
    def rules(self, ctx: Mapping[str, Any]) -> list[FieldRules]: ...

    @classmethod
    def schema_rules(cls) -> list[FieldRules] | None:
        return None


class ValueRuler(ABC):
    """
    Implemented by non-container types that carry their own rules.

    The rules apply wherever the type appears as a field value, both for
    validation and schema generation, without the enclosing container
    repeating them.

        class PaymentMethod(RuledStr):
            @classmethod
            def value_rules(cls):
                return [In("ach", "cc", "wire")]
    """

    @classmethod
    @abstractmethod
    def value_rules(cls) -> list[Rule]: ...


class Normalizer(ABC):
    """Implemented by types that mutate themselves after decoding."""

    @abstractmethod
    def normalize(self) -> None: ...


class ContextNormalizer(ABC):
    """Like Normalizer but receives a context mapping."""

    @abstractmethod
    def normalize(self, ctx: Mapping[str, Any]) -> None: ...


class Shape(Enum):
    """How a traversal treats a value."""

    RULER = auto()
    CONTEXT_RULER = auto()
    VALUE_RULER = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    NONE = auto()


_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def classify(value: Any) -> Shape:
    """Classify a runtime value."""
    if isinstance(value, Ruler):
        return Shape.RULER
    if isinstance(value, ContextRuler):
        return Shape.CONTEXT_RULER
    if isinstance(value, ValueRuler):
        return Shape.VALUE_RULER
    if isinstance(value, _SEQUENCE_TYPES):
        return Shape.SEQUENCE
    if isinstance(value, AbcMapping):
        return Shape.MAPPING
    return Shape.NONE


def classify_type(tp: Any) -> Shape:
    """Classify a class object. Generic aliases are not handled here."""
    if not isinstance(tp, type):
        return Shape.NONE
    if issubclass(tp, Ruler):
        return Shape.RULER
    if issubclass(tp, ContextRuler):
        return Shape.CONTEXT_RULER
    if issubclass(tp, ValueRuler):
        return Shape.VALUE_RULER
    if issubclass(tp, (str, bytes)):
        return Shape.NONE
    if issubclass(tp, _SEQUENCE_TYPES):
        return Shape.SEQUENCE
    if issubclass(tp, AbcMapping):
        return Shape.MAPPING
    return Shape.NONE


def is_declarator_type(tp: Any) -> bool:
    return classify_type(tp) in (Shape.RULER, Shape.CONTEXT_RULER)


def call_normalize(value: Any, ctx: Mapping[str, Any]) -> bool:
    """Call the value's normalization hook, if any. Returns True when called."""
    if isinstance(value, ContextNormalizer):
        value.normalize(ctx)
        return True
    if isinstance(value, Normalizer):
        value.normalize()
        return True
    return False

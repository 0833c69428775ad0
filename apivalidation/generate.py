"""
Schema synthesis: build an OpenAPI schema from types and their rules.

The walk mirrors validation. Container types become objects whose property
names are the same keys validation reports errors under; each binding's rules
then describe themselves onto the matching property. Value-ruled scalars
describe their rules wherever they appear.

Types are never instantiated. Bindings come from Ruler.schema_rules() or from
rules() evaluated against a TypeView.
"""

from __future__ import annotations

import typing
from collections.abc import Mapping as AbcMapping
from collections.abc import Sequence as AbcSequence
from collections.abc import Set as AbcSet
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Literal, Optional, Union, get_args, get_origin
from uuid import UUID

from .declarators import Shape, classify_type, is_declarator_type
from .errors import SchemaError
from .fields import TypeView, bind, container_fields, is_container, is_container_type, type_rules
from .log import get_logger
from .rules.base import Rule, plain
from .schema import Schema, SchemaAccumulator
from .types import Err

logger = get_logger(__name__)

# Checked in order; bool before int, datetime before date.
_SCALARS: tuple[tuple[type, str, Optional[str]], ...] = (
    (bool, "boolean", None),
    (int, "integer", None),
    (float, "number", "double"),
    (Decimal, "number", None),
    (str, "string", None),
    (bytes, "string", "byte"),
    (datetime, "string", "date-time"),
    (date, "string", "date"),
    (time, "string", "time"),
    (timedelta, "string", "duration"),
    (UUID, "string", "uuid"),
)


def _is_type_form(obj: Any) -> bool:
    return (
        isinstance(obj, type)
        or get_origin(obj) is not None
        or obj is Any
        or isinstance(obj, TypeView)
    )


def _scalar(tp: type) -> Optional[Schema]:
    for base, name, fmt in _SCALARS:
        if issubclass(tp, base):
            return Schema(type=name, format=fmt)
    return None


class SchemaGenerator:
    """
    One schema synthesis pass.

    Recursive container types are emitted once; a reference back to a type
    still being built becomes a bare {"type": "object"}.
    """

    def __init__(self):
        self._in_progress: set[type] = set()

    def generate(self, value_or_type: Any) -> Schema:
        if isinstance(value_or_type, TypeView):
            return self._schema(value_or_type.view_type, None, None, "")
        if _is_type_form(value_or_type):
            return self._schema(value_or_type, None, None, "")
        return self._schema(type(value_or_type), value_or_type, None, "")

    def _schema(
        self, annotation: Any, instance: Any, parent: Optional[Schema], name: str
    ) -> Schema:
        origin = get_origin(annotation)
        args = get_args(annotation)

        if annotation is Any or annotation is object:
            # Only a live value can say what an untyped field holds.
            if instance is None:
                return Schema()
            return self._schema(type(instance), instance, parent, name)
        if origin is typing.Annotated:
            return self._schema(args[0], instance, parent, name)
        if origin is Union or origin is UnionType:
            return self._union(args, instance, parent, name)
        if origin is Literal:
            return self._literal(args)
        if origin is not None:
            return self._generic(origin, args, instance)
        if not isinstance(annotation, type):
            return Schema()

        if is_container_type(annotation):
            return self._object(annotation, instance)
        if issubclass(annotation, Enum):
            return self._enum(annotation)
        node = _scalar(annotation)
        if node is None:
            node = self._untyped_collection(annotation, instance)
        if classify_type(annotation) is Shape.VALUE_RULER:
            self._describe_value(annotation, node, parent, name)
        return node

    def _union(self, args, instance, parent, name) -> Schema:
        members = [a for a in args if a is not NoneType]
        if len(members) == 1:
            node = self._schema(members[0], instance, parent, name)
        else:
            node = Schema(one_of=[self._schema(m, None, None, name) for m in members])
        if len(members) < len(args):
            node.nullable = True
        return node

    def _literal(self, args) -> Schema:
        values = [plain(a) for a in args]
        node = _scalar(type(values[0])) if values else None
        node = node or Schema()
        node.enum = values
        return node

    def _enum(self, tp: type[Enum]) -> Schema:
        values = [m.value for m in tp]
        node = _scalar(type(values[0])) if values else None
        node = node or Schema()
        node.enum = [plain(v) for v in values]
        return node

    def _generic(self, origin: Any, args: tuple, instance: Any) -> Schema:
        if not isinstance(origin, type):
            return Schema()
        if issubclass(origin, AbcMapping):
            value_type = args[1] if len(args) == 2 else Any
            sample = _first(instance.values()) if isinstance(instance, AbcMapping) else None
            return Schema(
                type="object",
                additional_properties=self._schema(value_type, sample, None, ""),
            )
        if issubclass(origin, (AbcSequence, AbcSet)) and not issubclass(origin, (str, bytes)):
            item_type = args[0] if args else Any
            sample = _first(instance) if instance is not None else None
            node = Schema(type="array", items=self._schema(item_type, sample, None, ""))
            if issubclass(origin, AbcSet):
                node.unique_items = True
            return node
        return self._schema(origin, instance, None, "")

    def _untyped_collection(self, tp: type, instance: Any) -> Schema:
        if issubclass(tp, AbcMapping):
            return self._generic(tp, (), instance)
        if issubclass(tp, (AbcSequence, AbcSet)):
            return self._generic(tp, (), instance)
        return Schema()

    def _object(self, tp: type, instance: Any) -> Schema:
        if tp in self._in_progress:
            return Schema(type="object")
        self._in_progress.add(tp)
        try:
            node = Schema(type="object", properties={})
            for spec in container_fields(tp):
                if not spec.serialized or not spec.documented:
                    continue
                child = getattr(instance, spec.name, None) if is_container(instance) else None
                node.properties[spec.key] = self._schema(spec.annotation, child, node, spec.key)
            if is_declarator_type(tp):
                self._describe_fields(tp, node)
        finally:
            self._in_progress.discard(tp)
        return node

    def _describe_fields(self, tp: type, node: Schema) -> None:
        for fr in bind(TypeView(tp), type_rules(tp)):
            prop = node.properties.get(fr.tag)
            if prop is None:
                continue
            _describe(fr.rules, fr.tag, SchemaAccumulator(node, prop))

    def _describe_value(
        self, tp: type, node: Schema, parent: Optional[Schema], name: str
    ) -> None:
        # Outside an object there is no required list to join.
        _describe(tp.value_rules(), name, SchemaAccumulator(parent or Schema(), node))


def _describe(rules: typing.Iterable[Rule], name: str, acc: SchemaAccumulator) -> None:
    for rule in rules:
        result = rule.describe(name, acc)
        if isinstance(result, Err):
            error = result.error
            if isinstance(error, SchemaError):
                raise error
            raise SchemaError(f"{name}: {error}") from error


def _first(items: Any) -> Any:
    for item in items:
        if item is not None:
            return item
    return None


def generate_schema(value_or_type: Any) -> Schema:
    """
    Build the schema for a type, or for the type of a value.

    Passing an instance only matters for fields typed Any: their schema is
    inferred from the value the instance holds.

    Raises:
        BindingError: a binding does not resolve against its container.
        SchemaError: a rule failed to describe itself.
    """
    schema = SchemaGenerator().generate(value_or_type)
    logger.debug("schema.generated", target=_label(value_or_type))
    return schema


def _label(value_or_type: Any) -> str:
    if isinstance(value_or_type, TypeView):
        return value_or_type.view_type.__name__
    if isinstance(value_or_type, type):
        return value_or_type.__name__
    if _is_type_form(value_or_type):
        return repr(value_or_type)
    return type(value_or_type).__name__

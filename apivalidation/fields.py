"""
Field bindings, container introspection, and embedding expansion.

A binding names a field of a container symbolically (its attribute name) and
carries the ordered rules for it. Bindings are resolved against the
container's declared fields when a traversal runs; a name that does not
resolve is a BindingError, never a silent skip.

Containers are pydantic models or dataclasses. Inheritance plays the role of
embedding: binding a base class (``Field(Base)``) inlines the base's own
bindings so error keys and schema properties stay flat.
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Mapping as AbcMapping
from collections.abc import Sequence as AbcSequence
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from types import FunctionType, MethodType, NoneType, UnionType
from typing import Any, Callable, Mapping, Optional, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic_core import PydanticUndefined

from .context import resolve_context
from .declarators import Shape, classify_type
from .errors import BindingError
from .rules.base import Rule

_MISSING = object()


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one declared field of a container type."""

    name: str
    key: str
    annotation: Any
    serialized: bool = True
    documented: bool = True
    ruleless: bool = False
    default: Any = _MISSING
    default_factory: Optional[Callable[[], Any]] = None

    def zero(self) -> Any:
        """The field's default, or the zero value of its annotation."""
        if self.default is not _MISSING:
            return self.default
        if self.default_factory is not None:
            return self.default_factory()
        return zero_value(self.annotation)


def is_container_type(tp: Any) -> bool:
    if not isinstance(tp, type):
        return False
    return issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp)


def is_container(value: Any) -> bool:
    if isinstance(value, TypeView):
        return True
    return not isinstance(value, type) and is_container_type(type(value))


def container_type(container: Any) -> type:
    if isinstance(container, TypeView):
        return container.view_type
    return type(container)


@lru_cache(maxsize=None)
def container_fields(tp: type) -> tuple[FieldSpec, ...]:
    """
    Declared fields of a container type, in declaration order.

    Inherited fields come first, matching how both pydantic and dataclasses
    order them.
    """
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return tuple(_model_field(name, info) for name, info in tp.model_fields.items())
    if is_container_type(tp):
        try:
            hints = typing.get_type_hints(tp, include_extras=True)
        except (NameError, TypeError):
            hints = {}
        return tuple(
            _dataclass_field(f, hints.get(f.name, f.type))
            for f in dataclasses.fields(tp)
        )
    raise TypeError(f"{tp!r} is not a pydantic model or dataclass")


def _markers(extra: Any) -> Mapping[str, Any]:
    return extra if isinstance(extra, Mapping) else {}


def _model_field(name: str, info: Any) -> FieldSpec:
    markers = _markers(info.json_schema_extra)
    default = _MISSING if info.default is PydanticUndefined else info.default
    factory = info.default_factory
    if factory is not None and getattr(info, "default_factory_takes_data", False):
        factory = None
    return FieldSpec(
        name=name,
        key=info.serialization_alias or info.alias or name,
        annotation=info.annotation,
        serialized=not info.exclude,
        documented=markers.get("docs") != "skip",
        ruleless=markers.get("validate") == "-",
        default=default,
        default_factory=factory,
    )


def _dataclass_field(f: dataclasses.Field, annotation: Any) -> FieldSpec:
    markers = f.metadata
    default = _MISSING if f.default is dataclasses.MISSING else f.default
    factory = None if f.default_factory is dataclasses.MISSING else f.default_factory
    return FieldSpec(
        name=f.name,
        key=f.name,
        annotation=annotation,
        serialized=markers.get("json") != "-",
        documented=markers.get("docs") != "skip",
        ruleless=markers.get("validate") == "-",
        default=default,
        default_factory=factory,
    )


_ZERO_TYPES = (str, bytes, bool, int, float, Decimal)


def zero_value(annotation: Any) -> Any:
    """Zero value for a type annotation, as used by TypeView."""
    origin = get_origin(annotation)
    args = get_args(annotation)

    if annotation is None or annotation is NoneType:
        return None
    if origin is typing.Annotated:
        return zero_value(args[0])
    if origin is Union or origin is UnionType:
        if NoneType in args:
            return None
        return zero_value(args[0])
    if origin is not None:
        annotation = origin
    if not isinstance(annotation, type):
        return None
    if is_container_type(annotation):
        return TypeView(annotation)
    if issubclass(annotation, Enum):
        return None
    if issubclass(annotation, _ZERO_TYPES):
        return annotation()
    if issubclass(annotation, (set, frozenset)):
        return set()
    if issubclass(annotation, AbcSequence):
        return []
    if issubclass(annotation, AbcMapping):
        return {}
    return None


class TypeView:
    """
    Read-only, zero-valued stand-in for an instance of a container type.

    Lets a container's rules() run for schema generation without
    constructing an instance: field attributes read as the field default (or
    the zero value of the annotation), other attributes come from the class.
    """

    __slots__ = ("view_type", "_specs")

    def __init__(self, tp: type):
        object.__setattr__(self, "view_type", tp)
        object.__setattr__(self, "_specs", {s.name: s for s in container_fields(tp)})

    def __getattr__(self, name: str) -> Any:
        spec = self._specs.get(name)
        if spec is not None:
            return spec.zero()
        attr = getattr(self.view_type, name)
        if isinstance(attr, FunctionType):
            return MethodType(attr, self)
        if isinstance(attr, property) and attr.fget is not None:
            return attr.fget(self)
        return attr

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"TypeView of {self.view_type.__name__} is read-only")

    def __repr__(self) -> str:
        return f"TypeView({self.view_type.__name__})"


@dataclass(frozen=True)
class FieldRules:
    """
    Binds one field of a container to its ordered rules.

    ``target`` is the attribute name, or a base class for embedded bindings.
    ``spec`` is filled in by resolve_tags.
    """

    target: Union[str, type]
    rules: tuple[Rule, ...] = ()
    spec: Optional[FieldSpec] = None

    @property
    def embedded(self) -> bool:
        return isinstance(self.target, type)

    @property
    def tag(self) -> str:
        """Resolved error/schema key; empty until resolved."""
        return self.spec.key if self.spec is not None else ""


def Field(target: Union[str, type], *rules: Rule) -> FieldRules:
    """
    Create a binding for a field name (or an embedded base class).

    Usage:
        Field("name", Required, Length(1, 50))
        Field("children")          # no rules, nested containers still validate
        Field(Base)                # inline Base.rules() into this container
    """
    if isinstance(target, str):
        if not target.isidentifier():
            raise BindingError(f"rule target {target!r} is not a field name")
    elif not (isinstance(target, type) and is_container_type(target)):
        raise BindingError(
            "rule target must be a field name or an embedded base class, "
            f"got {type(target).__name__}"
        )
    for i, rule in enumerate(rules):
        if not isinstance(rule, Rule):
            raise BindingError(
                f"rule {i} for field {_target_name(target)} is not a Rule, "
                f"got {type(rule).__name__}"
            )
    return FieldRules(target=target, rules=tuple(rules))


def _target_name(target: Union[str, type]) -> str:
    return target.__name__ if isinstance(target, type) else repr(target)


def declared_rules(container: Any, ctx: Optional[Mapping[str, Any]] = None) -> list[FieldRules]:
    """Call the container's own declarator."""
    tp = container_type(container)
    match classify_type(tp):
        case Shape.RULER:
            return list(tp.rules(container))
        case Shape.CONTEXT_RULER:
            return list(tp.rules(container, resolve_context(ctx)))
    raise TypeError(f"{tp.__name__} does not declare rules")


def type_rules(tp: type) -> list[FieldRules]:
    """
    Bindings for a container type, without instantiating it.

    Uses the type's schema_rules() when it provides one, otherwise runs its
    rules() against a TypeView.
    """
    explicit = tp.schema_rules()
    if explicit is not None:
        return list(explicit)
    return declared_rules(TypeView(tp))


def expand_fields(
    container: Any,
    fields: list[FieldRules],
    ctx: Optional[Mapping[str, Any]] = None,
    _seen: tuple[type, ...] = (),
) -> list[FieldRules]:
    """
    Flatten embedded bindings into the container's own binding list.

    A binding whose target is a base class is replaced by that base's own
    (recursively expanded) bindings, evaluated against the same container.
    Other bindings pass through unchanged.
    """
    tp = container_type(container)
    result: list[FieldRules] = []
    for fr in fields:
        if not fr.embedded:
            result.append(fr)
            continue
        base = fr.target
        if base is tp or base not in tp.__mro__:
            raise BindingError(
                f"embedded target {base.__name__} is not a base class of {tp.__name__}"
            )
        if base in _seen:
            raise BindingError(f"embedded target {base.__name__} expands into itself")
        match classify_type(base):
            case Shape.RULER:
                inner = base.rules(container)
            case Shape.CONTEXT_RULER:
                inner = base.rules(container, resolve_context(ctx))
            case _:
                raise BindingError(f"embedded target {base.__name__} declares no rules")
        result.extend(expand_fields(container, list(inner), ctx, (*_seen, base)))
    return result


def resolve_tags(fields: list[FieldRules], tp: type) -> list[FieldRules]:
    """Resolve every binding to its FieldSpec; unknown names raise BindingError."""
    specs = {s.name: s for s in container_fields(tp)}
    resolved = []
    for i, fr in enumerate(fields):
        if fr.embedded:
            raise BindingError(
                f"rule target for field index {i} ({fr.target.__name__}) was not expanded"
            )
        spec = specs.get(fr.target)
        if spec is None:
            raise BindingError(
                f"rule target {fr.target!r} for field index {i} not found in {tp.__name__}"
            )
        resolved.append(replace(fr, spec=spec))
    return resolved


def bind(container: Any, fields: list[FieldRules], ctx: Optional[Mapping[str, Any]] = None) -> list[FieldRules]:
    """Expand then resolve, the shared front half of every traversal."""
    return resolve_tags(expand_fields(container, fields, ctx), container_type(container))

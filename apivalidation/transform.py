"""
In-place string transforms for normalization hooks.

    class Signup(BaseModel, Normalizer):
        email: str
        name: str

        def normalize(self):
            struct_multi(self, struct_trim_space, struct_to_lower)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from .fields import container_fields, is_container


def struct_trim_space(value: Any) -> None:
    """Strip surrounding whitespace from every string in the container."""
    struct_string_func(value, str.strip)


def struct_to_lower(value: Any) -> None:
    """Lowercase every string in the container."""
    struct_string_func(value, str.lower)


def struct_multi(value: Any, *fns: Callable[[Any], None]) -> None:
    """Run each transform on value in order."""
    for fn in fns:
        fn(value)


def struct_string_func(value: Any, fn: Callable[[str], str]) -> None:
    """
    Apply fn to every string field of a container, recursively.

    Reaches nested containers, optional fields, list and tuple elements and
    dict values. Enum members are left alone; str subclasses keep their type.
    Anything that is not a container is ignored.
    """
    if not is_container(value):
        return
    for spec in container_fields(type(value)):
        current = getattr(value, spec.name, None)
        updated = _apply(current, fn)
        if updated is not current:
            setattr(value, spec.name, updated)


def _apply(value: Any, fn: Callable[[str], str]) -> Any:
    """Return the transformed value, or the same object when mutated in place."""
    if value is None or isinstance(value, Enum):
        return value
    if isinstance(value, str):
        return _string(value, fn)
    if is_container(value):
        struct_string_func(value, fn)
        return value
    if isinstance(value, list):
        for i, element in enumerate(value):
            updated = _apply(element, fn)
            if updated is not element:
                value[i] = updated
        return value
    if isinstance(value, tuple):
        items = tuple(_apply(element, fn) for element in value)
        if all(a is b for a, b in zip(items, value)):
            return value
        return type(value)(items) if type(value) is tuple else type(value)(*items)
    if isinstance(value, dict):
        for key, element in value.items():
            updated = _apply(element, fn)
            if updated is not element:
                value[key] = updated
        return value
    return value


def _string(value: str, fn: Callable[[str], str]) -> str:
    result = fn(value)
    if result == value:
        return value
    if type(value) is not str:
        return type(value)(result)
    return result

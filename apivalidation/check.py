"""
Missing-rule check for tests.

    def test_every_field_has_rules():
        assert missing_rules(Order) == []
        assert missing_rules(Order, "notes") == []
"""

from __future__ import annotations

from typing import Any

from .declarators import Shape, classify_type
from .fields import TypeView, bind, container_fields, container_type, declared_rules, type_rules


def missing_rules(container: Any, *exclude: str) -> list[str]:
    """
    Keys of fields that no binding covers.

    Accepts a declarator type or instance. Embedded bindings are expanded
    first, so fields inherited from a ruled base count as covered when the
    container binds that base.

    Skipped automatically: fields excluded from serialization, fields hidden
    from docs, fields marked {"validate": "-"}, and underscore-prefixed
    fields. ``exclude`` may name a field by key or attribute name.

    Returns:
        Uncovered keys in declaration order; [] for non-declarators.

    Raises:
        BindingError: a binding does not resolve against the container.
    """
    tp = container if isinstance(container, type) else container_type(container)
    if classify_type(tp) not in (Shape.RULER, Shape.CONTEXT_RULER):
        return []

    if isinstance(container, type):
        subject = TypeView(tp)
        fields = type_rules(tp)
    else:
        subject = container
        fields = declared_rules(container)
    covered = {fr.spec.name for fr in bind(subject, fields)}

    excluded = set(exclude)
    missing = []
    for spec in container_fields(tp):
        if not spec.serialized or not spec.documented or spec.ruleless:
            continue
        if spec.name.startswith("_"):
            continue
        if spec.key in excluded or spec.name in excluded:
            continue
        if spec.name not in covered:
            missing.append(spec.key)
    return missing
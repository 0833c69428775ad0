"""
The normalization traversal.

Runs after decoding and before validation. The top-level value's hook is
called first; then every nested container, list/tuple element and dict value
is visited depth-first, each with its own hook called before its children.
Containers without a hook are still walked so that hooks deeper down run.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .context import get_settings, resolve_context
from .declarators import Shape, call_normalize, classify
from .fields import container_fields, is_container
from .log import get_logger

logger = get_logger(__name__)


def normalize(value: Any, ctx: Optional[Mapping[str, Any]] = None) -> None:
    """
    Call Normalizer / ContextNormalizer hooks on value and everything inside it.

    Mutates in place and never reports errors.
    """
    _normalize(value, resolve_context(ctx), 0)


def _normalize(value: Any, ctx: Mapping[str, Any], depth: int) -> None:
    if value is None:
        return
    limit = get_settings().max_depth
    if limit is not None and depth > limit:
        raise RecursionError(f"normalization exceeded max_depth={limit}")

    if call_normalize(value, ctx):
        logger.debug("normalize.visit", value_type=type(value).__name__, depth=depth)

    if is_container(value):
        for spec in container_fields(type(value)):
            _normalize(getattr(value, spec.name, None), ctx, depth + 1)
        return

    match classify(value):
        case Shape.SEQUENCE:
            for element in value:
                _normalize(element, ctx, depth + 1)
        case Shape.MAPPING:
            for element in value.values():
                _normalize(element, ctx, depth + 1)

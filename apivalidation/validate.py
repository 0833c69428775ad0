"""
The validation traversal and its public entry points.

validate() classifies a value and dispatches:

    RULER / CONTEXT_RULER   bind the container's fields, run each field's rules
                            in order, then recurse into the field value
    VALUE_RULER             run the type's value_rules() against the value
    SEQUENCE / MAPPING      validate every element, keyed by index or str(key)
    NONE                    nothing to check

Failures come back as Err(ValidationErrors) (or Err(FieldError) for a bare
value-ruled scalar). Binding mistakes raise BindingError.
"""

from __future__ import annotations

from functools import lru_cache
from typing import IO, Any, Iterable, Mapping, Optional, Union

from pydantic import TypeAdapter

from .context import get_settings, resolve_context
from .declarators import Shape, classify
from .errors import RuleError, ValidationErrors
from .fields import FieldRules, bind, declared_rules, is_container
from .log import get_logger
from .normalize import normalize
from .rules.base import run_rules
from .types import Err, Ok

logger = get_logger(__name__)


def validate(value: Any, ctx: Optional[Mapping[str, Any]] = None) -> Ok[Any] | Err[RuleError]:
    """
    Validate a value against the rules its types declare.

    Args:
        value: A container, a value-ruled scalar, a collection of those, or
            anything else (which is trivially valid).
        ctx: Mapping handed to ContextRuler.rules(); defaults to the
            configured default context.

    Returns:
        Ok(value) or Err with the aggregated failures.
    """
    result = _validate(value, resolve_context(ctx), 0)
    if isinstance(result, Err):
        logger.debug(
            "validation.failed", value_type=type(value).__name__, errors=str(result.error)
        )
    return result


def validate_with_context(ctx: Mapping[str, Any], value: Any) -> Ok[Any] | Err[RuleError]:
    """validate() with the context first, for call sites that thread one through."""
    return validate(value, ctx)


def validate_struct(
    container: Any,
    fields: Iterable[FieldRules],
    ctx: Optional[Mapping[str, Any]] = None,
) -> Ok[Any] | Err[ValidationErrors]:
    """
    Validate a container against an explicit list of bindings.

    The container does not need to be a Ruler; nested field values are still
    validated through their own declarators.
    """
    if not is_container(container):
        raise TypeError(
            f"validate_struct expects a pydantic model or dataclass instance, "
            f"got {type(container).__name__}"
        )
    return _validate_fields(container, list(fields), resolve_context(ctx), 0)


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def decode_and_validate(
    raw: Union[bytes, str, IO[bytes]],
    target: Any,
    ctx: Optional[Mapping[str, Any]] = None,
) -> Ok[Any] | Err[RuleError]:
    """
    Decode JSON into ``target``, normalize it, then validate it.

    Args:
        raw: JSON text, bytes, or a binary file-like object (read fully).
        target: The type to decode into (a container type, or any type
            pydantic accepts such as list[Order]); a container instance
            stands for its own type.
        ctx: Passed to context-carrying normalizers and declarators.

    Returns:
        Ok(decoded_value) when valid, otherwise Err with the failures.

    Raises:
        pydantic.ValidationError: The input could not be decoded. Nothing is
            normalized or validated in that case.
    """
    tp = type(target) if is_container(target) else target
    if hasattr(raw, "read"):
        raw = raw.read()
    value = _adapter(tp).validate_json(raw, strict=get_settings().strict_decode)
    normalize(value, ctx)
    result = validate(value, ctx)
    if isinstance(result, Err):
        return result
    return Ok(value)


def _check_depth(depth: int) -> None:
    limit = get_settings().max_depth
    if limit is not None and depth > limit:
        raise RecursionError(f"validation exceeded max_depth={limit}")


def _validate(value: Any, ctx: Mapping[str, Any], depth: int) -> Ok[Any] | Err[RuleError]:
    if value is None:
        return Ok(value)
    _check_depth(depth)

    match classify(value):
        case Shape.RULER | Shape.CONTEXT_RULER:
            return _validate_fields(value, declared_rules(value, ctx), ctx, depth)
        case Shape.VALUE_RULER:
            return run_rules(type(value).value_rules(), value)
        case Shape.SEQUENCE:
            return _validate_elements(
                ((str(i), v) for i, v in enumerate(value)), value, ctx, depth
            )
        case Shape.MAPPING:
            return _validate_elements(
                ((str(k), v) for k, v in value.items()), value, ctx, depth
            )
    return Ok(value)


def _validate_fields(
    container: Any, fields: list[FieldRules], ctx: Mapping[str, Any], depth: int
) -> Ok[Any] | Err[ValidationErrors]:
    errors: dict[str, RuleError] = {}
    for fr in bind(container, fields, ctx):
        value = getattr(container, fr.spec.name)
        result = _validate_field(fr, value, ctx, depth)
        if isinstance(result, Err) and fr.tag not in errors:
            errors[fr.tag] = result.error
    if errors:
        return Err(ValidationErrors(errors))
    return Ok(container)


def _validate_field(
    fr: FieldRules, value: Any, ctx: Mapping[str, Any], depth: int
) -> Ok[Any] | Err[RuleError]:
    # The value's own declarators run last, as if they were one more rule.
    for rule in fr.rules:
        if rule.skips_rest():
            return Ok(value)
        result = rule.validate(value)
        if isinstance(result, Err):
            return result
    return _validate(value, ctx, depth + 1)


def _validate_elements(
    items: Iterable[tuple[str, Any]], collection: Any, ctx: Mapping[str, Any], depth: int
) -> Ok[Any] | Err[ValidationErrors]:
    errors: dict[str, RuleError] = {}
    for key, element in items:
        if element is None or classify(element) is Shape.NONE:
            continue
        result = _validate(element, ctx, depth + 1)
        if isinstance(result, Err):
            errors[key] = result.error
    if errors:
        return Err(ValidationErrors(errors))
    return Ok(collection)

"""
Context manager for validation configuration.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Settings:
    """
    Process-independent knobs read by the traversals.

    Attributes:
        max_depth: Optional limit on traversal nesting. Exceeding it raises
            RecursionError instead of recursing until the interpreter gives up
            on cyclic data. None means unlimited.
        strict_decode: Decode JSON in pydantic strict mode (no coercion).
        default_context: Mapping passed to context-carrying declarators when
            the caller does not supply one.
    """

    max_depth: Optional[int] = None
    strict_decode: bool = False
    default_context: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )


_settings: ContextVar[Settings] = ContextVar("apivalidation_settings", default=Settings())


def get_settings() -> Settings:
    """Return the settings active in the current context."""
    return _settings.get()


@contextmanager
def settings_context(**overrides: Any):
    """
    Context manager overriding settings for the enclosed block.

    Example:
        from apivalidation import settings_context, validate

        with settings_context(max_depth=32):
            validate(tree)  # RecursionError instead of running away on cycles
    """
    token = _settings.set(replace(_settings.get(), **overrides))
    try:
        yield get_settings()
    finally:
        _settings.reset(token)


def resolve_context(ctx: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """Return ctx, or the configured default when ctx is None."""
    if ctx is None:
        return get_settings().default_context
    return ctx

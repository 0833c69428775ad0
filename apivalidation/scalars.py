"""
Named scalar bases for value-level rules.

Subclass one of these and implement ``value_rules`` to get a scalar type that
pydantic can decode and that carries its own validation and documentation.
"""

from __future__ import annotations

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .declarators import ValueRuler


class RuledStr(str, ValueRuler):
    """A str subtype whose rules follow it into every container field."""

    @classmethod
    def value_rules(cls) -> list:
        return []

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls, core_schema.str_schema()
        )


class RuledInt(int, ValueRuler):
    """An int subtype whose rules follow it into every container field."""

    @classmethod
    def value_rules(cls) -> list:
        return []

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls, core_schema.int_schema()
        )


class RuledFloat(float, ValueRuler):
    """A float subtype whose rules follow it into every container field."""

    @classmethod
    def value_rules(cls) -> list:
        return []

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls, core_schema.float_schema()
        )

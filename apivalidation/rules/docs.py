"""
Documentation-only rules. They never fail validation.
"""

from __future__ import annotations

from typing import Any

from ..schema import SchemaAccumulator
from ..types import Ok
from .base import DocRule


class Describe(DocRule):
    """Appends free text to the property description."""

    def __init__(self, text: str):
        self.text = text

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.add_description(self.text)
        return Ok()


class Default(DocRule):
    def __init__(self, value: Any):
        self.value = value

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.prop.default = self.value
        return Ok()


class Example(DocRule):
    def __init__(self, value: Any):
        self.value = value

    def describe(self, name: str, acc: SchemaAccumulator):
        acc.prop.example = self.value
        return Ok()


class Deprecate(DocRule):
    def describe(self, name: str, acc: SchemaAccumulator):
        acc.prop.deprecated = True
        return Ok()

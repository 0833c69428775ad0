"""
OpenAPI 3.0 schema nodes and the accumulator rules describe themselves onto.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Schema(BaseModel):
    """A single OpenAPI 3.0 schema object."""

    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    properties: Optional[dict[str, Schema]] = None
    required: Optional[list[str]] = None
    items: Optional[Schema] = None
    additional_properties: Optional[Union[bool, Schema]] = Field(
        default=None, alias="additionalProperties"
    )
    enum: Optional[list[Any]] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: Optional[bool] = Field(default=None, alias="exclusiveMinimum")
    exclusive_maximum: Optional[bool] = Field(default=None, alias="exclusiveMaximum")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    min_items: Optional[int] = Field(default=None, alias="minItems")
    max_items: Optional[int] = Field(default=None, alias="maxItems")
    min_properties: Optional[int] = Field(default=None, alias="minProperties")
    max_properties: Optional[int] = Field(default=None, alias="maxProperties")
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")
    nullable: Optional[bool] = None
    deprecated: Optional[bool] = None
    default: Any = None
    example: Any = None
    one_of: Optional[list[Schema]] = Field(default=None, alias="oneOf")

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict using OpenAPI key names, unset keywords omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


Schema.model_rebuild()


@dataclass
class SchemaAccumulator:
    """
    What a rule's describe() decorates.

    ``parent`` is the enclosing object schema (it owns the ``required`` list);
    ``prop`` is the property schema for the field being described. For a
    value-level rule applied to a standalone type both are the same node.
    """

    parent: Schema
    prop: Schema

    def require(self, name: str) -> None:
        if not name:
            return
        required = self.parent.required or []
        if name not in required:
            required.append(name)
        self.parent.required = required

    def add_description(self, text: str) -> None:
        """Append text, separated from existing text by a single space."""
        if not text:
            return
        current = self.prop.description or ""
        if current and not current.endswith(" "):
            current += " "
        self.prop.description = current + text

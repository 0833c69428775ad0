"""
OpenAPI 3.0 document helpers.

Build a document out of ruled types; schemas come from generate_schema so the
documented properties match the keys validation reports.

    doc = doc_base("orders", "Order service", "1.0.0")
    post(doc, "/orders", "createOrder", Endpoint(
        summary="Create an order",
        request=Order,
        responses={"201": ResponseSpec("Created", [Order]), "400": ResponseSpec("Invalid")},
    ))
    json.dumps(doc.to_dict())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .generate import generate_schema
from .schema import Schema

JSON = "application/json"
METHODS = ("get", "post", "put", "patch", "delete")


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Info(_Node):
    title: str
    description: Optional[str] = None
    version: str


class MediaType(_Node):
    schema_: Schema = Field(alias="schema")


class RequestBody(_Node):
    content: dict[str, MediaType]
    required: Optional[bool] = None


class Response(_Node):
    description: str
    content: Optional[dict[str, MediaType]] = None


class Operation(_Node):
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)


class PathItem(_Node):
    get: Optional[Operation] = None
    post: Optional[Operation] = None
    put: Optional[Operation] = None
    patch: Optional[Operation] = None
    delete: Optional[Operation] = None


class Document(_Node):
    openapi: str = "3.0.3"
    info: Info
    paths: dict[str, PathItem] = Field(default_factory=dict)


@dataclass
class ResponseSpec:
    """A response description plus the body types it may carry."""

    desc: str
    bodies: list[Any] = field(default_factory=list)


@dataclass
class Endpoint:
    """
    One operation for get()/post()/put()/patch()/delete().

    ``requests`` (oneOf) wins over ``request``; ``responses`` wins over
    ``response``, which is shorthand for {"200": ResponseSpec("OK", [response])}.
    """

    summary: str = ""
    description: str = ""
    request: Any = None
    requests: list[Any] = field(default_factory=list)
    response: Any = None
    responses: Optional[dict[str, ResponseSpec]] = None


def doc_base(service_name: str, description: str, version: str) -> Document:
    """An empty OpenAPI 3.0.3 document."""
    return Document(info=Info(title=service_name, description=description or None, version=version))


def _content(bodies: list[Any]) -> dict[str, MediaType]:
    schemas = [generate_schema(body) for body in bodies]
    if len(schemas) == 1:
        return {JSON: MediaType(schema=schemas[0])}
    return {JSON: MediaType(schema=Schema(one_of=schemas))}


def new_request(*values: Any) -> RequestBody:
    """
    Request body documenting the given types.

    One type gives its schema directly; several are wrapped in oneOf.
    """
    if not values:
        raise ValueError("no values given")
    return RequestBody(content=_content(list(values)))


def new_response(responses: dict[str, ResponseSpec]) -> dict[str, Response]:
    """Responses keyed by status code ("200", "4xx", ...)."""
    if not responses:
        raise ValueError("no values given")
    out = {}
    for status, spec in responses.items():
        content = _content(spec.bodies) if spec.bodies else None
        out[status] = Response(description=spec.desc, content=content)
    return out


def add_path(path: str, method: str, doc: Document, op: Operation) -> None:
    """Register op under path for an HTTP method, replacing any previous one."""
    method = method.lower()
    if method not in METHODS:
        raise ValueError(f"unsupported method {method.upper()!r}")
    item = doc.paths.get(path) or PathItem()
    setattr(item, method, op)
    doc.paths[path] = item


def _add_endpoint(doc: Document, path: str, method: str, operation_id: str, ep: Endpoint) -> None:
    op = Operation(
        operation_id=operation_id,
        summary=ep.summary or None,
        description=ep.description or None,
    )
    if ep.requests:
        op.request_body = new_request(*ep.requests)
    elif ep.request is not None:
        op.request_body = new_request(ep.request)

    responses = ep.responses
    if responses is None and ep.response is not None:
        responses = {"200": ResponseSpec("OK", [ep.response])}
    if responses:
        op.responses = new_response(responses)
    else:
        op.responses = {"default": Response(description="")}

    add_path(path, method, doc, op)


def get(doc: Document, path: str, operation_id: str, ep: Endpoint) -> None:
    _add_endpoint(doc, path, "get", operation_id, ep)


def post(doc: Document, path: str, operation_id: str, ep: Endpoint) -> None:
    _add_endpoint(doc, path, "post", operation_id, ep)


def put(doc: Document, path: str, operation_id: str, ep: Endpoint) -> None:
    _add_endpoint(doc, path, "put", operation_id, ep)


def patch(doc: Document, path: str, operation_id: str, ep: Endpoint) -> None:
    _add_endpoint(doc, path, "patch", operation_id, ep)


def delete(doc: Document, path: str, operation_id: str, ep: Endpoint) -> None:
    _add_endpoint(doc, path, "delete", operation_id, ep)

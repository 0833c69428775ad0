"""
Tests for the OpenAPI document helpers.
"""

import pytest

from apivalidation.openapi import (
    Document,
    Endpoint,
    Operation,
    ResponseSpec,
    add_path,
    delete,
    doc_base,
    get,
    new_request,
    new_response,
    post,
)
from structstest import Customer, Fee, Invoice


class TestDocument:
    def test_doc_base(self):
        doc = doc_base("billing", "Billing service", "1.2.0")
        assert isinstance(doc, Document)
        assert doc.to_dict() == {
            "openapi": "3.0.3",
            "info": {"title": "billing", "description": "Billing service", "version": "1.2.0"},
            "paths": {},
        }

    def test_add_path(self):
        doc = doc_base("svc", "", "1")
        add_path("/fees", "GET", doc, Operation(operation_id="listFees"))
        add_path("/fees", "post", doc, Operation(operation_id="createFee"))
        item = doc.paths["/fees"]
        assert item.get.operation_id == "listFees"
        assert item.post.operation_id == "createFee"

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            add_path("/fees", "TRACE", doc_base("svc", "", "1"), Operation())


class TestBodies:
    def test_single_request(self):
        body = new_request(Fee).to_dict()
        schema = body["content"]["application/json"]["schema"]
        assert schema["required"] == ["payment_type"]

    def test_one_of(self):
        body = new_request(Fee, Customer).to_dict()
        schema = body["content"]["application/json"]["schema"]
        assert len(schema["oneOf"]) == 2

    def test_empty_request(self):
        with pytest.raises(ValueError):
            new_request()

    def test_responses(self):
        responses = new_response(
            {"200": ResponseSpec("OK", [Invoice]), "404": ResponseSpec("Not found")}
        )
        assert responses["200"].description == "OK"
        assert responses["200"].content["application/json"].schema_.properties["fees"].unique_items
        assert responses["404"].content is None

    def test_empty_responses(self):
        with pytest.raises(ValueError):
            new_response({})


class TestEndpoints:
    def test_post(self):
        doc = doc_base("svc", "", "1")
        post(doc, "/invoices", "createInvoice", Endpoint(
            summary="Create an invoice",
            request=Invoice,
            response=Invoice,
        ))
        op = doc.to_dict()["paths"]["/invoices"]["post"]
        assert op["operationId"] == "createInvoice"
        assert op["summary"] == "Create an invoice"
        assert "requestBody" in op
        assert op["responses"]["200"]["description"] == "OK"

    def test_requests_win(self):
        doc = doc_base("svc", "", "1")
        post(doc, "/fees", "createFees", Endpoint(request=Customer, requests=[Fee, Invoice]))
        schema = doc.paths["/fees"].post.request_body.content["application/json"].schema_
        assert len(schema.one_of) == 2

    def test_default_response(self):
        doc = doc_base("svc", "", "1")
        get(doc, "/health", "health", Endpoint())
        delete(doc, "/fees/{id}", "deleteFee", Endpoint(
            responses={"204": ResponseSpec("Deleted")},
        ))
        paths = doc.to_dict()["paths"]
        assert paths["/health"]["get"]["responses"] == {"default": {"description": ""}}
        assert "requestBody" not in paths["/health"]["get"]
        assert paths["/fees/{id}"]["delete"]["responses"] == {"204": {"description": "Deleted"}}

"""Tests for application wiring: health probes, error shapes, CORS."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient

from product_api.api.validation.aggregator import (
    InputValidationError,
    input_validation_exception_handler,
    request_validation_exception_handler,
)

pytestmark = pytest.mark.integration


class TestHealth:
    def test_live(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "product-api"}

    def test_ready_checks_database(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "healthy"


class TestErrorShapes:
    def test_unknown_route_uses_error_key(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_unsupported_method_uses_error_key(self, client):
        response = client.post("/api/products/1", json={})

        assert response.status_code == 405
        assert "error" in response.json()

    def test_framework_validation_errors_use_the_same_shape(self):
        app = FastAPI()
        app.add_exception_handler(InputValidationError, input_validation_exception_handler)
        app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

        @app.get("/items/{item_id}")
        async def read_item(item_id: int):
            return {"item_id": item_id}

        response = TestClient(app).get("/items/abc")

        assert response.status_code == 400
        errors = response.json()["error"]
        assert len(errors) == 1
        assert errors[0]["path"] == "item_id"
        assert errors[0]["location"] == "params"
        assert errors[0]["type"] == "field"


class TestDocs:
    def test_openapi_lists_product_routes(self, client):
        schema = client.get("/openapi.json").json()

        assert schema["info"]["title"] == "API for Products"
        assert "/api/products" in schema["paths"]
        assert set(schema["paths"]["/api/products/{id}"]) == {"get", "put", "patch", "delete"}


class TestCors:
    def test_allows_configured_origin(self, client):
        response = client.options(
            "/api/products",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_rejects_unknown_origin(self, client):
        response = client.options(
            "/api/products",
            headers={
                "Origin": "http://evil.example",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 400

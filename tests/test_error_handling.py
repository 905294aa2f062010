"""
Tests for error handling.
Tests custom exceptions, error response formatting, the request context
middleware and the application-level exception handlers.
"""

import pytest
import json
from unittest.mock import Mock
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from listing_api.config import Settings
from listing_api.services.error_handler import ErrorHandlerService
from listing_api.utils.exceptions import (
    BadRequestError,
    DuplicateWatchListEntryError,
    InvalidCredentialsError,
    MissingParameterError,
    NotFoundError,
    PropertyNotFoundError,
    ValidationError,
)

API = "/api/v1"


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        assert ErrorHandlerService.format_error_response("Property not found") == {"error": "Property not found"}

    def test_format_validation_response(self):
        response = ErrorHandlerService.format_validation_response(
            ["Email is invalid"],
            {"email": ["is invalid"]}
        )
        assert response == {"email": ["is invalid"], "errors": ["Email is invalid"]}

    def test_handle_api_exception(self):
        response = ErrorHandlerService.handle_api_exception(NotFoundError("Watchlist entry"))

        assert response.status_code == 404
        assert json.loads(response.body) == {"error": "Watchlist entry not found"}

    def test_handle_validation_exception(self):
        exception = ValidationError.from_fields({"property_type": ["is not included in the list"]})
        response = ErrorHandlerService.handle_api_exception(exception)

        assert response.status_code == 422
        assert json.loads(response.body) == {
            "property_type": ["is not included in the list"],
            "errors": ["Property type is not included in the list"],
        }

    def test_unauthorized_carries_www_authenticate(self):
        response = ErrorHandlerService.handle_api_exception(InvalidCredentialsError())

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_handle_request_validation_error(self):
        mock_error = Mock()
        mock_error.errors.return_value = [
            {"loc": ("query", "limit"), "msg": "Input should be a valid integer", "type": "int_parsing"},
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        assert response.status_code == 422
        assert json.loads(response.body) == {"errors": ["limit Input should be a valid integer"]}

    def test_malformed_json_is_bad_request(self):
        mock_error = Mock()
        mock_error.errors.return_value = [
            {"loc": ("body", 1), "msg": "JSON decode error", "type": "json_invalid"},
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        assert response.status_code == 400
        assert json.loads(response.body) == {"error": "Malformed JSON request body"}

    def test_unparseable_path_is_not_found(self):
        mock_error = Mock()
        mock_error.errors.return_value = [
            {"loc": ("path", "property_id"), "msg": "Input should be a valid integer", "type": "int_parsing"},
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        assert response.status_code == 404

    def test_handle_integrity_error(self):
        response = ErrorHandlerService.handle_database_error(IntegrityError("statement", "params", Exception("orig")))

        assert response.status_code == 422
        assert json.loads(response.body) == {"error": "Record violates a uniqueness or reference constraint"}

    def test_handle_database_error(self):
        response = ErrorHandlerService.handle_database_error(SQLAlchemyError("connection lost"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body == {"error": "Database operation failed"}
        assert "connection lost" not in response.body.decode()

    def test_handle_unexpected_error(self):
        response = ErrorHandlerService.handle_unexpected_error(Exception("secret internals"))

        assert response.status_code == 500
        assert "unexpected error occurred" in json.loads(response.body)["error"].lower()
        assert "secret internals" not in response.body.decode()


class TestExceptions:
    """Test custom exception status codes and messages."""

    def test_status_codes(self):
        assert PropertyNotFoundError().status_code == 404
        assert BadRequestError("bad").status_code == 400
        assert DuplicateWatchListEntryError().status_code == 422
        assert InvalidCredentialsError().status_code == 401

    def test_missing_parameter_message(self):
        error = MissingParameterError("property")
        assert error.status_code == 400
        assert error.detail == "param is missing or the value is empty: property"

    def test_validation_error_full_messages(self):
        error = ValidationError.from_fields({"email": ["is invalid", "has already been taken"]})
        assert error.errors == ["Email is invalid", "Email has already been taken"]


class TestRequestContextMiddleware:
    """Test request IDs and request size limits."""

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/properties")
        assert response.headers.get("x-request-id")

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/properties", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_on_error_responses(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/properties/999999", headers={"X-Request-ID": "lost-42"})

        assert response.status_code == 404
        assert response.headers["x-request-id"] == "lost-42"

    @pytest.mark.asyncio
    async def test_oversized_request_rejected(self, test_settings: Settings):
        from listing_api.main import create_app

        settings = test_settings.model_copy(update={"max_request_size": 64})
        small_app = create_app(settings)

        async with AsyncClient(transport=ASGITransport(app=small_app), base_url="http://test") as client:
            response = await client.post(f"{API}/users", json={"user": {"email": "x" * 100, "password": "y"}})

        assert response.status_code == 400
        assert "exceeds maximum allowed size" in response.json()["error"]
        await small_app.state.database.dispose()


class TestAPIErrorResponses:
    """Test error responses produced by the application's exception handlers."""

    @pytest.mark.asyncio
    async def test_unknown_route(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/nowhere")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, async_client: AsyncClient):
        response = await async_client.patch(f"{API}/watchlists")

        assert response.status_code == 405
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_malformed_json_body(self, async_client: AsyncClient):
        response = await async_client.post(
            f"{API}/users",
            content=b'{"user": {"email": ',
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Malformed JSON request body"}

    @pytest.mark.asyncio
    async def test_database_error_is_hidden(self, app: FastAPI, async_client: AsyncClient):
        @app.get("/database-failure")
        async def database_failure():
            raise SQLAlchemyError("password authentication failed for user postgres")

        response = await async_client.get("/database-failure")

        assert response.status_code == 500
        assert response.json() == {"error": "Database operation failed"}

    @pytest.mark.asyncio
    async def test_unexpected_error_is_hidden(self, app: FastAPI):
        @app.get("/unexpected-failure")
        async def unexpected_failure():
            raise RuntimeError("stack trace details")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/unexpected-failure")

        assert response.status_code == 500
        assert "stack trace details" not in response.text
        assert response.json()["error"] == "An unexpected error occurred. Please try again later."

"""Tests for error response helpers and the catch-all handler."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.exceptions import RequestValidationError

from taskboard.core.errors import (
    ErrorCode,
    error_response,
    make_unexpected_error_handler,
    validation_details,
)


def make_request() -> MagicMock:
    """Minimal stand-in for a Starlette request."""
    request = MagicMock()
    request.url.path = "/api/tasks"
    request.method = "GET"
    return request


@pytest.mark.unit
class TestValidationDetails:
    """Tests for flattening RequestValidationError."""

    def test_location_prefix_dropped(self):
        """The body/query prefix is removed from field names."""
        exc = RequestValidationError(
            [
                {"loc": ("body", "title"), "msg": "Value error, Title is required", "type": "value_error"},
                {"loc": ("query", "limit"), "msg": "Input should be less than or equal to 100", "type": "x"},
                {"loc": ("body", "tags", 3), "msg": "Input should be a valid string", "type": "string_type"},
            ]
        )

        details = validation_details(exc)

        assert [(d.field, d.message) for d in details] == [
            ("title", "Title is required"),
            ("limit", "Input should be less than or equal to 100"),
            ("tags.3", "Input should be a valid string"),
        ]

    def test_whole_body_location(self):
        """An error on the body itself gets a generic field name."""
        exc = RequestValidationError([{"loc": ("body",), "msg": "Field required", "type": "missing"}])

        assert validation_details(exc)[0].field == "request"


@pytest.mark.unit
def test_error_response_omits_missing_details():
    """details is only present when given."""
    response = error_response(404, ErrorCode.ERR_TASK_NOT_FOUND)

    assert response.status_code == 404
    assert json.loads(response.body) == {"success": False, "error": "Task not found"}


@pytest.mark.unit
class TestUnexpectedErrorHandler:
    """Tests for the 500 handler."""

    async def test_development_shows_message(self):
        """Outside production the exception text is returned."""
        handler = make_unexpected_error_handler(is_production=False)

        response = await handler(make_request(), RuntimeError("disk on fire"))

        assert response.status_code == 500
        assert json.loads(response.body) == {"success": False, "error": "disk on fire"}

    async def test_production_hides_message(self):
        """In production a generic message is returned."""
        handler = make_unexpected_error_handler(is_production=True)

        response = await handler(make_request(), RuntimeError("secret path /etc/x"))

        assert json.loads(response.body)["error"] == ErrorCode.ERR_UNEXPECTED

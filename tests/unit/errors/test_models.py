"""Tests for the xREL error payload model."""

import pytest
from httpx import Response

from xrel_client.errors.models import ApiErrorPayload


@pytest.mark.unit
def test_parse_error_payload():
    """Test parsing a complete xREL error envelope."""
    response = Response(
        status_code=200,
        json={
            "error": "invalid_token",
            "error_description": "The access token provided is invalid.",
            "error_type": "oauth2",
        },
    )

    error = ApiErrorPayload.from_response(response)

    assert error is not None
    assert error.error == "invalid_token"
    assert error.error_description == "The access token provided is invalid."
    assert error.error_type == "oauth2"


@pytest.mark.unit
def test_parse_error_without_description():
    """Test that only the error code is required."""
    error = ApiErrorPayload.from_content(b'{"error": "not_found"}')

    assert error is not None
    assert error.error == "not_found"
    assert error.error_description is None
    assert error.error_type is None
    assert error.to_exception_message() == "not_found"


@pytest.mark.unit
def test_description_used_as_message():
    """Test that the description becomes the exception message."""
    error = ApiErrorPayload(error="x", error_description="y", error_type="z")

    assert error.to_exception_message() == "y"


@pytest.mark.unit
@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"not json",
        b"\x89PNG\r\n\x1a\n\x00\x00",
        b"[]",
        b"null",
        b'{"id": "839488661e8f92", "dirname": "Some.Release-GRP"}',
        b'{"error": ""}',
        b'{"error": null}',
        b'{"error": 42}',
    ],
)
def test_non_error_bodies_return_none(content):
    """Test that anything other than an error envelope is not an error."""
    assert ApiErrorPayload.from_content(content) is None


@pytest.mark.unit
def test_non_string_description_ignored():
    """Test that malformed optional members do not break parsing."""
    error = ApiErrorPayload.from_json({"error": "x", "error_description": ["a"], "error_type": 3})

    assert error is not None
    assert error.error_description is None
    assert error.error_type is None

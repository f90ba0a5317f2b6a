"""xREL error payload model."""

import json
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass(frozen=True)
class ApiErrorPayload:
    """Error envelope returned by the xREL API.

    See: https://www.xrel.to/wiki/6435/api-errors.html
    """

    error: str  # Machine readable error code
    error_description: str | None = None  # Human-readable explanation
    error_type: str | None = None  # "api" or "oauth2"

    @classmethod
    def from_content(cls, content: bytes | str) -> "ApiErrorPayload | None":
        """Probe a raw body for the error envelope.

        Args:
            content: Buffered response body

        Returns:
            ApiErrorPayload, or None when the body is not an error envelope
        """
        if not content:
            return None
        try:
            data = json.loads(content)
        except (ValueError, TypeError, UnicodeDecodeError):
            # Not JSON at all (NFO images, HTML error pages, ...)
            return None
        return cls.from_json(data)

    @classmethod
    def from_json(cls, data: Any) -> "ApiErrorPayload | None":
        """Build a payload from decoded JSON, or None if it is not an error."""
        if not isinstance(data, dict):
            return None

        error = data.get("error")
        if not isinstance(error, str) or not error:
            return None

        description = data.get("error_description")
        error_type = data.get("error_type")
        return cls(
            error=error,
            error_description=description if isinstance(description, str) else None,
            error_type=error_type if isinstance(error_type, str) else None,
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiErrorPayload | None":
        """Parse the error envelope from a response whose body has been read."""
        return cls.from_content(response.content)

    def to_exception_message(self) -> str:
        """Convert the payload to an exception message."""
        if self.error_description:
            return self.error_description
        return self.error

"""
Magpie SDK exceptions.

Every failure surfaced by the SDK is a MagpieError. The concrete subclass
(and its ``kind``) tells callers what went wrong so they can pattern-match
with ``except`` clauses or ``match error.kind``.
"""

import json
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Error taxonomy tags."""

    AUTHENTICATION = "authentication_error"
    PERMISSION = "permission_error"
    NOT_FOUND = "not_found_error"
    INVALID_REQUEST = "invalid_request_error"
    RATE_LIMIT = "rate_limit_error"
    API = "api_error"
    NETWORK = "network_error"
    WEBHOOK = "webhook_error"
    CONFIGURATION = "configuration_error"


RETRYABLE_TYPES = (ErrorKind.RATE_LIMIT.value, ErrorKind.NETWORK.value)

USER_MESSAGES = {
    ErrorKind.AUTHENTICATION.value: "Authentication failed. Please check your API key.",
    ErrorKind.PERMISSION.value: "You do not have permission to perform this action.",
    ErrorKind.RATE_LIMIT.value: "Too many requests. Please try again later.",
    ErrorKind.NOT_FOUND.value: "The requested resource was not found.",
    ErrorKind.INVALID_REQUEST.value: "The request was invalid. Please check your parameters.",
    ErrorKind.NETWORK.value: "Network error occurred. Please check your connection.",
}


class MagpieError(Exception):
    """Base exception for all Magpie SDK errors.

    Args:
        message: Human readable error message
        type: Taxonomy tag reported by the API or derived from the status code
        code: Machine readable error code (e.g. ``http_500``, ``invalid_json``)
        status_code: HTTP status code, if the error came from a response
        request_id: Value of the ``request-id`` response header
        details: Extra error details returned by the API
        headers: Response headers
    """

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str = "",
        type: str | None = None,
        code: str | None = None,
        status_code: int | None = None,
        request_id: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = type if type is not None else self.kind.value
        self.code = code
        self.status_code = status_code
        self.request_id = request_id
        self.details = details or {}
        self.headers = headers or {}

    def is_type(self, type: str) -> bool:
        """Check the error's taxonomy tag."""
        return self.type == type

    def is_retryable(self) -> bool:
        """Whether a caller may reasonably retry the failed operation."""
        if self.type in RETRYABLE_TYPES:
            return True
        return self.status_code is not None and self.status_code >= 500

    def user_message(self) -> str:
        """Message suitable for showing to an end user."""
        return USER_MESSAGES.get(
            self.type, "An error occurred while processing your request."
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "message": self.message,
            "type": self.type,
            "code": self.code,
            "status_code": self.status_code,
            "request_id": self.request_id,
            "details": self.details,
            "headers": self.headers,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.message!r}, type={self.type!r}, "
            f"code={self.code!r}, status_code={self.status_code})"
        )


class AuthenticationError(MagpieError):
    """Raised when the API rejects the credential (401)."""

    kind = ErrorKind.AUTHENTICATION


class PermissionDeniedError(MagpieError):
    """Raised when the credential lacks rights for the operation (403)."""

    kind = ErrorKind.PERMISSION


class ResourceNotFoundError(MagpieError):
    """Raised when requested resource is not found (404)."""

    kind = ErrorKind.NOT_FOUND


class ValidationError(MagpieError):
    """Raised when request validation fails (422 and other 4xx).

    ``errors`` maps field names to lists of messages when the API returns
    field-level validation errors.
    """

    kind = ErrorKind.INVALID_REQUEST

    def __init__(
        self,
        message: str = "Validation failed",
        errors: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors = errors or {}

    def get_field_errors(self, field: str) -> list[Any]:
        value = self.errors.get(field, [])
        return value if isinstance(value, list) else [value]

    def has_field_errors(self, field: str) -> bool:
        return bool(self.errors.get(field))

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class RateLimitError(MagpieError):
    """Raised when rate limit is exceeded (429)."""

    kind = ErrorKind.RATE_LIMIT


class NetworkError(MagpieError):
    """Raised when the API could not be reached."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message, code="network_error")


class WebhookError(MagpieError):
    """Webhook signature or payload verification failed."""

    kind = ErrorKind.WEBHOOK

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code)


class ConfigurationError(MagpieError):
    """Invalid configuration or credential provided."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code)

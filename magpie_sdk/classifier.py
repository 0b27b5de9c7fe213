"""
Error classification for Magpie API responses.

Maps an HTTP status code and response body to the matching MagpieError
subclass. Pure functions, no I/O.
"""

import json
from collections.abc import Mapping
from typing import Any

from .exceptions import (
    AuthenticationError,
    MagpieError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
    ValidationError,
)

INVALID_JSON_BODY: dict[str, Any] = {"error": {"message": "Invalid JSON response"}}


def map_status_to_error_type(status_code: int) -> str:
    """Derive the taxonomy tag from an HTTP status code."""
    if status_code >= 500:
        return "api_error"
    if status_code == 429:
        return "rate_limit_error"
    if status_code == 401:
        return "authentication_error"
    if status_code == 403:
        return "permission_error"
    if status_code == 404:
        return "not_found_error"
    if 400 <= status_code < 500:
        return "invalid_request_error"
    return "api_error"


def error_class_for_status(status_code: int) -> type[MagpieError]:
    """Select the exception class raised for a status code."""
    if status_code == 401:
        return AuthenticationError
    if status_code == 403:
        return PermissionDeniedError
    if status_code == 404:
        return ResourceNotFoundError
    if status_code == 429:
        return RateLimitError
    if 400 <= status_code < 500:
        # 422 and every other 4xx
        return ValidationError
    return MagpieError


def get_request_id(headers: Mapping[str, str] | None) -> str | None:
    """Read the request id header, case-insensitively."""
    if not headers:
        return None
    for name, value in headers.items():
        if name.lower() == "request-id" and value:
            return value
    return None


def _decode_body(body: str | bytes | None) -> Any:
    if body is None or body == "" or body == b"":
        return INVALID_JSON_BODY
    try:
        return json.loads(body)
    except (ValueError, TypeError):
        return INVALID_JSON_BODY


def _normalize_message(raw: Any, status_code: int) -> str:
    default = f"HTTP {status_code} Error"
    if raw is None:
        return default
    if isinstance(raw, list):
        return ", ".join(item for item in raw if isinstance(item, str)) or default
    return str(raw)


def classify_response(
    status_code: int,
    body: str | bytes | None,
    headers: Mapping[str, str] | None = None,
) -> MagpieError:
    """
    Build the typed error for a failed API response.

    Args:
        status_code: HTTP status code
        body: Raw response body
        headers: Response headers

    Returns:
        The MagpieError subclass matching the status code, populated from
        the body's ``error`` object (or the body itself).
    """
    data = _decode_body(body)
    if not isinstance(data, dict):
        data = {}

    error = data.get("error", data)
    if isinstance(error, str):
        error = {"message": error}
    elif not isinstance(error, dict):
        error = {}

    message = _normalize_message(
        error.get("message", data.get("message")), status_code
    )
    error_type = error.get("type") or map_status_to_error_type(status_code)
    code = error.get("code") or f"http_{status_code}"

    raw_details = error.get("details")
    details = raw_details if isinstance(raw_details, dict) else {}

    header_map = dict(headers) if headers else {}
    kwargs: dict[str, Any] = {
        "type": error_type,
        "code": code,
        "status_code": status_code,
        "request_id": get_request_id(headers),
        "details": details,
        "headers": header_map,
    }

    error_class = error_class_for_status(status_code)
    if error_class is ValidationError:
        field_errors = error.get("errors")
        if not isinstance(field_errors, dict):
            field_errors = details
        return ValidationError(message, errors=field_errors, **kwargs)

    return error_class(message, **kwargs)

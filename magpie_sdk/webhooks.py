"""
Webhook signature verification.

Magpie signs webhook payloads with HMAC. The signature header looks like
``t=1700000000,v1=<hex>`` (several ``v1=`` entries may be present while a
secret is being rotated) or a bare ``v1=<hex>``.

Example:
    ```python
    verifier = WebhookVerifier()
    event = verifier.construct_event(
        request_body,
        request.headers["x-magpie-signature"],
        settings.webhook_secret,
    )
    if event.type == WebhookEventType.CHARGE_SUCCEEDED:
        ...
    ```
"""

import hashlib
import hmac
import json
import time
from collections.abc import Callable, Mapping
from typing import Any

import pydantic
import structlog

from .exceptions import WebhookError
from .models import WebhookEvent

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "algorithm": "sha256",
    "signature_header": "x-magpie-signature",
    "timestamp_header": "x-magpie-timestamp",
    "tolerance": 300,
    "prefix": "v1=",
}

# camelCase option names used by other Magpie SDKs
CONFIG_ALIASES = {
    "signatureHeader": "signature_header",
    "timestampHeader": "timestamp_header",
}

TIMESTAMP_PREFIX = "t="


def _to_bytes(value: str | bytes) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def compute_signature(payload: str | bytes, secret: str, algorithm: str = "sha256") -> str:
    """HMAC hex digest of ``payload`` keyed with ``secret``."""
    return hmac.new(
        _to_bytes(secret), _to_bytes(payload), getattr(hashlib, algorithm)
    ).hexdigest()


def timing_safe_equal(a: str, b: str) -> bool:
    """Constant-time string comparison. Different lengths never match."""
    if len(a) != len(b):
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def parse_signature_header(header: str, prefix: str = "v1=") -> tuple[str | None, list[str]]:
    """
    Split a signature header into its timestamp and candidate signatures.

    Returns:
        ``(timestamp, signatures)``; ``timestamp`` is None when the header has
        no ``t=`` element. ``signatures`` is empty when nothing carries
        ``prefix``.
    """
    timestamp = None
    signatures = []
    for element in header.split(","):
        element = element.strip()
        if element.startswith(prefix):
            signatures.append(element[len(prefix):])
        elif element.startswith(TIMESTAMP_PREFIX):
            timestamp = element[len(TIMESTAMP_PREFIX):]
    return timestamp, signatures


def _header_value(headers: Mapping[str, Any], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() != wanted:
            continue
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        return value or None
    return None


class WebhookVerifier:
    """
    Verifies webhook signatures and builds WebhookEvent objects.

    Args:
        clock: Returns the current unix time in seconds
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    @staticmethod
    def _merge_config(config: dict[str, Any] | None) -> dict[str, Any]:
        merged = dict(DEFAULT_CONFIG)
        for key, value in (config or {}).items():
            merged[CONFIG_ALIASES.get(key, key)] = value
        return merged

    def _now(self) -> int:
        return int(self._clock())

    def verify_signature(
        self,
        payload: str | bytes,
        signature: str,
        secret: str,
        config: dict[str, Any] | None = None,
    ) -> bool:
        """
        Check a signature header against the payload.

        The payload must be the raw request body. A ``v1`` value matches if
        it equals HMAC("{t}.{payload}") when the header carries ``t=``, and
        HMAC(payload) otherwise.

        Returns:
            True if any signature in the header matches. Never raises.
        """
        options = self._merge_config(config)
        try:
            timestamp, candidates = parse_signature_header(signature, options["prefix"])
            if not candidates:
                return False

            # With t= present only the timestamp-bound digest matches, so a v1
            # value cannot be moved behind a different t=.
            signed: str | bytes = payload
            if timestamp is not None:
                signed = _to_bytes(f"{timestamp}.") + _to_bytes(payload)
            expected = compute_signature(signed, secret, options["algorithm"])
        except (AttributeError, TypeError, ValueError) as e:
            logger.debug("webhook_signature_unverifiable", error=str(e))
            return False

        return any(timing_safe_equal(candidate, expected) for candidate in candidates)

    def is_valid_timestamp(self, timestamp: int, tolerance: int = 300) -> bool:
        """Whether ``timestamp`` lies within ``tolerance`` seconds of now."""
        return abs(self._now() - timestamp) <= tolerance

    def _check_timestamp(self, raw: Any, tolerance: int) -> None:
        try:
            timestamp = int(raw)
        except (TypeError, ValueError):
            timestamp = None
        if timestamp is None or not self.is_valid_timestamp(timestamp, tolerance):
            logger.warning("webhook_timestamp_rejected", timestamp=raw, tolerance=tolerance)
            raise WebhookError(
                "Webhook timestamp is outside tolerance window",
                code="webhook_timestamp_invalid",
            )

    def verify_signature_with_timestamp(
        self,
        payload: str | bytes,
        headers: Mapping[str, Any],
        secret: str,
        config: dict[str, Any] | None = None,
    ) -> bool:
        """
        Verify a webhook using its request headers.

        Raises:
            WebhookError: If the signature header is missing, or the
                timestamp header is outside the tolerance window
        """
        options = self._merge_config(config)
        signature = _header_value(headers, options["signature_header"])
        timestamp = _header_value(headers, options["timestamp_header"])

        if not signature:
            raise WebhookError(
                f"Missing signature header: {options['signature_header']}",
                code="webhook_signature_missing",
            )

        if timestamp:
            self._check_timestamp(timestamp, options["tolerance"])

        return self.verify_signature(payload, signature, secret, config)

    def construct_event(
        self,
        payload: str | bytes,
        signature: str,
        secret: str,
        config: dict[str, Any] | None = None,
    ) -> WebhookEvent:
        """
        Verify a webhook and parse it into a WebhookEvent.

        Raises:
            WebhookError: If the signature does not verify, the signed
                timestamp is stale, or the payload is not a valid event
        """
        if not self.verify_signature(payload, signature, secret, config):
            raise WebhookError("Invalid webhook signature")

        options = self._merge_config(config)
        timestamp, _ = parse_signature_header(signature, options["prefix"])
        if timestamp is not None:
            self._check_timestamp(timestamp, options["tolerance"])

        try:
            data = json.loads(payload)
        except ValueError as e:
            raise WebhookError("Invalid JSON in webhook payload") from e

        if not isinstance(data, dict):
            raise WebhookError("Invalid JSON in webhook payload")

        try:
            return WebhookEvent.from_dict(data)
        except pydantic.ValidationError as e:
            raise WebhookError("Invalid webhook event payload", code="invalid_event") from e

    def generate_test_signature(
        self,
        payload: str | bytes,
        secret: str,
        algorithm: str = "sha256",
        prefix: str = "v1=",
    ) -> str:
        """Build a timestamped signature header for tests and local development."""
        timestamp = self._now()
        signed = _to_bytes(f"{timestamp}.") + _to_bytes(payload)
        return f"{TIMESTAMP_PREFIX}{timestamp},{prefix}{compute_signature(signed, secret, algorithm)}"

"""Webhooks resource."""

from collections.abc import Mapping
from typing import Any

from ..models import WebhookEvent
from ..transport import HTTPClient
from ..webhooks import WebhookVerifier
from .base import BaseResource


class WebhooksResource(BaseResource):
    """
    Webhook verification bound to a client.

    Verification is local; no API call is made.
    """

    def __init__(self, client: HTTPClient, verifier: WebhookVerifier | None = None) -> None:
        super().__init__(client, "webhooks")
        self.verifier = verifier or WebhookVerifier()

    def verify_signature(
        self,
        payload: str | bytes,
        signature: str,
        secret: str,
        config: dict[str, Any] | None = None,
    ) -> bool:
        return self.verifier.verify_signature(payload, signature, secret, config)

    def verify_signature_with_timestamp(
        self,
        payload: str | bytes,
        headers: Mapping[str, Any],
        secret: str,
        config: dict[str, Any] | None = None,
    ) -> bool:
        return self.verifier.verify_signature_with_timestamp(payload, headers, secret, config)

    def construct_event(
        self,
        payload: str | bytes,
        signature: str,
        secret: str,
        config: dict[str, Any] | None = None,
    ) -> WebhookEvent:
        return self.verifier.construct_event(payload, signature, secret, config)

    def generate_test_signature(
        self,
        payload: str | bytes,
        secret: str,
        algorithm: str = "sha256",
        prefix: str = "v1=",
    ) -> str:
        return self.verifier.generate_test_signature(payload, secret, algorithm, prefix)

    def is_valid_timestamp(self, timestamp: int, tolerance: int = 300) -> bool:
        return self.verifier.is_valid_timestamp(timestamp, tolerance)

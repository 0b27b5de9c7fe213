"""Checkout sessions resource."""

from typing import Any

from ..models import CaptureSessionRequest, CheckoutSession, CreateCheckoutSessionRequest
from ..transport import HTTPClient
from .base import BaseResource, to_payload

CHECKOUT_BASE_URL = "https://api.pay.magpie.im/"


class CheckoutSessionsResource(BaseResource):
    """Hosted checkout sessions, served from the checkout API host."""

    model = CheckoutSession

    def __init__(self, client: HTTPClient, base_url: str = CHECKOUT_BASE_URL) -> None:
        super().__init__(client, "", base_url)

    def create(
        self,
        request: CreateCheckoutSessionRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> CheckoutSession:
        return self._create(to_payload(request), options)

    def retrieve(self, id: str, options: dict[str, Any] | None = None) -> CheckoutSession:
        return self._retrieve(id, options)

    def capture(
        self,
        id: str,
        request: CaptureSessionRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> CheckoutSession:
        """Capture the authorized payment of a session."""
        return self._custom_resource_action("POST", id, "capture", to_payload(request), options)

    def expire(self, id: str, options: dict[str, Any] | None = None) -> CheckoutSession:
        return self._custom_resource_action("POST", id, "expire", None, options)


class CheckoutResource:
    """Namespace for checkout APIs (``magpie.checkout.sessions``)."""

    def __init__(self, client: HTTPClient, base_url: str = CHECKOUT_BASE_URL) -> None:
        self.sessions = CheckoutSessionsResource(client, base_url)

"""Charges resource."""

from typing import Any

from ..models import (
    CaptureChargeRequest,
    Charge,
    CreateChargeRequest,
    RefundChargeRequest,
)
from ..transport import HTTPClient
from .base import BaseResource, to_payload


class ChargesResource(BaseResource):
    """
    Create and manage charges.

    Example:
        ```python
        charge = magpie.charges.create(
            {"amount": 10000, "currency": "php", "source": "src_123",
             "description": "Order #1234", "statement_descriptor": "MYSHOP"},
            {"idempotency_key": "order-1234"},
        )
        ```
    """

    model = Charge

    def __init__(self, client: HTTPClient) -> None:
        super().__init__(client, "charges")

    def create(
        self,
        params: CreateChargeRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> Charge:
        """Create a charge. Pass an ``idempotency_key`` option to make retries safe."""
        return self._create(to_payload(params), options)

    def retrieve(self, id: str, options: dict[str, Any] | None = None) -> Charge:
        return self._retrieve(id, options)

    def capture(
        self,
        id: str,
        params: CaptureChargeRequest | dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Charge:
        """Capture an authorized charge, optionally for a smaller amount."""
        return self._custom_resource_action("POST", id, "capture", to_payload(params) or {}, options)

    def verify(self, id: str, params: dict[str, Any], options: dict[str, Any] | None = None) -> Charge:
        """Submit verification data (e.g. an OTP) for a charge."""
        return self._custom_resource_action("POST", id, "verify", params, options)

    def void(self, id: str, options: dict[str, Any] | None = None) -> Charge:
        """Void an uncaptured charge."""
        return self._custom_resource_action("POST", id, "void", None, options)

    def refund(
        self,
        id: str,
        params: RefundChargeRequest | dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Charge:
        return self._custom_resource_action("POST", id, "refund", to_payload(params) or {}, options)

"""Payment requests resource."""

from typing import Any

from ..models import CreatePaymentRequestRequest, PaymentRequest, VoidPaymentRequestRequest
from ..transport import HTTPClient
from .base import BaseResource, to_payload

PAYMENT_REQUESTS_BASE_URL = "https://request.magpie.im/api/v1/"


class PaymentRequestsResource(BaseResource):
    """Invoice-style payment requests, served from the payment requests host."""

    model = PaymentRequest

    def __init__(self, client: HTTPClient, base_url: str = PAYMENT_REQUESTS_BASE_URL) -> None:
        super().__init__(client, "requests", base_url)

    def create(
        self,
        request: CreatePaymentRequestRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> PaymentRequest:
        return self._create(to_payload(request), options)

    def retrieve(self, id: str, options: dict[str, Any] | None = None) -> PaymentRequest:
        return self._retrieve(id, options)

    def resend(self, id: str, options: dict[str, Any] | None = None) -> PaymentRequest:
        """Deliver the payment request to the customer again."""
        return self._custom_resource_action("POST", id, "resend", None, options)

    def void(
        self,
        id: str,
        request: VoidPaymentRequestRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> PaymentRequest:
        # The void endpoint wraps the payment request: {"message": ..., "data": {...}}
        response = self.client.request(
            "POST", self._build_path(id, "void"), to_payload(request), self._options(options)
        )
        if isinstance(response, dict) and isinstance(response.get("data"), dict):
            return self._wrap(response["data"])
        return self._wrap(response)

"""Payment links resource."""

from typing import Any

from ..models import CreatePaymentLinkRequest, PaymentLink, UpdatePaymentLinkRequest
from ..transport import HTTPClient
from .base import BaseResource, to_payload

PAYMENT_LINKS_BASE_URL = "https://buy.magpie.im/api/v1"


class PaymentLinksResource(BaseResource):
    """Reusable payment links, served from the payment links host."""

    model = PaymentLink

    def __init__(self, client: HTTPClient, base_url: str = PAYMENT_LINKS_BASE_URL) -> None:
        super().__init__(client, "links", base_url)

    def create(
        self,
        params: CreatePaymentLinkRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> PaymentLink:
        return self._create(to_payload(params), options)

    def retrieve(self, id: str, options: dict[str, Any] | None = None) -> PaymentLink:
        return self._retrieve(id, options)

    def update(
        self,
        id: str,
        params: UpdatePaymentLinkRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> PaymentLink:
        return self._update(id, to_payload(params), options)

    def activate(self, id: str, options: dict[str, Any] | None = None) -> PaymentLink:
        return self._custom_resource_action("POST", id, "activate", None, options)

    def deactivate(self, id: str, options: dict[str, Any] | None = None) -> PaymentLink:
        return self._custom_resource_action("POST", id, "deactivate", None, options)

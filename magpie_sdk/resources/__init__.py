"""Resource facades for the Magpie API."""

from .base import BaseResource
from .charges import ChargesResource
from .checkout import CheckoutResource, CheckoutSessionsResource
from .customers import CustomersResource
from .organization import OrganizationResource
from .payment_links import PaymentLinksResource
from .payment_requests import PaymentRequestsResource
from .sources import SourcesResource
from .webhooks import WebhooksResource

__all__ = [
    "BaseResource",
    "ChargesResource",
    "CheckoutResource",
    "CheckoutSessionsResource",
    "CustomersResource",
    "OrganizationResource",
    "PaymentLinksResource",
    "PaymentRequestsResource",
    "SourcesResource",
    "WebhooksResource",
]

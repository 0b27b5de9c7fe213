"""
Magpie SDK - Python SDK for the Magpie Payment API

This SDK provides a typed, synchronous interface to the Magpie payment API
with automatic retries, typed errors and webhook signature verification.

Example:
    ```python
    from magpie_sdk import MagpieClient, MagpieConfig

    magpie = MagpieClient("sk_test_...", MagpieConfig(timeout=10))

    charge = magpie.charges.create(
        {
            "amount": 10000,
            "currency": "php",
            "source": "src_123",
            "description": "Order #1234",
            "statement_descriptor": "MYSHOP",
        },
        {"idempotency_key": "order-1234"},
    )
    ```

Webhooks:
    ```python
    from magpie_sdk import WebhookVerifier, WebhookError

    try:
        event = WebhookVerifier().construct_event(
            raw_body, signature_header, webhook_secret
        )
    except WebhookError:
        return 400
    ```
"""

from .classifier import classify_response, map_status_to_error_type
from .client import MagpieClient
from .config import MagpieConfig
from .credentials import PublicKeyResolver
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    MagpieError,
    NetworkError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
    ValidationError,
    WebhookError,
)
from .models import (
    BillingAddressCollection,
    CaptureChargeRequest,
    CaptureSessionRequest,
    Charge,
    ChargeStatus,
    CheckoutSession,
    CheckoutSubmitType,
    CreateChargeRequest,
    CreateCheckoutSessionRequest,
    CreateCustomerRequest,
    CreatePaymentLinkRequest,
    CreatePaymentRequestRequest,
    Customer,
    LineItem,
    Organization,
    PaymentLink,
    PaymentLinkItem,
    PaymentRequest,
    PaymentStatus,
    RefundChargeRequest,
    RefundStatus,
    SessionMode,
    Source,
    SourceType,
    UpdateCustomerRequest,
    UpdatePaymentLinkRequest,
    VoidPaymentRequestRequest,
    WebhookEvent,
    WebhookEventType,
)
from .retry import RetryPolicy
from .settings import MagpieSettings
from .transport import HTTPClient
from .version import __version__
from .webhooks import WebhookVerifier

__all__ = [
    # Clients
    "MagpieClient",
    "HTTPClient",
    "MagpieConfig",
    "MagpieSettings",
    "PublicKeyResolver",
    "RetryPolicy",
    "WebhookVerifier",
    # Errors
    "classify_response",
    "map_status_to_error_type",
    "ErrorKind",
    "MagpieError",
    "AuthenticationError",
    "ConfigurationError",
    "NetworkError",
    "PermissionDeniedError",
    "RateLimitError",
    "ResourceNotFoundError",
    "ValidationError",
    "WebhookError",
    # Models
    "Charge",
    "CheckoutSession",
    "Customer",
    "LineItem",
    "Organization",
    "PaymentLink",
    "PaymentLinkItem",
    "PaymentRequest",
    "Source",
    "WebhookEvent",
    # Requests
    "CaptureChargeRequest",
    "CaptureSessionRequest",
    "CreateChargeRequest",
    "CreateCheckoutSessionRequest",
    "CreateCustomerRequest",
    "CreatePaymentLinkRequest",
    "CreatePaymentRequestRequest",
    "RefundChargeRequest",
    "UpdateCustomerRequest",
    "UpdatePaymentLinkRequest",
    "VoidPaymentRequestRequest",
    # Enums
    "BillingAddressCollection",
    "ChargeStatus",
    "CheckoutSubmitType",
    "PaymentStatus",
    "RefundStatus",
    "SessionMode",
    "SourceType",
    "WebhookEventType",
    # Version
    "__version__",
]

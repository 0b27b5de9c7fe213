"""Magpie SDK Client implementation."""

import time
from collections.abc import Callable
from typing import Any

import httpx

from .config import MagpieConfig
from .credentials import PublicKeyResolver, is_test_key
from .exceptions import ConfigurationError
from .resources import (
    ChargesResource,
    CheckoutResource,
    CustomersResource,
    OrganizationResource,
    PaymentLinksResource,
    PaymentRequestsResource,
    SourcesResource,
    WebhooksResource,
)
from .settings import MagpieSettings
from .transport import HTTPClient


class MagpieClient:
    """
    Client for the Magpie Payment API.

    Gives access to every resource (charges, customers, sources, checkout
    sessions, payment links, payment requests, organization, webhooks) on
    top of a shared HTTP transport with authentication, retries and typed
    errors.

    Example:
        ```python
        from magpie_sdk import MagpieClient, MagpieConfig

        magpie = MagpieClient("sk_test_...", MagpieConfig(max_retries=5))

        customer = magpie.customers.create(
            {"email": "john@example.com", "description": "John Doe"}
        )
        charge = magpie.charges.create(
            {
                "amount": 10000,
                "currency": "php",
                "source": "src_123",
                "description": "Payment for Order #1234",
                "statement_descriptor": "MYSHOP",
            },
            {"idempotency_key": "order-1234"},
        )
        ```
    """

    def __init__(
        self,
        secret_key: str,
        config: MagpieConfig | dict[str, Any] | None = None,
        logger: Any = None,
        *,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the Magpie client.

        Args:
            secret_key: Magpie secret key (must start with "sk_")
            config: MagpieConfig, dict of config options, or None for defaults
            logger: structlog-compatible logger for transport events
            transport: Optional httpx transport (e.g. httpx.MockTransport)
            sleep: Function used to wait between retry attempts

        Raises:
            ConfigurationError: If the secret key is invalid
        """
        self.client = HTTPClient(
            secret_key, config, logger, transport=transport, sleep=sleep
        )

        self.organization = OrganizationResource(self.client)
        self.public_key_resolver = PublicKeyResolver(self.organization, self.client)

        self.charges = ChargesResource(self.client)
        self.customers = CustomersResource(self.client)
        self.sources = SourcesResource(self.client, self.public_key_resolver)
        self.checkout = CheckoutResource(self.client)
        self.payment_requests = PaymentRequestsResource(self.client)
        self.payment_links = PaymentLinksResource(self.client)
        self.webhooks = WebhooksResource(self.client)

        self.client.logger.info(
            "magpie_client_initialized",
            base_url=self.client.config.base_url,
            api_version=self.client.config.api_version,
            test_mode=is_test_key(secret_key),
        )

    @classmethod
    def from_settings(
        cls, settings: MagpieSettings | None = None, **kwargs: Any
    ) -> "MagpieClient":
        """
        Build a client from ``MAGPIE_*`` environment settings.

        Raises:
            ConfigurationError: If no secret key is configured
        """
        settings = settings or MagpieSettings()
        if not settings.secret_key:
            raise ConfigurationError("Secret key is required (set MAGPIE_SECRET_KEY)")
        return cls(settings.secret_key, settings.to_config(), **kwargs)

    def __enter__(self) -> "MagpieClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def get_client(self) -> HTTPClient:
        """The underlying HTTP transport, for endpoints without a resource."""
        return self.client

    def get_config(self) -> MagpieConfig:
        return self.client.get_config()

    def ping(self) -> bool:
        """Test connectivity to the Magpie API."""
        return self.client.ping()

    def set_debug(self, debug: bool) -> None:
        """Enable or disable request/response logging."""
        self.client.set_debug(debug)

    def set_api_key(self, api_key: str) -> None:
        """Rotate the credential and drop state derived from the old one."""
        self.client.set_api_key(api_key)
        self.public_key_resolver.reset()

    @property
    def api_version(self) -> str:
        return self.client.config.api_version

    @property
    def base_url(self) -> str:
        return self.client.config.base_url

    def close(self) -> None:
        self.client.close()

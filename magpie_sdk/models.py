"""Data models for Magpie SDK."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


# =============================================================================
# Enums
# =============================================================================


class ChargeStatus(str, Enum):
    """Charge status."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RefundStatus(str, Enum):
    """Refund status."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SourceType(str, Enum):
    """Payment source types."""

    CARD = "card"
    BPI = "bpi"
    QRPH = "qrph"
    GCASH = "gcash"
    MAYA = "maya"
    PAYMAYA = "paymaya"


class PaymentStatus(str, Enum):
    """Checkout session payment status."""

    PAID = "paid"
    UNPAID = "unpaid"
    EXPIRED = "expired"
    AUTHORIZED = "authorized"
    VOIDED = "voided"


class SessionMode(str, Enum):
    """Checkout session mode."""

    PAYMENT = "payment"
    SETUP = "setup"
    SUBSCRIPTION = "subscription"
    SAVE_CARD = "save_card"


class CheckoutSubmitType(str, Enum):
    """Label of the checkout submit button."""

    PAY = "pay"
    BOOK = "book"
    DONATE = "donate"
    SEND = "send"


class BillingAddressCollection(str, Enum):
    """Whether checkout collects a billing address."""

    AUTO = "auto"
    REQUIRED = "required"


class WebhookEventType(str, Enum):
    """Webhook event types."""

    CUSTOMER_CREATED = "customer.created"
    CUSTOMER_UPDATED = "customer.updated"
    CUSTOMER_DELETED = "customer.deleted"
    SOURCE_CREATED = "source.created"
    SOURCE_UPDATED = "source.updated"
    SOURCE_DELETED = "source.deleted"
    CHARGE_CREATED = "charge.created"
    CHARGE_UPDATED = "charge.updated"
    CHARGE_SUCCEEDED = "charge.succeeded"
    CHARGE_FAILED = "charge.failed"
    CHARGE_CAPTURED = "charge.captured"
    CHARGE_DISPUTED = "charge.disputed"
    REFUND_CREATED = "refund.created"
    REFUND_UPDATED = "refund.updated"
    PAYMENT_REQUEST_CREATED = "payment_request.created"
    PAYMENT_REQUEST_UPDATED = "payment_request.updated"
    PAYMENT_REQUEST_SUCCEEDED = "payment_request.succeeded"
    PAYMENT_REQUEST_FAILED = "payment_request.failed"
    CHECKOUT_SESSION_CREATED = "checkout_session.created"
    CHECKOUT_SESSION_COMPLETED = "checkout_session.completed"
    CHECKOUT_SESSION_EXPIRED = "checkout_session.expired"
    PAYMENT_LINK_CREATED = "payment_link.created"
    PAYMENT_LINK_UPDATED = "payment_link.updated"


# =============================================================================
# Base Models
# =============================================================================


class MagpieObject(BaseModel):
    """Base for API response objects.

    Undocumented fields are kept as extras; ``raw()`` returns the payload
    exactly as received. Resource models only require ``id``; which other
    fields are present is up to the API.
    """

    model_config = ConfigDict(extra="allow")

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MagpieObject":
        obj = cls.model_validate(data)
        obj._raw = dict(data)
        return obj

    def raw(self) -> dict[str, Any]:
        """The JSON object this model was built from."""
        return self._raw or self.to_dict()

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class BaseRequest(BaseModel):
    """Base for request payloads."""

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        """Wire representation, without unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


# =============================================================================
# Value Objects
# =============================================================================


class Address(MagpieObject):
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None


class Billing(MagpieObject):
    name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    address: Address | None = None


class Shipping(MagpieObject):
    name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    address: Address | None = None


class BrandingOptions(MagpieObject):
    icon: str | None = None
    logo: str | None = None
    use_logo: bool = False
    primary_color: str = ""
    secondary_color: str = ""


class ChargeAction(MagpieObject):
    """Next action required to complete a charge (e.g. 3DS redirect)."""

    type: str
    url: str


class ChargeProviderResponseLink(MagpieObject):
    href: str
    rel: str


class ChargeProviderResponse(MagpieObject):
    links: list[ChargeProviderResponseLink] = Field(default_factory=list)
    code: str | None = None
    message: str | None = None
    logref: str | None = None


class ChargeFailure(MagpieObject):
    reason: str | None = None
    code: str | None = None
    next_steps: str | None = None
    provider_response: ChargeProviderResponse | None = None


class CheckoutSessionAddress(MagpieObject):
    name: str | None = None
    line1: str | None = None
    line2: str | None = None
    barangay: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class CheckoutSessionMerchant(MagpieObject):
    name: str
    support_email: str | None = None
    support_phone: str | None = None


class LineItem(MagpieObject):
    name: str
    amount: int
    quantity: int
    description: str | None = None
    image: str | None = None


class PaymentLinkItem(LineItem):
    remaining: int = 0


class PaymentRequestDelivered(MagpieObject):
    email: bool = False
    sms: bool = False


class ShippingAddressCollection(MagpieObject):
    allowed_countries: list[str] = Field(default_factory=list)


class SourceBankAccount(MagpieObject):
    reference_id: str | None = None
    bank_type: str | None = None
    bank_code: str | None = None
    account_name: str | None = None
    account_number: str | None = None
    account_type: str | None = None
    expires_at: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SourceCard(MagpieObject):
    id: str | None = None
    object: str = "card"
    name: str | None = None
    last4: str | None = None
    exp_month: str | None = None
    exp_year: str | None = None
    brand: str | None = None
    country: str | None = None
    cvc_checked: str | None = None
    funding: str | None = None
    issuing_bank: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    address_country: str | None = None
    address_zip: str | None = None


class SourceOwner(MagpieObject):
    name: str | None = None
    address_country: str | None = None
    billing: Billing | None = None
    shipping: Shipping | None = None


class SourceRedirect(MagpieObject):
    success: str | None = None
    fail: str | None = None
    notify: str | None = None


class Refund(MagpieObject):
    id: str
    object: str = "refund"
    amount: int | None = None
    currency: str | None = None
    reason: str | None = None
    status: RefundStatus | str | None = Field(None, union_mode="left_to_right")
    created_at: str | None = None
    updated_at: str | None = None


# =============================================================================
# Resource Models
# =============================================================================


class Source(MagpieObject):
    """A payment source (card, bank account, e-wallet)."""

    id: str
    object: str = "source"
    type: SourceType | str | None = Field(None, union_mode="left_to_right")
    redirect: SourceRedirect | None = None
    vaulted: bool = False
    used: bool = False
    livemode: bool = False
    created_at: str | None = None
    updated_at: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    card: SourceCard | None = None
    bank_account: SourceBankAccount | None = None
    owner: SourceOwner | None = None


class Charge(MagpieObject):
    """A charge against a payment source."""

    id: str
    object: str = "charge"
    amount: int | None = None
    amount_refunded: int = 0
    authorized: bool = False
    captured: bool = False
    currency: str | None = None
    statement_descriptor: str | None = None
    description: str | None = None
    source: Source | None = None
    require_auth: bool = False
    owner: SourceOwner | None = None
    action: ChargeAction | None = None
    refunds: list[Refund] = Field(default_factory=list)
    status: ChargeStatus | str | None = Field(None, union_mode="left_to_right")
    livemode: bool = False
    created_at: str | None = None
    updated_at: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    failure_data: ChargeFailure | None = None

    @property
    def is_successful(self) -> bool:
        return self.status == ChargeStatus.SUCCEEDED


class Customer(MagpieObject):
    """A customer record."""

    id: str
    object: str = "customer"
    email: str | None = None
    description: str | None = None
    mobile_number: str | None = None
    livemode: bool = False
    created_at: str | None = None
    updated_at: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    name: str | None = None
    sources: list[Source] = Field(default_factory=list)


class Organization(MagpieObject):
    """The organization that owns the API key."""

    id: str
    object: str = "organization"
    title: str | None = None
    account_name: str | None = None
    statement_descriptor: str | None = None
    pk_test_key: str | None = None
    sk_test_key: str | None = None
    pk_live_key: str | None = None
    sk_live_key: str | None = None
    branding: dict[str, Any] = Field(default_factory=dict)
    status: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    payment_method_settings: dict[str, Any] = Field(default_factory=dict)
    rates: dict[str, Any] = Field(default_factory=dict)
    payout_settings: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    business_address: str | None = None


class CheckoutSession(MagpieObject):
    """A hosted checkout session."""

    id: str
    object: str = "checkout_session"
    amount_subtotal: int = 0
    amount_total: int = 0
    branding: BrandingOptions | None = None
    billing_address_collection: BillingAddressCollection | str | None = Field(None, union_mode="left_to_right")
    cancel_url: str | None = None
    created_at: str | None = None
    expires_at: str | None = None
    currency: str | None = None
    customer_name_collection: bool = False
    last_updated: str | None = None
    line_items: list[LineItem] = Field(default_factory=list)
    livemode: bool = False
    locale: str | None = None
    merchant: CheckoutSessionMerchant | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    mode: SessionMode | str | None = Field(None, union_mode="left_to_right")
    payment_method_types: list[str] = Field(default_factory=list)
    payment_status: PaymentStatus | str | None = Field(None, union_mode="left_to_right")
    payment_url: str | None = None
    phone_number_collection: bool = False
    require_auth: bool = False
    submit_type: CheckoutSubmitType | str | None = Field(None, union_mode="left_to_right")
    success_url: str | None = None
    bank_code: str | None = None
    billing: CheckoutSessionAddress | None = None
    client_reference_id: str | None = None
    customer: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    description: str | None = None
    payment_details: Charge | None = None
    shipping: CheckoutSessionAddress | None = None
    shipping_address_collection: ShippingAddressCollection | None = None


class PaymentLink(MagpieObject):
    """A reusable payment link."""

    id: str
    object: str = "payment_link"
    active: bool = False
    allow_adjustable_quantity: bool = False
    branding: dict[str, Any] = Field(default_factory=dict)
    created: int | None = None
    currency: str | None = None
    internal_name: str | None = None
    line_items: list[PaymentLinkItem] = Field(default_factory=list)
    livemode: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)
    payment_method_types: list[str] = Field(default_factory=list)
    require_auth: bool = False
    updated: int | None = None
    url: str | None = None
    description: str | None = None
    expiry: str | None = None
    maximum_payments: int | None = None
    phone_number_collection: bool | None = None
    redirect_url: str | None = None
    shipping_address_collection: dict[str, Any] | None = None


class PaymentRequest(MagpieObject):
    """An invoice-style payment request sent to a customer."""

    id: str
    object: str = "payment_request"
    account_name: str | None = None
    branding: dict[str, Any] = Field(default_factory=dict)
    created: int | None = None
    currency: str | None = None
    customer: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    delivery_methods: list[str] = Field(default_factory=list)
    delivered: PaymentRequestDelivered | None = None
    line_items: list[LineItem] = Field(default_factory=list)
    livemode: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)
    number: str | None = None
    paid: bool = False
    payment_method_types: list[str] = Field(default_factory=list)
    payment_request_url: str | None = None
    require_auth: bool = False
    subtotal: int = 0
    total: int = 0
    updated: int | None = None
    voided: bool = False
    account_support_email: str | None = None
    customer_phone: str | None = None
    message: str | None = None
    paid_at: int | None = None
    payment_details: dict[str, Any] | None = None
    voided_at: int | None = None
    void_reason: str | None = None


class WebhookEvent(MagpieObject):
    """A verified webhook event."""

    id: str
    type: WebhookEventType | str = Field(union_mode="left_to_right")
    data: dict[str, Any] = Field(default_factory=dict)
    created: int
    livemode: bool = False
    api_version: str | None = None
    pending_webhooks: int | None = None
    request: dict[str, Any] | None = None


# =============================================================================
# Request Models
# =============================================================================


class CreateChargeRequest(BaseRequest):
    """Payload for creating a charge."""

    amount: int
    currency: str
    source: str
    description: str
    statement_descriptor: str
    capture: bool = True
    cvc: str | None = None
    require_auth: bool | None = None
    redirect_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if len(v) != 3:
            raise ValueError("Currency must be a 3-letter ISO code")
        return v

    @field_validator("source", "description")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("statement_descriptor")
    @classmethod
    def validate_statement_descriptor(cls, v: str) -> str:
        if not v:
            raise ValueError("Statement descriptor cannot be empty")
        if len(v) > 15:
            raise ValueError("Statement descriptor must be 15 characters or less")
        return v


class CaptureChargeRequest(BaseRequest):
    amount: int


class RefundChargeRequest(BaseRequest):
    amount: int
    reason: str


class CreateCustomerRequest(BaseRequest):
    email: str
    description: str
    name: str | None = None
    mobile_number: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class UpdateCustomerRequest(BaseRequest):
    name: str | None = None
    email: str | None = None
    mobile_number: str | None = None
    description: str | None = None
    metadata: dict[str, Any] | None = None


class CreateCheckoutSessionRequest(BaseRequest):
    """Payload for creating a checkout session."""

    cancel_url: str
    currency: str
    line_items: list[LineItem]
    mode: SessionMode
    payment_method_types: list[str]
    success_url: str
    bank_code: str | None = None
    branding: BrandingOptions | None = None
    billing_address_collection: BillingAddressCollection | None = None
    client_reference_id: str | None = None
    customer: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_name_collection: bool | None = None
    customer_phone: str | None = None
    description: str | None = None
    locale: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    phone_number_collection: bool | None = None
    require_auth: bool | None = None
    shipping_address_collection: ShippingAddressCollection | None = None
    submit_type: CheckoutSubmitType | None = None


class CaptureSessionRequest(BaseRequest):
    amount: int


class CreatePaymentLinkRequest(BaseRequest):
    """Payload for creating a payment link."""

    allow_adjustable_quantity: bool
    currency: str
    internal_name: str
    line_items: list[PaymentLinkItem]
    payment_method_types: list[str]
    branding: BrandingOptions | None = None
    description: str | None = None
    expiry: str | None = None
    maximum_payments: int | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    phone_number_collection: bool | None = None
    redirect_url: str | None = None
    require_auth: bool | None = None
    shipping_address_collection: ShippingAddressCollection | None = None


class UpdatePaymentLinkRequest(CreatePaymentLinkRequest):
    """Payload for updating a payment link. The API expects the full link."""


class CreatePaymentRequestRequest(BaseRequest):
    """Payload for creating a payment request."""

    currency: str
    customer: str
    delivery_methods: list[str]
    line_items: list[LineItem]
    payment_method_types: list[str]
    branding: BrandingOptions | None = None
    message: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    require_auth: bool | None = None


class VoidPaymentRequestRequest(BaseRequest):
    reason: str

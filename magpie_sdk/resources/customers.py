"""Customers resource."""

from typing import Any

from ..models import CreateCustomerRequest, Customer, UpdateCustomerRequest
from ..transport import HTTPClient
from .base import BaseResource, to_payload


class CustomersResource(BaseResource):
    """Create, update and look up customers, and manage their saved sources."""

    model = Customer

    def __init__(self, client: HTTPClient) -> None:
        super().__init__(client, "customers")

    def create(
        self,
        params: CreateCustomerRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> Customer:
        return self._create(to_payload(params), options)

    def retrieve(self, id: str, options: dict[str, Any] | None = None) -> Customer:
        return self._retrieve(id, options)

    def update(
        self,
        id: str,
        params: UpdateCustomerRequest | dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> Customer:
        return self._update(id, to_payload(params), options)

    def retrieve_by_email(self, email: str, options: dict[str, Any] | None = None) -> Customer:
        return self._custom_action("GET", f"{self._build_path()}/by_email/{email}", None, options)

    def attach_source(self, id: str, source: str, options: dict[str, Any] | None = None) -> Customer:
        """Save a source on the customer for later charges."""
        return self._custom_resource_action("POST", id, "sources", {"source": source}, options)

    def detach_source(self, id: str, source: str, options: dict[str, Any] | None = None) -> Customer:
        return self._custom_action("DELETE", self._build_path(id, f"sources/{source}"), None, options)

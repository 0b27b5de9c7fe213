"""Organization resource."""

from typing import Any

from ..exceptions import MagpieError
from ..models import Organization
from ..transport import HTTPClient
from .base import BaseResource


class OrganizationResource(BaseResource):
    """
    Information about the organization that owns the API key.

    The helper methods operate on organization data already fetched with
    ``me()`` and perform no I/O.
    """

    model = Organization

    def __init__(self, client: HTTPClient) -> None:
        super().__init__(client, "me")

    def me(self, options: dict[str, Any] | None = None) -> Organization:
        return self._wrap(self.client.get(self.base_path, None, self._options(options)))

    @staticmethod
    def get_public_key(organization_data: dict[str, Any], secret_key: str) -> str:
        """
        Pick the public key matching the secret key's mode.

        Raises:
            MagpieError: If the organization has no public key for that mode
        """
        is_test_mode = "_test_" in secret_key
        public_key = organization_data.get("pk_test_key" if is_test_mode else "pk_live_key")

        if not public_key:
            mode = "test" if is_test_mode else "live"
            raise MagpieError(
                f"No {mode} public key available for organization",
                type="api_error",
                code="missing_public_key",
            )

        return public_key

    @staticmethod
    def get_payment_methods(
        organization_data: dict[str, Any], payment_method: str | None = None
    ) -> dict[str, Any]:
        settings = organization_data.get("payment_method_settings") or {}
        if payment_method is None:
            return settings
        return settings.get(payment_method) or {}

    @classmethod
    def is_payment_method_enabled(
        cls, organization_data: dict[str, Any], payment_method: str
    ) -> bool:
        settings = cls.get_payment_methods(organization_data, payment_method)
        return bool(settings) and settings.get("status") == "approved"

    @staticmethod
    def get_branding(organization_data: dict[str, Any]) -> dict[str, Any]:
        return organization_data.get("branding") or {}

    @staticmethod
    def get_payout_settings(organization_data: dict[str, Any]) -> dict[str, Any]:
        return organization_data.get("payout_settings") or {}

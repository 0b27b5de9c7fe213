"""Public key exchange for endpoints that require a publishable key."""

from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from .resources.organization import OrganizationResource
    from .transport import HTTPClient

logger = structlog.get_logger(__name__)


def is_test_key(api_key: str) -> bool:
    return "_test_" in api_key


class PublicKeyResolver:
    """
    Exchanges the client's secret key for the organization's public key.

    The organization lookup happens on the first ``resolve()`` call and the
    result is cached for the secret key it came from. Rotating the client's
    key invalidates the cache.
    """

    def __init__(self, organization: "OrganizationResource", client: "HTTPClient") -> None:
        self._organization = organization
        self._client = client
        self._cached_for: str | None = None
        self._public_key: str | None = None

    def resolve(self, options: dict[str, Any] | None = None) -> str:
        """Return the public key to authenticate with."""
        api_key = self._client.api_key
        if api_key.startswith("pk_"):
            return api_key

        if self._public_key is not None and self._cached_for == api_key:
            return self._public_key

        organization = self._organization.me(options)
        public_key = self._organization.get_public_key(organization.to_dict(), api_key)

        self._cached_for = api_key
        self._public_key = public_key
        logger.info("magpie_public_key_resolved", test_mode=is_test_key(api_key))
        return public_key

    def reset(self) -> None:
        """Forget the cached public key."""
        self._cached_for = None
        self._public_key = None

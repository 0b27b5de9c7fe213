"""Sources resource."""

from typing import Any

from ..credentials import PublicKeyResolver
from ..models import Source
from ..transport import HTTPClient
from .base import BaseResource


class SourcesResource(BaseResource):
    """
    Create and retrieve payment sources.

    Raw source data is only served to public-key credentials, so every call
    authenticates with the organization's public key obtained through
    ``resolver``.
    """

    model = Source

    def __init__(self, client: HTTPClient, resolver: PublicKeyResolver) -> None:
        super().__init__(client, "sources")
        self.resolver = resolver

    def _options(self, options: dict[str, Any] | None) -> dict[str, Any]:
        merged = super()._options(options)
        if "api_key" not in merged:
            merged["api_key"] = self.resolver.resolve()
        return merged

    def create(self, params: dict[str, Any], options: dict[str, Any] | None = None) -> Source:
        return self._create(params, options)

    def retrieve(self, id: str, options: dict[str, Any] | None = None) -> Source:
        return self._retrieve(id, options)

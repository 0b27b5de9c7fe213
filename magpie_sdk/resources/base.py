"""Base class for API resource facades."""

from typing import Any

import pydantic

from ..exceptions import MagpieError
from ..models import BaseRequest, MagpieObject
from ..transport import HTTPClient


def to_payload(request: BaseRequest | dict[str, Any] | None) -> dict[str, Any] | None:
    """Accept a request model or a plain dict."""
    if isinstance(request, BaseRequest):
        return request.to_payload()
    return request


class BaseResource:
    """
    Common plumbing for resource facades.

    Failed requests arrive from the transport already typed. A 2xx body
    that does not fit ``model`` raises ``invalid_response``.

    Args:
        client: HTTP transport
        base_path: Path of the resource relative to the API origin
        base_url: Alternate host for resources served outside the main API
    """

    model: type[MagpieObject] | None = None

    def __init__(self, client: HTTPClient, base_path: str, base_url: str | None = None) -> None:
        self.client = client
        self.base_path = base_path.lstrip("/")
        self.base_url = base_url

    def _build_path(self, id: str | None = None, action: str | None = None) -> str:
        path = self.base_path
        if id is not None:
            path = f"{path}/{id}" if path else id
        if action is not None:
            path = f"{path}/{action.lstrip('/')}"
        return path

    def _options(self, options: dict[str, Any] | None) -> dict[str, Any]:
        merged = dict(options or {})
        if self.base_url is not None:
            merged.setdefault("base_url", self.base_url)
        return merged

    def _wrap(self, data: Any) -> Any:
        if self.model is None:
            return data
        try:
            return self.model.from_dict(data)
        except pydantic.ValidationError as e:
            raise MagpieError(
                f"Unexpected {self.model.__name__} response from API",
                type="api_error",
                code="invalid_response",
                details={"fields": [".".join(map(str, err["loc"])) for err in e.errors()]},
            ) from e

    def _create(self, data: dict[str, Any] | None, options: dict[str, Any] | None = None) -> Any:
        return self._wrap(self.client.post(self.base_path, data, self._options(options)))

    def _retrieve(self, id: str, options: dict[str, Any] | None = None) -> Any:
        return self._wrap(self.client.get(self._build_path(id), None, self._options(options)))

    def _update(
        self, id: str, data: dict[str, Any] | None, options: dict[str, Any] | None = None
    ) -> Any:
        return self._wrap(
            self.client.patch(self._build_path(id), data, self._options(options))
        )

    def _custom_action(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        return self._wrap(self.client.request(method, path, data, self._options(options)))

    def _custom_resource_action(
        self,
        method: str,
        id: str,
        action: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        return self._custom_action(method, self._build_path(id, action), data, options)

"""HTTP transport for the Magpie API."""

import json
import time
from collections.abc import Callable
from typing import Any

import httpx
import structlog

from .classifier import classify_response, get_request_id
from .config import MagpieConfig
from .exceptions import ConfigurationError, MagpieError, NetworkError
from .retry import IDEMPOTENCY_HEADER, RetryPolicy

logger = structlog.get_logger(__name__)

BODY_METHODS = ("POST", "PUT", "PATCH")
SENSITIVE_HEADERS = ("authorization", "x-api-key")
REDACTED = "[REDACTED]"


def sanitize_headers(headers: Any) -> dict[str, str]:
    """Copy headers with credentials redacted, for logging."""
    sanitized = {}
    for name, value in headers.items():
        if name.lower() in SENSITIVE_HEADERS:
            sanitized[name] = REDACTED
        else:
            sanitized[name] = value
    return sanitized


class HTTPClient:
    """
    Synchronous HTTP client for the Magpie API.

    Handles authentication, request/response processing, retries with
    exponential backoff, and conversion of failures into MagpieError
    subclasses. Not safe for concurrent use across threads; use one
    instance per thread.

    Example:
        ```python
        client = HTTPClient("sk_test_123", MagpieConfig(timeout=10))
        charge = client.post("charges", {"amount": 10000, "currency": "php"})
        ```
    """

    def __init__(
        self,
        api_key: str,
        config: MagpieConfig | dict[str, Any] | None = None,
        logger: Any = None,
        *,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            api_key: Magpie secret key (must start with "sk_")
            config: MagpieConfig, dict of config options, or None for defaults
            logger: structlog-compatible logger; defaults to the module logger
            transport: Optional httpx transport (e.g. httpx.MockTransport)
            sleep: Function used to wait between retry attempts

        Raises:
            ConfigurationError: If the key is missing or not a secret key
        """
        self._validate_secret_key(api_key)

        self._api_key = api_key
        if isinstance(config, MagpieConfig):
            self.config = config
        else:
            self.config = MagpieConfig.from_dict(config or {})
        self.logger = logger or structlog.get_logger(__name__)
        self._transport = transport
        self._sleep = sleep
        self.retry_policy = RetryPolicy.from_config(self.config)
        self._client = self._create_http_client()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @staticmethod
    def _validate_secret_key(api_key: str) -> None:
        if not api_key:
            raise ConfigurationError("Secret key is required")
        if not api_key.startswith("sk_"):
            raise ConfigurationError(
                'Invalid secret key format. Secret key must start with "sk_"'
            )

    @staticmethod
    def _validate_api_key(api_key: str) -> None:
        if not api_key:
            raise ConfigurationError("API key is required")
        if not api_key.startswith(("sk_", "pk_")):
            raise ConfigurationError(
                'Invalid API key format. API key must start with "sk_" or "pk_"'
            )

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
            "X-API-Version": self.config.api_version,
        }
        headers.update(self.config.default_headers)
        return headers

    def _create_http_client(self) -> httpx.Client:
        """Create the underlying httpx client bound to the current key."""
        event_hooks: dict[str, list[Callable[..., Any]]] = {"request": [], "response": []}
        if self.config.debug:
            event_hooks["request"].append(self._log_request)
            event_hooks["response"].append(self._log_response)

        return httpx.Client(
            base_url=self.config.api_url,
            timeout=httpx.Timeout(self.config.timeout, connect=self.config.connect_timeout),
            verify=self.config.verify_ssl,
            headers=self._default_headers(),
            auth=httpx.BasicAuth(self._api_key, ""),
            event_hooks=event_hooks,
            transport=self._transport,
        )

    def _log_request(self, request: httpx.Request) -> None:
        self.logger.debug(
            "HTTP Request",
            method=request.method,
            url=str(request.url),
            headers=sanitize_headers(request.headers),
            body=request.content.decode("utf-8", errors="replace"),
        )

    def _log_response(self, response: httpx.Response) -> None:
        response.read()
        self.logger.debug(
            "HTTP Response",
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )

    def _build_request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None,
        options: dict[str, Any],
    ) -> httpx.Request:
        params: dict[str, Any] = {}
        body: dict[str, Any] | None = None
        headers: dict[str, str] = {}

        if method in BODY_METHODS and data is not None:
            body = data
        elif data is not None:
            params.update(data)

        if options.get("idempotency_key"):
            headers[IDEMPOTENCY_HEADER] = options["idempotency_key"]

        expand = options.get("expand")
        if isinstance(expand, (list, tuple)):
            params["expand"] = list(expand)

        base_url = options.get("base_url")
        url = f"{base_url.rstrip('/')}/{path}" if base_url else path

        return self._client.build_request(
            method,
            url,
            params=params or None,
            json=body,
            headers=headers or None,
        )

    def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an HTTP request to the Magpie API.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: Endpoint path relative to the API origin
            data: JSON body for POST/PUT/PATCH, query params otherwise
            options: ``idempotency_key``, ``expand``, ``base_url``, ``api_key``.
                ``expand`` is sent as repeated ``expand`` query parameters
                (``?expand=source&expand=customer``), not ``expand[]``.

        Returns:
            Decoded JSON response body

        Raises:
            MagpieError: Typed error for any failed request
        """
        method = method.upper()
        path = path.lstrip("/")
        options = options or {}

        request = self._build_request(method, path, data, options)
        # A per-request key authenticates this call only; the client-wide
        # credential is left untouched.
        auth: Any = httpx.USE_CLIENT_DEFAULT
        if options.get("api_key"):
            auth = httpx.BasicAuth(options["api_key"], "")

        retrying = self.retry_policy.build_retrying(
            request, sleep=self._sleep, log=self.logger
        )

        try:
            response = retrying(self._client.send, request, auth=auth)
        except httpx.HTTPError as e:
            self.logger.error(
                "magpie_request_failed",
                method=method,
                url=str(request.url),
                error=str(e),
            )
            raise NetworkError(str(e) or e.__class__.__name__) from e

        if response.is_success:
            return self._handle_response(response)

        raise classify_response(
            response.status_code, response.content, response.headers
        )

    def _handle_response(self, response: httpx.Response) -> Any:
        try:
            return json.loads(response.content)
        except ValueError as e:
            raise MagpieError(
                "Invalid JSON response from API",
                type="api_error",
                code="invalid_json",
                status_code=response.status_code,
                request_id=get_request_id(response.headers),
                headers=dict(response.headers),
            ) from e

    def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Make a GET request."""
        return self.request("GET", path, params, options)

    def post(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request."""
        return self.request("POST", path, data, options)

    def put(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Make a PUT request."""
        return self.request("PUT", path, data, options)

    def patch(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Make a PATCH request."""
        return self.request("PATCH", path, data, options)

    def delete(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Make a DELETE request."""
        return self.request("DELETE", path, data, options)

    def get_config(self) -> MagpieConfig:
        return self.config

    @property
    def api_key(self) -> str:
        """The credential currently used for authentication."""
        return self._api_key

    def set_api_key(self, api_key: str) -> None:
        """
        Replace the credential used for authentication.

        Accepts secret ("sk_") or public ("pk_") keys and rebuilds the
        underlying HTTP client. Must not be called while a request is in
        flight on another thread.

        Raises:
            ConfigurationError: If the key format is invalid
        """
        self._validate_api_key(api_key)
        self._api_key = api_key
        self._client.close()
        self._client = self._create_http_client()
        self.logger.info("magpie_api_key_rotated", key_prefix=api_key[:3])

    def set_debug(self, debug: bool) -> None:
        """Toggle request/response logging."""
        self.config.debug = debug
        self._client.close()
        self._client = self._create_http_client()

    def ping(self) -> bool:
        """Check connectivity. The ping endpoint lives outside the API version."""
        try:
            response = self._client.get(f"{self.config.base_url}/ping")
        except httpx.HTTPError as e:
            self.logger.warning("magpie_ping_failed", error=str(e))
            return False
        return response.status_code == 200 and response.text.strip() == "healthy"

    def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        self._client.close()

"""Configuration for Magpie SDK."""

import platform
from dataclasses import asdict, dataclass, field
from typing import Any

from .exceptions import ConfigurationError
from .version import __version__

DEFAULT_BASE_URL = "https://api.magpie.im"
DEFAULT_API_VERSION = "v2"


def build_user_agent() -> str:
    """Build the User-Agent string sent with every request."""
    return (
        f"magpie-python/{__version__} "
        f"(Python/{platform.python_version()}; {platform.system()}/{platform.release()})"
    )


@dataclass
class MagpieConfig:
    """
    Configuration for the Magpie HTTP client.

    Attributes:
        base_url: Base URL for the Magpie API (default: https://api.magpie.im)
        api_version: API version path segment (default: "v2")
        timeout: Request timeout in seconds (default: 30)
        connect_timeout: Connection timeout in seconds (default: 10)
        max_retries: Maximum number of retry attempts (default: 3)
        retry_delay: Base retry delay in milliseconds (default: 1000)
        max_retry_delay: Maximum retry delay in seconds (default: 30)
        verify_ssl: Whether to verify SSL certificates (default: True)
        debug: Log request/response details (default: False)
        default_headers: Additional headers sent with every request
        user_agent: Computed User-Agent string

    Example:
        ```python
        config = MagpieConfig(timeout=10.0, max_retries=5, debug=True)
        client = MagpieClient("sk_test_...", config)
        ```
    """

    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0
    connect_timeout: float = 10.0
    max_retries: int = 3
    retry_delay: int = 1000
    max_retry_delay: int = 30
    verify_ssl: bool = True
    debug: bool = False
    default_headers: dict[str, str] = field(default_factory=dict)
    user_agent: str = field(default_factory=build_user_agent)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.base_url = self.base_url.rstrip("/")

        if not self.base_url:
            raise ConfigurationError("base_url is required")

        if self.timeout <= 0:
            raise ConfigurationError("timeout must be greater than 0")

        if self.connect_timeout <= 0:
            raise ConfigurationError("connect_timeout must be greater than 0")

        if self.max_retries < 0:
            raise ConfigurationError("max_retries must be non-negative")

        if self.retry_delay < 0:
            raise ConfigurationError("retry_delay must be non-negative")

        if self.max_retry_delay < 0:
            raise ConfigurationError("max_retry_delay must be non-negative")

    @classmethod
    def from_dict(cls, options: dict[str, Any]) -> "MagpieConfig":
        """Build a config from a dict, ignoring unknown keys."""
        known = {name for name in cls.__dataclass_fields__}
        return cls(**{key: value for key, value in options.items() if key in known})

    @property
    def api_url(self) -> str:
        """Full API origin, always terminated by a single slash."""
        return f"{self.base_url}/{self.api_version.strip('/')}/"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

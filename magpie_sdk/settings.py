"""Environment-driven settings for the Magpie SDK.

Reads ``MAGPIE_*`` environment variables (and an optional ``.env`` file)
so applications can build a client without wiring each option by hand.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, MagpieConfig


class MagpieSettings(BaseSettings):
    """Magpie settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="MAGPIE_",
        env_file=".env",
        extra="ignore",
    )

    # API
    secret_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION

    # HTTP client
    timeout: float = 30.0
    connect_timeout: float = 10.0
    verify_ssl: bool = True
    debug: bool = False

    # Retries
    max_retries: int = 3
    retry_delay: int = 1000  # milliseconds
    max_retry_delay: int = 30  # seconds

    # Webhooks
    webhook_secret: str | None = None
    webhook_tolerance: int = 300  # seconds

    def to_config(self) -> MagpieConfig:
        return MagpieConfig(
            base_url=self.base_url,
            api_version=self.api_version,
            timeout=self.timeout,
            connect_timeout=self.connect_timeout,
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
            max_retry_delay=self.max_retry_delay,
            verify_ssl=self.verify_ssl,
            debug=self.debug,
        )

    @property
    def webhook_config(self) -> dict[str, int]:
        """Verifier options derived from the webhook settings."""
        return {"tolerance": self.webhook_tolerance}

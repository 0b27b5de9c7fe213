"""Shared test fixtures."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from magpie_sdk import HTTPClient, MagpieClient, MagpieConfig, WebhookVerifier

SECRET_KEY = "sk_test_fake123456789"
PUBLIC_KEY = "pk_test_fake123456789"
WEBHOOK_SECRET = "whsec_test123456789"
FROZEN_NOW = 1_700_000_000


def json_response(status_code: int, body: Any, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


class RecordingHandler:
    """httpx.MockTransport handler that replays canned responses.

    Each entry is an httpx.Response, an exception to raise, or a callable
    taking the request. The last entry repeats once the list is exhausted.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self.responses) - 1)
        outcome = self.responses[index]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(request)
        return outcome

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def sleeps() -> list[float]:
    """Records retry sleeps instead of waiting."""
    return []


@pytest.fixture
def test_config() -> MagpieConfig:
    return MagpieConfig(max_retries=3, retry_delay=1000, max_retry_delay=30)


@pytest.fixture
def make_http_client(sleeps: list[float], test_config: MagpieConfig) -> Callable[..., HTTPClient]:
    """Build an HTTPClient backed by a RecordingHandler."""

    def _make(handler: RecordingHandler, config: MagpieConfig | None = None, **kwargs: Any) -> HTTPClient:
        return HTTPClient(
            kwargs.pop("api_key", SECRET_KEY),
            config or test_config,
            transport=httpx.MockTransport(handler),
            sleep=sleeps.append,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_magpie(sleeps: list[float], test_config: MagpieConfig) -> Callable[..., MagpieClient]:
    """Build a MagpieClient backed by a RecordingHandler."""

    def _make(handler: RecordingHandler, secret_key: str = SECRET_KEY) -> MagpieClient:
        return MagpieClient(
            secret_key,
            test_config,
            transport=httpx.MockTransport(handler),
            sleep=sleeps.append,
        )

    return _make


@pytest.fixture
def verifier() -> WebhookVerifier:
    """Verifier with a frozen clock."""
    return WebhookVerifier(clock=lambda: FROZEN_NOW)

"""
Retry policy for Magpie API requests.

Decides whether a failed attempt is retried and how long to wait before
the next one. The policy drives a tenacity ``Retrying`` controller so the
transport only has to supply the attempt callable.
"""

import random
import time
from collections.abc import Callable
from typing import Any

import httpx
import structlog
from tenacity import RetryCallState, Retrying

logger = structlog.get_logger(__name__)

IDEMPOTENCY_HEADER = "X-Idempotency-Key"

# Failures where the server never produced a response. Timeouts count too.
CONNECTION_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


class RetryPolicy:
    """
    Exponential backoff with jitter, gated on idempotency.

    Args:
        max_retries: Retries allowed after the first attempt
        retry_delay: Base delay in milliseconds
        max_retry_delay: Delay ceiling in seconds
        rng: Random source for jitter (injectable for tests)
    """

    def __init__(
        self,
        max_retries: int = 3,
        retry_delay: int = 1000,
        max_retry_delay: int = 30,
        rng: random.Random | None = None,
    ) -> None:
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.max_retry_delay = max_retry_delay
        self._rng = rng or random.Random()

    @classmethod
    def from_config(cls, config: Any, rng: random.Random | None = None) -> "RetryPolicy":
        return cls(
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            max_retry_delay=config.max_retry_delay,
            rng=rng,
        )

    def should_retry(
        self,
        attempt_index: int,
        request: httpx.Request,
        response: httpx.Response | None = None,
        exception: BaseException | None = None,
    ) -> bool:
        """
        Decide whether to send the request again.

        Args:
            attempt_index: Retries already performed (0 after the first attempt)
            request: The request that was sent
            response: Response received, if any
            exception: Transport exception raised, if any

        Returns:
            True if the request should be retried
        """
        if attempt_index >= self.max_retries:
            return False

        if exception is not None and isinstance(exception, CONNECTION_ERRORS):
            return True

        if response is None:
            return False

        status_code = response.status_code

        # Rejected before processing, safe for any method.
        if status_code == 429:
            return True

        # Never replay a write the server may have applied.
        if request.method == "POST" and IDEMPOTENCY_HEADER not in request.headers:
            return False

        return status_code >= 500

    def delay_for(self, attempt_index: int) -> int:
        """Backoff delay in milliseconds before retry number ``attempt_index``."""
        exponential_delay = int(self.retry_delay * (2 ** (attempt_index - 1)))
        jitter = self._rng.randint(0, int(exponential_delay * 0.1))
        return min(exponential_delay + jitter, self.max_retry_delay * 1000)

    def _retry_callback(self, request: httpx.Request) -> Callable[[RetryCallState], bool]:
        def _should_retry(retry_state: RetryCallState) -> bool:
            outcome = retry_state.outcome
            if outcome is None:
                return False
            if outcome.failed:
                return self.should_retry(
                    retry_state.attempt_number - 1,
                    request,
                    exception=outcome.exception(),
                )
            return self.should_retry(
                retry_state.attempt_number - 1,
                request,
                response=outcome.result(),
            )

        return _should_retry

    def _wait(self, retry_state: RetryCallState) -> float:
        return self.delay_for(retry_state.attempt_number) / 1000

    def build_retrying(
        self,
        request: httpx.Request,
        sleep: Callable[[float], None] = time.sleep,
        log: Any = None,
    ) -> Retrying:
        """
        Build the retry controller for one logical request.

        The controller re-raises the last transport exception, or returns
        the last response, once the policy stops retrying.
        """
        log = log or logger

        def _before_sleep(retry_state: RetryCallState) -> None:
            outcome = retry_state.outcome
            reason: dict[str, Any] = {}
            if outcome is not None and outcome.failed:
                reason["error"] = str(outcome.exception())
            elif outcome is not None:
                reason["status_code"] = outcome.result().status_code
            log.warning(
                "magpie_request_retry",
                method=request.method,
                url=str(request.url),
                attempt=retry_state.attempt_number,
                delay_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
                **reason,
            )

        return Retrying(
            retry=self._retry_callback(request),
            wait=self._wait,
            sleep=sleep,
            before_sleep=_before_sleep,
            reraise=True,
        )

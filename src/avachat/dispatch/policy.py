"""Retry policy for proxy requests.

Hides the backoff timing. Policies are plain values handed to the
dispatcher; nothing here holds global state.
"""

import random
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import RateLimitedError, TransportFailure

RetryPredicate = Callable[[BaseException], bool]


def retry_on_rate_limit(error: BaseException) -> bool:
    """Retry only when the proxy answered 429."""
    return isinstance(error, RateLimitedError)


def retry_on_rate_limit_or_transport(error: BaseException) -> bool:
    """Retry on 429 and on requests that never completed."""
    return isinstance(error, (RateLimitedError, TransportFailure))


class RetryPolicy(BaseModel):
    """Exponential backoff with optional jitter.

    Defaults follow the classic backoff helper: 100ms initial delay,
    doubling, capped at 10s, no randomisation and no attempt limit.

    Delay before retry ``n`` (0-based) is::

        base = min(initial_delay * multiplier ** n, max_delay)
        delay = min(base * (1 + jitter * U[0, 1)), max_delay)
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Total attempts including the first; None retries forever"
    )
    initial_delay: float = Field(default=0.1, ge=0.0, description="Seconds before first retry")
    multiplier: float = Field(default=2.0, ge=1.0, description="Growth factor per retry")
    max_delay: float = Field(default=10.0, ge=0.0, description="Upper bound for any delay")
    jitter: float = Field(default=0.0, ge=0.0, le=1.0, description="Randomisation factor")
    retry_on: RetryPredicate = Field(
        default=retry_on_rate_limit,
        description="Predicate deciding which errors are retried"
    )

    @model_validator(mode="after")
    def _check_delays(self) -> "RetryPolicy":
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must be >= initial_delay")
        return self

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """Decide whether to retry after ``attempt`` attempts have failed.

        Args:
            error: Error raised by the last attempt
            attempt: Number of attempts made so far (1-based)
        """
        if not self.retry_on(error):
            return False
        return self.max_attempts is None or attempt < self.max_attempts

    def delay_for(self, retry_index: int, rng: Callable[[], float] = random.random) -> float:
        """Seconds to wait before retry number ``retry_index`` (0-based)."""
        base = self.initial_delay
        for _ in range(retry_index):
            # Stop growing once capped so float pow never overflows
            if base == 0 or base >= self.max_delay:
                break
            base *= self.multiplier
        base = min(base, self.max_delay)
        if self.jitter:
            base *= 1 + self.jitter * rng()
        return min(base, self.max_delay)

    @property
    def retries_transport_errors(self) -> bool:
        return self.retry_on is retry_on_rate_limit_or_transport

"""Unit tests for the retry policy."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from avachat.dispatch import (
    MalformedResponseError,
    RateLimitedError,
    RetryPolicy,
    ServerError,
    TransportFailure,
    retry_on_rate_limit,
    retry_on_rate_limit_or_transport,
)


class TestRetryPredicates:
    """Tests for the two retry predicates."""

    def test_rate_limit_only(self):
        assert retry_on_rate_limit(RateLimitedError())
        assert not retry_on_rate_limit(TransportFailure("connection refused"))
        assert not retry_on_rate_limit(ServerError(500))
        assert not retry_on_rate_limit(MalformedResponseError("missing result"))

    def test_rate_limit_or_transport(self):
        assert retry_on_rate_limit_or_transport(RateLimitedError())
        assert retry_on_rate_limit_or_transport(TransportFailure("connection refused"))
        assert not retry_on_rate_limit_or_transport(ServerError(503))

    def test_error_retryability_flags(self):
        assert RateLimitedError().is_retryable()
        assert TransportFailure("x").is_retryable()
        assert not ServerError(500).is_retryable()
        assert not MalformedResponseError("x").is_retryable()


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_attempts is None
        assert policy.initial_delay == 0.1
        assert policy.multiplier == 2.0
        assert policy.max_delay == 10.0
        assert policy.jitter == 0.0
        assert policy.retry_on is retry_on_rate_limit
        assert not policy.retries_transport_errors

    def test_policy_is_immutable(self):
        policy = RetryPolicy()
        with pytest.raises(ValidationError):
            policy.max_attempts = 3  # type: ignore[misc]

    def test_exponential_delays_are_capped(self):
        policy = RetryPolicy(initial_delay=0.1, multiplier=2.0, max_delay=1.0)
        delays = [policy.delay_for(n) for n in range(6)]
        assert delays == pytest.approx([0.1, 0.2, 0.4, 0.8, 1.0, 1.0])

    def test_huge_retry_index_does_not_overflow(self):
        policy = RetryPolicy(initial_delay=1.0, multiplier=1000.0, max_delay=30.0)
        assert policy.delay_for(10_000) == 30.0

    def test_jitter_scales_delay(self):
        policy = RetryPolicy(initial_delay=1.0, max_delay=10.0, jitter=0.5)
        assert policy.delay_for(0, rng=lambda: 0.0) == pytest.approx(1.0)
        assert policy.delay_for(0, rng=lambda: 0.5) == pytest.approx(1.25)
        assert policy.delay_for(1, rng=lambda: 1.0) == pytest.approx(3.0)

    def test_unbounded_policy_keeps_retrying(self):
        policy = RetryPolicy()
        assert policy.should_retry(RateLimitedError(), attempt=1)
        assert policy.should_retry(RateLimitedError(), attempt=1000)

    def test_max_attempts_bounds_retries(self):
        policy = RetryPolicy(max_attempts=3)
        assert policy.should_retry(RateLimitedError(), attempt=1)
        assert policy.should_retry(RateLimitedError(), attempt=2)
        assert not policy.should_retry(RateLimitedError(), attempt=3)

    def test_non_matching_errors_never_retry(self):
        policy = RetryPolicy()
        assert not policy.should_retry(ServerError(500), attempt=1)
        assert not policy.should_retry(TransportFailure("reset"), attempt=1)

    def test_transport_predicate(self):
        policy = RetryPolicy(retry_on=retry_on_rate_limit_or_transport)
        assert policy.retries_transport_errors
        assert policy.should_retry(TransportFailure("reset"), attempt=1)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_attempts": 0},
            {"initial_delay": -1.0},
            {"multiplier": 0.5},
            {"jitter": 1.5},
            {"initial_delay": 5.0, "max_delay": 1.0},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            RetryPolicy(**kwargs)

    @given(
        st.floats(min_value=0.0, max_value=5.0),
        st.floats(min_value=1.0, max_value=10.0),
        st.floats(min_value=5.0, max_value=60.0),
        st.floats(min_value=0.0, max_value=1.0),
        st.integers(min_value=0, max_value=200),
        st.floats(min_value=0.0, max_value=0.999),
    )
    def test_delay_never_exceeds_max(
        self,
        initial: float,
        multiplier: float,
        max_delay: float,
        jitter: float,
        retry_index: int,
        draw: float,
    ):
        """Property test: delays stay within [0, max_delay]."""
        policy = RetryPolicy(
            initial_delay=initial,
            multiplier=multiplier,
            max_delay=max_delay,
            jitter=jitter,
        )
        delay = policy.delay_for(retry_index, rng=lambda: draw)
        assert 0.0 <= delay <= max_delay

    @given(st.integers(min_value=0, max_value=30))
    def test_delays_do_not_decrease(self, retry_index: int):
        """Property test: without jitter, backoff is monotonic."""
        policy = RetryPolicy()
        assert policy.delay_for(retry_index + 1) >= policy.delay_for(retry_index)

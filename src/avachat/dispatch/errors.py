"""Dispatch error taxonomy.

Each error knows whether it may be retried; retry policies decide
whether to act on that.
"""


class DispatchError(Exception):
    """Base class for dispatch errors."""

    def is_retryable(self) -> bool:
        """Override in subclasses to control retry behavior."""
        return False


class RateLimitedError(DispatchError):
    """Proxy answered 429 Too Many Requests (retryable)."""

    def __init__(self, message: str = "Too Many Requests"):
        super().__init__(f"Rate limited: {message}")
        self.status_code = 429

    def is_retryable(self) -> bool:
        return True


class TransportFailure(DispatchError):
    """Request never completed: connection refused, reset, DNS, timeout."""

    def __init__(self, message: str):
        super().__init__(f"Transport failure: {message}")

    def is_retryable(self) -> bool:
        return True


class ServerError(DispatchError):
    """Any non-2xx status other than 429 (non-retryable)."""

    def __init__(self, status_code: int, body: str = ""):
        msg = f"Request failed with status: {status_code}"
        if body:
            msg += f" ({body[:200]})"
        super().__init__(msg)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(DispatchError):
    """2xx response without a reply at result.choices[0].message.content."""

    def __init__(self, message: str):
        super().__init__(f"Malformed response: {message}")


class RetriesExhaustedError(DispatchError):
    """Retry policy gave up on a retryable error."""

    def __init__(self, last_error: DispatchError, attempts: int):
        super().__init__(f"Request failed after {attempts} attempts: {last_error}")
        self.last_error = last_error
        self.attempts = attempts


class DispatchInProgressError(DispatchError):
    """A submission was rejected because another one is still in flight."""

    def __init__(self) -> None:
        super().__init__("A request is already in flight")

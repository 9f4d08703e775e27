"""Request dispatch for avachat.

Module structure (each module hides a design decision):
- client.py: HTTP exchange with the proxy (status mapping, reply extraction)
- policy.py: Backoff timing and which errors are retried
- errors.py: Failure taxonomy
- dispatcher.py: Round-trip orchestration and store updates
"""

from .client import DEFAULT_BASE_URL, DEFAULT_ENDPOINT, ChatProxyClient, build_payload, extract_reply
from .dispatcher import RequestDispatcher
from .errors import (
    DispatchError,
    DispatchInProgressError,
    MalformedResponseError,
    RateLimitedError,
    RetriesExhaustedError,
    ServerError,
    TransportFailure,
)
from .models import DispatchResult, ProxyResponse
from .policy import RetryPolicy, retry_on_rate_limit, retry_on_rate_limit_or_transport

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_ENDPOINT",
    "ChatProxyClient",
    "DispatchError",
    "DispatchInProgressError",
    "DispatchResult",
    "MalformedResponseError",
    "ProxyResponse",
    "RateLimitedError",
    "RequestDispatcher",
    "RetriesExhaustedError",
    "RetryPolicy",
    "ServerError",
    "TransportFailure",
    "build_payload",
    "extract_reply",
    "retry_on_rate_limit",
    "retry_on_rate_limit_or_transport",
]

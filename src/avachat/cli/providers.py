"""Provider factory functions for CLI.

Centralizes creation of the settings, proxy client and dispatcher from
environment variables. Hides configuration details from command
implementations.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..conversation import ConversationStore
from ..dispatch import (
    DEFAULT_BASE_URL,
    DEFAULT_ENDPOINT,
    ChatProxyClient,
    RequestDispatcher,
    RetryPolicy,
    retry_on_rate_limit,
    retry_on_rate_limit_or_transport,
)

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Runtime configuration for the client."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Proxy scheme and host")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Chat endpoint path")
    timeout: float | None = Field(default=None, gt=0, description="HTTP timeout in seconds")
    max_attempts: int | None = Field(default=None, ge=1, description="None retries forever")
    initial_delay: float = Field(default=0.1, ge=0.0)
    multiplier: float = Field(default=2.0, ge=1.0)
    max_delay: float = Field(default=10.0, ge=0.0)
    jitter: float = Field(default=0.0, ge=0.0, le=1.0)
    retry_transport_errors: bool = Field(
        default=False,
        description="Also retry requests that never got a response"
    )

    @model_validator(mode="after")
    def _check_delays(self) -> "Settings":
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must be >= initial_delay")
        return self

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy these settings describe."""
        return RetryPolicy(
            max_attempts=self.max_attempts,
            initial_delay=self.initial_delay,
            multiplier=self.multiplier,
            max_delay=self.max_delay,
            jitter=self.jitter,
            retry_on=(
                retry_on_rate_limit_or_transport
                if self.retry_transport_errors
                else retry_on_rate_limit
            ),
        )


def _optional(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key, "").strip()
    return value or None


def get_settings(env: Mapping[str, str] | None = None, **overrides: object) -> Settings:
    """Create settings from environment variables.

    Args:
        env: Environment mapping (defaults to os.environ)
        **overrides: Values that win over the environment; None is ignored

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: If a value is out of range or not a number

    Environment variables:
        AVACHAT_BASE_URL: Proxy base URL (default: http://localhost:3000)
        AVACHAT_ENDPOINT: Chat endpoint path (default: /api/openAIChat)
        AVACHAT_TIMEOUT: HTTP timeout in seconds (default: none)
        AVACHAT_MAX_ATTEMPTS: Total attempts per submission (default: unbounded)
        AVACHAT_INITIAL_DELAY: First backoff delay in seconds (default: 0.1)
        AVACHAT_MULTIPLIER: Backoff growth factor (default: 2)
        AVACHAT_MAX_DELAY: Backoff ceiling in seconds (default: 10)
        AVACHAT_JITTER: Randomisation factor 0..1 (default: 0)
        AVACHAT_RETRY_TRANSPORT: Retry transport failures too (default: off)
    """
    env = os.environ if env is None else env
    values: dict[str, object] = {
        "base_url": _optional(env, "AVACHAT_BASE_URL"),
        "endpoint": _optional(env, "AVACHAT_ENDPOINT"),
        "timeout": _optional(env, "AVACHAT_TIMEOUT"),
        "max_attempts": _optional(env, "AVACHAT_MAX_ATTEMPTS"),
        "initial_delay": _optional(env, "AVACHAT_INITIAL_DELAY"),
        "multiplier": _optional(env, "AVACHAT_MULTIPLIER"),
        "max_delay": _optional(env, "AVACHAT_MAX_DELAY"),
        "jitter": _optional(env, "AVACHAT_JITTER"),
    }
    retry_transport = _optional(env, "AVACHAT_RETRY_TRANSPORT")
    if retry_transport is not None:
        values["retry_transport_errors"] = retry_transport.lower() in _TRUTHY

    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings(**{key: value for key, value in values.items() if value is not None})


def get_client(settings: Settings) -> ChatProxyClient:
    """Create the proxy client described by settings."""
    return ChatProxyClient(
        base_url=settings.base_url,
        endpoint=settings.endpoint,
        timeout=settings.timeout,
    )


def get_dispatcher(
    settings: Settings,
    client: ChatProxyClient | None = None,
    store: ConversationStore | None = None,
) -> RequestDispatcher:
    """Wire a dispatcher to a client and a fresh (or given) store."""
    # An empty store is falsy (it has __len__), so test for None explicitly
    return RequestDispatcher(
        client=client if client is not None else get_client(settings),
        store=store if store is not None else ConversationStore(),
        policy=settings.retry_policy(),
    )

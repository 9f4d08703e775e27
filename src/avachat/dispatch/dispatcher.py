"""Request dispatcher.

Turns one submission into a proxy round-trip under a retry policy and
writes the outcome back into the conversation store.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Sequence

from ..conversation import ConversationStore, Message
from .client import ChatProxyClient
from .errors import DispatchError, DispatchInProgressError, RetriesExhaustedError
from .models import DispatchResult
from .policy import RetryPolicy

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class RequestDispatcher:
    """Dispatches submissions to the proxy and updates the store.

    Failures never escape ``dispatch``; they are logged and reported in
    the returned ``DispatchResult``. The store and pending input are only
    touched on success.

    By default a second submission while one is in flight is rejected.
    With ``allow_concurrent=True`` both run and the later completion
    overwrites the transcript (last writer wins).
    """

    def __init__(
        self,
        client: ChatProxyClient,
        store: ConversationStore,
        policy: RetryPolicy | None = None,
        allow_concurrent: bool = False,
        sleep: SleepFunc = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._client = client
        self._store = store
        self._policy = policy or RetryPolicy()
        self._allow_concurrent = allow_concurrent
        self._sleep = sleep
        self._rng = rng
        self._in_flight = 0

    @property
    def client(self) -> ChatProxyClient:
        return self._client

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def in_flight(self) -> bool:
        """True while at least one dispatch is outstanding."""
        return self._in_flight > 0

    async def submit(self, text: str | None = None) -> DispatchResult:
        """Submit one user message.

        Args:
            text: Message text; defaults to the store's pending input.
                Empty strings are sent as-is.

        Returns:
            DispatchResult describing the round-trip
        """
        if text is None:
            text = self._store.pending_input

        if self.in_flight and not self._allow_concurrent:
            error = DispatchInProgressError()
            logger.warning(f"Submission ignored: {error}")
            return DispatchResult(ok=False, attempts=0, error=error)

        history = [*self._store.messages, Message.user(text)]
        return await self.dispatch(history)

    async def dispatch(self, history: Sequence[Message]) -> DispatchResult:
        """Run one round-trip for a candidate history.

        Args:
            history: Prior transcript plus the new user message

        Returns:
            DispatchResult; on success the store already holds the reply
        """
        history = list(history)
        self._in_flight += 1
        attempts = 0
        try:
            while True:
                attempts += 1
                logger.debug(
                    f"POST {self._client.url} attempt {attempts} "
                    f"({len(history)} messages)"
                )
                try:
                    reply = await self._client.complete(history)
                    break
                except DispatchError as e:
                    if not self._policy.should_retry(e, attempts):
                        # Retryable but refused means the attempt budget ran out
                        if self._policy.retry_on(e):
                            raise RetriesExhaustedError(e, attempts) from e
                        raise
                    delay = self._policy.delay_for(attempts - 1, self._rng)
                    logger.warning(f"{e} (attempt {attempts}), retrying in {delay:.2f}s")
                    await self._sleep(delay)
        except DispatchError as e:
            logger.error(str(e))
            return DispatchResult(ok=False, attempts=attempts, error=e)
        finally:
            self._in_flight -= 1

        self._store.append([*history, Message.assistant(reply)])
        self._store.clear_pending_input()
        logger.info(f"Reply received after {attempts} attempt(s)")
        return DispatchResult(ok=True, attempts=attempts, reply=reply)

"""Pytest configuration and shared fixtures."""
import httpx
import pytest
from stubs import ProxyStub

from avachat.conversation import ConversationStore
from avachat.dispatch import ChatProxyClient, RequestDispatcher, RetryPolicy


@pytest.fixture
def sleeps():
    """Delays requested by the dispatcher, in order."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    """Sleep replacement that records the delay and returns immediately."""
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)
    return _sleep


@pytest.fixture
def make_client():
    """Factory for a ChatProxyClient backed by a ProxyStub."""
    def _make(stub: ProxyStub, **kwargs) -> ChatProxyClient:
        return ChatProxyClient(
            base_url="http://proxy.test",
            transport=httpx.MockTransport(stub),
            **kwargs
        )
    return _make


@pytest.fixture
def make_dispatcher(make_client, fake_sleep):
    """Factory for a RequestDispatcher wired to a ProxyStub and a fresh store."""
    def _make(
        stub: ProxyStub,
        store: ConversationStore | None = None,
        policy: RetryPolicy | None = None,
        **kwargs
    ) -> RequestDispatcher:
        return RequestDispatcher(
            client=make_client(stub),
            store=store if store is not None else ConversationStore(),
            policy=policy,
            sleep=fake_sleep,
            **kwargs
        )
    return _make

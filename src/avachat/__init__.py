"""
avachat: a minimal chat client for a chat-completion proxy.

Each module hides a specific design decision:
- conversation: how the transcript and pending input are held
- dispatch: how a submission becomes an HTTP exchange, and when it is retried
- ui: how the conversation is presented
- cli: how the pieces are configured and started
"""

__version__ = "0.1.0"

from .conversation import ConversationStore, Message
from .dispatch import (
    ChatProxyClient,
    DispatchError,
    DispatchResult,
    RequestDispatcher,
    RetryPolicy,
)

__all__ = [
    "ChatProxyClient",
    "ConversationStore",
    "DispatchError",
    "DispatchResult",
    "Message",
    "RequestDispatcher",
    "RetryPolicy",
]

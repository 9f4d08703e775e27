"""Conversation state for avachat.

Holds the transcript and the pending input cell for one UI session.
"""

from .models import ASSISTANT_ROLE, USER_ROLE, Message
from .store import ConversationStore

__all__ = [
    "ASSISTANT_ROLE",
    "ConversationStore",
    "Message",
    "USER_ROLE",
]

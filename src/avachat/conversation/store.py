"""In-memory conversation store.

Hides how the transcript and the pending input are held.
Every mutation swaps the whole transcript, never a slice of it.
Data is lost when the application exits.
"""

import logging
from collections.abc import Callable, Sequence

from .models import Message

logger = logging.getLogger(__name__)

StoreListener = Callable[["ConversationStore"], None]


class ConversationStore:
    """Session-only transcript plus the pending input cell.

    Example:
        store = ConversationStore()
        store.set_pending_input("Hello")
        store.append([Message.user("Hello"), Message.assistant("Hi!")])
        store.clear_pending_input()
    """

    def __init__(self) -> None:
        self._messages: tuple[Message, ...] = ()
        self._pending_input = ""
        self._listeners: list[StoreListener] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        """Current transcript, in chat order."""
        return self._messages

    @property
    def pending_input(self) -> str:
        """Current contents of the text box."""
        return self._pending_input

    def snapshot(self) -> list[Message]:
        """Return a copy of the transcript that callers may extend."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, messages: Sequence[Message]) -> None:
        """Replace the transcript with the full new sequence.

        Args:
            messages: Complete transcript, not a delta
        """
        self._messages = tuple(messages)
        logger.debug(f"Transcript replaced ({len(self._messages)} messages)")
        self._notify()

    def set_pending_input(self, text: str) -> None:
        """Update the pending input cell."""
        if text == self._pending_input:
            return
        self._pending_input = text
        self._notify()

    def clear_pending_input(self) -> None:
        """Clear the pending input cell."""
        self.set_pending_input("")

    def reset(self) -> None:
        """Empty the transcript and clear the pending input."""
        self._messages = ()
        self._pending_input = ""
        logger.debug("Conversation reset")
        self._notify()

    def subscribe(self, listener: StoreListener) -> None:
        """Register a listener called after every mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

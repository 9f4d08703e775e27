"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Transcript rendering
- Log rendering and level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from rich.text import Text
from textual.containers import Vertical, VerticalScroll
from textual.events import Click, Key
from textual.widgets import Input, Markdown, RichLog, Static

from ..conversation import ASSISTANT_ROLE, Message
from .config import (
    ASSISTANT_LABEL,
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    NOTIFY_TIMEOUT,
    USER_LABEL,
    LogLevel,
)


class MessageBubble(Vertical):
    """A transcript entry that copies its content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=NOTIFY_TIMEOUT)


class PromptInput(Input):
    """Single-line prompt with command history.

    Use Up/Down arrow keys to navigate through previously sent prompts.
    Enter submits (standard ``Input.Submitted``).
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def on_key(self, event: Key) -> None:
        """Handle key events for history navigation."""
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, prompt: str) -> None:
        """Remember a sent prompt."""
        if prompt and (not self._history or self._history[-1] != prompt):
            self._history.append(prompt)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class TranscriptView(VerticalScroll):
    """Read-only transcript that mirrors the conversation store."""

    BORDER_TITLE = "Conversation"
    BORDER_SUBTITLE = "No messages"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: tuple[Message, ...] = ()

    @property
    def messages(self) -> tuple[Message, ...]:
        """Messages currently rendered."""
        return self._messages

    def show_messages(self, messages: Sequence[Message]) -> None:
        """Render a full transcript, replacing what is shown."""
        messages = tuple(messages)
        if messages == self._messages:
            return
        self._messages = messages
        self.remove_children()
        if messages:
            self.mount_all(self._build_bubble(msg) for msg in messages)
            self.border_subtitle = f"{len(messages)} messages"
            self.scroll_end(animate=False)
        else:
            self.border_subtitle = "No messages"

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._messages):
            if msg.role == ASSISTANT_ROLE:
                return msg.content
        return None

    def _build_bubble(self, msg: Message) -> MessageBubble:
        if msg.role == ASSISTANT_ROLE:
            bubble = MessageBubble(content=msg.content, classes="chat-message assistant-message")
            bubble.compose_add_child(Static(ASSISTANT_LABEL, classes="message-header"))
            bubble.compose_add_child(Markdown(msg.content, classes="message-content"))
        else:
            # Anything that is not the assistant renders as the user side
            bubble = MessageBubble(content=msg.content, classes="chat-message user-message")
            bubble.compose_add_child(Static(USER_LABEL, classes="message-header"))
            bubble.compose_add_child(Static(msg.content, markup=False, classes="message-content"))
        return bubble


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped records from all avachat components.
    Hidden by default, shown with --log-level flag or toggled with F2.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
        LogLevel.CRITICAL: "bold red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Dispatch": "magenta",
        "HTTP": "blue",
        "Store": "green",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def write_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Dispatch, HTTP, Store)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        line = Text.assemble(
            (f"{timestamp} ", "dim"),
            (f"{LogLevel.name(level):<5} ", self.LEVEL_COLORS.get(level, "white")),
            (f"[{component}] ", self.COMPONENT_COLORS.get(component, "white")),
            message,
        )
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

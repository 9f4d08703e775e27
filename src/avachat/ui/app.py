"""Main Textual TUI application.

Orchestrates the UI components and routes user interaction to the
request dispatcher.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Button, Footer, Header, Input, Static

from ..conversation import ConversationStore
from ..dispatch import DispatchInProgressError, RequestDispatcher
from .callbacks import DebugPanelHandler
from .config import (
    APP_TITLE,
    GREETING,
    INPUT_PLACEHOLDER,
    NOTIFY_ERROR_TIMEOUT,
    NOTIFY_TIMEOUT,
    PROMPT_LABEL,
    RESET_BUTTON_LABEL,
    THINKING_SUBTITLE,
    LogLevel,
)
from .styles import APP_CSS
from .themes import AVA_DARK
from .widgets import DebugPanel, PromptInput, TranscriptView

logger = logging.getLogger(__name__)

# Loggers routed into the log panel while the app runs
PACKAGE_LOGGER = "avachat"


class AvaChatApp(App):
    """Textual TUI for chatting through the proxy."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "new_conversation", "New Conversation"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("f2", "toggle_debug", "Log"),
    ]

    def __init__(self, dispatcher: RequestDispatcher, log_level: str | None = None) -> None:
        super().__init__()
        self._dispatcher = dispatcher
        self._log_level = log_level
        self._log_handler: DebugPanelHandler | None = None
        self._saved_logger_state: tuple[int, bool] | None = None

    @property
    def store(self) -> ConversationStore:
        return self._dispatcher.store

    def compose(self) -> ComposeResult:
        yield Header()

        with Vertical(id="prompt-area"):
            yield Static(GREETING, id="greeting")
            yield Static(PROMPT_LABEL, id="prompt-label")
            yield PromptInput(placeholder=INPUT_PLACEHOLDER, id="prompt-input")
            yield Button(RESET_BUTTON_LABEL, id="reset-btn", variant="primary")

        yield TranscriptView(id="transcript")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(AVA_DARK)
        self.theme = AVA_DARK.name

        self._install_log_handler()

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            logger.info(f"Log panel enabled with level: {self._log_level.upper()}")

        self.store.subscribe(self._on_store_changed)
        self._on_store_changed(self.store)
        self.query_one("#prompt-input", PromptInput).focus()

    def on_unmount(self) -> None:
        """Detach from the store and logging."""
        self.store.unsubscribe(self._on_store_changed)
        self._remove_log_handler()

    def _install_log_handler(self) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        self._saved_logger_state = (package_logger.level, package_logger.propagate)
        self._log_handler = DebugPanelHandler(log_panel, app=self)
        package_logger.addHandler(self._log_handler)
        # Panel does the filtering; terminal handlers would corrupt the screen
        package_logger.setLevel(logging.DEBUG)
        package_logger.propagate = False

    def _remove_log_handler(self) -> None:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        if self._log_handler is not None:
            package_logger.removeHandler(self._log_handler)
            self._log_handler = None
        if self._saved_logger_state is not None:
            level, propagate = self._saved_logger_state
            package_logger.setLevel(level)
            package_logger.propagate = propagate
            self._saved_logger_state = None

    def _on_store_changed(self, store: ConversationStore) -> None:
        """Mirror store state into the transcript and the input box."""
        self.query_one("#transcript", TranscriptView).show_messages(store.messages)
        prompt = self.query_one("#prompt-input", PromptInput)
        if prompt.value != store.pending_input:
            prompt.value = store.pending_input

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "prompt-input":
            self.store.set_pending_input(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter in the prompt."""
        if event.input.id != "prompt-input":
            return
        self.query_one("#prompt-input", PromptInput).add_to_history(event.value)
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "reset-btn":
            self.action_new_conversation()

    @work(exclusive=True)
    async def _submit(self) -> None:
        """Run one round-trip as a background async worker."""
        prompt = self.query_one("#prompt-input", PromptInput)
        prompt.disabled = True
        self.sub_title = THINKING_SUBTITLE
        try:
            result = await self._dispatcher.submit()
        except asyncio.CancelledError:
            logger.warning("Submission cancelled")
            raise
        finally:
            self.sub_title = ""
            prompt.disabled = False
            prompt.focus()

        if not result.ok and not isinstance(result.error, DispatchInProgressError):
            self.notify(
                f"Request failed: {result.error}",
                severity="error",
                timeout=NOTIFY_ERROR_TIMEOUT,
            )

    def action_new_conversation(self) -> None:
        """Empty the transcript and the prompt."""
        self.store.reset()
        self.query_one("#prompt-input", PromptInput).focus()
        self.notify("New conversation", timeout=NOTIFY_TIMEOUT)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_TIMEOUT)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self.query_one("#transcript", TranscriptView).get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied", timeout=NOTIFY_TIMEOUT)
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(dispatcher: RequestDispatcher, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        dispatcher: Dispatcher wired to a proxy client and a store
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = AvaChatApp(dispatcher=dispatcher, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass

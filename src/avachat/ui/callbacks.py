"""Logging integration for the TUI.

Hides the details of how log records from the dispatcher and store
reach the log panel. Uses thread-safe methods so records emitted from
worker threads still land on the UI thread.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import DebugPanel

# Logger name prefix -> panel component label
COMPONENTS = {
    "avachat.dispatch.dispatcher": "Dispatch",
    "avachat.dispatch.client": "HTTP",
    "avachat.conversation": "Store",
    "avachat.ui": "TUI",
}


def component_for(logger_name: str) -> str:
    """Map a logger name to the short component label shown in the panel."""
    for prefix, component in COMPONENTS.items():
        if logger_name.startswith(prefix):
            return component
    return logger_name.rsplit(".", 1)[-1]


class DebugPanelHandler(logging.Handler):
    """logging.Handler that writes records into a DebugPanel.

    Example:
        handler = DebugPanelHandler(panel, app=app)
        logging.getLogger("avachat").addHandler(handler)
    """

    def __init__(
        self,
        panel: "DebugPanel",
        app: "App | None" = None,
        level: int = logging.DEBUG
    ) -> None:
        super().__init__(level)
        self.panel = panel
        self.app = app

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self._call_thread_safe(
                self.panel.write_entry,
                component_for(record.name),
                message,
                record.levelno,
            )
        except Exception:
            self.handleError(record)

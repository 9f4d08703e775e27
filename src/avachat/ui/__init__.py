"""Terminal UI module for avachat.

Provides a Textual-based TUI around the request dispatcher.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (prompt history, transcript, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- callbacks.py: Logging integration (how the log panel receives records)
- config.py: Labels and constants
- app.py: Application orchestration (user interaction flow)
"""

from .app import AvaChatApp, run_textual_tui
from .callbacks import DebugPanelHandler
from .config import LogLevel
from .widgets import DebugPanel, MessageBubble, PromptInput, TranscriptView

__all__ = [
    "AvaChatApp",
    "DebugPanel",
    "DebugPanelHandler",
    "LogLevel",
    "MessageBubble",
    "PromptInput",
    "TranscriptView",
    "run_textual_tui",
]

"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Single centered column: prompt area on top, transcript below,
log panel docked at the bottom when shown.
"""

APP_CSS = """
Screen {
    layout: vertical;
    align-horizontal: center;
    background: $background;
}

#prompt-area {
    width: 100%;
    height: auto;
    align-horizontal: center;
    padding: 1 2;
}

#greeting {
    width: 100%;
    content-align: center middle;
    text-style: bold;
    color: $primary;
    padding: 1 0;
}

#prompt-label {
    width: 100%;
    content-align: center middle;
    text-style: bold;
    margin-bottom: 1;
}

#prompt-input {
    width: 60;
    max-width: 100%;
    border: tall $primary 60%;

    &:focus {
        border: tall $primary;
    }

    &:disabled {
        opacity: 60%;
    }
}

#reset-btn {
    margin-top: 1;
}

#transcript {
    width: 100%;
    height: 1fr;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

.chat-message {
    height: auto;
    width: 80%;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border: round $primary;
}

.assistant-message {
    border: round $secondary;
    margin-left: 10;
}

.message-header {
    text-style: bold;
    color: $accent;
}

.message-content {
    height: auto;
}

#debug-panel {
    height: 12;
    dock: bottom;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}
"""

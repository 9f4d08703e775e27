"""Theme definitions for the TUI.

Hides the color palette. Colors follow the pink/purple look of the
original web page's component theme.
"""

from textual.theme import Theme

AVA_DARK = Theme(
    name="ava-dark",
    primary="#f000b8",      # Pink - user bubbles, focus
    secondary="#7b92b2",    # Slate - assistant bubbles
    accent="#37cdbe",       # Teal - badges
    foreground="#e5e7eb",
    background="#1d232a",
    success="#36d399",
    warning="#fbbd23",
    error="#f87272",
    surface="#2a303c",
    panel="#242933",
    dark=True,
    variables={
        "border": "#3d4451",
        "border-blurred": "#2a303c",
        "input-cursor-background": "#e5e7eb",
        "input-cursor-foreground": "#1d232a",
        "input-selection-background": "#f000b8 30%",
        "scrollbar": "#2a303c",
        "scrollbar-hover": "#3d4451",
        "scrollbar-active": "#f000b8",
        "footer-key-foreground": "#37cdbe",
        "text-muted": "#9ca3af",
        "button-color-foreground": "#1d232a",
    },
)

"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Teal and sand palette for the travel guide
WANDERLUST_TRAVEL = Theme(
    name="wanderlust-travel",
    primary="#0d9488",      # Teal - main accent, user bubbles
    secondary="#f59e0b",    # Amber - guide bubbles
    accent="#38bdf8",       # Sky - links and chips
    foreground="#e7e5e4",   # Warm light text
    background="#1c1917",   # Stone - deepest background
    success="#22c55e",
    warning="#f97316",
    error="#ef4444",
    surface="#292524",
    panel="#231f1d",
    dark=True,
    variables={
        "block-cursor-foreground": "#1c1917",
        "block-cursor-background": "#fde68a",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#e7e5e4",
        "input-cursor-foreground": "#1c1917",
        "input-selection-background": "#0d9488 30%",

        "border": "#57534e",
        "border-blurred": "#44403c",

        "scrollbar": "#44403c",
        "scrollbar-hover": "#57534e",
        "scrollbar-active": "#0d9488",
        "scrollbar-background": "#231f1d",

        "footer-key-foreground": "#fde68a",
        "footer-background": "#1c1917",

        "text-muted": "#a8a29e",
        "link-color": "#38bdf8",
        "link-style": "underline",
    },
)

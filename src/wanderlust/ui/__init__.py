"""Terminal UI module for wanderlust.

Provides a Textual-based TUI for chatting with the travel guide.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (chat bubbles, quick replies, input, log panel)
- formatting.py: How citations and timestamps are displayed
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (confirmation screens)
- app.py: Application orchestration (user interaction flow)
"""

from .app import WanderLustApp, run_textual_tui
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, QuickReplies

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "QuickReplies",
    "WanderLustApp",
    "run_textual_tui",
]

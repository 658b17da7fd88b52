"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

#bottom-bar {
    height: auto;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

QuickReplies {
    height: 3;
    overflow-x: auto;
}

.quick-reply {
    min-width: 12;
    margin-right: 1;
    border: tall $primary 40%;
    background: $primary 10%;
}

ChatInputBar {
    height: 3;
    margin-top: 1;

    &.rtl #chat-input {
        text-align: right;
    }
}

#chat-input {
    width: 1fr;
}

#send-btn {
    width: 10;
    margin-left: 1;
}

#footer-note {
    height: 1;
    width: 100%;
    text-align: center;
    color: $text-muted;
}

.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
}

.user-message {
    border-left: tall $primary;
    background: $primary 10%;

    & .message-header {
        color: $primary;
        text-style: bold;
    }
}

.guide-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.rtl {
    & .message-header, & .message-content {
        text-align: right;
    }
}

.message-content {
    height: auto;
    margin: 0;
}

.message-chips {
    height: auto;
    color: $accent;
    padding-top: 1;
}

.typing-indicator {
    color: $secondary;
    padding: 0 2;
    margin-bottom: 1;
}
"""

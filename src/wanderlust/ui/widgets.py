"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat bubble rendering and citation chips
- Quick-reply suggestion buttons
- Log rendering and level filtering
"""

import logging
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..locale import INPUT_PLACEHOLDER, Language
from ..memory.models import Message, Role
from .config import (
    LOG_LEVEL_COLORS,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    TYPING_INDICATOR,
)
from .formatting import message_header, render_chips


class MessageBubble(Vertical):
    """One chat message; clicking it copies the raw text to the clipboard."""

    def __init__(self, message: Message, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.message = message

    def compose(self):
        yield Static(message_header(self.message), classes="message-header")
        yield Markdown(self.message.text, classes="message-content")
        chips = render_chips(self.message.grounding_chunks)
        if chips is not None and self.message.role is Role.MODEL:
            yield Static(chips, classes="message-chips")

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self.message.text)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history in log order."""

    BORDER_TITLE = "WanderLust"
    BORDER_SUBTITLE = "AI Travel Companion"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []
        self._typing: Static | None = None

    def add_message(self, message: Message, rtl: bool = False) -> None:
        """Render a message at the bottom of the history."""
        self._messages.append(message)
        classes = "chat-message user-message" if message.role is Role.USER else "chat-message guide-message"
        if rtl:
            classes += " rtl"
        bubble = MessageBubble(message, classes=classes)
        if self._typing is not None:
            self.mount(bubble, before=self._typing)
        else:
            self.mount(bubble)
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def show_typing(self) -> None:
        """Show the guide's typing indicator while a reply is pending."""
        if self._typing is None:
            self._typing = Static(TYPING_INDICATOR, classes="typing-indicator")
            self.mount(self._typing)
            self.scroll_end(animate=False)

    def hide_typing(self) -> None:
        if self._typing is not None:
            self._typing.remove()
            self._typing = None

    def get_last_response(self) -> str | None:
        """Get the last guide response."""
        for message in reversed(self._messages):
            if message.role is Role.MODEL:
                return message.text
        return None

    def clear_history(self) -> None:
        """Remove every rendered message."""
        self._messages.clear()
        self._typing = None
        self.remove_children()
        self.border_subtitle = "AI Travel Companion"


class QuickReplies(Horizontal):
    """Row of canned suggestions for the current language."""

    class Selected(TextualMessage):
        """Posted when a suggestion is chosen."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    def __init__(self, suggestions: tuple[str, ...] = (), *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._suggestions = suggestions

    def compose(self):
        for index, text in enumerate(self._suggestions):
            yield Button(text, id=f"quick-{index}", classes="quick-reply")

    async def set_suggestions(self, suggestions: tuple[str, ...]) -> None:
        self._suggestions = suggestions
        await self.remove_children()
        await self.mount_all(
            Button(text, id=f"quick-{index}", classes="quick-reply")
            for index, text in enumerate(suggestions)
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        index = int((event.button.id or "quick-0").split("-", 1)[1])
        self.post_message(self.Selected(self._suggestions[index]))


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    Multi-line pastes are converted to single line (newlines become spaces).
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_paste(self, event) -> None:
        """Handle paste events - convert newlines to spaces for single-line input."""
        if event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
            event.prevent_default()
            event.stop()

    def _on_key(self, event) -> None:
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

    def add_to_history(self, command: str) -> None:
        """Add a command to history."""
        if command and (not self._history or self._history[-1] != command):
            self._history.append(command)
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Single-line input with a Send button. Enter submits."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER[Language.EN], id="chat-input")
        yield Button("Send", id="send-btn", variant="success")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def _submit(self) -> None:
        text_input = self.query_one("#chat-input", HistoryInput)
        value = text_input.value.strip()
        if value:
            text_input.add_to_history(value)
            text_input.value = ""
            self.post_message(self.Submitted(value))

    def set_language(self, language: Language) -> None:
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.placeholder = INPUT_PLACEHOLDER[language]
        self.set_class(language.is_rtl, "rtl")

    def set_busy(self, busy: bool) -> None:
        """Disable input while a reply is pending."""
        self.query_one("#chat-input", HistoryInput).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy
        if not busy:
            self.focus_input()

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class DebugPanel(RichLog):
    """Log panel for application log records with level filtering.

    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    def __init__(self, *args, log_level: int = logging.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=False,
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
            self.border_subtitle = f"Level: {logging.getLevelName(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def add_record(self, level: int, component: str, message: str) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        self.write(Text.assemble(
            (f"{timestamp} ", "dim"),
            (f"{logging.getLevelName(level):<7} ", LOG_LEVEL_COLORS.get(level, "white")),
            (f"[{component}] ", "bold"),
            message,
        ))

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class PanelLogHandler(logging.Handler):
    """Routes ``logging`` records into a DebugPanel."""

    def __init__(self, panel: DebugPanel, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._panel = panel

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                message = f"{message}: {record.exc_info[1]!r}"
            component = record.name.rsplit(".", 1)[-1]
            self._panel.add_record(record.levelno, component, message)
        except Exception:
            self.handleError(record)

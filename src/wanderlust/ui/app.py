"""Main Textual TUI application.

Orchestrates the UI components and routes user commands to the
SessionController. The app only renders; the controller owns the log.
"""

import asyncio
import contextlib
import logging
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from ..conversation import SessionController
from ..export import export_transcript
from ..memory.models import Message, Role
from .config import CLEAR_CONFIRMATION_PROMPT, FOOTER_NOTE, parse_log_level
from .screens import ConfirmationScreen
from .styles import APP_CSS
from .themes import WANDERLUST_TRAVEL
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    PanelLogHandler,
    QuickReplies,
)

logger = logging.getLogger(__name__)


class WanderLustApp(App):
    """Textual TUI for the WanderLust travel guide."""

    CSS = APP_CSS
    TITLE = "WanderLust"
    SUB_TITLE = "AI Travel Companion"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_language", "Language"),
        Binding("ctrl+s", "export_transcript", "Download"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        controller: SessionController,
        log_level: str | None = None,
        export_dir: str | Path = ".",
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level
        self._export_dir = Path(export_dir)
        self._log_handler: PanelLogHandler | None = None
        self._turn_pending = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        with Vertical(id="bottom-bar"):
            yield QuickReplies(self._controller.quick_replies(), id="quick-replies")
            yield ChatInputBar(id="chat-input-bar")
            yield Static(FOOTER_NOTE, id="footer-note")
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(WANDERLUST_TRAVEL)
        self.theme = "wanderlust-travel"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_level = parse_log_level(self._log_level, default=logging.INFO)
        self._log_handler = PanelLogHandler(log_panel)
        logging.getLogger("wanderlust").addHandler(self._log_handler)
        if self._log_level is not None:
            log_panel.show()

        self._controller.set_message_callback(self._on_message_appended)
        await self._controller.start()
        self._apply_language()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    async def on_unmount(self) -> None:
        """Release the store and detach the log handler."""
        self._controller.set_message_callback(None)
        if self._log_handler is not None:
            logging.getLogger("wanderlust").removeHandler(self._log_handler)
            self._log_handler = None
        await self._controller.close()

    def _on_message_appended(self, message: Message) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        rtl = self._controller.language.is_rtl and message.role is Role.MODEL
        chat.add_message(message, rtl=rtl)

    def _apply_language(self) -> None:
        language = self._controller.language
        self.sub_title = f"AI Travel Companion | {language.label}"
        self.query_one("#chat-input-bar", ChatInputBar).set_language(language)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._send(event.value)

    def on_quick_replies_selected(self, event: QuickReplies.Selected) -> None:
        self._send(event.text)

    def _send(self, text: str) -> None:
        # Claimed before the worker starts so a second submit is dropped, not queued
        if not text.strip() or self._turn_pending:
            return
        self._turn_pending = True
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(True)
        self._run_turn(text)

    @work(group="turn")
    async def _run_turn(self, text: str) -> None:
        """Run one turn as a background async worker."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)

        chat.show_typing()
        try:
            await self._controller.send(text)
        except Exception as e:
            # The client absorbs provider errors; anything here is a local fault
            logger.exception("Turn failed")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)
        finally:
            chat.hide_typing()
            input_bar.set_busy(False)
            self._turn_pending = False

    async def action_toggle_language(self) -> None:
        """Switch the reply language for subsequent turns."""
        language = self._controller.toggle_language()
        self._apply_language()
        await self.query_one("#quick-replies", QuickReplies).set_suggestions(
            self._controller.quick_replies()
        )
        self.notify(f"Language: {language.label}", timeout=2)

    def action_clear_chat(self) -> None:
        """Ask for confirmation, then clear the conversation."""
        if self._turn_pending:
            return
        self.push_screen(ConfirmationScreen(CLEAR_CONFIRMATION_PROMPT), self._clear_confirmed)

    async def _clear_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self.query_one("#chat-history", ChatHistoryWidget).clear_history()
        await self._controller.clear_conversation(confirmed=True)
        self.notify("Chat cleared", timeout=2)

    def action_export_transcript(self) -> None:
        """Write the conversation to a text file."""
        try:
            path = export_transcript(self._controller.messages, self._export_dir)
        except OSError as e:
            logger.error("Export failed: %s", e)
            self.notify(f"Export failed: {e}", severity="error", timeout=5)
            return
        self.notify(f"Saved {path}", timeout=3)

    def action_copy_last_response(self) -> None:
        """Copy last guide response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    controller: SessionController,
    log_level: str | None = None,
    export_dir: str | Path = ".",
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Session controller for the conversation
        log_level: Log level for panel (debug/info/warning/error), None to hide
        export_dir: Directory transcripts are written to
    """
    app = WanderLustApp(controller=controller, log_level=log_level, export_dir=export_dir)
    with contextlib.suppress(KeyboardInterrupt, asyncio.CancelledError):
        await app.run_async()

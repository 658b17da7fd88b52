"""Text formatting utilities for the TUI and CLI.

Hides the details of how citations and timestamps are displayed.
"""

from datetime import datetime

from rich.style import Style
from rich.text import Text

from ..memory.models import GroundingChunk, MapsChunk, Message, Role, WebChunk

SENDER_NAMES = {
    Role.USER: "You",
    Role.MODEL: "Guide",
}

CHIP_ICONS = {
    "maps": "📍",
    "web": "🌐",
}

WEB_TITLE_MAX = 30


def describe_chunk(chunk: GroundingChunk) -> tuple[str, str, str]:
    """Return (kind, title, uri) for a grounding chunk.

    Raises:
        TypeError: For a chunk kind this renderer does not know.
    """
    if isinstance(chunk, MapsChunk):
        return "maps", chunk.maps.title, chunk.maps.uri
    if isinstance(chunk, WebChunk):
        title = chunk.web.title
        if len(title) > WEB_TITLE_MAX:
            title = title[: WEB_TITLE_MAX - 1] + "…"
        return "web", title, chunk.web.uri
    raise TypeError(f"Unsupported grounding chunk: {type(chunk).__name__}")


def render_chip(chunk: GroundingChunk) -> Text:
    """Render a citation as a clickable terminal hyperlink."""
    kind, title, uri = describe_chunk(chunk)
    return Text.assemble(
        f"{CHIP_ICONS[kind]} ",
        (title or uri, Style(link=uri, underline=True)),
    )


def render_chips(chunks: tuple[GroundingChunk, ...] | None) -> Text | None:
    if not chunks:
        return None
    return Text("   ").join(render_chip(chunk) for chunk in chunks)


def message_time(message: Message) -> str:
    """Local HH:MM for a message bubble."""
    return datetime.fromtimestamp(message.timestamp / 1000).strftime("%H:%M")


def message_header(message: Message) -> str:
    return f"{SENDER_NAMES[message.role]} [{message_time(message)}]"

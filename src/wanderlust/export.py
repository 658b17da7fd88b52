"""Plain-text transcript export.

A read-only consumer of the message log: renders each turn with a
localized timestamp and a sender label, in log order.
"""

from collections.abc import Iterable
from datetime import date, datetime, tzinfo
from pathlib import Path

from .memory.models import Message, Role

SEPARATOR = "-" * 40

SENDER_LABELS = {
    Role.USER: "You",
    Role.MODEL: "Guide",
}


def format_timestamp(timestamp_ms: int, tz: tzinfo | None = None) -> str:
    """Render an epoch-millisecond timestamp in the local date/time format."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=tz)
    if tz is None:
        moment = moment.astimezone()
    return moment.strftime("%x, %X")


def format_transcript(messages: Iterable[Message], tz: tzinfo | None = None) -> str:
    """Render messages as a plain-text transcript.

    Each entry is ``[time] Sender:``, the message text, then a separator
    line; entries are joined by a blank line.
    """
    entries = [
        f"[{format_timestamp(m.timestamp, tz)}] {SENDER_LABELS[m.role]}:\n"
        f"{m.text}\n"
        f"{SEPARATOR}\n"
        for m in messages
    ]
    return "\n".join(entries)


def transcript_filename(day: date | None = None) -> str:
    day = day or date.today()
    return f"wanderlust-itinerary-{day.isoformat()}.txt"


def export_transcript(
    messages: Iterable[Message],
    directory: str | Path = ".",
    tz: tzinfo | None = None,
) -> Path:
    """Write the transcript to ``directory`` and return the file path."""
    target_dir = Path(directory).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / transcript_filename()
    path.write_text(format_transcript(messages, tz), encoding="utf-8")
    return path

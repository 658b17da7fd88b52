"""Main CLI application using Typer."""
import asyncio
import logging
import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.table import Table

from ..export import SENDER_LABELS, export_transcript, format_timestamp
from ..locale import Language
from ..memory import DEFAULT_SESSION_KEY, MessageStore
from ..ui.config import parse_log_level
from ..ui.formatting import render_chips
from .providers import build_controller, get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="wanderlust",
    help="AI travel guide chat with Google Maps grounded answers",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()
err_console = Console(stderr=True)

StoreOption = typer.Option(
    None, "--store", help="Storage backend: json, sqlite or memory (env: WANDERLUST_STORE)"
)
StorePathOption = typer.Option(
    None, "--store-path", help="Storage directory (json) or database file (sqlite)"
)
SessionOption = typer.Option(
    DEFAULT_SESSION_KEY, "--session", "-s", help="Conversation key to load and save"
)
LogLevelOption = typer.Option(
    None, "--log-level", "-l", help="Log level: debug, info, warning, error (env: WANDERLUST_LOG_LEVEL)"
)


def _setup_logging(level: str | None) -> None:
    level_name = level or os.getenv("WANDERLUST_LOG_LEVEL")
    logging.basicConfig(
        level=parse_log_level(level_name),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.command()
def chat(
    language: Language | None = typer.Option(None, "--language", help="Starting reply language"),
    store: str | None = StoreOption,
    store_path: str | None = StorePathOption,
    session: str = SessionOption,
    log_level: str | None = LogLevelOption,
    export_dir: Path = typer.Option(
        Path("."), "--export-dir", "-o", help="Where Ctrl+S writes transcripts"
    ),
):
    """Start the interactive chat TUI."""
    from ..ui import run_textual_tui

    message_store = get_store(store, store_path, session, language, console)
    controller = build_controller(message_store, console)

    # Log records go to the in-app panel, not the terminal the TUI draws on
    logging.getLogger("wanderlust").setLevel(parse_log_level(log_level, default=logging.INFO))

    asyncio.run(run_textual_tui(controller, log_level=log_level, export_dir=export_dir))


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send to the guide"),
    language: Language | None = typer.Option(None, "--language", help="Reply language"),
    store: str | None = StoreOption,
    store_path: str | None = StorePathOption,
    session: str = SessionOption,
    log_level: str | None = LogLevelOption,
):
    """Send one message and print the guide's reply."""
    _setup_logging(log_level)

    async def _ask():
        message_store = get_store(store, store_path, session, language, console)
        controller = build_controller(message_store, console)
        try:
            await controller.start()
            with console.status("[dim]The guide is thinking...[/dim]"):
                reply = await controller.send(text)
        finally:
            await controller.close()

        if reply is None:
            console.print("[yellow]Nothing to send.[/yellow]")
            raise typer.Exit(code=1)

        console.print(Markdown(reply.text))
        chips = render_chips(reply.grounding_chunks)
        if chips is not None:
            console.print()
            console.print(chips)

    asyncio.run(_ask())


@app.command()
def history(
    store: str | None = StoreOption,
    store_path: str | None = StorePathOption,
    session: str = SessionOption,
    log_level: str | None = LogLevelOption,
):
    """Show the saved conversation."""
    _setup_logging(log_level)

    async def _history():
        message_store = get_store(store, store_path, session, console=console)
        messages = await _load(message_store)
        if not messages:
            console.print("[dim]No saved conversation.[/dim]")
            return

        table = Table(title=f"Conversation '{session}'", show_lines=True)
        table.add_column("Time", style="dim", no_wrap=True)
        table.add_column("Sender", style="bold")
        table.add_column("Message")
        table.add_column("Citations", justify="right")
        for message in messages:
            table.add_row(
                format_timestamp(message.timestamp),
                SENDER_LABELS[message.role],
                message.text,
                str(len(message.grounding_chunks or ())),
            )
        console.print(table)

    asyncio.run(_history())


@app.command()
def export(
    output: Path = typer.Option(Path("."), "--output", "-o", help="Directory to write the transcript to"),
    store: str | None = StoreOption,
    store_path: str | None = StorePathOption,
    session: str = SessionOption,
    log_level: str | None = LogLevelOption,
):
    """Write the saved conversation to a plain-text transcript."""
    _setup_logging(log_level)

    async def _export():
        message_store = get_store(store, store_path, session, console=console)
        messages = await _load(message_store)
        if not messages:
            console.print("[yellow]No saved conversation to export.[/yellow]")
            raise typer.Exit(code=1)
        path = export_transcript(messages, output)
        console.print(f"[green]Transcript written to {path}[/green]")

    asyncio.run(_export())


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    store: str | None = StoreOption,
    store_path: str | None = StorePathOption,
    session: str = SessionOption,
    log_level: str | None = LogLevelOption,
):
    """Delete the saved conversation. The next chat starts with a greeting."""
    _setup_logging(log_level)

    if not yes and not typer.confirm("Are you sure you want to clear the chat history?"):
        console.print("[dim]Aborted.[/dim]")
        return

    async def _clear():
        message_store = get_store(store, store_path, session, console=console)
        await message_store.connect()
        try:
            await message_store.clear()
        finally:
            await message_store.disconnect()
        console.print("[green]Chat cleared![/green]")

    asyncio.run(_clear())


async def _load(message_store: MessageStore):
    await message_store.connect()
    try:
        return await message_store.load()
    finally:
        await message_store.disconnect()


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

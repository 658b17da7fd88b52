"""Provider factory functions for CLI.

Centralizes creation of the LLM provider, message store and controller
from environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path
from typing import Any

from rich.console import Console

from ..conversation import ConversationClient, SessionController
from ..llm import create_llm_provider
from ..locale import Language
from ..memory import DEFAULT_SESSION_KEY, MessageStore, Session, create_key_value_backend

# Default console for output
_console = Console()

DEFAULT_STORE_DIR = Path("~/.wanderlust")


def get_llm(console: Console | None = None) -> Any:
    """Create the Gemini provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance

    Raises:
        SystemExit: If no API key is set

    Environment variables:
        GEMINI_API_KEY: Gemini API key (falls back to GOOGLE_API_KEY)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    import typer

    con = console or _console
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        con.print("[red]Error: GEMINI_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)

    model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    return create_llm_provider("gemini", api_key=api_key, model=model)


def get_store(
    backend: str | None = None,
    path: str | None = None,
    session_key: str = DEFAULT_SESSION_KEY,
    language: Language | None = None,
    console: Console | None = None,
) -> MessageStore:
    """Create the message store for one session.

    Environment variables:
        WANDERLUST_STORE: Backend type (json, sqlite, memory; default: json)
        WANDERLUST_STORE_PATH: Directory for json, database file for sqlite
        WANDERLUST_LANGUAGE: Starting language (en, ur; default: en)
    """
    import typer

    con = console or _console
    backend = (backend or os.getenv("WANDERLUST_STORE", "json")).lower()
    path = path or os.getenv("WANDERLUST_STORE_PATH")

    config: dict[str, Any] = {}
    if backend == "json":
        config["path"] = path or DEFAULT_STORE_DIR
    elif backend == "sqlite":
        config["path"] = path or DEFAULT_STORE_DIR / "wanderlust.db"

    try:
        session = Session(key=session_key, language=language or get_language(con))
        kv_backend = create_key_value_backend(backend, **config)
    except (ValueError, ImportError) as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    return MessageStore(kv_backend, session)


def get_language(console: Console | None = None) -> Language:
    """Starting language from WANDERLUST_LANGUAGE, English if unset or unknown."""
    con = console or _console
    value = os.getenv("WANDERLUST_LANGUAGE", Language.EN.value).lower()
    try:
        return Language(value)
    except ValueError:
        con.print(f"[yellow]Warning: unknown language '{value}', using English[/yellow]")
        return Language.EN


def build_controller(
    store: MessageStore,
    console: Console | None = None,
) -> SessionController:
    """Wire a SessionController for the given store."""
    llm = get_llm(console)
    return SessionController(store, ConversationClient(llm))

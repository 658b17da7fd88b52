"""The owned state of one conversation session."""

import re
from dataclasses import dataclass, field

from ..locale import Language
from .models import Message

DEFAULT_SESSION_KEY = "wanderlust_chat"

_SESSION_KEY = re.compile(r"[A-Za-z0-9_.-]+")


def validate_session_key(key: str) -> str:
    """Return ``key`` unchanged, or raise ValueError if a backend cannot store it.

    Keys become file names for the json backend, so only letters, digits,
    ``_``, ``.`` and ``-`` are allowed.
    """
    if not _SESSION_KEY.fullmatch(key) or key in (".", ".."):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


@dataclass
class Session:
    """One continuous conversation.

    Holds the active message log and language. A session is passed by
    reference to the store and controller that operate on it, so several
    independent sessions can coexist in one process.
    """

    key: str = DEFAULT_SESSION_KEY
    language: Language = Language.EN
    messages: list[Message] = field(default_factory=list)

    def __post_init__(self) -> None:
        validate_session_key(self.key)

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None

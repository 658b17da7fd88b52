"""Prompt management module.

Externalizes prompts to text files for easy customization.
Prompts can be overridden by placing files in the working directory.
"""

from functools import lru_cache
from pathlib import Path

from ..locale import Language

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent

URDU_DIRECTIVE = "IMPORTANT: You must reply in Urdu (Urdu script)."


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: wanderlust/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content, without trailing whitespace

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    # Check working directory first (allows user overrides)
    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").rstrip()

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").rstrip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def instruction_for(language: Language) -> str:
    """Build the model's system instruction for a session language.

    The base persona is the same for every language; the secondary
    language adds a directive to answer in Urdu script.
    """
    base = load_prompt("system")
    if Language(language) is Language.UR:
        return f"{base}\n\n{URDU_DIRECTIVE}"
    return base


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "URDU_DIRECTIVE",
    "clear_cache",
    "instruction_for",
    "load_prompt",
]

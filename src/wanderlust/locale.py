"""Locale settings and static localized text.

Hides which two languages the assistant speaks and every user-facing
string that depends on that choice (greetings, apologies, suggestions).
"""

from enum import Enum


class Language(str, Enum):
    """Two-valued session language selector."""

    EN = "en"  # primary
    UR = "ur"  # secondary, Urdu script

    @property
    def is_rtl(self) -> bool:
        """Whether text in this language is laid out right-to-left."""
        return self is Language.UR

    @property
    def label(self) -> str:
        """Short label shown on the language toggle."""
        return _LABELS[self]

    def toggled(self) -> "Language":
        """Return the other language."""
        return Language.UR if self is Language.EN else Language.EN


_LABELS = {
    Language.EN: "EN",
    Language.UR: "اردو",
}

# Seeded on first launch, before any language toggle has happened
GREETING_TEXT = (
    "Hello! I'm your WanderLust Guide. 🌍✈️\n\n"
    "I can help you plan trips, find amazing food, and discover hidden gems. "
    "Where would you like to go today?"
)

CLEARED_TEXT = {
    Language.EN: "Chat cleared! Where to next? 🌍",
    Language.UR: "چیٹ صاف کر دی گئی! اگلی منزل کون سی ہے؟ 🌍",
}

APOLOGY_TEXT = {
    Language.EN: "Sorry, something went wrong. Please try again later.",
    Language.UR: "معذرت، کچھ غلط ہو گیا۔ براہ کرم دوبارہ کوشش کریں۔",
}

NO_RESPONSE_TEXT = "I couldn't generate a response. Please try again."

INPUT_PLACEHOLDER = {
    Language.EN: "Ask about a destination, itinerary, or food...",
    Language.UR: "منزل، سفر کے منصوبے یا کھانے کے بارے میں پوچھیں...",
}

QUICK_REPLIES = {
    Language.EN: (
        "Plan a 3-day trip to Paris",
        "Best food in Tokyo",
        "Budget tips for Bali",
        "Historical places in Rome",
    ),
    Language.UR: (
        "لاہور کا 3 دن کا سفر منصوبہ",
        "کراچی میں بہترین کھانا",
        "مری کے لیے بجٹ ٹپس",
        "اسلام آباد کے تاریخی مقامات",
    ),
}


def quick_replies(language: Language) -> tuple[str, ...]:
    """Canned suggestions offered for the given language."""
    return QUICK_REPLIES[language]


__all__ = [
    "APOLOGY_TEXT",
    "CLEARED_TEXT",
    "GREETING_TEXT",
    "INPUT_PLACEHOLDER",
    "Language",
    "NO_RESPONSE_TEXT",
    "QUICK_REPLIES",
    "quick_replies",
]

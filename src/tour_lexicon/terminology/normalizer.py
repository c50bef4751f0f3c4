"""
Text normalization producing canonical matching keys for crew terms.
"""

import re
import unicodedata
from typing import Any

DASHES = re.compile("[\u2010\u2011\u2012\u2013\u2014\u2212]")
FANCY_QUOTES = re.compile("[\u2018\u2019\u201A\u201B\u2032\u2035]")
FANCY_DQUOTES = re.compile("[\u201C\u201D\u201E\u201F\u2033\u2036]")
PUNCT_TO_STRIP = re.compile(r"""[.,;:!?"'(){}\[\]`]""")
SEPARATORS = re.compile(r"[-_]")
DOTS_IN_ACRONYM = re.compile(r"\b([a-z])\.(?=[a-z])", re.IGNORECASE)
MULTISPACE = re.compile(r"\s+")

# Ordered: later rules assume hyphens and dots were already collapsed.
SUBSTITUTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bf\.o\.h\b", re.IGNORECASE), "foh"),
    (re.compile(r"\bf-o-h\b", re.IGNORECASE), "foh"),
    (re.compile(r"\bb\.o\.h\b", re.IGNORECASE), "boh"),
    (re.compile(r"\bb-o-h\b", re.IGNORECASE), "boh"),
    (re.compile(r"\bload-?in\b", re.IGNORECASE), "load in"),
    (re.compile(r"\bload-?out\b", re.IGNORECASE), "load out"),
    (re.compile(r"\bset-?list\b", re.IGNORECASE), "set list"),
    (re.compile(r"\bon-?stage time\b", re.IGNORECASE), "on stage time"),
)


def _collapse(text: str) -> str:
    return MULTISPACE.sub(" ", text).strip()


def normalize(text: Any) -> str:
    """Normalize text into the key used by the alias table.

    Applies NFKC folding, maps typographic quotes and dashes to ASCII,
    strips separator punctuation, turns hyphens/underscores into spaces,
    elides acronym dots, lowercases, collapses whitespace and finally runs
    the ordered domain substitutions.

    Args:
        text: Arbitrary input. None yields an empty string.

    Returns:
        Normalized key (possibly empty)

    Example:
        >>> normalize("What's F.O.H.?")
        'whats foh'
        >>> normalize("Front-of-House")
        'front of house'
        >>> normalize("Loadin")
        'load in'
    """
    if text is None:
        return ""

    s = unicodedata.normalize("NFKC", str(text))
    s = FANCY_QUOTES.sub("'", s)
    s = FANCY_DQUOTES.sub('"', s)
    s = DASHES.sub("-", s)
    s = PUNCT_TO_STRIP.sub("", s)
    s = SEPARATORS.sub(" ", s)
    s = DOTS_IN_ACRONYM.sub(r"\1", s)
    s = _collapse(s.lower())

    for pattern, replacement in SUBSTITUTIONS:
        s = pattern.sub(replacement, s)

    return _collapse(s)


def token_len(normalized: str) -> int:
    """Count the space-separated non-empty tokens of a normalized string."""
    if not normalized:
        return 0
    return len([tok for tok in normalized.split(" ") if tok])

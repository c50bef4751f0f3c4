"""
Tour Lexicon - resolves touring-crew jargon in free text to canonical terms.
"""

from .terminology import TermLookup, TermResolver, normalize

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("tour-lexicon")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = ["TermLookup", "TermResolver", "normalize"]

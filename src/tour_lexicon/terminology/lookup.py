"""
Term lookup pipeline used by the chat layer.
"""

import logging

from .models import Term, TermAnswer
from .normalizer import normalize
from .resolver import TermResolver

logger = logging.getLogger("tour-lexicon")


class TermLookup:
    """Resolves raw user text to a term and attaches its definition.

    Tries the whole normalized text as an exact alias first, then falls back
    to the longest alias found anywhere in the sentence.

    Example:
        >>> lookup = TermLookup(resolver, terms)
        >>> answer = lookup.resolve("what time is load-in?")
        >>> answer.term, answer.match_type
        ('load in', 'sentence')
    """

    def __init__(self, resolver: TermResolver, terms: list[Term]) -> None:
        self.resolver = resolver
        self._terms: dict[str, Term] = {term.term_id: term for term in terms if term.term_id}

    def get_term(self, term_id: str) -> Term | None:
        return self._terms.get(term_id)

    def resolve(self, text: str | None) -> TermAnswer | None:
        """Resolve text to a TermAnswer, or None when no alias matches."""
        normalized = normalize(text)
        if not normalized:
            return None

        exact = self.resolver.lookup_exact(normalized)
        if exact is not None:
            term_id, alias, match_type = exact.term_id, normalized, "exact"
        else:
            found = self.resolver.lookup_in_sentence(normalized)
            if found is None:
                logger.debug(f"No term found in '{normalized}'")
                return None
            term_id, alias, match_type = found.term_id, found.alias, "sentence"

        term = self._terms.get(term_id)
        if term is None:
            logger.warning(f"Alias '{alias}' points to unknown term {term_id}")

        return TermAnswer(
            input=text,
            normalized=normalized,
            term_id=term_id,
            alias=alias,
            match_type=match_type,
            term=term.term if term else None,
            category=term.category if term else None,
            definition=term.definition if term else None,
        )

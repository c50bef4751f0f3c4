"""
Curated term corpus: YAML loading and term identifier assignment.
"""

import logging
import re
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from .models import Term

logger = logging.getLogger("tour-lexicon")

DEFAULT_CORPUS_PATH = Path(__file__).resolve().parent.parent / "data" / "industry_terms.yaml"

# 1000 slots reserved for the crew lexicon
TERM_ID_RANGE = (0x604000, 0x6043E7)
HEX_TERM_ID = re.compile(r"[0-9A-F]{6}")


class CorpusError(ValueError):
    """Raised when the term corpus is malformed."""


class TermIdRangeExhaustedError(ValueError):
    """Raised when no identifiers remain in the term ID range."""


class HexIdAllocator:
    """Allocates six-digit upper-case hex identifiers from a fixed range.

    The next identifier is one past the highest identifier already taken
    inside the range, so allocation is stable across re-runs of the same
    corpus. Identifiers outside the range (hand-assigned ones) and anything
    that is not six upper-case hex digits are ignored.

    Example:
        >>> allocator = HexIdAllocator(existing=["604000", "604003"])
        >>> allocator.allocate()
        '604004'
    """

    def __init__(
        self,
        existing: Iterable[str] = (),
        start: int = TERM_ID_RANGE[0],
        end: int = TERM_ID_RANGE[1],
    ) -> None:
        if start > end:
            raise ValueError(f"Invalid ID range: {start:#x} > {end:#x}")
        self.start = start
        self.end = end
        self._current = start - 1

        for value in existing:
            if not isinstance(value, str) or not HEX_TERM_ID.fullmatch(value):
                continue
            n = int(value, 16)
            if start <= n <= end and n > self._current:
                self._current = n

    def allocate(self) -> str:
        """Return the next free identifier.

        Raises:
            TermIdRangeExhaustedError: If the range is used up
        """
        n = self._current + 1
        if n > self.end:
            raise TermIdRangeExhaustedError(
                f"Term ID range {self.start:06X}-{self.end:06X} exhausted"
            )
        self._current = n
        return f"{n:06X}"


def load_corpus(path: Path) -> list[Term]:
    """Load the term corpus from a YAML file.

    Expected YAML format:
        terms:
          - term_id: "604007"
            term: FOH
            category: technical
            definition: Front of House - main sound mixing position
            aliases: [front of house]

    Args:
        path: Path to the YAML file

    Returns:
        Terms in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the YAML is malformed
        CorpusError: If entries are invalid or term IDs repeat
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or "terms" not in data:
        raise CorpusError("YAML file must contain a 'terms' key")

    terms: list[Term] = []
    seen_ids: set[str] = set()
    for position, term_data in enumerate(data["terms"] or []):
        try:
            term = Term(**term_data)
        except (TypeError, ValidationError) as e:
            raise CorpusError(f"Invalid term entry #{position}: {e}") from e

        if term.term_id:
            if term.term_id in seen_ids:
                raise CorpusError(f"Duplicate term_id '{term.term_id}' (entry #{position})")
            seen_ids.add(term.term_id)
        terms.append(term)

    logger.debug(f"Loaded {len(terms)} terms from {path}")
    return terms


def save_corpus(path: Path, terms: list[Term]) -> None:
    """Write the corpus back to YAML, preserving term order."""
    payload = {"terms": [term.model_dump() for term in terms]}
    temp_file = path.with_suffix(".tmp")
    try:
        with open(temp_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(payload, f, allow_unicode=True, sort_keys=False)
        temp_file.replace(path)
    except OSError:
        if temp_file.exists():
            temp_file.unlink()
        raise


def assign_term_ids(terms: list[Term], allocator: HexIdAllocator | None = None) -> list[Term]:
    """Fill in missing term identifiers in corpus order.

    Args:
        terms: Corpus terms, some possibly without ``term_id``
        allocator: Allocator to draw from; seeded from the existing IDs if omitted

    Returns:
        The terms that received a new identifier
    """
    if allocator is None:
        allocator = HexIdAllocator(existing=[t.term_id for t in terms if t.term_id])

    assigned: list[Term] = []
    for term in terms:
        if not term.term_id:
            term.term_id = allocator.allocate()
            assigned.append(term)
            logger.info(f"Assigned {term.term_id} to '{term.term}' ({term.category})")
    return assigned

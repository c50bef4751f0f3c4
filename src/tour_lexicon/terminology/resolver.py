"""
Alias index and longest-match term lookup.
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import AliasRecord, IndexStats, LoadResult, MatchResult, SentenceMatch
from .store import AliasStore

logger = logging.getLogger("tour-lexicon")


@dataclass(frozen=True)
class IndexEntry:
    term_id: str
    token_len: int


class AliasIndex:
    """Immutable mapping of normalized alias to term, built wholesale.

    ``max_token_len`` bounds the n-gram window used by sentence scans and
    is at least 1, even for an empty index.
    """

    __slots__ = ("_entries", "_max_token_len")

    def __init__(self, entries: Mapping[str, IndexEntry], max_token_len: int = 1) -> None:
        self._entries: Mapping[str, IndexEntry] = MappingProxyType(dict(entries))
        self._max_token_len = max(1, max_token_len)

    @classmethod
    def empty(cls) -> "AliasIndex":
        return cls({})

    @property
    def max_token_len(self) -> int:
        return self._max_token_len

    @property
    def size(self) -> int:
        return len(self._entries)

    def get(self, alias_normalized: str) -> IndexEntry | None:
        return self._entries.get(alias_normalized)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, alias_normalized: object) -> bool:
        return alias_normalized in self._entries


def build_index(records: Iterable[AliasRecord]) -> AliasIndex:
    """Build a fresh index from alias rows.

    If the input repeats a key, the first row wins, matching the alias
    table's first-insert-wins policy.
    """
    entries: dict[str, IndexEntry] = {}
    max_len = 1
    for record in records:
        if record.alias_normalized in entries:
            continue
        entries[record.alias_normalized] = IndexEntry(record.term_id, record.token_len)
        if record.token_len > max_len:
            max_len = record.token_len
    return AliasIndex(entries, max_len)


def lookup_exact(index: AliasIndex, normalized_text: str) -> MatchResult | None:
    """Look up an already-normalized string as a whole key.

    No normalization happens here; callers pass the output of ``normalize``.
    """
    hit = index.get(normalized_text)
    if hit is None:
        return None
    return MatchResult(term_id=hit.term_id, token_len=hit.token_len)


def lookup_in_sentence(index: AliasIndex, normalized_sentence: str) -> SentenceMatch | None:
    """Find the longest indexed alias anywhere in a normalized sentence.

    Scans token starts left to right. At each start, windows are tried from
    the longest possible down to one token and the first hit is that start's
    candidate. A candidate only replaces the best match when it spans strictly
    more tokens, so equal lengths keep the earliest start.

    Example:
        >>> lookup_in_sentence(index, "whats foh")
        SentenceMatch(term_id='604001', token_len=1, alias='foh', start=1)
    """
    tokens = [tok for tok in normalized_sentence.split(" ") if tok]
    best: SentenceMatch | None = None

    for i in range(len(tokens)):
        for k in range(min(index.max_token_len, len(tokens) - i), 0, -1):
            ngram = " ".join(tokens[i:i + k])
            hit = index.get(ngram)
            if hit is None:
                continue
            if best is None or hit.token_len > best.token_len:
                best = SentenceMatch(
                    term_id=hit.term_id,
                    token_len=hit.token_len,
                    alias=ngram,
                    start=i,
                )
            # Shorter windows at this start cannot beat this one.
            break

    return best


class TermResolver:
    """Holds the published alias index and answers lookups against it.

    ``load()`` builds a complete new index from the store and only then swaps
    it in, so concurrent readers see either the old or the new index, never
    a partial one. Published indexes are never mutated.

    Example:
        >>> resolver = TermResolver(AliasStore("lexicon_data/aliases.json"))
        >>> resolver.load()
        LoadResult(count=52, max_token_len=3)
        >>> resolver.lookup_exact(normalize("Front-of-House"))
        MatchResult(term_id='604007', token_len=3)
    """

    def __init__(self, store: AliasStore | None = None, index: AliasIndex | None = None) -> None:
        self._store = store
        self._index = index if index is not None else AliasIndex.empty()
        self._swap_lock = threading.Lock()

    @property
    def index(self) -> AliasIndex:
        """The currently published index."""
        return self._index

    def load(self) -> LoadResult:
        """Replace the index with one built from the store's current rows.

        Returns:
            LoadResult with the row count and the longest alias in tokens

        Raises:
            AliasStoreError: If the table cannot be read; the previous index stays
            RuntimeError: If the resolver has no store
        """
        if self._store is None:
            raise RuntimeError("TermResolver has no alias store to load from")

        records = self._store.read_records()
        new_index = build_index(records)
        self.publish(new_index)
        logger.info(
            f"Alias index loaded: {len(records)} rows, max token length {new_index.max_token_len}"
        )
        return LoadResult(count=len(records), max_token_len=new_index.max_token_len)

    def publish(self, index: AliasIndex) -> None:
        """Swap in a fully built index."""
        with self._swap_lock:
            self._index = index
        logger.debug(f"Published alias index ({index.size} entries)")

    def lookup_exact(self, normalized_text: str) -> MatchResult | None:
        return lookup_exact(self._index, normalized_text)

    def lookup_in_sentence(self, normalized_sentence: str) -> SentenceMatch | None:
        return lookup_in_sentence(self._index, normalized_sentence)

    def stats(self) -> IndexStats:
        """Diagnostic view: index size and window bound."""
        index = self._index
        return IndexStats(size=index.size, max_token_len=index.max_token_len)

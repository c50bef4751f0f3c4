"""
Terminology resolution for touring-crew jargon.

Normalizes free text, materializes the alias table from the curated corpus,
and resolves text to term identifiers with longest-match lookup.
"""

from .corpus import (
    CorpusError,
    HexIdAllocator,
    TermIdRangeExhaustedError,
    assign_term_ids,
    load_corpus,
    save_corpus,
)
from .lookup import TermLookup
from .materializer import (
    AliasCollision,
    AliasCollisionError,
    CollisionPolicy,
    MaterializeReport,
    materialize_aliases,
    materialize_into,
)
from .models import (
    AliasRecord,
    GoldExample,
    IndexStats,
    LoadResult,
    MatchResult,
    SentenceMatch,
    Term,
    TermAnswer,
)
from .normalizer import normalize, token_len
from .resolver import AliasIndex, TermResolver, build_index, lookup_exact, lookup_in_sentence
from .store import AliasStore, AliasStoreError, AliasTable

__all__ = [
    "AliasCollision",
    "AliasCollisionError",
    "AliasIndex",
    "AliasRecord",
    "AliasStore",
    "AliasStoreError",
    "AliasTable",
    "CollisionPolicy",
    "CorpusError",
    "GoldExample",
    "HexIdAllocator",
    "IndexStats",
    "LoadResult",
    "MatchResult",
    "MaterializeReport",
    "SentenceMatch",
    "Term",
    "TermAnswer",
    "TermIdRangeExhaustedError",
    "TermLookup",
    "TermResolver",
    "assign_term_ids",
    "build_index",
    "load_corpus",
    "lookup_exact",
    "lookup_in_sentence",
    "materialize_aliases",
    "materialize_into",
    "normalize",
    "save_corpus",
    "token_len",
]

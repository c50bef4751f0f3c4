"""
Data models for terminology resolution.
"""

from pydantic import BaseModel, Field


class Term(BaseModel):
    """A curated crew term with its alternate phrasings.

    Attributes:
        term_id: Stable opaque identifier (six upper-case hex digits when
                 generated, e.g. "604007"). Empty until assigned by seeding.
        term: Canonical display name (e.g., "FOH")
        category: Term category - e.g. technical, logistics, production,
                  hospitality, financial
        definition: Free-text definition attached to answers
        aliases: Raw alternate phrasings (e.g., ["front of house"])
    """
    term_id: str = Field(default="", description="Stable term identifier")
    term: str = Field(..., description="Canonical display name")
    category: str = Field(default="general", description="Term category")
    definition: str = Field(default="", description="Canonical definition")
    aliases: list[str] = Field(default_factory=list, description="Alternate phrasings")


class AliasRecord(BaseModel):
    """One persisted row of the alias table.

    ``alias_normalized`` is unique across the whole table.
    """
    term_id: str = Field(..., description="Owning term identifier")
    alias_raw: str = Field(..., description="Alias exactly as curated")
    alias_normalized: str = Field(..., min_length=1, description="Normalized matching key")
    token_len: int = Field(..., ge=1, description="Word count of alias_normalized")
    is_canonical: bool = Field(default=False, description="True for the term's display name")


class MatchResult(BaseModel):
    """Result of an exact alias lookup."""
    term_id: str
    token_len: int


class SentenceMatch(MatchResult):
    """Result of a sentence scan: the matched n-gram and its token offset."""
    alias: str
    start: int


class LoadResult(BaseModel):
    """Summary returned by ``TermResolver.load()``."""
    count: int
    max_token_len: int


class IndexStats(BaseModel):
    """Diagnostic view of the published index."""
    size: int
    max_token_len: int


class GoldExample(BaseModel):
    """A labeled evaluation example. ``expect_term_id`` is None for negatives."""
    input: str
    expect_term_id: str | None = None


class TermAnswer(BaseModel):
    """A resolved term with its definition attached, as handed to the chat layer."""
    input: str
    normalized: str
    term_id: str
    alias: str
    match_type: str = Field(..., description="'exact' or 'sentence'")
    term: str | None = None
    category: str | None = None
    definition: str | None = None

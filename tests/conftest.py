"""
Pytest configuration and fixtures for tour-lexicon tests.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add src directory to Python path to allow importing tour_lexicon
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from tour_lexicon.terminology import AliasStore, Term  # noqa: E402


SAMPLE_TERMS = {
    "terms": [
        {
            "term_id": "604000",
            "term": "soundcheck",
            "category": "technical",
            "definition": "Pre-show audio equipment test and setup",
            "aliases": ["sound test", "audio check"],
        },
        {
            "term_id": "604001",
            "term": "load in",
            "category": "logistics",
            "definition": "Process of bringing equipment into the venue",
            "aliases": ["load-in", "loadin"],
        },
        {
            "term_id": "604007",
            "term": "FOH",
            "category": "technical",
            "definition": "Front of House - main sound mixing position",
            "aliases": ["front of house"],
        },
        {
            "term_id": "60400D",
            "term": "onstage time",
            "category": "production",
            "definition": "Scheduled time for performance to begin",
            "aliases": ["stage time", "show time"],
        },
        {
            "term_id": "604012",
            "term": "meet and greet",
            "category": "hospitality",
            "definition": "Scheduled fan interaction event",
            "aliases": ["VIP meet", "M&G"],
        },
    ]
}


@pytest.fixture
def sample_terms() -> list[Term]:
    """Sample corpus as Term objects."""
    return [Term(**entry) for entry in SAMPLE_TERMS["terms"]]


@pytest.fixture
def corpus_file(tmp_path: Path) -> Path:
    """Sample corpus written to a YAML file."""
    path = tmp_path / "terms.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(SAMPLE_TERMS, f, allow_unicode=True, sort_keys=False)
    return path


@pytest.fixture
def alias_store(tmp_path: Path) -> AliasStore:
    """Empty alias store backed by a temporary file."""
    return AliasStore(tmp_path / "data" / "aliases.json")

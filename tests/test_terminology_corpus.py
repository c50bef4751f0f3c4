"""
Unit tests for corpus loading and term ID allocation.
"""

from pathlib import Path

import pytest
import yaml

from tour_lexicon.terminology import (
    CorpusError,
    HexIdAllocator,
    Term,
    TermIdRangeExhaustedError,
    assign_term_ids,
    load_corpus,
    save_corpus,
)
from tour_lexicon.terminology.corpus import DEFAULT_CORPUS_PATH


class TestHexIdAllocator:
    """Test hex identifier allocation."""

    def test_starts_at_range_start(self) -> None:
        allocator = HexIdAllocator()
        assert allocator.allocate() == "604000"
        assert allocator.allocate() == "604001"

    def test_continues_after_highest_existing(self) -> None:
        allocator = HexIdAllocator(existing=["604000", "604009", "604003"])
        assert allocator.allocate() == "60400A"

    def test_ignores_out_of_range_and_garbage(self) -> None:
        allocator = HexIdAllocator(existing=["700000", "custom", "", "5FFFFF"])
        assert allocator.allocate() == "604000"

    def test_ignores_non_canonical_spellings(self) -> None:
        allocator = HexIdAllocator(existing=["0x604001", "604_001", " 604005", "60400a", "6040001"])
        assert allocator.allocate() == "604000"

    def test_upper_case_six_digits(self) -> None:
        allocator = HexIdAllocator(start=0xA, end=0x20)
        assert allocator.allocate() == "00000A"

    def test_exhausted(self) -> None:
        allocator = HexIdAllocator(existing=["604001"], start=0x604000, end=0x604002)
        assert allocator.allocate() == "604002"
        with pytest.raises(TermIdRangeExhaustedError):
            allocator.allocate()

    def test_invalid_range(self) -> None:
        with pytest.raises(ValueError):
            HexIdAllocator(start=10, end=5)


class TestLoadCorpus:
    """Test YAML corpus loading."""

    def test_load(self, corpus_file: Path) -> None:
        terms = load_corpus(corpus_file)
        assert len(terms) == 5
        assert terms[2].term == "FOH"
        assert terms[2].term_id == "604007"
        assert terms[2].aliases == ["front of house"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_corpus(tmp_path / "nope.yaml")

    def test_missing_terms_key(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"invalid": "data"}), encoding="utf-8")
        with pytest.raises(CorpusError, match="must contain a 'terms' key"):
            load_corpus(path)

    def test_invalid_entry(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"terms": [{"category": "technical"}]}), encoding="utf-8")
        with pytest.raises(CorpusError, match="Invalid term entry #0"):
            load_corpus(path)

    def test_duplicate_term_id(self, tmp_path: Path) -> None:
        path = tmp_path / "dup.yaml"
        path.write_text(
            yaml.dump({"terms": [
                {"term_id": "604000", "term": "rider"},
                {"term_id": "604000", "term": "wedge"},
            ]}),
            encoding="utf-8",
        )
        with pytest.raises(CorpusError, match="Duplicate term_id '604000'"):
            load_corpus(path)

    def test_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "min.yaml"
        path.write_text(yaml.dump({"terms": [{"term": "rider"}]}), encoding="utf-8")
        term = load_corpus(path)[0]
        assert term.term_id == ""
        assert term.aliases == []
        assert term.category == "general"

    def test_bundled_corpus(self) -> None:
        terms = load_corpus(DEFAULT_CORPUS_PATH)
        assert len(terms) == 19
        assert all(t.term_id for t in terms)
        foh = next(t for t in terms if t.term == "FOH")
        assert foh.term_id == "604007"
        assert "front of house" in foh.aliases


class TestAssignTermIds:
    """Test seeding identifiers into a corpus."""

    def test_fills_missing_in_order(self) -> None:
        terms = [
            Term(term_id="604004", term="lobby call"),
            Term(term="rider"),
            Term(term="wedge"),
        ]
        assigned = assign_term_ids(terms)
        assert [t.term for t in assigned] == ["rider", "wedge"]
        assert [t.term_id for t in terms] == ["604004", "604005", "604006"]

    def test_nothing_to_assign(self, sample_terms: list[Term]) -> None:
        assert assign_term_ids(sample_terms) == []

    def test_save_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "seed.yaml"
        terms = [Term(term="rider", category="hospitality", aliases=["tech rider"])]
        assign_term_ids(terms)
        save_corpus(path, terms)

        reloaded = load_corpus(path)
        assert reloaded[0].term_id == "604000"
        assert reloaded[0].aliases == ["tech rider"]
        assert not path.with_suffix(".tmp").exists()

    def test_save_failure_removes_temp_file(self, tmp_path: Path) -> None:
        target = tmp_path / "terms.yaml"
        target.mkdir()

        with pytest.raises(OSError):
            save_corpus(target, [Term(term_id="604000", term="rider")])

        assert not target.with_suffix(".tmp").exists()
        assert target.is_dir()

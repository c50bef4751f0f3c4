"""
Scores the exact-match pipeline against a gold corpus.
"""

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..terminology.models import GoldExample
from ..terminology.normalizer import normalize
from ..terminology.resolver import AliasIndex, lookup_exact

logger = logging.getLogger("tour-lexicon")

COVERAGE_HEADER = ("input", "normalized", "expected", "got", "status")


@dataclass
class CoverageRow:
    input: str
    normalized: str
    expected: str | None
    got: str | None
    status: str


@dataclass
class Mismatch:
    input: str
    normalized: str
    expect_term_id: str | None
    got: str | None


@dataclass
class EvaluationReport:
    """Aggregate scores plus the per-example coverage table.

    Attributes:
        total: Examples scored.
        positives: Examples expecting a term.
        positives_passed: Positives resolved to the expected term.
        negatives: Examples expecting no match.
        negatives_rejected: Negatives that resolved to nothing.
        predicted: Examples that resolved to some term.
        predicted_correct: Resolved examples whose term was the expected one.
        rows: Coverage row for every example, in input order.
        failures: Mismatches only.
    """
    total: int = 0
    positives: int = 0
    positives_passed: int = 0
    negatives: int = 0
    negatives_rejected: int = 0
    predicted: int = 0
    predicted_correct: int = 0
    rows: list[CoverageRow] = field(default_factory=list)
    failures: list[Mismatch] = field(default_factory=list)

    @property
    def precision(self) -> float:
        return self.predicted_correct / self.predicted if self.predicted else 1.0

    @property
    def recall(self) -> float:
        return self.positives_passed / self.positives if self.positives else 1.0

    @property
    def negative_accuracy(self) -> float:
        return self.negatives_rejected / self.negatives if self.negatives else 1.0

    @property
    def passed(self) -> bool:
        return not self.failures


def evaluate(examples: Iterable[GoldExample], index: AliasIndex) -> EvaluationReport:
    """Normalize each input, look it up exactly, and compare with the label.

    Only the exact lookup is scored; sentence scanning is not involved.
    """
    report = EvaluationReport()

    for example in examples:
        normalized = normalize(example.input)
        hit = lookup_exact(index, normalized)
        got = hit.term_id if hit else None
        expected = example.expect_term_id
        ok = got == expected

        report.total += 1
        if expected is not None:
            report.positives += 1
            if ok:
                report.positives_passed += 1
        else:
            report.negatives += 1
            if got is None:
                report.negatives_rejected += 1

        if got is not None:
            report.predicted += 1
            if ok:
                report.predicted_correct += 1

        report.rows.append(CoverageRow(
            input=example.input,
            normalized=normalized,
            expected=expected,
            got=got,
            status="PASS" if ok else "FAIL",
        ))
        if not ok:
            report.failures.append(Mismatch(
                input=example.input,
                normalized=normalized,
                expect_term_id=expected,
                got=got,
            ))

    logger.debug(f"Scored {report.total} gold examples, {len(report.failures)} failures")
    return report


def write_coverage_csv(path: Path, rows: Iterable[CoverageRow]) -> None:
    """Write the full coverage matrix; missing terms are empty cells."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL)
        writer.writerow(COVERAGE_HEADER)
        for row in rows:
            writer.writerow([row.input, row.normalized, row.expected or "", row.got or "", row.status])


def write_mismatch_report(path: Path, failures: Iterable[Mismatch]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [
        {
            "input": m.input,
            "normalized": m.normalized,
            "expect_term_id": m.expect_term_id,
            "got": m.got,
        }
        for m in failures
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def format_summary(report: EvaluationReport) -> list[str]:
    """Console summary lines, ending with the pass/fail verdict."""
    lines = [
        f"Total: {report.total}",
        f"Positives: {report.positives}  Passed: {report.positives_passed}",
        f"Negatives: {report.negatives}  Correctly Rejected: {report.negatives_rejected}",
        f"Precision: {report.precision:.4f}  Recall: {report.recall:.4f}  "
        f"NegAcc: {report.negative_accuracy:.4f}",
    ]
    if report.passed:
        lines.append("100% on closed set")
    else:
        lines.append(f"Mismatches: {len(report.failures)}")
    return lines

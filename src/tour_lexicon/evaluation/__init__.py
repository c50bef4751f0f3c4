"""
Closed-set evaluation of the terminology resolver.
"""

from .gold import NEGATIVE_EXAMPLES, generate_gold, gold_variants, read_gold, write_gold
from .scoring import (
    CoverageRow,
    EvaluationReport,
    Mismatch,
    evaluate,
    format_summary,
    write_coverage_csv,
    write_mismatch_report,
)

__all__ = [
    "CoverageRow",
    "EvaluationReport",
    "Mismatch",
    "NEGATIVE_EXAMPLES",
    "evaluate",
    "format_summary",
    "generate_gold",
    "gold_variants",
    "read_gold",
    "write_coverage_csv",
    "write_gold",
    "write_mismatch_report",
]

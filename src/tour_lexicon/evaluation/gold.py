"""
Deterministic gold corpus generation from the alias table.
"""

import json
import logging
import re
from pathlib import Path
from typing import Iterable

from ..terminology.models import AliasRecord, GoldExample

logger = logging.getLogger("tour-lexicon")

THREE_LETTERS = re.compile(r"[A-Za-z]{3}")

# Near misses of real terms: plurals, run-together forms, suffixed typos.
NEGATIVE_EXAMPLES: tuple[str, ...] = (
    "random",
    "guestlisting",
    "soundchecks",
    "fohx",
    "front-of-housekeeping",
    "loadins",
    "onstagetimez",
    "setlistsz",
)


def gold_variants(alias_raw: str) -> list[str]:
    """Surface perturbations of one alias, in a fixed order.

    Duplicates are kept (``"foh"`` lowercased is still ``"foh"``), so every
    alias of the same shape yields the same number of examples.

    Example:
        >>> gold_variants("FOH")
        ['FOH', 'foh', 'FOH', 'FOH', 'FOH', 'F.O.H', 'F.O.H.', 'FOH!', 'FOH.', 'FOH']
    """
    variants = [
        alias_raw,
        alias_raw.lower(),
        alias_raw.upper(),
        alias_raw.replace("-", " "),
        alias_raw.replace(" ", "-"),
    ]
    if THREE_LETTERS.fullmatch(alias_raw):
        dotted = ".".join(alias_raw)
        variants.append(dotted)
        variants.append(dotted + ".")
    variants.append(alias_raw + "!")
    variants.append(alias_raw + ".")
    variants.append(alias_raw.replace(" ", "  "))
    return variants


def _gold_order(record: AliasRecord) -> tuple[str, bool, str]:
    return (record.term_id, not record.is_canonical, record.alias_raw)


def generate_gold(
    records: Iterable[AliasRecord],
    negatives: Iterable[str] = NEGATIVE_EXAMPLES,
) -> list[GoldExample]:
    """Build the labeled corpus: perturbed aliases first, then negatives.

    Rows are ordered by term, canonical rows first, then raw alias.
    """
    examples: list[GoldExample] = []
    for record in sorted(records, key=_gold_order):
        for variant in gold_variants(record.alias_raw):
            examples.append(GoldExample(input=variant, expect_term_id=record.term_id))

    for negative in negatives:
        examples.append(GoldExample(input=negative, expect_term_id=None))

    return examples


def write_gold(path: Path, examples: Iterable[GoldExample]) -> int:
    """Write examples as JSON Lines. Returns the number of lines written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for example in examples:
            f.write(json.dumps(example.model_dump(), ensure_ascii=False) + "\n")
            count += 1
    logger.info(f"Wrote {count} gold examples to {path}")
    return count


def read_gold(path: Path) -> list[GoldExample]:
    """Read a JSON Lines gold file, ignoring blank lines.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a line is not a valid example
    """
    examples: list[GoldExample] = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                examples.append(GoldExample(**json.loads(line)))
            except (json.JSONDecodeError, TypeError, ValueError) as e:
                raise ValueError(f"{path}:{line_no}: invalid gold example: {e}") from e
    return examples

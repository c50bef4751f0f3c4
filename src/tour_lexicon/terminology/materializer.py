"""
Expands the term corpus into the flat alias table.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .models import AliasRecord, Term
from .normalizer import normalize, token_len
from .store import AliasStore, AliasTable

logger = logging.getLogger("tour-lexicon")


class CollisionPolicy(str, Enum):
    """What to do when two terms normalize an alias to the same key."""
    FIRST_INSERT_WINS = "first_insert_wins"
    REJECT = "reject"


class AliasCollisionError(ValueError):
    """Raised under CollisionPolicy.REJECT when two terms claim one alias."""


@dataclass
class AliasCollision:
    """A row dropped because another term already owns its key.

    Attributes:
        alias_normalized: The contested key.
        alias_raw: Raw alias of the dropped row.
        term_id: Term of the dropped row.
        owner_term_id: Term that holds the key.
    """
    alias_normalized: str
    alias_raw: str
    term_id: str
    owner_term_id: str


@dataclass
class MaterializeReport:
    """Outcome of one materialization pass.

    Attributes:
        inserted: New rows written.
        skipped_empty: Aliases that normalized to an empty string.
        duplicates: Rows whose key the same term already owns (re-runs land here).
        collisions: Rows dropped because a different term owns the key.
    """
    inserted: int = 0
    skipped_empty: int = 0
    duplicates: int = 0
    collisions: list[AliasCollision] = field(default_factory=list)


def alias_rows(term: Term) -> list[AliasRecord]:
    """Build the candidate rows for one term: canonical name first, then aliases.

    Aliases that normalize to the empty string are left out.
    """
    rows: list[AliasRecord] = []
    candidates = [(term.term, True)] + [(alias, False) for alias in term.aliases]
    for raw, is_canonical in candidates:
        normalized = normalize(raw)
        if not normalized:
            continue
        rows.append(AliasRecord(
            term_id=term.term_id,
            alias_raw=raw,
            alias_normalized=normalized,
            token_len=token_len(normalized),
            is_canonical=is_canonical,
        ))
    return rows


def materialize_into(
    terms: list[Term],
    table: AliasTable,
    policy: CollisionPolicy = CollisionPolicy.FIRST_INSERT_WINS,
) -> MaterializeReport:
    """Insert every term's alias rows into ``table``, lowest term_id first.

    Rows whose key is already taken are dropped: silently when the same term
    owns it, recorded as a collision when another term does. Under
    ``CollisionPolicy.REJECT`` a collision raises instead.

    Args:
        terms: Corpus terms; each must carry a ``term_id``
        table: Table to extend in place
        policy: Collision policy

    Returns:
        MaterializeReport with counts for this pass

    Raises:
        ValueError: If a term has no identifier
        AliasCollisionError: On a cross-term collision under REJECT
    """
    report = MaterializeReport()

    for term in sorted(terms, key=lambda t: t.term_id):
        if not term.term_id:
            raise ValueError(f"Term '{term.term}' has no term_id; run seeding first")

        candidates = [term.term] + list(term.aliases)
        rows = alias_rows(term)
        report.skipped_empty += len(candidates) - len(rows)

        for row in rows:
            existing = table.insert(row)
            if existing is None:
                report.inserted += 1
                continue

            if existing.term_id == row.term_id:
                report.duplicates += 1
                continue

            collision = AliasCollision(
                alias_normalized=row.alias_normalized,
                alias_raw=row.alias_raw,
                term_id=row.term_id,
                owner_term_id=existing.term_id,
            )
            if policy is CollisionPolicy.REJECT:
                raise AliasCollisionError(
                    f"Alias '{row.alias_raw}' of term {row.term_id} normalizes to "
                    f"'{row.alias_normalized}', already owned by term {existing.term_id}"
                )
            report.collisions.append(collision)
            logger.debug(
                f"Alias collision: '{row.alias_normalized}' kept for {existing.term_id}, "
                f"dropped for {row.term_id}"
            )

    return report


def materialize_aliases(
    terms: list[Term],
    store: AliasStore,
    policy: CollisionPolicy = CollisionPolicy.FIRST_INSERT_WINS,
) -> MaterializeReport:
    """Materialize the corpus into the persisted alias table.

    Existing rows are kept, so re-running against an unchanged corpus adds
    nothing. The table is written once, after the whole pass succeeded.
    Two passes must not run concurrently against the same store.
    """
    table = store.read_table()
    report = materialize_into(terms, table, policy)
    if report.inserted:
        store.write_table(table)

    logger.info(
        f"Alias materialization complete. Inserted: {report.inserted}, "
        f"Duplicates: {report.duplicates}, Collisions: {len(report.collisions)}, "
        f"Empty: {report.skipped_empty}"
    )
    return report

"""
Command-line entry point for the terminology tools.

Usage:
    tour-lexicon seed --corpus terms.yaml
    tour-lexicon materialize
    tour-lexicon gold
    tour-lexicon evaluate
    tour-lexicon resolve "what's the FOH position?"
    tour-lexicon stats
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from .config import LexiconSettings, load_settings
from .evaluation import (
    evaluate,
    format_summary,
    generate_gold,
    read_gold,
    write_coverage_csv,
    write_gold,
    write_mismatch_report,
)
from .terminology import (
    AliasCollisionError,
    AliasStore,
    AliasStoreError,
    CollisionPolicy,
    CorpusError,
    TermIdRangeExhaustedError,
    TermLookup,
    TermResolver,
    assign_term_ids,
    load_corpus,
    materialize_aliases,
    normalize,
    save_corpus,
)

logger = logging.getLogger("tour-lexicon")

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def cmd_seed(settings: LexiconSettings, args: argparse.Namespace) -> int:
    terms = load_corpus(settings.corpus_path)
    assigned = assign_term_ids(terms)
    if assigned:
        save_corpus(settings.corpus_path, terms)
    print(f"Assigned {len(assigned)} term IDs ({len(terms)} terms in corpus)")
    return EXIT_OK


def cmd_materialize(settings: LexiconSettings, args: argparse.Namespace) -> int:
    terms = load_corpus(settings.corpus_path)
    policy = CollisionPolicy.REJECT if args.reject_collisions else CollisionPolicy.FIRST_INSERT_WINS
    report = materialize_aliases(terms, AliasStore(settings.alias_store_path), policy)
    print(
        f"Alias materialization complete. Inserted: {report.inserted}, "
        f"Skipped: {report.duplicates + len(report.collisions)}"
    )
    return EXIT_OK


def cmd_gold(settings: LexiconSettings, args: argparse.Namespace) -> int:
    records = AliasStore(settings.alias_store_path).read_records()
    output = Path(args.output) if args.output else settings.gold_path
    count = write_gold(output, generate_gold(records))
    print(f"Wrote {count} gold examples to {output}")
    return EXIT_OK


def cmd_evaluate(settings: LexiconSettings, args: argparse.Namespace) -> int:
    resolver = TermResolver(AliasStore(settings.alias_store_path))
    resolver.load()

    gold_path = Path(args.gold) if args.gold else settings.gold_path
    report = evaluate(read_gold(gold_path), resolver.index)

    report_dir = Path(args.report_dir) if args.report_dir else settings.report_dir
    write_coverage_csv(report_dir / "coverage_matrix.csv", report.rows)
    write_mismatch_report(report_dir / "mismatch_report.json", report.failures)

    for line in format_summary(report):
        print(line)
    if not report.passed:
        print(f"See {report_dir / 'mismatch_report.json'}")
    return EXIT_OK if report.passed else EXIT_MISMATCH


def cmd_resolve(settings: LexiconSettings, args: argparse.Namespace) -> int:
    text = " ".join(args.text)
    resolver = TermResolver(AliasStore(settings.alias_store_path))
    resolver.load()
    lookup = TermLookup(resolver, load_corpus(settings.corpus_path))

    answer = lookup.resolve(text)
    if answer is None:
        payload = {"input": text, "normalized": normalize(text), "match": None, "answer": None}
    else:
        payload = {
            "input": text,
            "normalized": answer.normalized,
            "match": {
                "term_id": answer.term_id,
                "alias": answer.alias,
                "match_type": answer.match_type,
                "term": answer.term,
                "category": answer.category,
            },
            "answer": answer.definition,
        }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return EXIT_OK


def cmd_stats(settings: LexiconSettings, args: argparse.Namespace) -> int:
    resolver = TermResolver(AliasStore(settings.alias_store_path))
    resolver.load()
    print(json.dumps(resolver.stats().model_dump()))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tour-lexicon",
        description="Touring-crew terminology resolution tools",
    )
    parser.add_argument("--data-dir", help="Directory for the alias table, gold file and reports")
    parser.add_argument("--corpus", help="YAML term corpus")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")

    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Assign missing term IDs and save the corpus")
    seed.set_defaults(handler=cmd_seed)

    materialize = sub.add_parser("materialize", help="Build the alias table from the corpus")
    materialize.add_argument(
        "--reject-collisions",
        action="store_true",
        help="Fail instead of keeping the first term when two terms share an alias",
    )
    materialize.set_defaults(handler=cmd_materialize)

    gold = sub.add_parser("gold", help="Generate the gold corpus from the alias table")
    gold.add_argument("--output", help="Gold JSONL path")
    gold.set_defaults(handler=cmd_gold)

    evaluate_cmd = sub.add_parser("evaluate", help="Score exact lookup against the gold corpus")
    evaluate_cmd.add_argument("--gold", help="Gold JSONL path")
    evaluate_cmd.add_argument("--report-dir", help="Where to write coverage and mismatch reports")
    evaluate_cmd.set_defaults(handler=cmd_evaluate)

    resolve = sub.add_parser("resolve", help="Resolve text to a term and print its definition")
    resolve.add_argument("text", nargs="+", help="Text to resolve")
    resolve.set_defaults(handler=cmd_resolve)

    stats = sub.add_parser("stats", help="Show alias index size and max token length")
    stats.set_defaults(handler=cmd_stats)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        overrides: dict[str, str] = {}
        if args.data_dir:
            overrides["data_dir"] = args.data_dir
        if args.corpus:
            overrides["corpus_path"] = args.corpus
        if args.log_level:
            overrides["log_level"] = args.log_level
        if overrides:
            settings = LexiconSettings(**{**settings.model_dump(), **overrides})

        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        return args.handler(settings, args)
    except (
        AliasCollisionError,
        AliasStoreError,
        CorpusError,
        TermIdRangeExhaustedError,
        OSError,
        yaml.YAMLError,
        ValueError,
    ) as e:
        logger.error(f"{args.command} failed: {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())

"""
Fold report for one input deck.

Reads a deck, builds its folds and prints them as a table, CSV or JSON.
Optionally prints the number of lines per card keyword.

Example
-------
    python -m card_fold_analyzer.scripts.fold_report model.pc --one-based --summary
"""

from __future__ import annotations

import codecs
import logging
import sys
from typing import Optional, Sequence

import pandas as pd

from card_fold_analyzer.analysis.classify import keyword_summary
from card_fold_analyzer.ingest.readers_pc import PcDeckReader, PcReaderConfig
from card_fold_analyzer.logging_config import setup_logging
from card_fold_analyzer.models.keywords import GROUPS
from card_fold_analyzer.models.profile import ScanProfile

logger = logging.getLogger(__name__)


def _render(df: pd.DataFrame, fmt: str) -> str:
    if fmt == "csv":
        return df.to_csv(index=False)
    if fmt == "json":
        return df.to_json(orient="records", indent=2)
    if df.empty:
        return "(none)"
    return df.to_string(index=False)


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse

    p = argparse.ArgumentParser(
        prog="python -m card_fold_analyzer.scripts.fold_report",
        description="Print the folds (collapsible card ranges) of a Pamcrash input deck.",
    )
    p.add_argument("deck", help="Input deck (*.pc)")
    p.add_argument("--format", choices=("table", "csv", "json"), default="table", help="Output format")
    p.add_argument("--one-based", action="store_true", help="Report 1-based line numbers (as shown by editors)")
    p.add_argument("--summary", action="store_true", help="Also print the number of lines per keyword")
    p.add_argument(
        "--groups",
        default=",".join(GROUPS),
        help="Comma-separated keyword groups to recognize among: node,element,link",
    )
    p.add_argument("--no-absorb", action="store_true", help="Do not merge comment runs into surrounding folds")
    p.add_argument("--encoding", default="latin-1", help="Deck encoding (default: latin-1)")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")

    ns = p.parse_args(list(argv) if argv is not None else None)

    setup_logging(getattr(logging, str(ns.log_level).upper(), logging.WARNING))

    try:
        profile = ScanProfile(
            groups=tuple(g.strip().lower() for g in ns.groups.split(",") if g.strip()),
            absorb_comments=not ns.no_absorb,
        ).validate()
    except ValueError as e:
        p.error(str(e))

    try:
        codecs.lookup(ns.encoding)
    except LookupError:
        p.error(f"unknown encoding: {ns.encoding!r}")

    reader = PcDeckReader(PcReaderConfig(encoding=ns.encoding))
    try:
        deck = reader.read(ns.deck)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 2

    df = deck.folds(profile).to_frame()
    logger.info("%s: %d lines, %d folds", deck.source_path.name, deck.n_lines, len(df))
    if ns.one_based:
        df["start"] += 1
        df["end"] += 1

    print(_render(df, ns.format))
    if ns.summary:
        print(_render(keyword_summary(deck.lines, profile), ns.format))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

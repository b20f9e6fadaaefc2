"""Line classifier.

Maps one line of an input deck to its card keyword:

- a card keyword when the first 8 characters equal one of the known headers
  (exact match, no case folding, no partial match),
- ``Keyword.COMMENT`` when the line starts with a comment marker,
- ``None`` (unrecognized) otherwise, including any non-comment line shorter than 8.

The classifier is total and side-effect-free: absence of a match is a
result, not an error.
"""

from __future__ import annotations

from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from card_fold_analyzer.models.keywords import PREFIX_TABLE, PREFIX_WIDTH, Keyword
from card_fold_analyzer.models.profile import DEFAULT_PROFILE, ScanProfile


@lru_cache(maxsize=32)
def _rules(profile: ScanProfile) -> Tuple[FrozenSet[Keyword], Tuple[str, ...]]:
    profile.validate()
    return profile.enabled(), tuple(profile.comment_markers)


def classify_line(line: str, profile: Optional[ScanProfile] = None) -> Optional[Keyword]:
    """Classify a single line (without line terminator)."""
    enabled, markers = _rules(profile or DEFAULT_PROFILE)
    if len(line) >= PREFIX_WIDTH:
        kw = PREFIX_TABLE.get(line[:PREFIX_WIDTH])
        if kw is not None and kw in enabled:
            return kw
    if line[:1] in markers:
        return Keyword.COMMENT
    return None


def classify_lines(lines: Iterable[str], profile: Optional[ScanProfile] = None) -> List[Optional[Keyword]]:
    """Classify every line of a sequence, in order."""
    profile = profile or DEFAULT_PROFILE
    return [classify_line(s, profile) for s in lines]


def keyword_codes(lines: Iterable[str], profile: Optional[ScanProfile] = None) -> np.ndarray:
    """Integer code per line: ``Keyword.code``, or -1 for unrecognized lines."""
    kws = classify_lines(lines, profile)
    return np.fromiter((-1 if kw is None else kw.code for kw in kws), dtype=np.int16, count=len(kws))


def keyword_summary(lines: Iterable[str], profile: Optional[ScanProfile] = None) -> pd.DataFrame:
    """Line counts per classification.

    Returns
    -------
    pd.DataFrame
        Columns ``keyword`` (name, or ``"UNRECOGNIZED"``), ``group`` and
        ``n_lines``; only classifications that occur are listed, in table
        order with unrecognized last.
    """
    codes = keyword_codes(lines, profile)
    n_members = len(Keyword)
    # shift by one so that unrecognized (-1) lands in bin 0
    counts = np.bincount(codes.astype(np.int64) + 1, minlength=n_members + 1)

    rows = []
    for code in range(n_members):
        n = int(counts[code + 1])
        if n:
            kw = Keyword.from_code(code)
            rows.append({"keyword": kw.name, "group": kw.group, "n_lines": n})
    if counts[0]:
        rows.append({"keyword": "UNRECOGNIZED", "group": "", "n_lines": int(counts[0])})

    return pd.DataFrame(rows, columns=["keyword", "group", "n_lines"])

"""Fold construction and storage.

A fold is a maximal run of lines sharing one card keyword.  Comment lines
inside a run are absorbed when the same keyword reappears after them before
any other classification; otherwise trailing comments belong to no fold.
Unrecognized lines always close the active run.

The builder is a two-state machine driven one classified line at a time::

    Seeking --card K--> Extending(K, i, i)
    Extending(K, s, m) --K at i--------> Extending(K, s, i)
                       --comment-------> Extending(K, s, m)
                       --card J != K---> Extending(J, i, i)   emits (s, m, K)
                       --unrecognized--> Seeking              emits (s, m, K)
                       --end of input--> (done)               emits (s, m, K)

Emitted ranges with ``s == m`` are single lines; :class:`FoldList` drops them.

Example
-------
>>> fl = FoldList()
>>> fl.recreate_all(["NODE  /  1", "#c", "NODE  /  2", "", "SHELL / 1"])
>>> fl.into_list()
[(0, 2, <Keyword.NODE: ('NODE  / ', 'node')>)]
"""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from card_fold_analyzer.analysis.classify import classify_line
from card_fold_analyzer.models.fold import Fold
from card_fold_analyzer.models.keywords import Keyword
from card_fold_analyzer.models.profile import DEFAULT_PROFILE, ScanProfile

logger = logging.getLogger(__name__)


class DuplicateFoldError(ValueError):
    """A fold with the same (start, end) is already in the FoldList."""


class FoldNotFoundError(KeyError):
    """The (start, end) fold to remove is not in the FoldList."""


# ---------------------------------------------------------------------------
# Builder state machine
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Seeking:
    """Looking for the first card line of the next fold."""


@dataclass(frozen=True)
class Extending:
    """Inside a run of ``keyword`` that started at ``fold_start``.

    ``last_match`` is the last line classified ``keyword``; comment lines
    after it are pending and only become part of the fold if the keyword
    reappears.
    """

    keyword: Keyword
    fold_start: int
    last_match: int

    def close(self) -> Fold:
        return Fold(self.fold_start, self.last_match, self.keyword)


State = Union[Seeking, Extending]

SEEKING = Seeking()


def step(
    state: State,
    index: int,
    kw: Optional[Keyword],
    *,
    absorb_comments: bool = True,
) -> Tuple[State, Optional[Fold]]:
    """Consume the classification of line ``index``.

    Returns the next state and the fold closed by this line, if any (the
    closed fold may span a single line).
    """
    if isinstance(state, Seeking):
        if kw is None or kw is Keyword.COMMENT:
            return state, None
        return Extending(kw, index, index), None

    if kw is state.keyword:
        return Extending(kw, state.fold_start, index), None
    if kw is Keyword.COMMENT and absorb_comments:
        return state, None

    closed = state.close()
    if kw is None or kw is Keyword.COMMENT:
        return SEEKING, closed
    # a different card opens the next run on this very line
    return Extending(kw, index, index), closed


def finish(state: State) -> Optional[Fold]:
    """End of input: close the active run, if any."""
    if isinstance(state, Extending):
        return state.close()
    return None


def scan_folds(lines: Iterable[str], profile: Optional[ScanProfile] = None) -> Iterator[Fold]:
    """Yield candidate folds of ``lines`` in order, single-line runs included."""
    profile = profile or DEFAULT_PROFILE
    state: State = SEEKING
    for i, line in enumerate(lines):
        state, closed = step(state, i, classify_line(line, profile), absorb_comments=profile.absorb_comments)
        if closed is not None:
            yield closed
    last = finish(state)
    if last is not None:
        yield last


# ---------------------------------------------------------------------------
# FoldList
# ---------------------------------------------------------------------------


class FoldList:
    """
    Fold data of one buffer.

    Folds are stored under their ``(start, end)`` key, with an inverse index
    keyed by ``(end, start)`` and a sorted key list for ordered traversal and
    line lookups.  Stored folds are pairwise disjoint, and every mutation
    updates all three structures or none of them.
    """

    def __init__(self, profile: Optional[ScanProfile] = None) -> None:
        self.profile = profile or DEFAULT_PROFILE
        self._folds: Dict[Tuple[int, int], Keyword] = {}
        self._folds_inv: Dict[Tuple[int, int], Keyword] = {}
        self._order: List[Tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self._folds)

    def __iter__(self) -> Iterator[Fold]:
        for start, end in self._order:
            yield Fold(start, end, self._folds[(start, end)])

    def __contains__(self, key: object) -> bool:
        return key in self._folds

    def __repr__(self) -> str:
        return f"FoldList({len(self)} folds)"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._folds.clear()
        self._folds_inv.clear()
        self._order.clear()

    def insert(self, start: int, end: int, kw: Keyword) -> None:
        """Insert fold (start, end).

        Raises DuplicateFoldError if that fold is already present; it has to
        be removed first.  Raises ValueError for ranges shorter than 2 lines,
        for a ``kw`` that is not a Keyword, and for a range overlapping a
        stored fold.
        """
        start, end = int(start), int(end)
        if start < 0 or end <= start:
            raise ValueError(f"Invalid fold range ({start}, {end})")
        if not isinstance(kw, Keyword):
            raise ValueError(f"Fold type must be a Keyword, got {kw!r}")
        if (start, end) in self._folds or (end, start) in self._folds_inv:
            raise DuplicateFoldError(f"Fold ({start}, {end}) already in foldlist")
        i = bisect_left(self._order, (start, end))
        # stored folds are disjoint, so only the two neighbours can overlap
        if i > 0 and self._order[i - 1][1] >= start:
            raise ValueError(f"Fold ({start}, {end}) overlaps fold {self._order[i - 1]}")
        if i < len(self._order) and self._order[i][0] <= end:
            raise ValueError(f"Fold ({start}, {end}) overlaps fold {self._order[i]}")
        self._folds[(start, end)] = kw
        self._folds_inv[(end, start)] = kw
        self._order.insert(i, (start, end))

    def checked_insert(self, start: int, end: int, kw: Keyword) -> None:
        """Insert fold (start, end), silently skipping ranges shorter than 2 lines."""
        if start >= end:
            return
        self.insert(start, end, kw)

    def remove(self, start: int, end: int) -> None:
        """Remove fold (start, end); FoldNotFoundError if either index lacks it."""
        start, end = int(start), int(end)
        if (start, end) not in self._folds:
            raise FoldNotFoundError(f"Could not remove fold ({start}, {end}) from foldlist")
        if (end, start) not in self._folds_inv:
            raise FoldNotFoundError(f"Could not remove fold ({start}, {end}) from inverse foldlist")
        i = self._index_of(start, end)
        del self._folds[(start, end)]
        del self._folds_inv[(end, start)]
        self._order.pop(i)

    def add_keyword_data(self, lines: Iterable[str]) -> None:
        """Run the fold builder over ``lines`` and insert its folds (no clearing)."""
        n_candidates = 0
        for fold in scan_folds(lines, self.profile):
            n_candidates += 1
            self.checked_insert(fold.start, fold.end, fold.keyword)
        logger.debug("fold builder: %d candidate runs, %d folds", n_candidates, len(self))

    def recreate_all(self, lines: Iterable[str]) -> None:
        """Clear the FoldList and rebuild it from the full line sequence."""
        self.clear()
        self.add_keyword_data(lines)

    rebuild_from_lines = recreate_all

    # ------------------------------------------------------------------
    # Queries / export
    # ------------------------------------------------------------------

    def _index_of(self, start: int, end: int) -> int:
        i = bisect_right(self._order, (start, end)) - 1
        if i < 0 or self._order[i] != (start, end):
            raise FoldNotFoundError(f"Fold ({start}, {end}) not in ordering")
        return i

    def get(self, start: int, end: int) -> Optional[Keyword]:
        return self._folds.get((int(start), int(end)))

    def keys(self) -> List[Tuple[int, int]]:
        """(start, end) keys, sorted."""
        return list(self._order)

    def inverse_keys(self) -> List[Tuple[int, int]]:
        """(end, start) keys, sorted."""
        return sorted(self._folds_inv)

    def fold_at(self, line: int) -> Optional[Fold]:
        """The fold containing ``line``, or None."""
        i = bisect_right(self._order, (int(line), float("inf"))) - 1
        if i < 0:
            return None
        start, end = self._order[i]
        if end < line:
            return None
        return Fold(start, end, self._folds[(start, end)])

    def into_list(self) -> List[Tuple[int, int, Keyword]]:
        """Folds as (start, end, keyword) tuples sorted by (start, end).

        The FoldList itself is left untouched.
        """
        return [(s, e, self._folds[(s, e)]) for s, e in self._order]

    export = into_list

    def host_ranges(self) -> List[Tuple[int, int]]:
        """1-based inclusive (first, last) pairs, in order."""
        return [fold.host_range() for fold in self]

    def to_frame(self) -> pd.DataFrame:
        """Folds as a DataFrame with columns start, end, keyword, n_lines."""
        if not self._order:
            return pd.DataFrame(
                {
                    "start": np.empty(0, dtype=np.int64),
                    "end": np.empty(0, dtype=np.int64),
                    "keyword": pd.Series([], dtype=object),
                    "n_lines": np.empty(0, dtype=np.int64),
                }
            )
        keys = np.asarray(self._order, dtype=np.int64)
        return pd.DataFrame(
            {
                "start": keys[:, 0],
                "end": keys[:, 1],
                "keyword": [self._folds[k].name for k in self._order],
                "n_lines": keys[:, 1] - keys[:, 0] + 1,
            }
        )

"""Tests for the fold builder (state machine + FoldList.recreate_all)."""

from __future__ import annotations

import itertools

from card_fold_analyzer.analysis.folds import (
    SEEKING,
    Extending,
    FoldList,
    finish,
    scan_folds,
    step,
)
from card_fold_analyzer.models.fold import Fold
from card_fold_analyzer.models.keywords import Keyword
from card_fold_analyzer.models.profile import ScanProfile

Node = Keyword.NODE
Shell = Keyword.SHELL

N = "NODE  /        1              0.             0.5              0."
S = "SHELL /     3129       1       1    2967    2971    2970"

LINES = [
    N,  # 0
    N,  # 1
    N,  # 2
    N,  # 3
    "#Comment here",  # 4
    S,  # 5
    "invalid line here",  # 6
    S,  # 7
    S,  # 8
    "#Comment",  # 9
    "#Comment",  # 10
    S,  # 11
    S,  # 12
    "$Comment",  # 13
    S,  # 14
    S,  # 15
    "$Comment",  # 16
    "#Comment",  # 17
    N,  # 18
    N,  # 19
]

LINES_24 = [
    N,  # 0
    N,  # 1
    N,  # 2
    N,  # 3
    "#Comment",  # 4
    S,  # 5
    N,  # 6
    N,  # 7
    "#Comment",  # 8
    "$Comment",  # 9
    S,  # 10
    S,  # 11
    "#Comment",  # 12
    S,  # 13
    S,  # 14
    "#Comment",  # 15
    "$Comment",  # 16
    N,  # 17
    "#Comment",  # 18
    N,  # 19
    S,  # 20
    "$Comment",  # 21
    S,  # 22
    S,  # 23
]


def _folds(lines, profile=None):
    fl = FoldList(profile)
    fl.recreate_all(lines)
    return fl.into_list()


# -----------------------------------------------------------------------
# reference scenarios
# -----------------------------------------------------------------------


def test_reference_deck() -> None:
    assert _folds(LINES) == [(0, 3, Node), (7, 15, Shell), (18, 19, Node)]


def test_reference_deck_slices() -> None:
    assert _folds(LINES[4:]) == [(3, 11, Shell), (14, 15, Node)]
    assert _folds(LINES[6:]) == [(1, 9, Shell), (12, 13, Node)]
    assert _folds(LINES[13:19]) == [(1, 2, Shell)]


def test_two_runs_each_kind() -> None:
    assert _folds(LINES_24) == [
        (0, 3, Node),
        (6, 7, Node),
        (10, 14, Shell),
        (17, 19, Node),
        (20, 23, Shell),
    ]


# -----------------------------------------------------------------------
# rules
# -----------------------------------------------------------------------


def test_empty_and_comment_only_input() -> None:
    assert _folds([]) == []
    assert _folds(["#a", "$b", "#c"]) == []
    assert _folds(["junk", "", "more junk"]) == []


def test_single_line_runs_are_dropped() -> None:
    assert _folds([N]) == []
    assert _folds([N, S, N, S]) == []
    assert _folds([N, "#c", S, "#c"]) == []


def test_comment_absorbed_only_between_same_keyword() -> None:
    assert _folds([N, "#c", "#c", N]) == [(0, 3, Node)]
    assert _folds([N, N, "#c", S, S]) == [(0, 1, Node), (3, 4, Shell)]


def test_leading_and_trailing_comments_are_dropped() -> None:
    assert _folds(["#c", "$c", N, N, "#c", "$c"]) == [(2, 3, Node)]


def test_unrecognized_is_a_hard_break() -> None:
    assert _folds([N, N, "junk", N, N]) == [(0, 1, Node), (3, 4, Node)]
    assert _folds([N, "#c", "junk", "#c", N]) == []
    # an empty line is unrecognized too
    assert _folds([S, S, "", S, S]) == [(0, 1, Shell), (3, 4, Shell)]


def test_end_of_input_closes_at_last_match() -> None:
    assert _folds([N, N, "#c", "#c"]) == [(0, 1, Node)]
    assert _folds([S, "#c", S]) == [(0, 2, Shell)]


def test_no_absorb_profile() -> None:
    prof = ScanProfile(absorb_comments=False)
    assert _folds([N, N, "#c", N, N], prof) == [(0, 1, Node), (3, 4, Node)]
    assert _folds(LINES, prof) == [(0, 3, Node), (7, 8, Shell), (11, 12, Shell), (14, 15, Shell), (18, 19, Node)]


def test_disabled_group_breaks_like_unrecognized() -> None:
    prof = ScanProfile(groups=("node",))
    assert _folds(LINES, prof) == [(0, 3, Node), (18, 19, Node)]


# -----------------------------------------------------------------------
# properties
# -----------------------------------------------------------------------


def test_rebuild_is_idempotent() -> None:
    fl = FoldList()
    fl.recreate_all(LINES_24)
    first = fl.into_list()
    fl.recreate_all(LINES_24)
    assert fl.into_list() == first
    assert fl.into_list() == first  # export leaves the list intact


def test_rebuild_replaces_previous_content() -> None:
    fl = FoldList()
    fl.recreate_all(LINES)
    fl.recreate_all(LINES[13:19])
    assert fl.into_list() == [(1, 2, Shell)]


def test_exhaustive_small_decks() -> None:
    """Non-overlap, minimum span and fold content on every 5-line deck of N/S/comment/junk."""
    for combo in itertools.product([N, S, "#c", "x"], repeat=5):
        lines = list(combo)
        prev_end = -1
        for start, end, kw in _folds(lines):
            assert end > start
            assert start > prev_end  # ordered, non-overlapping
            prev_end = end
            assert kw.is_card
            # both ends are cards of the fold keyword; inside only that keyword or comments
            assert lines[start] == lines[end]
            assert set(lines[start:end + 1]) <= {lines[start], "#c"}
            # maximal: the fold cannot be extended to an adjacent card of the same type
            assert start == 0 or lines[start - 1] != lines[start]
            assert end == len(lines) - 1 or lines[end + 1] != lines[end]


# -----------------------------------------------------------------------
# state machine
# -----------------------------------------------------------------------


def test_step_transitions() -> None:
    state, closed = step(SEEKING, 0, Keyword.COMMENT)
    assert state is SEEKING and closed is None
    state, closed = step(state, 1, None)
    assert state is SEEKING and closed is None

    state, closed = step(state, 2, Node)
    assert state == Extending(Node, 2, 2) and closed is None
    state, _ = step(state, 3, Keyword.COMMENT)
    assert state == Extending(Node, 2, 2)
    state, _ = step(state, 4, Node)
    assert state == Extending(Node, 2, 4)
    state, _ = step(state, 5, Keyword.COMMENT)

    state, closed = step(state, 6, Shell)
    assert closed == Fold(2, 4, Node)
    assert state == Extending(Shell, 6, 6)

    state, closed = step(state, 7, None)
    assert closed == Fold(6, 6, Shell)
    assert state is SEEKING
    assert finish(state) is None


def test_finish_closes_active_run() -> None:
    assert finish(Extending(Shell, 3, 5)) == Fold(3, 5, Shell)


def test_scan_folds_reports_single_line_candidates() -> None:
    candidates = list(scan_folds([N, S, S, "x", N]))
    assert [f.as_tuple() for f in candidates] == [(0, 0, Node), (1, 2, Shell), (4, 4, Node)]

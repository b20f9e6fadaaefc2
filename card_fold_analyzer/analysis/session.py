"""Per-buffer session: current lines plus their FoldList.

The editor host reports changes as line events (``firstline``, ``lastline``,
``linedata``): lines ``[firstline, lastline)`` were replaced by ``linedata``,
``lastline == -1`` meaning "up to the end of the buffer".  The session
splices its copy of the lines and rebuilds the folds wholesale, so no partial
rebuild is ever observable.

Painting the folds is left to the host; :meth:`BufferSession.host_commands`
only produces the command sequence (clear all folds, then one ``N,Mfo`` per
fold with 1-based inclusive line numbers).
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from card_fold_analyzer.analysis.folds import FoldList
from card_fold_analyzer.models.profile import ScanProfile

logger = logging.getLogger(__name__)

CLEAR_FOLDS_COMMAND = "normal! zE"


class BufferSession:
    def __init__(self, lines: Iterable[str] = (), profile: Optional[ScanProfile] = None) -> None:
        self._lines: List[str] = list(lines)
        self.folds = FoldList(profile)
        self.changedtick = 0
        self.folds.recreate_all(self._lines)

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    @property
    def profile(self) -> ScanProfile:
        return self.folds.profile

    def replace_all(self, lines: Iterable[str]) -> None:
        """Full reload of the buffer contents."""
        self._lines = list(lines)
        self._rebuild()

    def apply_lines_event(self, firstline: int, lastline: int, linedata: Sequence[str]) -> None:
        """Replace lines ``[firstline, lastline)`` by ``linedata`` and rebuild the folds.

        Raises ValueError (state untouched) if the range does not fit the buffer.
        """
        n = len(self._lines)
        if lastline == -1:
            lastline = n
        if not (0 <= firstline <= lastline <= n):
            raise ValueError(
                f"Invalid line event range [{firstline}, {lastline}) for buffer of {n} lines"
            )
        self._lines[firstline:lastline] = list(linedata)
        logger.debug(
            "lines event: replaced [%d, %d) with %d lines (buffer now %d lines)",
            firstline, lastline, len(linedata), len(self._lines),
        )
        self._rebuild()

    def _rebuild(self) -> None:
        self.changedtick += 1
        self.folds.recreate_all(self._lines)

    def host_commands(self) -> List[str]:
        """Commands that make the host's visual folds match the FoldList."""
        cmds = [CLEAR_FOLDS_COMMAND]
        for first, last in self.folds.host_ranges():
            cmds.append(f"{first},{last}fo")
        return cmds

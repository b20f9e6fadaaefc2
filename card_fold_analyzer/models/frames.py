from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

from card_fold_analyzer.models.keywords import Keyword
from card_fold_analyzer.models.profile import ScanProfile

if TYPE_CHECKING:
    from card_fold_analyzer.analysis.folds import FoldList


@dataclass(frozen=True)
class CardDeck:
    """
    In-memory representation of one input deck after decoding.

    Notes
    - 'lines' never carry line terminators; index i is buffer line i (0-based).
    - 'warnings' collects non-fatal findings of the reader (never raised).
    """
    source_path: Path
    lines: Tuple[str, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def n_lines(self) -> int:
        return int(len(self.lines))

    def classifications(self, profile: Optional[ScanProfile] = None) -> List[Optional[Keyword]]:
        from card_fold_analyzer.analysis.classify import classify_lines

        return classify_lines(self.lines, profile)

    def folds(self, profile: Optional[ScanProfile] = None) -> "FoldList":
        from card_fold_analyzer.analysis.folds import FoldList

        fl = FoldList(profile)
        fl.recreate_all(self.lines)
        return fl

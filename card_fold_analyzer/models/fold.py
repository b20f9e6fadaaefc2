from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from card_fold_analyzer.models.keywords import Keyword


@dataclass(frozen=True)
class Fold:
    """
    One collapsible line range of a buffer.

    start, end: 0-based line indices, end inclusive.
    keyword: card type shared by the range (never None; a fold built from a
             deck always carries a card keyword, COMMENT only when inserted explicitly).
    """
    start: int
    end: int
    keyword: Keyword

    @property
    def n_lines(self) -> int:
        return self.end - self.start + 1

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end

    def host_range(self) -> Tuple[int, int]:
        """1-based inclusive (first, last) as expected by an editor host."""
        return self.start + 1, self.end + 1

    def as_tuple(self) -> Tuple[int, int, Keyword]:
        return self.start, self.end, self.keyword

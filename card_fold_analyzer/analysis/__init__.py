"""Analysis package: line classification and fold construction.

Design principle:
  - Ingest produces a :class:`~card_fold_analyzer.models.frames.CardDeck`
    (or the host supplies lines directly).
  - Analysis classifies every line independently, then derives the folds in
    one forward pass.  Nothing here performs I/O.
"""

from .classify import classify_line, classify_lines, keyword_codes, keyword_summary
from .folds import DuplicateFoldError, FoldList, FoldNotFoundError, scan_folds
from .session import BufferSession

__all__ = [
    "classify_line",
    "classify_lines",
    "keyword_codes",
    "keyword_summary",
    "DuplicateFoldError",
    "FoldList",
    "FoldNotFoundError",
    "scan_folds",
    "BufferSession",
]

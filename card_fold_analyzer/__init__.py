"""Card Fold Analyzer -- line classification and folding for Pamcrash input decks.

An input deck is a fixed-column text file of "cards": every card line starts
with an 8-character header (``"NODE  / "``, ``"SHELL / "``, ...).  Large decks
hold thousands of consecutive cards of the same type, which an editor can
collapse into one fold each.

This package provides tools for:
- Classifying each line by its card header (or as comment / unrecognized)
- Building the minimal set of non-overlapping folds, absorbing comment runs
  that sit between cards of the same type
- Keeping folds of an edited buffer up to date and producing the host commands
  that paint them
- Reading decks from disk and reporting folds and keyword statistics

Key principles:
- No parsing of card contents: only the header decides
- Unrecognized lines always break a fold
- No I/O in the analysis layer; the editor host is an external collaborator

Main subpackages:
- analysis: Classifier, fold builder / FoldList, buffer session
- ingest: Deck reader
- models: Data models (Keyword, Fold, CardDeck, ScanProfile)
- scripts: Command-line fold report
"""

__all__ = []

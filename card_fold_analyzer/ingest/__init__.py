"""Ingest package - deck readers.

This package handles:
- Reading Pamcrash input decks (*.pc) into CardDeck objects
- Decoding and line splitting, with non-fatal findings kept as warnings

Design principle:
- Readers never classify or fold; they only hand over clean lines
"""
from .readers_pc import PcDeckReader, PcReaderConfig

__all__ = [
    "PcDeckReader",
    "PcReaderConfig",
]

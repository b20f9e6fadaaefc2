from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from card_fold_analyzer.models.frames import CardDeck
from card_fold_analyzer.models.keywords import PREFIX_TABLE, PREFIX_WIDTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PcReaderConfig:
    """
    Reader configuration for Pamcrash input decks (*.pc).

    encoding / errors:
      - passed to bytes.decode(); decks are plain ASCII in practice, latin-1 never fails.
      - with a strict codec and errors="replace", undecodable bytes become U+FFFD
        and are reported in the warnings.

    strip_trailing_whitespace:
      - True: rstrip() every line. The 8-character header keeps its trailing
              blank only if the line carries data after it, so this is off by default.
    """
    encoding: str = "latin-1"
    errors: str = "replace"
    strip_trailing_whitespace: bool = False
    max_warning_lines: int = 10


class PcDeckReader:
    """
    Reads one input deck into a :class:`CardDeck`.

    The reader only decodes and splits lines; classification is left to the
    analysis package. Suspicious headers (tabs, lowercase keywords) are
    reported as warnings because they silently turn a card into an
    unrecognized line.
    """

    def __init__(self, config: Optional[PcReaderConfig] = None):
        self.config = config or PcReaderConfig()

    def _line_warnings(self, lines: List[str]) -> List[str]:
        cfg = self.config
        tabbed: List[int] = []
        lowercase: List[int] = []
        for i, line in enumerate(lines):
            head = line[:PREFIX_WIDTH]
            if "\t" in head:
                tabbed.append(i)
            elif head not in PREFIX_TABLE and head.upper() in PREFIX_TABLE:
                lowercase.append(i)

        warnings: List[str] = []
        if tabbed:
            shown = ", ".join(str(i + 1) for i in tabbed[: cfg.max_warning_lines])
            warnings.append(f"tab characters in card header on {len(tabbed)} lines (first: {shown})")
        if lowercase:
            shown = ", ".join(str(i + 1) for i in lowercase[: cfg.max_warning_lines])
            warnings.append(
                f"{len(lowercase)} lines carry a non-uppercase card keyword and are not recognized (first: {shown})"
            )
        return warnings

    def read_lines(self, data: bytes) -> Tuple[List[str], List[str]]:
        """Decode raw deck bytes into lines; returns (lines, warnings)."""
        cfg = self.config
        warnings: List[str] = []

        try:
            text = data.decode(cfg.encoding)
        except UnicodeDecodeError:
            text = data.decode(cfg.encoding, errors=cfg.errors)
            warnings.append(f"undecodable bytes handled with errors='{cfg.errors}' while decoding as {cfg.encoding}")
        if "\r\n" in text:
            warnings.append("CRLF line endings converted")

        # split on LF only: str.splitlines() would also break on FF/NEL and shift line numbers
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        lines = [s[:-1] if s.endswith("\r") else s for s in lines]
        if cfg.strip_trailing_whitespace:
            lines = [s.rstrip() for s in lines]

        warnings.extend(self._line_warnings(lines))
        return lines, warnings

    def read(self, path: str | Path) -> CardDeck:
        p = Path(path).expanduser().resolve()
        if not p.is_file():
            raise FileNotFoundError(f"Deck file not found: {p}")

        logger.info("Reading deck: %s", p)
        lines, warnings = self.read_lines(p.read_bytes())
        for w in warnings:
            logger.warning("%s: %s", p.name, w)
        logger.debug("%s: %d lines", p.name, len(lines))

        return CardDeck(source_path=p, lines=tuple(lines), warnings=tuple(warnings))

"""Card keywords of the Pamcrash input deck.

Every card starts with a fixed 8-character header: the keyword padded with
spaces to 6 characters, a ``/`` and one space (``"NODE  / "``). This module
holds the closed table of known headers and the :class:`Keyword` enum that
names them. ``Keyword.COMMENT`` is the generic tag for comment lines; an
unrecognized line has no keyword at all (``None``).
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple


PREFIX_WIDTH = 8

GROUPS: Tuple[str, ...] = ("node", "element", "link")


class Keyword(Enum):
    """Card types a line may belong to.

    Only the keyword is carried, not its subtype: e.g. CNTAC types 33 and 36
    would both map to one member.
    """

    # Node
    NODE = ("NODE  / ", "node")
    CNODE = ("CNODE / ", "node")
    MASS = ("MASS  / ", "node")
    NSMAS = ("NSMAS / ", "node")
    NSMAS2 = ("NSMAS2/ ", "node")
    # Element
    SOLID = ("SOLID / ", "element")
    HEXA20 = ("HEXA20/ ", "element")
    PENT15 = ("PENT15/ ", "element")
    PENTA6 = ("PENTA6/ ", "element")
    TETR10 = ("TETR10/ ", "element")
    TETR4 = ("TETR4 / ", "element")
    BSHEL = ("BSHEL / ", "element")
    TSHEL = ("TSHEL / ", "element")
    SHELL = ("SHELL / ", "element")
    SHEL6 = ("SHEL6 / ", "element")
    SHEL8 = ("SHEL8 / ", "element")
    MEMBR = ("MEMBR / ", "element")
    BEAM = ("BEAM  / ", "element")
    SPRGBM = ("SPRGBM/ ", "element")
    BAR = ("BAR   / ", "element")
    SPRING = ("SPRING/ ", "element")
    JOINT = ("JOINT / ", "element")
    KJOIN = ("KJOIN / ", "element")
    MTOJNT = ("MTOJNT/ ", "element")
    SPHEL = ("SPHEL / ", "element")
    SPHELO = ("SPHELO/ ", "element")
    GAP = ("GAP   / ", "element")
    IMPMA = ("IMPMA / ", "element")
    # Link
    ELINK = ("ELINK / ", "link")
    # Not a card: generic tag for comment lines
    COMMENT = ("", "comment")

    def __init__(self, prefix: str, group: str) -> None:
        self.prefix = prefix
        self.group = group

    @property
    def is_card(self) -> bool:
        return self is not Keyword.COMMENT

    @property
    def code(self) -> int:
        """Position in table order (used as integer code for bulk statistics)."""
        return _CODES[self]

    @classmethod
    def from_name(cls, name: str) -> "Keyword":
        """Look up a member by name, case-insensitively (``"shell"`` -> SHELL)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown keyword: {name!r}") from None

    @classmethod
    def from_code(cls, code: int) -> Optional["Keyword"]:
        if code < 0:
            return None
        return _MEMBERS[code]


_MEMBERS: Tuple[Keyword, ...] = tuple(Keyword)
_CODES: Dict[Keyword, int] = {kw: i for i, kw in enumerate(_MEMBERS)}

# Static header table, checked once per line.
PREFIX_TABLE: Dict[str, Keyword] = {kw.prefix: kw for kw in _MEMBERS if kw.is_card}

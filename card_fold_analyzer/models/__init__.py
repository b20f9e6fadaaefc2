from .keywords import Keyword, PREFIX_TABLE
from .fold import Fold
from .frames import CardDeck
from .profile import DEFAULT_PROFILE, ScanProfile

__all__ = [
    "Keyword",
    "PREFIX_TABLE",
    "Fold",
    "CardDeck",
    "DEFAULT_PROFILE",
    "ScanProfile",
]

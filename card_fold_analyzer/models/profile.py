"""Scan profile -- bundles all configuration that affects classification and folding.

A ScanProfile groups every parameter that changes the fold output into one
frozen dataclass.  It can be:

- Used as-is (``DEFAULT_PROFILE`` reproduces the plain card format rules)
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple

from card_fold_analyzer.models.keywords import GROUPS, Keyword


@dataclass(frozen=True)
class ScanProfile:
    """Frozen configuration for the classifier and the fold builder.

    Fields
    ------
    comment_markers : tuple of str
        Single characters that mark a line as comment when found in column 1.
    groups : tuple of str
        Keyword groups that are recognized, subset of {"node","element","link"}.
        Cards of a disabled group classify as unrecognized.
    keywords : tuple of str or None
        Optional whitelist of keyword names (e.g. ``("NODE", "SHELL")``),
        applied after the group filter.  ``None`` keeps every keyword of the
        enabled groups.
    absorb_comments : bool
        If True, a comment run flanked by the same keyword is merged into
        one fold.  If False, any comment line closes the active fold.
    """

    comment_markers: Tuple[str, ...] = ("#", "$")
    groups: Tuple[str, ...] = GROUPS
    keywords: Optional[Tuple[str, ...]] = None
    absorb_comments: bool = True

    def __post_init__(self) -> None:
        # Callers may pass lists; keep the profile hashable
        object.__setattr__(self, "comment_markers", tuple(self.comment_markers))
        object.__setattr__(self, "groups", tuple(self.groups))
        if self.keywords is not None:
            object.__setattr__(self, "keywords", tuple(self.keywords))

    def validate(self) -> "ScanProfile":
        """Raise ValueError on unknown groups/keywords or malformed markers."""
        for m in self.comment_markers:
            if not isinstance(m, str) or len(m) != 1:
                raise ValueError(f"comment marker must be a single character, got {m!r}")
        bad = [g for g in self.groups if g not in GROUPS]
        if bad:
            raise ValueError(f"Unknown keyword groups: {bad} (expected subset of {list(GROUPS)})")
        if self.keywords is not None:
            for name in self.keywords:
                if not Keyword.from_name(name).is_card:
                    raise ValueError(f"{name!r} is not a card keyword")
        return self

    def enabled(self) -> FrozenSet[Keyword]:
        """Card keywords recognized under this profile."""
        kws = {kw for kw in Keyword if kw.is_card and kw.group in self.groups}
        if self.keywords is not None:
            kws &= {Keyword.from_name(n) for n in self.keywords}
        return frozenset(kws)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (tuples become lists)."""
        d = asdict(self)
        d["comment_markers"] = list(d["comment_markers"])
        d["groups"] = list(d["groups"])
        if d["keywords"] is not None:
            d["keywords"] = list(d["keywords"])
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScanProfile":
        """Reconstruct from a dict (e.g. loaded from JSON)."""
        return cls(**dict(d)).validate()


DEFAULT_PROFILE = ScanProfile()

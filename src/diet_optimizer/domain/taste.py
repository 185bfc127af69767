"""Taste preference models."""

from dataclasses import dataclass, field
from enum import Enum

_SCORES = {
    "Favorite": 5,
    "Delicious": 4,
    "Good": 3,
    "Ok": 2,
}


class TasteLabel(Enum):
    """Discovered taste labels, best first."""

    FAVORITE = "Favorite"
    DELICIOUS = "Delicious"
    GOOD = "Good"
    OK = "Ok"
    UNKNOWN = "Unknown"
    BAD = "Bad"
    HORRIBLE = "Horrible"
    WORST = "Worst"

    @classmethod
    def parse(cls, raw: object) -> "TasteLabel":
        """Return the label matching ``raw`` case-insensitively, else UNKNOWN."""
        if isinstance(raw, TasteLabel):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            return cls.UNKNOWN
        cleaned = raw.strip().lower()
        for label in cls:
            if label.value.lower() == cleaned:
                return label
        return cls.UNKNOWN

    @property
    def score(self) -> int:
        """Ordinal taste score; anything below Ok counts as 1."""
        return _SCORES.get(self.value, 1)


@dataclass(frozen=True)
class TasteProfile:
    """Partition of a user's known foods for one search."""

    excluded: frozenset[str]
    allowed: dict[str, TasteLabel]
    favorite_discovered: bool = False
    worst_discovered: bool = False


@dataclass(frozen=True)
class TasteListing:
    """Discovered foods grouped by taste label for display."""

    favorite: str | None
    worst: str | None
    groups: dict[TasteLabel, list[str]] = field(default_factory=dict)
    total: int = 0

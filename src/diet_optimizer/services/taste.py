"""Taste classification for preference snapshots."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from diet_optimizer.domain.taste import TasteLabel, TasteListing, TasteProfile

_EXCLUDED_LABELS = {TasteLabel.BAD, TasteLabel.HORRIBLE, TasteLabel.WORST}
_ALLOWED_LABELS = {
    TasteLabel.FAVORITE,
    TasteLabel.DELICIOUS,
    TasteLabel.GOOD,
    TasteLabel.OK,
}
_LISTED_GROUPS = (
    TasteLabel.DELICIOUS,
    TasteLabel.GOOD,
    TasteLabel.OK,
    TasteLabel.BAD,
    TasteLabel.HORRIBLE,
)


def taste_score(label: object) -> int:
    """Return the 1-5 taste score for a raw or parsed label."""
    return TasteLabel.parse(label).score


@dataclass
class TasteClassifier:
    """Splits a taste map into excluded and allowed food identities."""

    def classify(
        self,
        taste_map: Mapping[str, object],
        *,
        favorite_discovered: bool,
        worst_discovered: bool = False,
    ) -> TasteProfile:
        """Partition food ids by their discovered taste label.

        An undiscovered favorite is hidden rather than merely unscored, so it
        lands in the excluded set.
        """
        excluded: set[str] = set()
        allowed: dict[str, TasteLabel] = {}
        for food_id, raw_label in taste_map.items():
            label = TasteLabel.parse(raw_label)
            if label in _EXCLUDED_LABELS:
                excluded.add(food_id)
            elif label is TasteLabel.FAVORITE and not favorite_discovered:
                excluded.add(food_id)
            elif label in _ALLOWED_LABELS:
                allowed[food_id] = label
        return TasteProfile(
            excluded=frozenset(excluded),
            allowed=allowed,
            favorite_discovered=favorite_discovered,
            worst_discovered=worst_discovered,
        )

    def group(
        self,
        taste_map: Mapping[str, object],
        *,
        favorite_discovered: bool,
        worst_discovered: bool,
        name_for: Callable[[str], str],
    ) -> TasteListing:
        """Group discovered foods by label for the taste listing."""
        grouped: dict[TasteLabel, list[str]] = {}
        for food_id, raw_label in taste_map.items():
            label = TasteLabel.parse(raw_label)
            grouped.setdefault(label, []).append(name_for(food_id))

        total = 0
        favorite = None
        if favorite_discovered and grouped.get(TasteLabel.FAVORITE):
            favorite = grouped[TasteLabel.FAVORITE][0]
            total += len(grouped[TasteLabel.FAVORITE])
        worst = None
        if worst_discovered and grouped.get(TasteLabel.WORST):
            worst = grouped[TasteLabel.WORST][0]
            total += len(grouped[TasteLabel.WORST])

        groups = {
            label: grouped[label] for label in _LISTED_GROUPS if grouped.get(label)
        }
        total += sum(len(names) for names in groups.values())
        return TasteListing(favorite=favorite, worst=worst, groups=groups, total=total)

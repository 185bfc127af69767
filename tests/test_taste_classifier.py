"""Tests for taste classification."""

from diet_optimizer.domain.taste import TasteLabel
from diet_optimizer.services.taste import TasteClassifier, taste_score


def test_taste_score_maps_labels() -> None:
    assert taste_score("Favorite") == 5
    assert taste_score("delicious") == 4
    assert taste_score("Good") == 3
    assert taste_score("Ok") == 2
    for label in ("Unknown", "Bad", "Horrible", "Worst", "", None, "Spicy"):
        assert taste_score(label) == 1


def test_classify_excludes_bad_and_hidden_favorite() -> None:
    taste_map = {
        "a": "Bad",
        "b": "Horrible",
        "c": "Worst",
        "d": "Favorite",
        "e": "Delicious",
        "f": "Good",
        "g": "Ok",
        "h": "Unknown",
    }

    profile = TasteClassifier().classify(taste_map, favorite_discovered=False)

    assert profile.excluded == {"a", "b", "c", "d"}
    assert profile.allowed == {
        "e": TasteLabel.DELICIOUS,
        "f": TasteLabel.GOOD,
        "g": TasteLabel.OK,
    }


def test_classify_allows_discovered_favorite() -> None:
    profile = TasteClassifier().classify(
        {"d": "favorite", "x": "worst"},
        favorite_discovered=True,
        worst_discovered=True,
    )

    assert profile.allowed == {"d": TasteLabel.FAVORITE}
    assert profile.excluded == {"x"}
    assert profile.worst_discovered is True


def test_group_hides_undiscovered_favorite_and_worst() -> None:
    taste_map = {
        "fav": "Favorite",
        "bad": "Worst",
        "stew": "Good",
        "pie": "Good",
        "gruel": "Horrible",
    }

    listing = TasteClassifier().group(
        taste_map,
        favorite_discovered=False,
        worst_discovered=True,
        name_for=str.title,
    )

    assert listing.favorite is None
    assert listing.worst == "Bad"
    assert listing.groups[TasteLabel.GOOD] == ["Stew", "Pie"]
    assert listing.groups[TasteLabel.HORRIBLE] == ["Gruel"]
    assert TasteLabel.FAVORITE not in listing.groups
    assert listing.total == 4

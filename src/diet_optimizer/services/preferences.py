"""Preference provider interface."""

from collections.abc import Mapping
from typing import Protocol


class PreferenceProvider(Protocol):
    """Per-user taste preferences and stomach capacity."""

    def get_taste_map(self, user_id: str) -> Mapping[str, str]:
        """Return food id -> discovered taste label."""

    def is_favorite_discovered(self, user_id: str) -> bool:
        """Return True once the user's favorite food is known."""

    def is_worst_discovered(self, user_id: str) -> bool:
        """Return True once the user's worst food is known."""

    def get_capacity(self, user_id: str) -> float | None:
        """Return the calorie ceiling for a single meal."""

    def warm_up(self, user_id: str) -> None:
        """Prepare taste data for a user whose taste map came back empty."""

"""Supabase-backed taste preferences and stomach capacity."""

from dataclasses import dataclass

from supabase import Client

from diet_optimizer.domain.errors import ProviderUnavailable
from diet_optimizer.services.preferences import PreferenceProvider


@dataclass
class SupabasePreferenceProvider(PreferenceProvider):
    """Reads ``taste_preferences`` and ``user_profiles`` rows."""

    client: Client

    def get_taste_map(self, user_id: str) -> dict[str, str]:
        """Return food id -> taste label for a user."""
        try:
            response = (
                self.client.table("taste_preferences")
                .select("food_id, preference")
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as exc:
            raise ProviderUnavailable(f"Taste query failed: {exc}") from exc
        return {
            str(row["food_id"]): str(row.get("preference") or "")
            for row in response.data or []
        }

    def is_favorite_discovered(self, user_id: str) -> bool:
        """Return the profile's favorite-discovered flag."""
        return bool(self._profile(user_id).get("favorite_discovered"))

    def is_worst_discovered(self, user_id: str) -> bool:
        """Return the profile's worst-discovered flag."""
        return bool(self._profile(user_id).get("worst_discovered"))

    def get_capacity(self, user_id: str) -> float | None:
        """Return the stomach capacity stored on the profile."""
        capacity = self._profile(user_id).get("stomach_capacity")
        if isinstance(capacity, int | float) and capacity > 0:
            return float(capacity)
        return None

    def warm_up(self, user_id: str) -> None:
        """Ask the database to resync the user's taste rows."""
        try:
            self.client.rpc("sync_taste_preferences", {"user_id": user_id}).execute()
        except Exception as exc:
            raise ProviderUnavailable(f"Taste warm-up failed: {exc}") from exc

    def _profile(self, user_id: str) -> dict[str, object]:
        try:
            response = (
                self.client.table("user_profiles")
                .select("stomach_capacity, favorite_discovered, worst_discovered")
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise ProviderUnavailable(f"Profile query failed: {exc}") from exc
        if not response.data:
            return {}
        return response.data[0]

"""Supabase-backed food catalog."""

from dataclasses import dataclass

from supabase import Client

from diet_optimizer.domain.errors import ProviderUnavailable
from diet_optimizer.domain.foods import FoodDescriptor, UnlockRequirement
from diet_optimizer.services.catalog import FoodCatalogProvider

_COLUMNS = (
    "id, name, calories, carbs, fat, protein, vitamins, tags, hidden, tier, "
    "unlock_requirements"
)


@dataclass
class SupabaseFoodCatalog(FoodCatalogProvider):
    """Reads food descriptors from the ``foods`` table."""

    client: Client

    def list_all_foods(self) -> list[FoodDescriptor]:
        """Return every food row."""
        try:
            response = self.client.table("foods").select(_COLUMNS).execute()
        except Exception as exc:
            raise ProviderUnavailable(f"Food catalog query failed: {exc}") from exc
        return [_parse_row(row) for row in response.data or []]

    def get_food(self, food_id: str) -> FoodDescriptor | None:
        """Return one food row by id."""
        try:
            response = (
                self.client.table("foods")
                .select(_COLUMNS)
                .eq("id", food_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise ProviderUnavailable(f"Food lookup failed: {exc}") from exc
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> FoodDescriptor:
    requirements = tuple(
        UnlockRequirement(
            skill=str(requirement.get("skill", "")),
            level=int(requirement.get("level") or 0),
        )
        for requirement in row.get("unlock_requirements") or []
        if isinstance(requirement, dict)
    )
    return FoodDescriptor(
        id=str(row["id"]),
        name=str(row.get("name") or row["id"]),
        calories=float(row.get("calories") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        protein=float(row.get("protein") or 0.0),
        vitamins=float(row.get("vitamins") or 0.0),
        tags=frozenset(str(tag) for tag in row.get("tags") or []),
        hidden=bool(row.get("hidden")),
        unlock_requirements=requirements,
        tier=int(row.get("tier") or 0),
    )

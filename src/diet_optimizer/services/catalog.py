"""Food catalog provider interface."""

from collections.abc import Sequence
from typing import Protocol

from diet_optimizer.domain.foods import FoodDescriptor


class FoodCatalogProvider(Protocol):
    """Read access to the food catalog."""

    def list_all_foods(self) -> Sequence[FoodDescriptor]:
        """Return every food item, hidden ones included."""

    def get_food(self, food_id: str) -> FoodDescriptor | None:
        """Return a single food by id, if present."""

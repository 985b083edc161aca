"""Remove staples the cook already has from a shopping list."""

from collections.abc import Iterable

from recipeclub.models import ConsolidatedItem
from recipeclub.normalize.names import normalize_ingredient_name
from recipeclub.schemas import SmartGroceryItem

# Staples every new pantry starts with
DEFAULT_PANTRY_ITEMS: tuple[str, ...] = ("salt", "pepper", "water")


def _pantry_names(pantry_names: Iterable[str]) -> set[str]:
    return {normalize_ingredient_name(name) for name in pantry_names if name}


def filter_pantry_items(
    items: list[ConsolidatedItem], pantry_names: Iterable[str]
) -> list[ConsolidatedItem]:
    """
    Drop items whose canonical name matches a pantry entry.

    Matching goes through the same name normalization as consolidation, so
    "Onions" in the pantry removes "onion". An empty pantry keeps everything.
    """
    pantry = _pantry_names(pantry_names)
    return [item for item in items if normalize_ingredient_name(item.name) not in pantry]


def filter_smart_pantry_items(
    items: list[SmartGroceryItem], pantry_names: Iterable[str]
) -> list[SmartGroceryItem]:
    """Same as filter_pantry_items, for items returned by the combination service."""
    pantry = _pantry_names(pantry_names)
    return [item for item in items if normalize_ingredient_name(item.name) not in pantry]

"""Domain value types for grocery consolidation."""

from dataclasses import dataclass, field
from enum import Enum


class GroceryCategory(str, Enum):
    """Store section an ingredient is shopped in, in display order."""

    PRODUCE = "produce"
    MEAT_SEAFOOD = "meat_seafood"
    DAIRY = "dairy"
    PANTRY = "pantry"
    SPICES = "spices"
    FROZEN = "frozen"
    BAKERY = "bakery"
    BEVERAGES = "beverages"
    CONDIMENTS = "condiments"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: "GroceryCategory | str | None") -> "GroceryCategory":
        """
        Turn extractor output into a category.

        Missing or unrecognized values fall back to OTHER instead of raising,
        since the extractor's guess is best-effort.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.OTHER
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


CATEGORY_ORDER: tuple[GroceryCategory, ...] = tuple(GroceryCategory)

GROCERY_CATEGORIES: dict[GroceryCategory, str] = {
    GroceryCategory.PRODUCE: "Produce",
    GroceryCategory.MEAT_SEAFOOD: "Protein",
    GroceryCategory.DAIRY: "Dairy",
    GroceryCategory.PANTRY: "Pantry",
    GroceryCategory.SPICES: "Spices",
    GroceryCategory.FROZEN: "Frozen",
    GroceryCategory.BAKERY: "Bakery",
    GroceryCategory.BEVERAGES: "Beverages",
    GroceryCategory.CONDIMENTS: "Condiments",
    GroceryCategory.OTHER: "Other",
}


@dataclass(frozen=True)
class IngredientLine:
    """One ingredient of one recipe, as produced by recipe extraction."""

    recipe_id: str
    name: str
    quantity: float | None = None
    unit: str | None = None
    category: GroceryCategory | str | None = None


@dataclass(frozen=True)
class ConsolidatedItem:
    """A single shopping list entry after consolidation."""

    name: str
    total_quantity: float | None = None
    unit: str | None = None
    category: GroceryCategory = GroceryCategory.OTHER
    source_recipes: tuple[str, ...] = field(default_factory=tuple)


def merge_quantity(left: float | None, right: float | None) -> float | None:
    """
    Add two optional quantities.

    None is the identity element: an unspecified amount never erases a
    specified one, and two unspecified amounts stay unspecified.
    """
    if left is None:
        return right
    if right is None:
        return left
    return left + right

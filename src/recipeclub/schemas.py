"""Wire schemas shared with the ingredient combination service."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipeclub.models import GroceryCategory


def parse_quantity(value: Any) -> float | None:
    """
    Read a quantity that may arrive as a number or a fraction string.

    Examples:
        2 -> 2.0
        "1 1/2" -> 1.5
        "3/4" -> 0.75
        "a pinch" -> None
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    try:
        total = 0.0
        for part in str(value).split():
            if "/" in part:
                numerator, denominator = part.split("/", 1)
                total += float(numerator) / float(denominator)
            else:
                total += float(part)
        return total
    except (ValueError, ZeroDivisionError):
        return None


class SmartGroceryItem(BaseModel):
    """Grocery item as returned by the combination service."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    total_quantity: float | None = Field(None, alias="totalQuantity")
    unit: str | None = None
    category: GroceryCategory = GroceryCategory.OTHER
    source_recipes: list[str] = Field(default_factory=list, alias="sourceRecipes")

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v: Any) -> str:
        return str(v).strip().lower() if v is not None else ""

    @field_validator("total_quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> float | None:
        """Accept numbers and fraction strings; anything else is unspecified."""
        return parse_quantity(v)

    @field_validator("unit", mode="before")
    @classmethod
    def empty_unit(cls, v: Any) -> str | None:
        if not v:
            return None
        return str(v).strip().lower()

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> GroceryCategory:
        """Unknown categories fall back to OTHER."""
        return GroceryCategory.coerce(v)


class PreCombinedItem(BaseModel):
    """Locally consolidated item sent to the combination service."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    quantity: str | None = Field(None, description="Quantity as a fraction string")
    unit: str | None = None
    category: GroceryCategory
    source_recipes: list[str] = Field(default_factory=list, alias="sourceRecipes")

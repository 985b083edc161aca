"""Unit normalization and unit family classification."""

from enum import Enum

from recipeclub.normalize.conversions import (
    BULK_CONVERSIONS,
    CAN_RATIO,
    COUNT_RATIO,
    HOUSEHOLD_UNITS,
    VOLUME_TO_TSP,
    WEIGHT_TO_OZ,
)

# =============================================================================
# Unit Aliases
# =============================================================================

# Plural and long forms to canonical symbols
UNIT_MAP: dict[str, str] = {
    # Volume
    "cups": "cup",
    "c": "cup",
    "tablespoons": "tbsp",
    "tablespoon": "tbsp",
    "tbsps": "tbsp",
    "tbs": "tbsp",
    "tbl": "tbsp",
    "teaspoons": "tsp",
    "teaspoon": "tsp",
    "tsps": "tsp",
    "liters": "liter",
    "litres": "liter",
    "litre": "liter",
    "l": "liter",
    "milliliters": "ml",
    "milliliter": "ml",
    "millilitres": "ml",
    "millilitre": "ml",
    # Weight
    "ounces": "oz",
    "ounce": "oz",
    "pounds": "lb",
    "pound": "lb",
    "lbs": "lb",
    "grams": "g",
    "gram": "g",
    "kilograms": "kg",
    "kilogram": "kg",
    # Household
    "cloves": "clove",
    "slices": "slice",
    "pieces": "piece",
    "cans": "can",
    "bottles": "bottle",
    "bunches": "bunch",
    "heads": "head",
    "stalks": "stalk",
    "ribs": "rib",
    "strips": "strip",
    "ears": "ear",
    "sprigs": "sprig",
    "pinches": "pinch",
    "dashes": "dash",
}


class UnitFamily(str, Enum):
    """Class of mutually convertible units."""

    VOLUME = "volume"
    WEIGHT = "weight"
    HOUSEHOLD = "household"
    BARE_COUNT = "bare_count"
    OPAQUE = "opaque"


def normalize_unit(unit: str | None) -> str:
    """
    Map a free-text unit token to its canonical symbol.

    Examples:
        "Cups" -> "cup"
        "tablespoons" -> "tbsp"
        None -> ""
        "Handful" -> "handful"
    """
    if not unit:
        return ""
    lower = unit.strip().lower()
    return UNIT_MAP.get(lower, lower)


def unit_family(unit: str) -> UnitFamily:
    """Classify a canonical unit without ingredient context."""
    if not unit:
        return UnitFamily.BARE_COUNT
    if unit in VOLUME_TO_TSP:
        return UnitFamily.VOLUME
    if unit in WEIGHT_TO_OZ:
        return UnitFamily.WEIGHT
    if unit in HOUSEHOLD_UNITS:
        return UnitFamily.HOUSEHOLD
    return UnitFamily.OPAQUE


def classify_unit(unit: str, ingredient: str) -> UnitFamily:
    """
    Classify a canonical unit with respect to one canonical ingredient.

    Household units only count as convertible when the ingredient has a
    ratio covering them (celery stalks, cans of broth). Anything else stays
    opaque so it is never summed with a different unit.
    """
    family = unit_family(unit)
    if family is not UnitFamily.HOUSEHOLD:
        return family

    if unit == "can" and ingredient in CAN_RATIO:
        return UnitFamily.HOUSEHOLD

    ratio = COUNT_RATIO.get(ingredient)
    if ratio and (unit == ratio.unit or unit in ratio.aliases):
        return UnitFamily.HOUSEHOLD

    bulk = BULK_CONVERSIONS.get(ingredient)
    if bulk and unit == bulk.to_unit:
        return UnitFamily.HOUSEHOLD

    return UnitFamily.OPAQUE


def convert(quantity: float, from_unit: str, to_unit: str) -> float | None:
    """
    Convert a quantity between two units of the same family.

    Returns None when the units are not both volume or both weight.
    """
    for table in (VOLUME_TO_TSP, WEIGHT_TO_OZ):
        if from_unit in table and to_unit in table:
            return quantity * table[from_unit] / table[to_unit]
    return None

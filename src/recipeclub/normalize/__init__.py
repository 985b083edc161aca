"""Normalize free-text ingredient names and units into canonical forms."""

from recipeclub.normalize.names import normalize_ingredient_name, singularize
from recipeclub.normalize.units import (
    UnitFamily,
    classify_unit,
    convert,
    normalize_unit,
    unit_family,
)

__all__ = [
    "UnitFamily",
    "classify_unit",
    "convert",
    "normalize_ingredient_name",
    "normalize_unit",
    "singularize",
    "unit_family",
]

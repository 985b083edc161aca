"""Grocery list consolidation, display and smart combination."""

from recipeclub.plan.consolidate import combine_ingredients
from recipeclub.plan.pantry import (
    DEFAULT_PANTRY_ITEMS,
    filter_pantry_items,
    filter_smart_pantry_items,
)
from recipeclub.plan.shopping_list import (
    decimal_to_fraction,
    format_grocery_item,
    generate_csv,
    group_by_category,
)
from recipeclub.plan.smart_combine import (
    SmartCombineFailed,
    SmartCombineOk,
    SmartCombineResult,
    SmartCombineSkipped,
    build_pre_combined,
    smart_combine,
    smart_combine_result,
)

__all__ = [
    "DEFAULT_PANTRY_ITEMS",
    "SmartCombineFailed",
    "SmartCombineOk",
    "SmartCombineResult",
    "SmartCombineSkipped",
    "build_pre_combined",
    "combine_ingredients",
    "decimal_to_fraction",
    "filter_pantry_items",
    "filter_smart_pantry_items",
    "format_grocery_item",
    "generate_csv",
    "group_by_category",
    "smart_combine",
    "smart_combine_result",
]

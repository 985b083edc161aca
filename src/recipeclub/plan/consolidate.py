"""Consolidate ingredient lines from many recipes into one grocery list."""

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from recipeclub.logging_config import get_logger
from recipeclub.models import (
    ConsolidatedItem,
    GroceryCategory,
    IngredientLine,
    merge_quantity,
)
from recipeclub.normalize.conversions import (
    BULK_CONVERSIONS,
    CAN_RATIO,
    COUNT_RATIO,
    METRIC_UNITS,
    SAME_UNIT_UPGRADE,
    VOLUME_LADDER,
    VOLUME_TO_TSP,
    WEIGHT_LADDER,
    WEIGHT_TO_OZ,
    upgrade_threshold,
)
from recipeclub.normalize.names import normalize_ingredient_name
from recipeclub.normalize.units import UnitFamily, classify_unit, convert, normalize_unit

logger = get_logger(__name__)

UNKNOWN_RECIPE = "Unknown Recipe"

# Categories the extractor frequently gets wrong
CATEGORY_OVERRIDES: dict[str, GroceryCategory] = {
    "tofu": GroceryCategory.MEAT_SEAFOOD,
    "tempeh": GroceryCategory.MEAT_SEAFOOD,
    "seitan": GroceryCategory.MEAT_SEAFOOD,
    "egg": GroceryCategory.PANTRY,
    "egg yolk": GroceryCategory.PANTRY,
    "egg white": GroceryCategory.PANTRY,
    "ghee": GroceryCategory.PANTRY,
    "tomato paste": GroceryCategory.PANTRY,
    "sesame seed": GroceryCategory.PANTRY,
    "water": GroceryCategory.OTHER,
}

CATEGORY_SUFFIX_OVERRIDES: tuple[tuple[str, GroceryCategory], ...] = (
    (" oil", GroceryCategory.PANTRY),
    ("stock", GroceryCategory.PANTRY),
)

MEASURED_TABLES: dict[UnitFamily, tuple[dict[str, float], tuple[str, ...]]] = {
    UnitFamily.VOLUME: (VOLUME_TO_TSP, VOLUME_LADDER),
    UnitFamily.WEIGHT: (WEIGHT_TO_OZ, WEIGHT_LADDER),
}

BucketKey = tuple[UnitFamily, str]


def resolve_category(name: str, guessed: GroceryCategory) -> GroceryCategory:
    """Apply the category override table; overrides always win."""
    if name in CATEGORY_OVERRIDES:
        return CATEGORY_OVERRIDES[name]
    if name == "oil":
        return GroceryCategory.PANTRY
    for suffix, category in CATEGORY_SUFFIX_OVERRIDES:
        if name.endswith(suffix):
            return category
    return guessed


@dataclass
class _Bucket:
    """Running total for one unit family (or one opaque unit) of a group."""

    family: UnitFamily
    unit: str
    total: float | None = None
    entries: list[tuple[float | None, str]] = field(default_factory=list)
    recipes: dict[str, None] = field(default_factory=dict)

    def add(self, quantity: float | None, unit: str, base: float | None, recipe: str) -> None:
        self.total = merge_quantity(self.total, base)
        self.entries.append((quantity, unit))
        self.recipes.setdefault(recipe, None)


def select_display_unit(
    total: float | None,
    entries: list[tuple[float | None, str]],
    family: UnitFamily,
) -> tuple[float | None, str]:
    """
    Pick a human-friendly unit for a merged volume or weight total.

    A single entry keeps its original unit unless it is metric. Entries that
    all share one imperial unit are summed in that unit, and only move up
    the ladder once the total is worth half of its largest unit. Mixed units
    use the largest ladder unit whose quantity clears its upgrade threshold
    (cup needs half a cup, lb a full pound); failing that, the smallest
    ladder unit that appeared in the input.
    """
    _, ladder = MEASURED_TABLES[family]
    base_unit = ladder[-1]

    if len(entries) == 1 and entries[0][1] not in METRIC_UNITS:
        return entries[0]

    units = {unit for _, unit in entries}
    if len(units) == 1 and not units & METRIC_UNITS:
        [unit] = units
        if total is None:
            return None, unit
        if unit == ladder[0] or convert(total, base_unit, ladder[0]) < SAME_UNIT_UPGRADE:
            return convert(total, base_unit, unit), unit

    present = [unit for unit in ladder if any(unit == u for _, u in entries)]
    fallback = present[-1] if present else base_unit

    if total is None:
        return None, fallback

    for unit in ladder:
        quantity = convert(total, base_unit, unit)
        if quantity >= upgrade_threshold(unit):
            return quantity, unit
    return convert(total, base_unit, fallback), fallback


class _GroupMerger:
    """Merges every line that shares one canonical ingredient name."""

    def __init__(self, name: str):
        self.name = name
        self.ratio = COUNT_RATIO.get(name)
        self.bulk = BULK_CONVERSIONS.get(name)
        self.buckets: dict[BucketKey, _Bucket] = {}
        self._handlers: dict[UnitFamily, Callable[[float | None, str, str], None]] = {
            UnitFamily.VOLUME: self._add_volume,
            UnitFamily.WEIGHT: self._add_weight,
            UnitFamily.HOUSEHOLD: self._add_household,
            UnitFamily.BARE_COUNT: self._add_bare_count,
            UnitFamily.OPAQUE: self._add_opaque,
        }

    def add(self, quantity: float | None, unit: str, recipe: str) -> None:
        family = classify_unit(unit, self.name)
        self._handlers[family](quantity, unit, recipe)

    def _bucket(self, family: UnitFamily, unit: str = "") -> _Bucket:
        key = (family, unit)
        if key not in self.buckets:
            self.buckets[key] = _Bucket(family=family, unit=unit)
        return self.buckets[key]

    def _count_bucket(self) -> _Bucket:
        natural = self.ratio.unit if self.ratio and self.ratio.unit else ""
        return self._bucket(UnitFamily.HOUSEHOLD if natural else UnitFamily.BARE_COUNT, natural)

    def _add_to_count(self, count: float | None, recipe: str) -> None:
        bucket = self._count_bucket()
        bucket.add(count, bucket.unit, count, recipe)

    def _add_measured(
        self, quantity: float | None, unit: str, recipe: str, family: UnitFamily
    ) -> None:
        table, ladder = MEASURED_TABLES[family]
        ratio = self.ratio
        if ratio and ratio.per_unit and ratio.ratio_unit in table:
            count = None
            if quantity is not None:
                count = convert(quantity, unit, ratio.ratio_unit) / ratio.per_unit
            self._add_to_count(count, recipe)
            return

        base = None if quantity is None else convert(quantity, unit, ladder[-1])
        self._bucket(family).add(quantity, unit, base, recipe)

    def _add_volume(self, quantity: float | None, unit: str, recipe: str) -> None:
        self._add_measured(quantity, unit, recipe, UnitFamily.VOLUME)

    def _add_weight(self, quantity: float | None, unit: str, recipe: str) -> None:
        self._add_measured(quantity, unit, recipe, UnitFamily.WEIGHT)

    def _add_household(self, quantity: float | None, unit: str, recipe: str) -> None:
        if unit == "can":
            if quantity is None:
                self._add_opaque(quantity, unit, recipe)
            else:
                self._add_volume(quantity * CAN_RATIO[self.name], "cup", recipe)
            return

        if self.bulk and unit == self.bulk.to_unit:
            self._bucket(UnitFamily.HOUSEHOLD, unit).add(quantity, unit, quantity, recipe)
            return
        self._add_to_count(quantity, recipe)

    def _add_bare_count(self, quantity: float | None, unit: str, recipe: str) -> None:
        if self.ratio:
            self._add_to_count(quantity, recipe)
        else:
            self._bucket(UnitFamily.BARE_COUNT).add(quantity, unit, quantity, recipe)

    def _add_opaque(self, quantity: float | None, unit: str, recipe: str) -> None:
        self._bucket(UnitFamily.OPAQUE, unit).add(quantity, unit, quantity, recipe)

    def results(self) -> list[tuple[float | None, str, tuple[str, ...]]]:
        """Return (quantity, unit, recipes) for every bucket, first-seen order."""
        self._apply_bulk()
        rows = []
        for bucket in self.buckets.values():
            if bucket.family in MEASURED_TABLES:
                quantity, unit = select_display_unit(bucket.total, bucket.entries, bucket.family)
            else:
                quantity, unit = bucket.total, bucket.unit
            rows.append((quantity, unit, tuple(bucket.recipes)))
        return rows

    def _apply_bulk(self) -> None:
        """Buy whole heads once the summed cloves pass the threshold."""
        bulk = self.bulk
        if not bulk:
            return
        source_key = (UnitFamily.HOUSEHOLD, bulk.from_unit)
        source = self.buckets.get(source_key)
        if source is None or source.total is None or source.total <= bulk.threshold:
            return

        converted = float(math.floor(source.total / bulk.ratio + 0.5))
        target = self.buckets.get((UnitFamily.HOUSEHOLD, bulk.to_unit))
        if target is None:
            source.total, source.unit = converted, bulk.to_unit
            return

        target.total = merge_quantity(target.total, converted)
        target.recipes.update(source.recipes)
        del self.buckets[source_key]


def combine_ingredients(
    lines: Iterable[IngredientLine],
    recipe_names: Mapping[str, str],
) -> list[ConsolidatedItem]:
    """
    Combine ingredient lines into consolidated grocery items.

    Args:
        lines: Ingredient lines from every recipe of an event.
        recipe_names: Recipe ID to display name lookup.

    Returns:
        One item per canonical ingredient name, plus one extra item for each
        unit that could not be converted into the others, in first-seen order.
    """
    groups: dict[str, _GroupMerger] = {}
    categories: dict[str, GroceryCategory | None] = {}
    line_count = 0

    for line in lines:
        line_count += 1
        name = normalize_ingredient_name(line.name)
        unit = normalize_unit(line.unit)
        recipe = recipe_names.get(line.recipe_id, UNKNOWN_RECIPE)

        if name not in groups:
            groups[name] = _GroupMerger(name)
            categories[name] = None
        if categories[name] is None and line.category:
            categories[name] = GroceryCategory.coerce(line.category)

        groups[name].add(line.quantity, unit, recipe)

    items: list[ConsolidatedItem] = []
    for name, merger in groups.items():
        category = resolve_category(name, categories[name] or GroceryCategory.OTHER)
        for quantity, unit, recipes in merger.results():
            items.append(
                ConsolidatedItem(
                    name=name,
                    total_quantity=quantity,
                    unit=unit or None,
                    category=category,
                    source_recipes=recipes,
                )
            )

    logger.debug(f"Consolidated {line_count} ingredient lines into {len(items)} grocery items")
    return items

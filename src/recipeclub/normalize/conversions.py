"""Static conversion tables used for cross-unit grocery math.

Every ratio the consolidation step applies lives here. The per-ingredient
ratios are kitchen rules of thumb (a medium onion chops to about a cup), not
nutritional data.
"""

from dataclasses import dataclass, field

# =============================================================================
# Unit Families
# =============================================================================

# Volume conversions (base unit: tsp)
VOLUME_TO_TSP: dict[str, float] = {
    "tsp": 1.0,
    "tbsp": 3.0,
    "cup": 48.0,
    "ml": 1 / 4.92892,
    "liter": 1000 / 4.92892,
}

# Weight conversions (base unit: oz)
WEIGHT_TO_OZ: dict[str, float] = {
    "oz": 1.0,
    "lb": 16.0,
    "g": 1 / 28.35,
    "kg": 1000 / 28.35,
}

# Ingredient-specific discrete units
HOUSEHOLD_UNITS: frozenset[str] = frozenset(
    {
        "clove",
        "head",
        "stalk",
        "rib",
        "strip",
        "slice",
        "ear",
        "bunch",
        "can",
        "bottle",
        "pinch",
        "dash",
        "sprig",
        "piece",
    }
)

METRIC_UNITS: frozenset[str] = frozenset({"ml", "liter", "g", "kg"})

# Display ladders, largest first. Metric units are converted onto these.
VOLUME_LADDER: tuple[str, ...] = ("cup", "tbsp", "tsp")
WEIGHT_LADDER: tuple[str, ...] = ("lb", "oz")

# Minimum quantity a ladder unit needs before it is chosen for display
UPGRADE_THRESHOLDS: dict[str, float] = {
    "cup": 0.5,
    "lb": 1.0,
}
DEFAULT_UPGRADE_THRESHOLD = 1.0

# Share of the largest ladder unit a same-unit total needs before it moves up
SAME_UNIT_UPGRADE = 0.5


# =============================================================================
# Per-Ingredient Ratios
# =============================================================================


@dataclass(frozen=True)
class CountRatio:
    """
    How an ingredient is counted when it is bought.

    `unit` is the natural unit (None for whole items like onions). When
    `per_unit` and `ratio_unit` are set, one natural unit equals `per_unit`
    of `ratio_unit`, which lets volume or weight amounts fold into the count.
    `aliases` are household units that mean the same thing as `unit`.
    """

    unit: str | None = None
    per_unit: float | None = None
    ratio_unit: str | None = None
    aliases: frozenset[str] = field(default_factory=frozenset)


COUNT_RATIO: dict[str, CountRatio] = {
    "onion": CountRatio(per_unit=1.0, ratio_unit="cup"),
    "bell pepper": CountRatio(per_unit=1.0, ratio_unit="cup"),
    "carrot": CountRatio(per_unit=0.5, ratio_unit="cup"),
    "zucchini": CountRatio(per_unit=1.25, ratio_unit="cup"),
    "celery": CountRatio(
        unit="stalk", per_unit=0.5, ratio_unit="cup", aliases=frozenset({"rib"})
    ),
    "garlic": CountRatio(unit="clove", per_unit=1.0, ratio_unit="tsp"),
    "potato": CountRatio(per_unit=0.5, ratio_unit="lb"),
    "broccoli": CountRatio(unit="head", per_unit=1.25, ratio_unit="lb"),
    "bacon": CountRatio(unit="strip", aliases=frozenset({"slice"})),
    "corn": CountRatio(unit="ear"),
}

# Cups in one standard can (14.5 oz broth, 13.5 oz coconut milk).
# Keys are canonical names, so "<x> broth" is listed as "<x> stock".
CAN_RATIO: dict[str, float] = {
    "chicken stock": 1.8125,
    "low sodium chicken stock": 1.8125,
    "beef stock": 1.8125,
    "vegetable stock": 1.8125,
    "coconut milk": 1.75,
}

GARLIC_HEAD_THRESHOLD = 10


@dataclass(frozen=True)
class BulkConversion:
    """Swap a count unit for a larger one once the total passes a threshold."""

    from_unit: str
    to_unit: str
    ratio: float
    threshold: float


BULK_CONVERSIONS: dict[str, BulkConversion] = {
    "garlic": BulkConversion(
        from_unit="clove",
        to_unit="head",
        ratio=GARLIC_HEAD_THRESHOLD,
        threshold=GARLIC_HEAD_THRESHOLD,
    ),
}


def upgrade_threshold(unit: str) -> float:
    """Return the minimum display quantity for a ladder unit."""
    return UPGRADE_THRESHOLDS.get(unit, DEFAULT_UPGRADE_THRESHOLD)

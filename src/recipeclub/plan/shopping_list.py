"""Shopping list display: quantities, item text, category grouping and CSV export."""

import csv
import io
from collections.abc import Iterable

from recipeclub.logging_config import get_logger
from recipeclub.models import CATEGORY_ORDER, GROCERY_CATEGORIES, ConsolidatedItem, GroceryCategory
from recipeclub.normalize.names import Rule
from recipeclub.schemas import SmartGroceryItem

logger = get_logger(__name__)

GroceryItem = ConsolidatedItem | SmartGroceryItem

CSV_HEADER = ["Category", "Item", "Quantity", "Unit", "Recipes"]

FRACTION_TOLERANCE = 0.02

FRACTION_MAP: list[tuple[float, str]] = [
    (0.125, "1/8"),
    (0.25, "1/4"),
    (0.333, "1/3"),
    (0.375, "3/8"),
    (0.5, "1/2"),
    (0.625, "5/8"),
    (0.667, "2/3"),
    (0.75, "3/4"),
    (0.875, "7/8"),
]

# Uncountable last words; "2 cups flour", never "flours"
MASS_NOUNS: frozenset[str] = frozenset(
    {
        "flour", "sugar", "salt", "rice", "water", "milk", "butter", "oil",
        "garlic", "ginger", "chicken", "beef", "pork", "lamb", "turkey", "fish",
        "salmon", "tuna", "shrimp", "pasta", "spaghetti", "penne", "macaroni",
        "bread", "cheese", "cream", "honey", "mustard", "vinegar", "broth",
        "stock", "cornstarch", "cornmeal", "cilantro", "parsley", "basil",
        "oregano", "thyme", "rosemary", "dill", "cinnamon", "paprika", "cumin",
        "turmeric", "nutmeg", "lettuce", "spinach", "kale", "cabbage", "celery",
        "broccoli", "cauliflower", "corn", "bacon", "sausage", "ham",
        "chocolate", "cocoa", "coffee", "tea", "juice", "wine", "beer",
        "mayonnaise", "ketchup", "sriracha", "tahini", "hummus", "pesto",
        "couscous", "quinoa", "oatmeal", "granola", "yogurt", "tofu", "tempeh",
        "seitan", "coriander", "sage", "tarragon", "powder", "sauce", "paste",
        "soy", "mint", "wheat", "sumac", "breadcrumbs", "flakes", "half",
        "cayenne", "buttermilk", "soda", "extract", "vanilla", "ghee",
        "allspice", "arugula", "watercress", "asparagus", "paneer", "pancetta",
        "gelatin", "margarine", "seaweed", "molasses", "steak", "noodle",
    }
)  # fmt: skip

# Whole names that are uncountable even though their last word is not
MASS_NOUN_NAMES: frozenset[str] = frozenset(
    {
        "cayenne pepper",
        "pepper",
        "half and half",
        "garam masala",
        "tandoori masala",
        "italian seasoning",
        "kasuri methi",
        "gochujang",
        "pomegranate molasses",
        "urad dal",
        "white hominy",
    }
)

ABBREVIATION_UNITS: frozenset[str] = frozenset({"tsp", "tbsp", "oz", "lb", "g", "kg", "ml"})

# Units that read after the name: "5 celery stalks", not "5 stalks celery"
NAME_FIRST_UNITS: frozenset[str] = frozenset(
    {"stalk", "strip", "ear", "clove", "head", "bunch", "sprig", "piece", "slice", "rib"}
)

O_ES_WORDS: frozenset[str] = frozenset({"potato", "tomato", "hero"})

PLURAL_RULES: list[Rule] = [
    (lambda s: s.endswith("leaf"), lambda s: s[: -len("leaf")] + "leaves"),
    (lambda s: s.endswith(("s", "sh", "ch")), lambda s: s + "es"),
    (lambda s: len(s) > 1 and s.endswith("y") and s[-2] not in "aeiou", lambda s: s[:-1] + "ies"),
    (
        lambda s: s.endswith("o"),
        lambda s: s + ("es" if s.split()[-1] in O_ES_WORDS else "s"),
    ),
]


def decimal_to_fraction(value: float) -> str:
    """
    Render a quantity the way a recipe card would.

    Examples:
        2.0 -> "2"
        0.333 -> "1/3"
        1.5 -> "1 1/2"
        0.15 -> "0.15"
    """
    if value == int(value):
        return str(int(value))

    whole = int(value // 1)
    remainder = value - whole

    for target, fraction in FRACTION_MAP:
        if abs(remainder - target) < FRACTION_TOLERANCE:
            return f"{whole} {fraction}" if whole > 0 else fraction

    return f"{value:.2f}".rstrip("0").rstrip(".")


def pluralize(name: str) -> str:
    """Pluralize an English noun phrase by its last word."""
    for predicate, transform in PLURAL_RULES:
        if predicate(name):
            return transform(name)
    return name + "s"


def is_mass_noun(name: str) -> bool:
    return name in MASS_NOUN_NAMES or name.split(" ")[-1] in MASS_NOUNS


def _format_unit(unit: str, quantity: float | None, name_first: bool) -> str:
    if quantity is None or unit in ABBREVIATION_UNITS:
        return unit
    # "1 garlic clove" but "1/2 cup mushrooms"
    needs_plural = quantity != 1 if name_first else quantity > 1
    return pluralize(unit) if needs_plural else unit


def format_grocery_item(item: GroceryItem) -> str:
    """
    Render one shopping list line.

    Examples:
        ConsolidatedItem("flour", 2, "cup") -> "2 cups flour"
        ConsolidatedItem("celery", 5, "stalk") -> "5 celery stalks"
        ConsolidatedItem("egg", 3) -> "3 eggs"
        ConsolidatedItem("salt") -> "salt"
    """
    quantity = item.total_quantity
    unit = item.unit
    parts: list[str] = []

    if quantity is not None:
        parts.append(decimal_to_fraction(quantity))

    if unit and unit in NAME_FIRST_UNITS:
        parts.append(item.name)
        parts.append(_format_unit(unit, quantity, name_first=True))
        return " ".join(parts)

    if unit:
        parts.append(_format_unit(unit, quantity, name_first=False))

    countable = quantity is not None and not is_mass_noun(item.name)
    if countable and (unit or quantity != 1):
        parts.append(pluralize(item.name))
    else:
        parts.append(item.name)

    return " ".join(parts)


def group_by_category(
    items: Iterable[GroceryItem],
) -> dict[GroceryCategory, list[GroceryItem]]:
    """Bucket items by store section in display order, dropping empty sections."""
    buckets: dict[GroceryCategory, list[GroceryItem]] = {
        category: [] for category in CATEGORY_ORDER
    }
    for item in items:
        buckets[GroceryCategory.coerce(item.category)].append(item)
    return {category: grouped for category, grouped in buckets.items() if grouped}


def generate_csv(grouped: dict[GroceryCategory, list[GroceryItem]]) -> str:
    """
    Export a grouped shopping list as CSV.

    One row per item with the category display label, the quantity as a
    fraction string and the source recipes joined by "; ". No trailing
    newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    rows = 0
    for category, items in grouped.items():
        label = GROCERY_CATEGORIES[category]
        for item in items:
            quantity = (
                "" if item.total_quantity is None else decimal_to_fraction(item.total_quantity)
            )
            writer.writerow(
                [label, item.name, quantity, item.unit or "", "; ".join(item.source_recipes)]
            )
            rows += 1

    logger.debug(f"Exported {rows} grocery rows to CSV")
    return buffer.getvalue().removesuffix("\n")

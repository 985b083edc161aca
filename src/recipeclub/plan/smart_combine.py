"""Best-effort smart combination through the external combination service."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from pydantic import ValidationError

from recipeclub.connectors import CombineServiceConnector, ConnectorError
from recipeclub.logging_config import get_logger
from recipeclub.models import ConsolidatedItem, IngredientLine
from recipeclub.plan.consolidate import combine_ingredients
from recipeclub.plan.shopping_list import decimal_to_fraction
from recipeclub.schemas import PreCombinedItem, SmartGroceryItem

logger = get_logger(__name__)


@dataclass(frozen=True)
class SmartCombineOk:
    """The service returned a usable item list."""

    items: list[SmartGroceryItem]


@dataclass(frozen=True)
class SmartCombineSkipped:
    """The service is not configured or declined to combine."""

    reason: str


@dataclass(frozen=True)
class SmartCombineFailed:
    """The call failed or the response was unusable."""

    reason: str


SmartCombineResult = SmartCombineOk | SmartCombineSkipped | SmartCombineFailed


def build_pre_combined(items: Iterable[ConsolidatedItem]) -> list[PreCombinedItem]:
    """Serialize locally consolidated items for the combination service."""
    return [
        PreCombinedItem(
            name=item.name,
            quantity=(
                decimal_to_fraction(item.total_quantity)
                if item.total_quantity is not None
                else None
            ),
            unit=item.unit or None,
            category=item.category,
            source_recipes=list(item.source_recipes),
        )
        for item in items
    ]


async def smart_combine_result(
    lines: Iterable[IngredientLine],
    recipe_names: Mapping[str, str],
    connector: CombineServiceConnector | None = None,
) -> SmartCombineResult:
    """
    Consolidate locally, then ask the combination service for a better merge.

    Args:
        lines: Ingredient lines from every recipe of an event.
        recipe_names: Recipe ID to display name lookup.
        connector: Service client. A default one is created (and closed)
            when omitted.

    Returns:
        SmartCombineOk with the service's items, otherwise SmartCombineSkipped
        or SmartCombineFailed. Nothing is raised for service problems.
    """
    owns_connector = connector is None
    if connector is None:
        connector = CombineServiceConnector()

    if not connector.is_available:
        return SmartCombineSkipped("combination service is not configured")

    local_items = combine_ingredients(lines, recipe_names)
    pre_combined = build_pre_combined(local_items)

    try:
        data = await connector.combine(pre_combined)
    except ConnectorError as e:
        logger.warning(f"Smart combine failed, falling back to local result: {e}")
        return SmartCombineFailed(str(e))
    finally:
        if owns_connector:
            await connector.close()

    if data.get("skipped"):
        logger.info("Combination service skipped the request")
        return SmartCombineSkipped("combination service skipped the request")

    raw_items = data.get("items")
    if not isinstance(raw_items, list):
        logger.warning("Smart combine response has no item list")
        return SmartCombineFailed("response has no items")

    try:
        items = [SmartGroceryItem.model_validate(raw) for raw in raw_items]
    except ValidationError as e:
        logger.warning(f"Smart combine returned invalid items: {e.error_count()} errors")
        return SmartCombineFailed("response items failed validation")

    logger.info(f"Smart combine reduced {len(pre_combined)} items to {len(items)}")
    return SmartCombineOk(items)


async def smart_combine(
    lines: Iterable[IngredientLine],
    recipe_names: Mapping[str, str],
    connector: CombineServiceConnector | None = None,
) -> list[SmartGroceryItem] | None:
    """Return the service's items, or None when the caller should use the local result."""
    result = await smart_combine_result(lines, recipe_names, connector)
    if isinstance(result, SmartCombineOk):
        return result.items
    return None

"""API routes for building an event's grocery list."""

import asyncio
from collections.abc import AsyncIterator
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field

from recipeclub.config import get_settings
from recipeclub.connectors import CombineServiceConnector
from recipeclub.logging_config import LoggingContext, get_logger
from recipeclub.models import GROCERY_CATEGORIES, GroceryCategory, IngredientLine
from recipeclub.plan import (
    combine_ingredients,
    filter_pantry_items,
    filter_smart_pantry_items,
    format_grocery_item,
    generate_csv,
    group_by_category,
    smart_combine,
)
from recipeclub.plan.shopping_list import GroceryItem

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery", tags=["grocery"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class IngredientLineSchema(BaseModel):
    """One extracted ingredient of one recipe."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_id: str = Field(alias="recipeId")
    name: str
    quantity: float | None = Field(None, ge=0)
    unit: str | None = None
    category: str | None = Field(None, description="Extractor's category guess")

    def to_line(self) -> IngredientLine:
        return IngredientLine(
            recipe_id=self.recipe_id,
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            category=self.category,
        )


class GroceryRequest(BaseModel):
    """Ingredients of every recipe in an event, plus the cook's pantry."""

    model_config = ConfigDict(populate_by_name=True)

    event_id: str | None = Field(None, alias="eventId")
    ingredients: list[IngredientLineSchema] = Field(default_factory=list)
    recipe_names: dict[str, str] = Field(default_factory=dict, alias="recipeNames")
    pantry: list[str] = Field(default_factory=list, description="Ingredient names to leave off")

    def lines(self) -> list[IngredientLine]:
        return [ingredient.to_line() for ingredient in self.ingredients]


class GroceryItemResponse(BaseModel):
    """A shopping list entry with its display text."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    total_quantity: float | None = Field(None, alias="totalQuantity")
    unit: str | None = None
    category: GroceryCategory
    source_recipes: list[str] = Field(default_factory=list, alias="sourceRecipes")
    display: str


class CategoryGroupResponse(BaseModel):
    """Items of one store section."""

    category: GroceryCategory
    label: str
    items: list[GroceryItemResponse]


class GroceryListResponse(BaseModel):
    """Grouped shopping list."""

    model_config = ConfigDict(populate_by_name=True)

    source: Literal["local", "smart"]
    item_count: int = Field(alias="itemCount")
    categories: list[CategoryGroupResponse]


# =============================================================================
# Dependencies
# =============================================================================


async def get_combine_connector() -> AsyncIterator[CombineServiceConnector]:
    """Provide a combination service client for the duration of a request."""
    connector = CombineServiceConnector()
    try:
        yield connector
    finally:
        await connector.close()


def _build_response(
    items: list[GroceryItem], source: Literal["local", "smart"]
) -> GroceryListResponse:
    grouped = group_by_category(items)
    categories = [
        CategoryGroupResponse(
            category=category,
            label=GROCERY_CATEGORIES[category],
            items=[
                GroceryItemResponse(
                    name=item.name,
                    total_quantity=item.total_quantity,
                    unit=item.unit,
                    category=category,
                    source_recipes=list(item.source_recipes),
                    display=format_grocery_item(item),
                )
                for item in grouped_items
            ],
        )
        for category, grouped_items in grouped.items()
    ]
    return GroceryListResponse(
        source=source,
        item_count=sum(len(group.items) for group in categories),
        categories=categories,
    )


def _local_items(request: GroceryRequest) -> list[GroceryItem]:
    items = combine_ingredients(request.lines(), request.recipe_names)
    return filter_pantry_items(items, request.pantry)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/combine", response_model=GroceryListResponse)
async def combine_grocery_list(request: GroceryRequest) -> GroceryListResponse:
    """Consolidate ingredients with the local rules and group them by store section."""
    with LoggingContext(event_id=request.event_id):
        logger.info(f"Combining {len(request.ingredients)} ingredient lines")
        return _build_response(_local_items(request), source="local")


@router.post("/csv")
async def export_grocery_csv(request: GroceryRequest) -> Response:
    """Export the locally consolidated grocery list as CSV."""
    with LoggingContext(event_id=request.event_id):
        grouped = group_by_category(_local_items(request))
        content = generate_csv(grouped)
        logger.info(f"Exported grocery list with {sum(map(len, grouped.values()))} items")

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="grocery-list.csv"'},
    )


@router.post("/smart-combine", response_model=GroceryListResponse)
async def smart_combine_grocery_list(
    request: GroceryRequest,
    connector: Annotated[CombineServiceConnector, Depends(get_combine_connector)],
) -> GroceryListResponse:
    """
    Consolidate ingredients through the combination service.

    Falls back to the local result when the service is not configured,
    declines, fails or does not answer within the configured deadline.
    """
    settings = get_settings()

    with LoggingContext(event_id=request.event_id):
        lines = request.lines()
        try:
            smart_items = await asyncio.wait_for(
                smart_combine(lines, request.recipe_names, connector),
                timeout=settings.smart_combine_deadline,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Smart combine exceeded {settings.smart_combine_deadline}s, using local result"
            )
            smart_items = None

        if smart_items is None:
            return _build_response(_local_items(request), source="local")

        items = filter_smart_pantry_items(smart_items, request.pantry)
        return _build_response(items, source="smart")

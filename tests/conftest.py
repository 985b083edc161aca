"""Pytest configuration and shared fixtures."""

import pytest

from recipeclub.config import get_settings
from recipeclub.models import ConsolidatedItem, GroceryCategory, IngredientLine

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Keep the environment from leaking a real combination service into tests."""
    monkeypatch.setenv("COMBINE_SERVICE_URL", "")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Ingredient Fixtures
# =============================================================================


@pytest.fixture
def recipe_names():
    """Recipe ID to display name lookup."""
    return {"r1": "Recipe A", "r2": "Recipe B", "r3": "Recipe C"}


@pytest.fixture
def make_line():
    """Factory for ingredient lines."""

    def _make(
        name: str,
        quantity: float | None = None,
        unit: str | None = None,
        recipe_id: str = "r1",
        category: str | None = "other",
    ) -> IngredientLine:
        return IngredientLine(
            recipe_id=recipe_id,
            name=name,
            quantity=quantity,
            unit=unit,
            category=category,
        )

    return _make


@pytest.fixture
def make_item():
    """Factory for consolidated items."""

    def _make(
        name: str,
        total_quantity: float | None = None,
        unit: str | None = None,
        category: GroceryCategory = GroceryCategory.OTHER,
        source_recipes: tuple[str, ...] = ("Recipe A",),
    ) -> ConsolidatedItem:
        return ConsolidatedItem(
            name=name,
            total_quantity=total_quantity,
            unit=unit,
            category=category,
            source_recipes=source_recipes,
        )

    return _make


@pytest.fixture
def event_ingredients():
    """Ingredient lines of a three-recipe cooking club event."""
    return [
        IngredientLine("r1", "Yellow Onions", 2, None, "produce"),
        IngredientLine("r1", "garlic cloves", 3, "cloves", "produce"),
        IngredientLine("r1", "olive oil", 2, "tablespoons", "condiments"),
        IngredientLine("r1", "salt", None, None, "spices"),
        IngredientLine("r2", "onion", 0.5, "cup", "produce"),
        IngredientLine("r2", "Minced Garlic", 1, "tbsp", "produce"),
        IngredientLine("r2", "extra virgin olive oil", 1, "cup", "pantry"),
        IngredientLine("r2", "chicken broth", 2, "cans", "pantry"),
        IngredientLine("r3", "chicken stock", 1, "cup", "pantry"),
        IngredientLine("r3", "eggs", 3, None, "dairy"),
    ]

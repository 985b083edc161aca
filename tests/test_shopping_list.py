"""Unit tests for shopping list display, grouping and CSV export."""

import pytest

from recipeclub.models import GroceryCategory
from recipeclub.plan.shopping_list import (
    CSV_HEADER,
    decimal_to_fraction,
    format_grocery_item,
    generate_csv,
    group_by_category,
    pluralize,
)
from recipeclub.schemas import SmartGroceryItem, parse_quantity

# =============================================================================
# Quantity Display Tests
# =============================================================================


class TestDecimalToFraction:
    """Tests for decimal_to_fraction function."""

    def test_integers(self):
        """Test that whole numbers render bare."""
        assert decimal_to_fraction(0) == "0"
        assert decimal_to_fraction(2) == "2"
        assert decimal_to_fraction(3.0) == "3"

    def test_simple_fractions(self):
        """Test eighths and thirds."""
        assert decimal_to_fraction(0.5) == "1/2"
        assert decimal_to_fraction(0.25) == "1/4"
        assert decimal_to_fraction(0.333) == "1/3"
        assert decimal_to_fraction(2 / 3) == "2/3"
        assert decimal_to_fraction(0.125) == "1/8"

    def test_mixed_numbers(self):
        """Test whole plus fraction."""
        assert decimal_to_fraction(1.5) == "1 1/2"
        assert decimal_to_fraction(1.333) == "1 1/3"
        assert decimal_to_fraction(2.75) == "2 3/4"

    def test_tolerance(self):
        """Test that values within 0.02 of a fraction snap to it."""
        assert decimal_to_fraction(0.26) == "1/4"
        assert decimal_to_fraction(0.49) == "1/2"

    def test_decimals(self):
        """Test that other values render as trimmed decimals."""
        assert decimal_to_fraction(0.15) == "0.15"
        assert decimal_to_fraction(1.43) == "1.43"
        assert decimal_to_fraction(2.99) == "2.99"
        assert decimal_to_fraction(1.1) == "1.1"

    @pytest.mark.parametrize("value", [0.1, 0.26, 0.4, 0.49, 0.7, 1.2, 2.9, 3.05])
    def test_round_trip(self, value):
        """Test that parsing the display string lands within tolerance."""
        assert parse_quantity(decimal_to_fraction(value)) == pytest.approx(value, abs=0.02)


class TestPluralize:
    """Tests for the pluralization rule chain."""

    def test_rules(self):
        """Test each rule."""
        assert pluralize("egg") == "eggs"
        assert pluralize("bay leaf") == "bay leaves"
        assert pluralize("radish") == "radishes"
        assert pluralize("peach") == "peaches"
        assert pluralize("cherry") == "cherries"
        assert pluralize("turkey") == "turkeys"
        assert pluralize("tomato") == "tomatoes"
        assert pluralize("avocado") == "avocados"


# =============================================================================
# Item Display Tests
# =============================================================================


class TestFormatGroceryItem:
    """Tests for format_grocery_item function."""

    @pytest.mark.parametrize(
        ("name", "quantity", "unit", "expected"),
        [
            ("flour", 2, "cup", "2 cups flour"),
            ("butter", 1.5, "tbsp", "1 1/2 tbsp butter"),
            ("salt", None, None, "salt"),
            ("egg", 3, None, "3 eggs"),
            ("egg", 1, None, "1 egg"),
            ("onion", 4, None, "4 onions"),
            ("tomato", 2, None, "2 tomatoes"),
            ("avocado", 3, None, "3 avocados"),
            ("bay leaf", 3, None, "3 bay leaves"),
            ("cherry", 5, None, "5 cherries"),
            ("radishe", 3, None, "3 radishes"),
            ("peache", 4, None, "4 peaches"),
        ],
    )
    def test_basic(self, make_item, name, quantity, unit, expected):
        """Test quantity, unit and name ordering."""
        assert format_grocery_item(make_item(name, quantity, unit)) == expected

    @pytest.mark.parametrize(
        ("name", "quantity", "unit", "expected"),
        [
            ("egg", 3, "cup", "3 cups eggs"),
            ("black bean", 2, "cup", "2 cups black beans"),
            ("blueberry", 1, "cup", "1 cup blueberries"),
            ("mushroom", 0.5, "cup", "1/2 cup mushrooms"),
        ],
    )
    def test_countable_with_unit_always_plural(self, make_item, name, quantity, unit, expected):
        """Test that countable names pluralize after a unit, even for one."""
        assert format_grocery_item(make_item(name, quantity, unit)) == expected

    @pytest.mark.parametrize(
        ("name", "quantity", "unit", "expected"),
        [
            ("chicken", 2, "lb", "2 lb chicken"),
            ("rice noodle", 8, "oz", "8 oz rice noodle"),
            ("cumin powder", 2, "tsp", "2 tsp cumin powder"),
            ("fish sauce", 3, "tbsp", "3 tbsp fish sauce"),
            ("thai green curry paste", 4, "tbsp", "4 tbsp thai green curry paste"),
            ("dark soy", 2, "tsp", "2 tsp dark soy"),
            ("baking soda", 2, "tsp", "2 tsp baking soda"),
            ("vanilla extract", 3, "tsp", "3 tsp vanilla extract"),
            ("red pepper flakes", 2, "tsp", "2 tsp red pepper flakes"),
            ("red pepper flakes", 1, None, "1 red pepper flakes"),
            ("half and half", 2, "cup", "2 cups half and half"),
            ("cayenne pepper", 2, "tsp", "2 tsp cayenne pepper"),
            ("pepper", 2, "tsp", "2 tsp pepper"),
            ("bell pepper", 3, None, "3 bell peppers"),
        ],
    )
    def test_mass_nouns(self, make_item, name, quantity, unit, expected):
        """Test that mass nouns never pluralize."""
        assert format_grocery_item(make_item(name, quantity, unit)) == expected

    @pytest.mark.parametrize(
        ("name", "quantity", "unit", "expected"),
        [
            ("celery", 5, "stalk", "5 celery stalks"),
            ("bacon", 13, "strip", "13 bacon strips"),
            ("corn", 4, "ear", "4 corn ears"),
            ("garlic", 1, "clove", "1 garlic clove"),
            ("garlic", 2, "head", "2 garlic heads"),
            ("parsley", None, "bunch", "parsley bunch"),
        ],
    )
    def test_name_first_units(self, make_item, name, quantity, unit, expected):
        """Test household units that read after the name."""
        assert format_grocery_item(make_item(name, quantity, unit)) == expected

    def test_unit_without_quantity(self, make_item):
        """Test that a unit with no amount still shows the unit."""
        assert format_grocery_item(make_item("olive oil", None, "tbsp")) == "tbsp olive oil"

    def test_abbreviations_never_pluralize(self, make_item):
        """Test that abbreviated units stay singular."""
        assert format_grocery_item(make_item("vanilla", 0.25, "tsp")) == "1/4 tsp vanilla"
        assert format_grocery_item(make_item("sugar", 1 / 3, "cup")) == "1/3 cup sugar"
        assert format_grocery_item(make_item("beef", 3, "lb")) == "3 lb beef"

    def test_smart_item(self):
        """Test that items from the combination service render the same way."""
        item = SmartGroceryItem(
            name="Cherry Tomato", totalQuantity=2, unit="cup", category="produce"
        )
        assert format_grocery_item(item) == "2 cups cherry tomatoes"


# =============================================================================
# Grouping and CSV Tests
# =============================================================================


class TestGroupByCategory:
    """Tests for group_by_category function."""

    def test_order_and_empty_buckets(self, make_item):
        """Test fixed category order, no empty buckets and stable items."""
        items = [
            make_item("salt", category=GroceryCategory.SPICES),
            make_item("tomato", 2, category=GroceryCategory.PRODUCE),
            make_item("basil", 1, "cup", category=GroceryCategory.PRODUCE),
            make_item("flour", 2, "cup", category=GroceryCategory.PANTRY),
        ]
        grouped = group_by_category(items)

        assert list(grouped) == [
            GroceryCategory.PRODUCE,
            GroceryCategory.PANTRY,
            GroceryCategory.SPICES,
        ]
        assert [item.name for item in grouped[GroceryCategory.PRODUCE]] == ["tomato", "basil"]

    def test_empty(self):
        """Test that no items give no groups."""
        assert group_by_category([]) == {}


class TestGenerateCsv:
    """Tests for generate_csv function."""

    def test_header_only(self):
        """Test an empty list."""
        assert generate_csv({}) == ",".join(CSV_HEADER)

    def test_rows(self, make_item):
        """Test one row per item in category order."""
        grouped = group_by_category(
            [
                make_item("flour", 2, "cup", GroceryCategory.PANTRY, ("Recipe A", "Recipe B")),
                make_item("tomato", 3, None, GroceryCategory.PRODUCE),
                make_item("salt", None, None, GroceryCategory.SPICES),
            ]
        )
        assert generate_csv(grouped).split("\n") == [
            "Category,Item,Quantity,Unit,Recipes",
            "Produce,tomato,3,,Recipe A",
            "Pantry,flour,2,cup,Recipe A; Recipe B",
            "Spices,salt,,,Recipe A",
        ]

    def test_no_trailing_newline(self, make_item):
        """Test that the export does not end with a newline."""
        csv_text = generate_csv(group_by_category([make_item("egg", 3)]))
        assert not csv_text.endswith("\n")

    def test_fractions(self, make_item):
        """Test that quantities are written as fractions."""
        grouped = group_by_category(
            [
                make_item("vanilla", 0.25, "tsp", GroceryCategory.SPICES),
                make_item("butter", 1.5, "tbsp", GroceryCategory.DAIRY),
            ]
        )
        rows = generate_csv(grouped).split("\n")
        assert "Dairy,butter,1 1/2,tbsp,Recipe A" in rows
        assert "Spices,vanilla,1/4,tsp,Recipe A" in rows

    def test_commas_are_quoted(self, make_item):
        """Test that fields containing commas are quoted."""
        grouped = group_by_category(
            [
                make_item("salt, pepper"),
                make_item("flour", 1, "cup", source_recipes=("Recipe A, The Best",)),
            ]
        )
        rows = generate_csv(grouped).split("\n")
        assert rows[1] == 'Other,"salt, pepper",,,Recipe A'
        assert rows[2] == 'Other,flour,1,cup,"Recipe A, The Best"'

    def test_protein_label(self, make_item):
        """Test that meat and seafood are exported under their display label."""
        grouped = group_by_category([make_item("shrimp", 1, "lb", GroceryCategory.MEAT_SEAFOOD)])
        assert generate_csv(grouped).split("\n")[1] == "Protein,shrimp,1,lb,Recipe A"

"""Unit tests for recipe_index.consolidator module."""

import pytest

from recipe_index.consolidator import (
    IngredientConsolidator,
    ParsedIngredient,
    format_quantity,
    parse_ingredient,
    parse_quantity,
    strip_modifiers,
)


class TestParseQuantity:
    """Tests for parse_quantity()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2", 2.0),
            ("1.5", 1.5),
            ("1/2", 0.5),
            ("1 1/2", 1.5),
            ("½", 0.5),
            ("1½", 1.5),
            (".25", 0.25),
            ("1-2", 1.0),
        ],
    )
    def test_parses(self, text, expected):
        assert parse_quantity(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "a pinch", "1/0"])
    def test_unparseable(self, text):
        assert parse_quantity(text) is None


class TestFormatQuantity:
    """Tests for format_quantity()."""

    @pytest.mark.parametrize(
        ("quantity", "expected"),
        [(1.5, "1.5"), (2.0, "2"), (1 / 3, "0.333"), (0.25, "0.25")],
    )
    def test_format(self, quantity, expected):
        assert format_quantity(quantity) == expected


class TestStripModifiers:
    """Tests for strip_modifiers()."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("onion, diced", "onion"),
            ("onion, finely chopped", "onion"),
            ("thinly sliced red onion", "red onion"),
            ("garlic, minced", "garlic, minced"),
            ("cheddar, shredded, divided", "cheddar, divided"),
        ],
    )
    def test_strip(self, name, expected):
        """Preparation modifiers go; "minced" stays."""
        assert strip_modifiers(name) == expected


class TestParseIngredient:
    """Tests for parse_ingredient()."""

    def test_quantity_unit_name(self):
        """A plain measured line is split into its parts."""
        item = parse_ingredient("2 cups all-purpose flour", "r1")

        assert item.quantity == 2.0
        assert item.unit == "cup"
        assert item.name == "all-purpose flour"
        assert item.recipe_ids == ["r1"]

    def test_unit_aliases(self):
        """Unit spellings are canonicalized."""
        assert parse_ingredient("2 tablespoons olive oil").unit == "tbsp"
        assert parse_ingredient("1 Tbsp. olive oil").unit == "tbsp"
        assert parse_ingredient("3 cloves garlic").unit == "clove"

    def test_count_without_unit(self):
        """Counted items have no unit."""
        item = parse_ingredient("2 large eggs")
        assert item.quantity == 2.0
        assert item.unit is None
        assert item.name == "large eggs"

    def test_no_quantity(self):
        """Lines without a number keep their text as the name."""
        item = parse_ingredient("salt and pepper to taste")
        assert item.quantity is None
        assert item.unit is None
        assert item.name == "salt and pepper to taste"

    def test_simple_container(self):
        """A sized container is counted by container."""
        item = parse_ingredient("9 oz can of tomatoes", "r1")

        assert item.quantity == 1.0
        assert item.unit == "can"
        assert item.name == "tomatoes"
        assert item.notes == "9 oz"

    def test_parenthesized_container(self):
        """A count of sized containers keeps the count and the size."""
        item = parse_ingredient("2 (14.5 oz) cans diced tomatoes")

        assert item.quantity == 2.0
        assert item.unit == "can"
        assert item.name == "tomatoes"
        assert item.notes == "14.5 oz"
        assert item.display_text == "2 can tomatoes (14.5 oz)"

    def test_range_uses_first_bound(self):
        """Ranges resolve to their lower bound."""
        item = parse_ingredient("2-3 cups broth")
        assert item.quantity == 2.0
        assert item.unit == "cup"
        assert item.name == "broth"

    def test_bullet_removed(self):
        """Leading bullets are ignored but raw text is kept."""
        item = parse_ingredient("• ½ tsp salt")
        assert item.quantity == 0.5
        assert item.unit == "tsp"
        assert item.name == "salt"
        assert item.raw_text == "• ½ tsp salt"


class TestParsedIngredient:
    """Tests for ParsedIngredient properties."""

    def test_display_text(self):
        assert ParsedIngredient(raw_text="", name="flour", quantity=1.5, unit="cup").display_text == (
            "1.5 cup flour"
        )
        assert ParsedIngredient(raw_text="", name="salt").display_text == "salt"

    def test_group_key_separates_unquantified(self):
        """Quantified and unquantified lines never share a key."""
        counted = ParsedIngredient(raw_text="2 eggs", name="eggs", quantity=2.0)
        uncounted = ParsedIngredient(raw_text="eggs", name="Eggs")
        assert counted.group_key != uncounted.group_key


class TestIngredientConsolidator:
    """Tests for IngredientConsolidator.consolidate()."""

    @pytest.fixture
    def consolidator(self):
        return IngredientConsolidator()

    def test_sums_same_unit(self, consolidator):
        """Lines with the same name and unit are summed."""
        items = consolidator.consolidate([(["1 cup flour"], "r1"), (["1/2 cup flour"], "r2")])

        assert len(items) == 1
        assert items[0].quantity == pytest.approx(1.5)
        assert items[0].unit == "cup"
        assert items[0].name == "flour"
        assert items[0].recipe_ids == ["r1", "r2"]

    def test_different_units_kept_apart(self, consolidator):
        """Different units are not converted or merged."""
        items = consolidator.consolidate([(["1 cup milk", "200 ml milk"], "r1")])
        assert [(item.unit, item.quantity) for item in items] == [("cup", 1.0), ("ml", 200.0)]

    def test_case_insensitive_names(self, consolidator):
        """Names merge regardless of case; first casing is kept."""
        items = consolidator.consolidate(
            [(["2 tablespoons Olive Oil"], 1), (["1 tbsp olive oil"], 2)]
        )
        assert len(items) == 1
        assert items[0].name == "Olive Oil"
        assert items[0].quantity == 3.0
        assert items[0].recipe_ids == [1, 2]

    def test_modifiers_merge(self, consolidator):
        """Lines differing only by preparation merge."""
        items = consolidator.consolidate([(["1 onion, diced"], "a"), (["2 onion, chopped"], "b")])
        assert [item.display_text for item in items] == ["3 onion"]

    def test_containers_merge_notes(self, consolidator):
        """Containers of different sizes merge with both sizes noted."""
        items = consolidator.consolidate(
            [(["9 oz can of tomatoes"], "a"), (["15 oz can of tomatoes"], "b")]
        )
        assert len(items) == 1
        assert items[0].quantity == 2.0
        assert items[0].notes == "9 oz, 15 oz"

    def test_unquantified_not_merged_with_quantified(self, consolidator):
        """A bare name stays separate from a counted one."""
        items = consolidator.consolidate([(["2 eggs", "eggs"], "r1")])
        assert [item.quantity for item in items] == [2.0, None]

    def test_repeat_recipe_id_once(self, consolidator):
        """A recipe contributing twice is listed once."""
        items = consolidator.consolidate([(["1 cup sugar", "1 cup sugar"], "r1")])
        assert items[0].quantity == 2.0
        assert items[0].recipe_ids == ["r1"]

    def test_order_and_blanks(self, consolidator):
        """Output keeps first-seen order; blank lines are skipped."""
        items = consolidator.consolidate(
            [(["1 cup flour", "", "  ", "2 eggs"], "pancakes"), (["1/2 cup flour"], "crepes")]
        )
        assert [item.display_text for item in items] == ["1.5 cup flour", "2 eggs"]

    def test_empty(self, consolidator):
        assert consolidator.consolidate([]) == []

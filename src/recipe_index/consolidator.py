"""Shopping-list consolidation of ingredient lines.

Ingredient lines from several recipes are parsed into quantity, unit and
name, preparation modifiers that don't change what you buy are dropped, and
lines for the same thing in the same unit are summed.

Example:
    >>> consolidator = IngredientConsolidator()
    >>> items = consolidator.consolidate([
    ...     (["1 cup flour", "2 eggs"], "pancakes"),
    ...     (["1/2 cup flour"], "crepes"),
    ... ])
    >>> [item.display_text for item in items]
    ['1.5 cup flour', '2 eggs']
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

UNICODE_FRACTIONS: dict[str, float] = {
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
}

# Canonical unit for every spelling the parser accepts
UNIT_ALIASES: dict[str, str] = {
    "cup": "cup",
    "cups": "cup",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbsp": "tbsp",
    "tbs": "tbsp",
    "tbl": "tbsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tsp": "tsp",
    "fl oz": "fl oz",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    "ounce": "oz",
    "ounces": "oz",
    "oz": "oz",
    "pound": "lb",
    "pounds": "lb",
    "lb": "lb",
    "lbs": "lb",
    "gram": "g",
    "grams": "g",
    "g": "g",
    "kilogram": "kg",
    "kilograms": "kg",
    "kg": "kg",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "ml": "ml",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    "l": "l",
    "quart": "quart",
    "quarts": "quart",
    "qt": "quart",
    "pint": "pint",
    "pints": "pint",
    "pt": "pint",
    "gallon": "gallon",
    "gallons": "gallon",
    "gal": "gallon",
    "clove": "clove",
    "cloves": "clove",
    "can": "can",
    "cans": "can",
    "jar": "jar",
    "jars": "jar",
    "bottle": "bottle",
    "bottles": "bottle",
    "package": "package",
    "packages": "package",
    "pkg": "package",
    "pack": "pack",
    "packs": "pack",
    "box": "box",
    "boxes": "box",
    "bag": "bag",
    "bags": "bag",
    "pinch": "pinch",
    "pinches": "pinch",
    "dash": "dash",
    "dashes": "dash",
    "slice": "slice",
    "slices": "slice",
    "piece": "piece",
    "pieces": "piece",
    "bunch": "bunch",
    "bunches": "bunch",
    "stalk": "stalk",
    "stalks": "stalk",
    "head": "head",
    "heads": "head",
    "sprig": "sprig",
    "sprigs": "sprig",
    "stick": "stick",
    "sticks": "stick",
}

CONTAINERS = ("can", "jar", "bottle", "pack", "package", "box", "bag", "carton")
SIZE_UNITS = ("oz", "ounce", "ounces", "g", "ml", "lb", "lbs")

# Preparation states that don't change what is bought; "minced" is kept
STRIPPED_MODIFIERS = ("diced", "chopped", "shredded", "sliced", "cubed")
MODIFIER_ADVERBS = ("finely", "roughly", "coarsely", "thinly", "thickly", "freshly")

_FRACTION_CHARS = "".join(UNICODE_FRACTIONS)
_NUMBER = rf"(?:\d+\s+\d+/\d+|\d+/\d+|\d+\s*[{_FRACTION_CHARS}]|\d*\.\d+|\d+|[{_FRACTION_CHARS}])"
_QUANTITY = re.compile(rf"^(?P<qty>{_NUMBER})(?:\s*(?:-|–|to)\s*{_NUMBER})?\s*(?P<rest>.*)$")

_UNIT = re.compile(
    r"^(?P<unit>"
    + "|".join(re.escape(u) for u in sorted(UNIT_ALIASES, key=len, reverse=True))
    + r")\.?(?=\s|$)\s*(?:of\s+)?(?P<name>.*)$",
    re.IGNORECASE,
)

_SIZE_UNIT = "|".join(SIZE_UNITS)
_CONTAINER = "|".join(CONTAINERS)
_CONTAINER_LINE = re.compile(
    rf"^(?P<size>[\d./]+)\s*(?P<size_unit>{_SIZE_UNIT})\.?\s+(?P<container>{_CONTAINER})"
    r"(?:es|s)?\s+(?:of\s+)?(?P<name>.+)$",
    re.IGNORECASE,
)
_PAREN_CONTAINER_LINE = re.compile(
    rf"^(?P<qty>{_NUMBER})\s*\(\s*(?P<size>[\d./]+)\s*-?\s*(?P<size_unit>{_SIZE_UNIT})\.?\s*\)"
    rf"\s*(?P<container>{_CONTAINER})(?:es|s)?\s+(?:of\s+)?(?P<name>.+)$",
    re.IGNORECASE,
)

_MODIFIERS = re.compile(
    rf"\b(?:(?:{'|'.join(MODIFIER_ADVERBS)})\s+)?(?:{'|'.join(STRIPPED_MODIFIERS)})\b",
    re.IGNORECASE,
)
_BULLET = re.compile(r"^[•·\-*]\s*")
_COMMAS = re.compile(r"\s*,(?:\s*,)*\s*")
_SPACES = re.compile(r"\s+")


@dataclass
class ParsedIngredient:
    """One shopping-list line.

    Attributes:
        raw_text: Original ingredient line (first line of a merged group)
        name: Item name with modifiers stripped
        quantity: Numeric amount, if the line had one
        unit: Canonical unit or container type
        notes: Extra detail such as a container size
        recipe_ids: Recipes that contributed to this line, without repeats
    """

    raw_text: str
    name: str
    quantity: float | None = None
    unit: str | None = None
    notes: str | None = None
    recipe_ids: list[str | int] = field(default_factory=list)

    @property
    def group_key(self) -> tuple[str, str | None, bool]:
        """Items with equal keys are merged.

        Quantified and unquantified items of the same name never share a key.
        """
        return (self.name.lower(), self.unit, self.quantity is None)

    @property
    def display_text(self) -> str:
        """Render as a shopping-list line, e.g. ``1 can tomatoes (14.5 oz)``."""
        parts = []
        if self.quantity is not None:
            parts.append(format_quantity(self.quantity))
        if self.unit:
            parts.append(self.unit)
        parts.append(self.name)
        text = " ".join(parts)
        return f"{text} ({self.notes})" if self.notes else text


def format_quantity(quantity: float) -> str:
    """Format a quantity without trailing zeros (``1.5``, ``2``, ``0.333``)."""
    return f"{round(quantity, 3):g}"


def parse_quantity(text: str) -> float | None:
    """Parse an amount like ``2``, ``1.5``, ``1/2``, ``1 1/2``, ``½`` or ``1½``.

    Ranges (``1-2``) resolve to their first bound.
    """
    text = text.strip()
    if not text:
        return None

    match = re.match(rf"^{_NUMBER}", text)
    if not match:
        return None
    token = match.group(0)

    total = 0.0
    for fraction_char, value in UNICODE_FRACTIONS.items():
        if fraction_char in token:
            total += value
            token = token.replace(fraction_char, "")

    for part in token.split():
        if "/" in part:
            numerator, _, denominator = part.partition("/")
            if not numerator or not denominator or float(denominator) == 0:
                return None
            total += float(numerator) / float(denominator)
        else:
            total += float(part)
    return total


def strip_modifiers(name: str) -> str:
    """Remove preparation modifiers and tidy the leftover punctuation."""
    name = _MODIFIERS.sub("", name)
    name = _COMMAS.sub(", ", name)
    name = _SPACES.sub(" ", name)
    return name.strip(" ,")


def parse_ingredient(line: str, recipe_id: str | int | None = None) -> ParsedIngredient:
    """Parse one ingredient line.

    Sized containers ("9 oz can of tomatoes", "2 (14.5 oz) cans tomatoes")
    are counted by container, with the size kept in ``notes``.

    Args:
        line: Raw ingredient line
        recipe_id: Recipe the line belongs to

    Returns:
        Parsed ingredient; lines without a quantity keep their whole text as
        the name
    """
    raw_text = line.strip()
    text = _BULLET.sub("", raw_text)
    recipe_ids = [recipe_id] if recipe_id is not None else []

    container = _CONTAINER_LINE.match(text)
    if container:
        return ParsedIngredient(
            raw_text=raw_text,
            name=strip_modifiers(container.group("name")),
            quantity=1.0,
            unit=container.group("container").lower(),
            notes=f"{container.group('size')} {_size_unit(container.group('size_unit'))}",
            recipe_ids=recipe_ids,
        )

    container = _PAREN_CONTAINER_LINE.match(text)
    if container:
        return ParsedIngredient(
            raw_text=raw_text,
            name=strip_modifiers(container.group("name")),
            quantity=parse_quantity(container.group("qty")),
            unit=container.group("container").lower(),
            notes=f"{container.group('size')} {_size_unit(container.group('size_unit'))}",
            recipe_ids=recipe_ids,
        )

    quantity_match = _QUANTITY.match(text)
    if not quantity_match:
        return ParsedIngredient(raw_text=raw_text, name=strip_modifiers(text), recipe_ids=recipe_ids)

    quantity = parse_quantity(quantity_match.group("qty"))
    rest = quantity_match.group("rest")
    unit = None
    unit_match = _UNIT.match(rest)
    if unit_match and unit_match.group("name").strip():
        unit = UNIT_ALIASES[unit_match.group("unit").lower()]
        rest = unit_match.group("name")

    return ParsedIngredient(
        raw_text=raw_text,
        name=strip_modifiers(rest) or rest.strip(),
        quantity=quantity,
        unit=unit,
        recipe_ids=recipe_ids,
    )


def _size_unit(unit: str) -> str:
    return UNIT_ALIASES.get(unit.lower(), unit.lower())


class IngredientConsolidator:
    """Merges ingredient lists from several recipes into one shopping list."""

    def consolidate(
        self, recipes: Iterable[tuple[list[str], str | int]]
    ) -> list[ParsedIngredient]:
        """Merge ingredient lines from several recipes.

        Lines with the same name (case-insensitive) and unit are merged:
        quantities are summed, contributing recipe ids are unioned and
        distinct notes are joined. The first line's casing is kept and
        output follows first-seen order.

        Args:
            recipes: Pairs of (ingredient lines, recipe id)

        Returns:
            Consolidated shopping list
        """
        groups: dict[tuple[str, str | None, bool], ParsedIngredient] = {}

        for lines, recipe_id in recipes:
            for line in lines:
                if not line or not line.strip():
                    continue
                item = parse_ingredient(line, recipe_id)
                if not item.name:
                    logger.debug(f"Skipping ingredient without a name: {line!r}")
                    continue

                existing = groups.get(item.group_key)
                if existing is None:
                    groups[item.group_key] = item
                else:
                    _merge_into(existing, item)

        logger.info(f"Consolidated ingredients into {len(groups)} items")
        return list(groups.values())


def _merge_into(target: ParsedIngredient, item: ParsedIngredient) -> None:
    if item.quantity is not None:
        target.quantity = (target.quantity or 0.0) + item.quantity

    for recipe_id in item.recipe_ids:
        if recipe_id not in target.recipe_ids:
            target.recipe_ids.append(recipe_id)

    if item.notes:
        notes = target.notes.split(", ") if target.notes else []
        if item.notes not in notes:
            notes.append(item.notes)
        target.notes = ", ".join(notes)

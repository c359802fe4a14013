"""Schema.org JSON-LD recipe extraction.

Recipe sites embed machine-readable recipes in
``<script type="application/ld+json">`` blocks, but the producers disagree on
almost everything: the recipe may be a single object, one item of an array, or
buried in a ``@graph``; ``@type`` may be a string or a list; ingredients,
instructions and images each come in several shapes. This module accepts all
of them.

Example:
    >>> soup = BeautifulSoup(html, "html.parser")
    >>> data = StructuredDataExtractor().extract(soup)
    >>> data.title, data.prep_time_minutes
    ('Chocolate Cake', 15)
"""

from __future__ import annotations

import html
import json
import logging
from collections.abc import Iterator
from typing import Any, TypeAlias

from bs4 import BeautifulSoup, Tag

from ..exceptions import StructuredDataError
from ..models import ParsedRecipeData
from ..normalizers import parse_iso_duration, parse_servings, resolve_image_urls
from ..tags import resolve_cuisine, standardize_tags

logger = logging.getLogger(__name__)

JsonValue: TypeAlias = str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]

RECIPE_TYPE = "Recipe"
ARTICLE_TYPES = frozenset({"Article", "BlogPosting"})
RECIPE_FIELDS = ("recipeIngredient", "recipeInstructions")

# first present field wins when a list item is an object
TEXT_FIELDS = ("text", "name", "@value")

TAXONOMY_LINK_SELECTOR = "a[rel*=category], a[rel*=tag]"


def is_recipe_type(type_value: JsonValue) -> bool:
    """Check whether a ``@type`` value names a Recipe.

    ``@type`` may be a single string or an array of strings; element order
    does not matter.
    """
    if isinstance(type_value, str):
        return type_value == RECIPE_TYPE
    if isinstance(type_value, list):
        return RECIPE_TYPE in type_value
    return False


def is_recipe_bearing(obj: dict[str, JsonValue]) -> bool:
    """Check whether an object should be read as a recipe.

    True for objects typed Recipe, and for Article/BlogPosting objects that
    carry recipe fields anyway (a common mislabelling).
    """
    type_value = obj.get("@type")
    if is_recipe_type(type_value):
        return True

    if isinstance(type_value, str):
        types = {type_value}
    elif isinstance(type_value, list):
        types = {t for t in type_value if isinstance(t, str)}
    else:
        types = set()

    return bool(types & ARTICLE_TYPES) and any(field in obj for field in RECIPE_FIELDS)


def find_recipe_candidates(value: JsonValue) -> Iterator[dict[str, JsonValue]]:
    """Yield recipe-bearing objects from a parsed JSON-LD value in order.

    Handles a single object, an array of objects and a ``@graph`` container.
    """
    if isinstance(value, list):
        for item in value:
            yield from find_recipe_candidates(item)
    elif isinstance(value, dict):
        if is_recipe_bearing(value):
            yield value
        elif isinstance(value.get("@graph"), list):
            yield from find_recipe_candidates(value["@graph"])


def json_to_strings(value: JsonValue) -> list[str]:
    """Flatten a tag-like JSON field into a list of strings.

    - string: split on commas, trimmed, blanks dropped
    - array: strings kept, objects reduced to ``text``/``name``/``@value``,
      nested arrays flattened and re-joined with ", "
    - object: reduced the same way as an array item
    """
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]

    if isinstance(value, dict):
        text = _object_text(value)
        return [text] if text else []

    if isinstance(value, list):
        result: list[str] = []
        for item in value:
            if isinstance(item, str):
                text = _clean_text(item)
            elif isinstance(item, dict):
                text = _object_text(item)
            elif isinstance(item, list):
                text = ", ".join(json_to_strings(item))
            elif isinstance(item, int | float) and not isinstance(item, bool):
                text = str(item)
            else:
                text = None
            if text:
                result.append(text)
        return result

    return []


def parse_instructions(value: JsonValue) -> list[str]:
    """Flatten ``recipeInstructions`` into a list of step strings.

    HowToSection objects contribute their name followed by a colon as a
    pseudo-header, then their steps. Items of unknown shape are skipped.
    """
    if isinstance(value, str):
        return [line for line in (_clean_text(part) for part in value.splitlines()) if line]

    if isinstance(value, dict):
        return _instruction_object(value)

    if isinstance(value, list):
        steps: list[str] = []
        for item in value:
            if isinstance(item, str):
                text = _clean_text(item)
                if text:
                    steps.append(text)
            elif isinstance(item, dict):
                steps.extend(_instruction_object(item))
            elif isinstance(item, list):
                steps.extend(parse_instructions(item))
        return steps

    return []


def _instruction_object(obj: dict[str, JsonValue]) -> list[str]:
    type_value = obj.get("@type")
    types = type_value if isinstance(type_value, list) else [type_value]

    if "HowToSection" in types:
        steps: list[str] = []
        name = obj.get("name")
        if isinstance(name, str) and name.strip():
            steps.append(f"{_clean_text(name)}:")
        steps.extend(parse_instructions(obj.get("itemListElement")))
        return steps

    # HowToStep and untyped step objects: text, then name
    for key in ("text", "name"):
        text = obj.get(key)
        if isinstance(text, str) and _clean_text(text):
            return [_clean_text(text)]

    if isinstance(obj.get("itemListElement"), list):
        return parse_instructions(obj["itemListElement"])
    return []


def _object_text(obj: dict[str, JsonValue]) -> str | None:
    for key in TEXT_FIELDS:
        value = obj.get(key)
        if isinstance(value, str) and value.strip():
            return _clean_text(value)
    return None


def _clean_text(text: str) -> str:
    text = html.unescape(text)
    if "<" in text:
        text = BeautifulSoup(text, "html.parser").get_text(" ")
    return " ".join(text.split())


class StructuredDataExtractor:
    """Extracts a recipe from embedded JSON-LD blocks.

    Scans every structured-data block in document order and reads the first
    recipe-bearing object found. A malformed block is logged and skipped; it
    never prevents a later valid block from being used.

    Attributes:
        name: Tier name used in diagnostics
        standardize: Run the tag normalizer over extracted tags
    """

    name = "structured_data"

    def __init__(self, standardize: bool = True) -> None:
        self.standardize = standardize

    def extract(self, document: BeautifulSoup) -> ParsedRecipeData | None:
        """Extract the first JSON-LD recipe in the document.

        Args:
            document: Parsed HTML page

        Returns:
            Recipe data, or None if no block contains a recipe
        """
        scripts = document.find_all("script", attrs={"type": "application/ld+json"})
        logger.debug(f"Found {len(scripts)} JSON-LD blocks")

        candidate = next(
            (
                found
                for found in (self._block_candidate(script, i) for i, script in enumerate(scripts))
                if found is not None
            ),
            None,
        )
        if candidate is None:
            logger.debug("No JSON-LD recipe found")
            return None

        data = self._to_recipe_data(candidate)
        link_tags = taxonomy_link_tags(document)
        tags = data.tags + link_tags
        if self.standardize:
            tags = standardize_tags(tags)
        else:
            tags = list(dict.fromkeys(tags))

        logger.info(
            f"JSON-LD recipe '{data.title}': {len(data.ingredients)} ingredients, "
            f"{len(data.instructions)} instructions"
        )
        return data.model_copy(update={"tags": tags})

    def _block_candidate(self, script: Tag, index: int) -> dict[str, JsonValue] | None:
        """First recipe object in one block, or None (including for bad JSON)."""
        try:
            value = self._load_block(script, index)
        except StructuredDataError as e:
            logger.warning(f"Skipping JSON-LD block: {e}")
            return None
        return next(find_recipe_candidates(value), None)

    @staticmethod
    def _load_block(script: Tag, index: int) -> JsonValue:
        """Parse one script block as JSON.

        Raises:
            StructuredDataError: If the block is empty or not valid JSON
        """
        raw = script.get_text().strip()
        if not raw:
            raise StructuredDataError("Empty JSON-LD block", block_index=index)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StructuredDataError(
                "Malformed JSON-LD block",
                block_index=index,
                error=str(e),
            ) from e

    def _to_recipe_data(self, obj: dict[str, JsonValue]) -> ParsedRecipeData:
        title = obj.get("name") if isinstance(obj.get("name"), str) else None
        title = _clean_text(title) if title else None

        description = obj.get("description")
        description = _clean_text(description) if isinstance(description, str) else None

        ingredient_value = obj.get("recipeIngredient")
        if ingredient_value is None:
            ingredient_value = obj.get("ingredients")

        categories = json_to_strings(obj.get("recipeCategory"))
        cuisines = json_to_strings(obj.get("recipeCuisine"))
        keywords = json_to_strings(obj.get("keywords"))

        nutrition = obj.get("nutrition")
        serving_size = None
        if isinstance(nutrition, dict):
            size = nutrition.get("servingSize")
            if isinstance(size, str | int | float) and not isinstance(size, bool):
                serving_size = str(size).strip() or None

        return ParsedRecipeData(
            title=title or None,
            description=description or None,
            ingredients=json_to_strings(ingredient_value),
            instructions=parse_instructions(obj.get("recipeInstructions")),
            servings=parse_servings(obj.get("recipeYield")),
            serving_size=serving_size,
            prep_time_minutes=parse_iso_duration(obj.get("prepTime")),
            cook_time_minutes=parse_iso_duration(obj.get("cookTime")),
            total_time_minutes=parse_iso_duration(obj.get("totalTime")),
            tags=categories + cuisines + keywords,
            cuisine=resolve_cuisine(cuisines[0] if cuisines else None, title),
            image_urls=resolve_image_urls(obj.get("image")),
        )


def taxonomy_link_tags(document: BeautifulSoup) -> list[str]:
    """Text of CMS category/tag links (``rel="category"``/``rel="tag"``)."""
    texts = (link.get_text(" ", strip=True) for link in document.select(TAXONOMY_LINK_SELECTOR))
    return [text for text in texts if text]

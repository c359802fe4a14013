"""CSS-selector scraping for pages without structured data.

Most recipe plugins mark their lists with class or id names containing
"ingredient", "instruction", "direction" or "step". The scraper tries a list
of such selectors in order and keeps the first one that yields anything.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from ..models import ParsedRecipeData
from ..tags import standardize_tags
from .metadata import meta_content
from .structured_data import taxonomy_link_tags

logger = logging.getLogger(__name__)

INGREDIENT_SELECTORS = (
    "[class*=ingredient] li",
    "[id*=ingredient] li",
    "[class*=ing] li",
    "ul[class*=ingredient] li",
    "ol[class*=ingredient] li",
    ".ingredients li",
    "#ingredients li",
)

INSTRUCTION_SELECTORS = (
    "[class*=instruction] li",
    "[id*=instruction] li",
    "[class*=direction] li",
    "[id*=direction] li",
    "[class*=step] li",
    "ol[class*=instruction] li",
    "ol[class*=direction] li",
    ".instructions li",
    "#instructions li",
    ".directions li",
    "#directions li",
)


class HtmlContentScraper:
    """Heuristic DOM scraper.

    Only returns data when both ingredients and instructions are found; half
    a recipe from guessed selectors is more likely to be page chrome than
    content.

    Attributes:
        name: Tier name used in diagnostics
        min_ingredient_length: Shortest list item kept as an ingredient
        min_instruction_length: Shortest list item kept as an instruction
        standardize: Run the tag normalizer over link tags
    """

    name = "html_scrape"

    def __init__(
        self,
        min_ingredient_length: int = 4,
        min_instruction_length: int = 11,
        standardize: bool = True,
    ) -> None:
        self.min_ingredient_length = min_ingredient_length
        self.min_instruction_length = min_instruction_length
        self.standardize = standardize

    def extract(self, document: BeautifulSoup) -> ParsedRecipeData | None:
        ingredients = self._first_matching(
            document, INGREDIENT_SELECTORS, self.min_ingredient_length
        )
        instructions = self._first_matching(
            document, INSTRUCTION_SELECTORS, self.min_instruction_length
        )

        if not ingredients or not instructions:
            logger.debug(
                f"HTML scraping found {len(ingredients)} ingredients, "
                f"{len(instructions)} instructions (need both)"
            )
            return None

        heading = document.find("h1")
        title = heading.get_text(" ", strip=True) if heading is not None else None
        title = title or meta_content(document, "og:title")

        tags = taxonomy_link_tags(document)
        tags = standardize_tags(tags) if self.standardize else list(dict.fromkeys(tags))

        logger.info(
            f"HTML scraping found {len(ingredients)} ingredients, "
            f"{len(instructions)} instructions"
        )
        return ParsedRecipeData(
            title=title,
            ingredients=ingredients,
            instructions=instructions,
            tags=tags,
        )

    @staticmethod
    def _first_matching(
        document: BeautifulSoup, selectors: tuple[str, ...], min_length: int
    ) -> list[str]:
        for selector in selectors:
            texts = [item.get_text(" ", strip=True) for item in document.select(selector)]
            found = [text for text in texts if len(text) >= min_length]
            if found:
                logger.debug(f"Selector {selector!r} matched {len(found)} items")
                return found
        return []

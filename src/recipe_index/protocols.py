"""Protocol definitions for recipe_index.

Extraction tiers are plain classes; these Protocols describe the seams the
orchestrator relies on so tiers can be swapped or mocked in tests.

Example:
    >>> class NullTier:
    ...     name = "null"
    ...     def extract(self, document: BeautifulSoup) -> ParsedRecipeData | None:
    ...         return None
    >>> isinstance(NullTier(), DocumentExtractor)
    True
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from .consolidator import ParsedIngredient
    from .models import ParsedRecipeData, Recipe, RecipeSource


@runtime_checkable
class DocumentExtractor(Protocol):
    """An extraction tier that reads a parsed HTML document.

    Implementations return None when they find nothing; that is not an
    error, the orchestrator simply moves on to the next tier.
    """

    name: str

    def extract(self, document: BeautifulSoup) -> ParsedRecipeData | None:
        """Extract whatever recipe data this tier understands.

        Args:
            document: Parsed HTML page

        Returns:
            Partial recipe data, or None if the tier found nothing
        """
        ...


@runtime_checkable
class TextExtractor(Protocol):
    """Extracts a recipe from already-extracted plain text (PDF or OCR)."""

    def extract(
        self,
        raw_text: str,
        source: RecipeSource,
        source_identifier: str | None = None,
    ) -> Recipe:
        """Extract a best-effort recipe.

        Raises:
            NoTextFoundError: If the text has no non-blank lines
        """
        ...


@runtime_checkable
class IngredientMerger(Protocol):
    """Merges ingredient lists from several recipes into a shopping list."""

    def consolidate(
        self, recipes: Iterable[tuple[list[str], str | int]]
    ) -> list[ParsedIngredient]:
        """Merge ingredient lines keyed by the recipe that contributed them."""
        ...

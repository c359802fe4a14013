"""
Recipe Index - Extract structured recipes from web pages, PDFs and photos.

This package turns already-fetched HTML or already-extracted text into
structured recipes using a tiered extraction pipeline, and merges ingredient
lists from several recipes into a single shopping list.
"""

__version__ = "0.1.0"

from .config import ExtractionConfig
from .consolidator import IngredientConsolidator, ParsedIngredient
from .models import ParsedRecipeData, Recipe, RecipeSource
from .pipeline import ImportResult, SourceOrchestrator
from .services import ServiceFactory

__all__ = [
    "ExtractionConfig",
    "ImportResult",
    "IngredientConsolidator",
    "ParsedIngredient",
    "ParsedRecipeData",
    "Recipe",
    "RecipeSource",
    "ServiceFactory",
    "SourceOrchestrator",
]

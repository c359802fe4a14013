"""Service factory for centralized dependency injection.

The ServiceFactory turns one ExtractionConfig into configured extractors,
the source orchestrator, the consolidator and the validator, so callers
never wire thresholds by hand.

Example:
    >>> from recipe_index.config import ExtractionConfig
    >>> factory = ServiceFactory(ExtractionConfig.load())
    >>> result = factory.orchestrator.import_html(html, url)
    >>> shopping_list = factory.create_consolidator().consolidate(pairs)
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import ExtractionConfig
    from ..consolidator import IngredientConsolidator
    from ..extractors import PlainTextRecipeExtractor
    from ..pipeline import SourceOrchestrator, TierPipeline
    from ..validator import RecipeValidator


@dataclass
class ServiceFactory:
    """Factory for creating service instances from shared configuration.

    Attributes:
        config: Extraction configuration for all services

    Note:
        The orchestrator is created lazily and cached; every other
        ``create_*`` method returns a fresh instance.
    """

    config: ExtractionConfig

    @cached_property
    def orchestrator(self) -> SourceOrchestrator:
        """Shared source orchestrator, created on first access."""
        return self.create_orchestrator()

    def create_text_extractor(self) -> PlainTextRecipeExtractor:
        """Create a plain-text extractor with configured heuristics."""
        from ..extractors import PlainTextRecipeExtractor

        return PlainTextRecipeExtractor(
            default_title=self.config.default_title,
            default_servings=self.config.default_servings,
            min_title_length=self.config.min_title_length,
            min_ingredient_length=self.config.min_ingredient_length,
            min_instruction_length=self.config.min_instruction_length,
            recover_misplaced=self.config.recover_misplaced_ingredients,
            standardize=self.config.standardize_tags,
        )

    def create_url_pipeline(self) -> TierPipeline:
        """Create the structured data, HTML scrape and metadata tiers."""
        from ..pipeline import create_url_pipeline

        return create_url_pipeline(self.config)

    def create_orchestrator(self) -> SourceOrchestrator:
        """Create a source orchestrator with injected tiers.

        Example:
            >>> orchestrator = factory.create_orchestrator()
            >>> result = orchestrator.import_text(text, RecipeSource.PDF)
        """
        from ..pipeline import SourceOrchestrator

        return SourceOrchestrator(
            config=self.config,
            url_pipeline=self.create_url_pipeline(),
            text_extractor=self.create_text_extractor(),
        )

    def create_consolidator(self) -> IngredientConsolidator:
        """Create an ingredient consolidator."""
        from ..consolidator import IngredientConsolidator

        return IngredientConsolidator()

    def create_validator(self) -> RecipeValidator:
        """Create a recipe validator."""
        from ..validator import RecipeValidator

        return RecipeValidator()

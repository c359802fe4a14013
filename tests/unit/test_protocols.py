"""Unit tests for recipe_index.protocols module.

The concrete classes must satisfy the runtime-checkable protocols the
orchestrator is typed against.
"""

import pytest

from recipe_index.consolidator import IngredientConsolidator
from recipe_index.extractors import (
    HtmlContentScraper,
    MetadataExtractor,
    PlainTextRecipeExtractor,
    StructuredDataExtractor,
)
from recipe_index.protocols import DocumentExtractor, IngredientMerger, TextExtractor


class TestDocumentExtractor:
    """Tests for the DocumentExtractor protocol."""

    @pytest.mark.parametrize(
        "tier",
        [StructuredDataExtractor(), HtmlContentScraper(), MetadataExtractor()],
    )
    def test_tiers_conform(self, tier):
        assert isinstance(tier, DocumentExtractor)

    def test_custom_tier_conforms(self):
        """Any object with a name and extract() is a tier."""

        class NullTier:
            name = "null"

            def extract(self, document):
                return None

        assert isinstance(NullTier(), DocumentExtractor)

    def test_missing_method(self):
        class NotATier:
            name = "nope"

        assert not isinstance(NotATier(), DocumentExtractor)


class TestOtherProtocols:
    """Tests for TextExtractor and IngredientMerger."""

    def test_text_extractor(self):
        assert isinstance(PlainTextRecipeExtractor(), TextExtractor)

    def test_ingredient_merger(self):
        assert isinstance(IngredientConsolidator(), IngredientMerger)

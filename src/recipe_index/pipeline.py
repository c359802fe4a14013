"""Tiered extraction pipeline.

A URL import runs three tiers over the fetched page, highest confidence
first:

1. **Structured data**: JSON-LD recipe markup
2. **HTML scrape**: CSS-selector heuristics
3. **Metadata**: OpenGraph title/description/image

Each tier only fills fields the earlier tiers left empty (supplementation),
so better data is never overwritten by worse. PDF and photo imports have no
markup and go straight to the plain-text extractor.

Every entry point returns an ``ImportResult``; failures are values, never
exceptions.

Example:
    >>> orchestrator = ServiceFactory(ExtractionConfig()).create_orchestrator()
    >>> result = orchestrator.import_html(html, "example.com/cake")
    >>> if result.is_success:
    ...     print(result.recipe.title, result.tiers_used)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from .exceptions import NoRecipeDataError, NoTextFoundError, RecipeIndexError
from .models import ParsedRecipeData, Recipe, RecipeSource
from .normalizers import normalize_url

if TYPE_CHECKING:
    from .config import ExtractionConfig
    from .protocols import DocumentExtractor, TextExtractor

logger = logging.getLogger(__name__)

# Once all of these are populated, later tiers have nothing left to add
EXPECTED_FIELDS = (
    "title",
    "ingredients",
    "instructions",
    "servings",
    "prep_time_minutes",
    "cook_time_minutes",
    "total_time_minutes",
    "tags",
    "cuisine",
    "description",
    "image_urls",
)

NO_URL_DATA = "No recipe data found at URL"
NO_IMAGE_TEXT = "No text found in image. Please ensure the image contains readable recipe text."
MULTIPLE_PHOTOS = "multiple_photos"


@dataclass
class ImportResult:
    """Outcome of one import.

    Attributes:
        recipe: Extracted recipe, or None on failure
        image_urls: Image URLs found in the source, for the caller to choose from
        error: Human-readable failure reason, or None on success
        tiers_used: Names of the tiers that contributed data
    """

    recipe: Recipe | None = None
    image_urls: list[str] = field(default_factory=list)
    error: str | None = None
    tiers_used: list[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Check if the import produced a recipe."""
        return self.error is None and self.recipe is not None

    @classmethod
    def failure(cls, error: str, tiers_used: list[str] | None = None) -> ImportResult:
        """Create a failed result."""
        return cls(error=error, tiers_used=tiers_used or [])


@dataclass
class ImportContext:
    """State accumulated while tiers run over one document.

    Attributes:
        document: Parsed HTML page
        data: Merged result of every tier so far
        tiers_used: Names of tiers that returned data, in order
    """

    document: BeautifulSoup
    data: ParsedRecipeData = field(default_factory=ParsedRecipeData)
    tiers_used: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when no expected field is still missing."""
        missing = set(self.data.missing_fields())
        return not missing.intersection(EXPECTED_FIELDS)


class TierPipeline:
    """Runs document tiers in priority order with supplementation.

    Attributes:
        tiers: Ordered list of extraction tiers
    """

    def __init__(self, tiers: list[DocumentExtractor]) -> None:
        self.tiers = tiers

    def run(self, ctx: ImportContext) -> ParsedRecipeData | None:
        """Run tiers until every expected field is populated or tiers run out.

        Args:
            ctx: Context holding the document; updated in place

        Returns:
            Merged data, or None if no tier returned anything
        """
        for tier in self.tiers:
            if ctx.is_complete:
                logger.debug(f"All fields populated, skipping remaining tiers from {tier.name}")
                break

            result = tier.extract(ctx.document)
            if result is None or result.is_empty:
                logger.debug(f"Tier {tier.name} found nothing")
                continue

            filled = [
                name for name in ctx.data.missing_fields() if name not in result.missing_fields()
            ]
            logger.info(f"Tier {tier.name} supplied: {', '.join(filled) or 'nothing new'}")
            ctx.data = ctx.data.supplement(result)
            ctx.tiers_used.append(tier.name)

        return ctx.data if ctx.tiers_used else None


class SourceOrchestrator:
    """Chooses and runs the extraction tiers for each source kind.

    Attributes:
        config: Extraction configuration (defaults for title and servings)
        url_pipeline: Tiers applied to fetched HTML
        text_extractor: Extractor for PDF and OCR text
    """

    def __init__(
        self,
        config: ExtractionConfig,
        url_pipeline: TierPipeline,
        text_extractor: TextExtractor,
    ) -> None:
        self.config = config
        self.url_pipeline = url_pipeline
        self.text_extractor = text_extractor

    def import_html(self, html: str, source_url: str) -> ImportResult:
        """Extract a recipe from an already-fetched web page.

        Args:
            html: Page markup
            source_url: Address the page was fetched from

        Returns:
            Result with the recipe, or the reason nothing was found
        """
        url = normalize_url(source_url) if source_url else source_url
        try:
            ctx = ImportContext(document=BeautifulSoup(html or "", "html.parser"))
            data = self.url_pipeline.run(ctx)
            if data is None:
                raise NoRecipeDataError(NO_URL_DATA, url=url)

            recipe = Recipe.from_parsed(
                data,
                source=RecipeSource.URL,
                source_url=url,
                default_title=self.config.default_title,
                default_servings=self.config.default_servings,
            )
            logger.info(f"Imported '{recipe.title}' from {url} via {', '.join(ctx.tiers_used)}")
            return ImportResult(
                recipe=recipe,
                image_urls=list(recipe.image_urls),
                tiers_used=ctx.tiers_used,
            )
        except RecipeIndexError as e:
            logger.warning(f"URL import failed: {e}")
            return ImportResult.failure(e.message)
        except Exception as e:  # Intentional catch-all: failures are returned, not raised
            logger.exception(f"Unexpected error parsing {url}")
            return ImportResult.failure(f"Failed to parse recipe from URL: {e}")

    def import_text(
        self,
        text: str,
        source: RecipeSource,
        source_identifier: str | None = None,
    ) -> ImportResult:
        """Extract a recipe from PDF-extracted or OCR text.

        Args:
            text: Plain text handed over by the PDF or OCR step
            source: RecipeSource.PDF or RecipeSource.PHOTO
            source_identifier: File path or other identifier

        Returns:
            Result with the recipe, or a "no text" failure for blank input
        """
        try:
            recipe = self.text_extractor.extract(text, source, source_identifier)
            return ImportResult(recipe=recipe, tiers_used=["plain_text"])
        except NoTextFoundError as e:
            logger.warning(f"{source.value} import failed: {e}")
            message = NO_IMAGE_TEXT if source is RecipeSource.PHOTO else e.message
            return ImportResult.failure(message)
        except RecipeIndexError as e:
            logger.warning(f"{source.value} import failed: {e}")
            return ImportResult.failure(e.message)
        except Exception as e:  # Intentional catch-all: failures are returned, not raised
            logger.exception(f"Unexpected error parsing {source.value} text")
            kind = "image" if source is RecipeSource.PHOTO else source.value
            return ImportResult.failure(f"Failed to parse recipe from {kind}: {e}")

    def import_photos(self, texts: list[str], source_identifier: str | None = None) -> ImportResult:
        """Extract one recipe from the OCR text of one or more photos.

        Pages are joined with a blank line. With several pages the identifier
        defaults to ``"multiple_photos"``.
        """
        pages = [text.strip() for text in texts if text and text.strip()]
        if not pages:
            logger.warning("No text found in any photo")
            return ImportResult.failure(NO_IMAGE_TEXT)

        if source_identifier is None and len(texts) > 1:
            source_identifier = MULTIPLE_PHOTOS
        return self.import_text("\n\n".join(pages), RecipeSource.PHOTO, source_identifier)


def create_url_pipeline(config: ExtractionConfig) -> TierPipeline:
    """Create the standard URL tier pipeline.

    Returns:
        Pipeline running, in order:
        1. StructuredDataExtractor - JSON-LD
        2. HtmlContentScraper - CSS selectors
        3. MetadataExtractor - OpenGraph
    """
    from .extractors import HtmlContentScraper, MetadataExtractor, StructuredDataExtractor

    return TierPipeline(
        [
            StructuredDataExtractor(standardize=config.standardize_tags),
            HtmlContentScraper(
                min_ingredient_length=config.scraped_ingredient_min_length,
                min_instruction_length=config.scraped_instruction_min_length,
                standardize=config.standardize_tags,
            ),
            MetadataExtractor(),
        ]
    )

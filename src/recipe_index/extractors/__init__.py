"""Extraction tiers for HTML documents and plain text."""

from .html_scraper import HtmlContentScraper
from .metadata import MetadataExtractor
from .plain_text import PlainTextRecipeExtractor
from .structured_data import StructuredDataExtractor

__all__ = [
    "HtmlContentScraper",
    "MetadataExtractor",
    "PlainTextRecipeExtractor",
    "StructuredDataExtractor",
]

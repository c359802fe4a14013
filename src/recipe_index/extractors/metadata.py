"""OpenGraph metadata tier.

The lowest-confidence tier: no ingredients or instructions, just enough
(title, description, images) that an import is never completely empty when
the page at least names itself.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from ..models import ParsedRecipeData

logger = logging.getLogger(__name__)


def meta_content(document: BeautifulSoup, prop: str) -> str | None:
    """Content of the first ``<meta property=...>`` tag, or None if blank."""
    tag = document.find("meta", attrs={"property": prop})
    if tag is None:
        return None
    content = tag.get("content")
    if isinstance(content, str) and content.strip():
        return content.strip()
    return None


class MetadataExtractor:
    """Reads ``og:title``, ``og:description`` and every ``og:image``."""

    name = "metadata"

    def extract(self, document: BeautifulSoup) -> ParsedRecipeData | None:
        """Extract page metadata.

        Falls back to the ``<title>`` element when ``og:title`` is missing.

        Returns:
            Minimal recipe data, or None when the page has no title at all
        """
        title = meta_content(document, "og:title")
        if title is None and document.title is not None:
            title = document.title.get_text(strip=True) or None

        if title is None:
            logger.debug("No page title in metadata")
            return None

        images: list[str] = []
        for tag in document.find_all("meta", attrs={"property": "og:image"}):
            content = tag.get("content")
            if isinstance(content, str) and content.strip() and content.strip() not in images:
                images.append(content.strip())

        return ParsedRecipeData(
            title=title,
            description=meta_content(document, "og:description"),
            image_urls=images,
        )

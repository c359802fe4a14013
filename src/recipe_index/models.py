"""Recipe data models.

``ParsedRecipeData`` is the intermediate record every extraction tier returns;
the orchestrator merges tier results into one and finalizes it as a
``Recipe``.
"""

from __future__ import annotations

from copy import deepcopy
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class RecipeSource(str, Enum):
    """Where a recipe came from."""

    URL = "URL"
    PDF = "PDF"
    PHOTO = "PHOTO"
    MANUAL = "MANUAL"


class ParsedRecipeData(BaseModel):
    """Partial recipe produced by a single extraction tier.

    Every field is optional or empty by default so that a tier only fills in
    what it actually found. Durations are in minutes and tags are already
    normalized by the time a tier returns.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str | None = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    servings: int | None = None
    serving_size: str | None = Field(
        default=None,
        description="Free-text portion size, e.g. '1 cup'",
    )
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    total_time_minutes: int | None = None
    tags: list[str] = Field(default_factory=list)
    cuisine: str | None = None
    description: str | None = None
    source_tips: str | None = Field(
        default=None,
        description="Tips, substitutions and notes published with the recipe",
    )
    image_urls: list[str] = Field(default_factory=list)
    source_url: str | None = None

    def missing_fields(self) -> list[str]:
        """Names of fields that are still empty."""
        return [name for name in type(self).model_fields if _is_empty(getattr(self, name))]

    @property
    def is_empty(self) -> bool:
        """True when no field has been populated."""
        return len(self.missing_fields()) == len(type(self).model_fields)

    def supplement(self, other: ParsedRecipeData) -> ParsedRecipeData:
        """Fill this record's empty fields from ``other``.

        Populated fields are never overwritten, so the record that was
        produced by a higher-priority tier always wins.

        Args:
            other: Result from a lower-priority tier

        Returns:
            New merged record; ``self`` is left unchanged
        """
        updates = {
            name: deepcopy(getattr(other, name))
            for name in self.missing_fields()
            if not _is_empty(getattr(other, name))
        }
        return self.model_copy(update=updates, deep=True)


class Recipe(BaseModel):
    """A finalized recipe, ready to hand to storage."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    title: str
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    servings: int = Field(default=4, gt=0)
    serving_size: str | None = None
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    total_time_minutes: int | None = None
    tags: list[str] = Field(default_factory=list)
    cuisine: str | None = None
    description: str | None = None
    source_tips: str | None = None
    notes: str | None = Field(default=None, description="User-entered notes only")
    source: RecipeSource = RecipeSource.MANUAL
    source_url: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    is_template: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_parsed(
        cls,
        data: ParsedRecipeData,
        source: RecipeSource,
        source_url: str | None = None,
        default_title: str = "Imported Recipe",
        default_servings: int = 4,
    ) -> Recipe:
        """Build a recipe from a merged extraction result.

        Args:
            data: Merged tier output
            source: Kind of source the data came from
            source_url: URL or identifier of the source; falls back to
                ``data.source_url``
            default_title: Title used when none was extracted
            default_servings: Servings used when none were extracted

        Returns:
            New recipe with equal creation and update timestamps
        """
        now = datetime.now(UTC)
        return cls(
            title=data.title or default_title,
            ingredients=list(data.ingredients),
            instructions=list(data.instructions),
            servings=data.servings if data.servings and data.servings > 0 else default_servings,
            serving_size=data.serving_size,
            prep_time_minutes=data.prep_time_minutes,
            cook_time_minutes=data.cook_time_minutes,
            total_time_minutes=data.total_time_minutes,
            tags=list(data.tags),
            cuisine=data.cuisine,
            description=data.description,
            source_tips=data.source_tips,
            source=source,
            source_url=source_url or data.source_url,
            image_urls=list(data.image_urls),
            created_at=now,
            updated_at=now,
        )


def _is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return not value
    return False

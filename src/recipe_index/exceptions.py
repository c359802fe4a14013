"""Custom exceptions for recipe_index.

This module defines the exception hierarchy used throughout the extraction
pipeline. Extractors raise these internally; the orchestrator converts them
into failed ``ImportResult`` values so nothing escapes the pipeline boundary.

Example:
    >>> try:
    ...     raise NoTextFoundError("No text found to parse", source="pdf")
    ... except RecipeIndexError as e:
    ...     print(f"Error in {e.context}: {e}")
"""


class RecipeIndexError(Exception):
    """Base exception for all recipe_index errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about where/when the error occurred
    """

    def __init__(self, message: str, **context: str | int | float | bool | None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            **context: Additional context (e.g., block_index=2, source="url")
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Format error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(RecipeIndexError):
    """Error in configuration or settings.

    Raised when:
    - Configuration file is invalid
    - Settings have invalid values
    - An unknown configuration key is updated

    Example:
        >>> raise ConfigurationError(
        ...     "default_servings must be at least 1",
        ...     default_servings=0,
        ... )
    """

    pass


class ExtractionError(RecipeIndexError):
    """Error while extracting a recipe from a document or text.

    Subclasses describe the specific reason a whole extraction produced
    nothing. A recipe with missing ingredients or instructions is not an
    error.
    """

    pass


class NoTextFoundError(ExtractionError):
    """The input contained no non-blank lines."""

    pass


class NoRecipeDataError(ExtractionError):
    """Every applicable tier returned nothing.

    Example:
        >>> raise NoRecipeDataError(
        ...     "No recipe data found at URL",
        ...     url="https://example.com/cake",
        ... )
    """

    pass


class StructuredDataError(RecipeIndexError):
    """A single embedded JSON-LD block could not be read.

    Recoverable: the block is skipped and extraction continues with the next
    block in the document.
    """

    pass


class ValidationError(RecipeIndexError):
    """A recipe is not complete enough to be saved.

    Example:
        >>> raise ValidationError(
        ...     "At least one ingredient is required",
        ...     recipe_title="Chocolate Cake",
        ... )
    """

    pass

"""Recipe completeness checks.

The extraction pipeline returns partial recipes as successes; whether a
recipe is complete enough to save is decided here, by the caller.

Example:
    >>> validator = RecipeValidator()
    >>> error = validator.validation_error(recipe)
    >>> if error:
    ...     print(f"Cannot save: {error}")
"""

from .exceptions import ValidationError
from .models import Recipe


class RecipeValidator:
    """Checks that a recipe has the minimum content needed to save it."""

    def validation_error(self, recipe: Recipe) -> str | None:
        """Describe the first problem with a recipe.

        Returns:
            Human-readable message, or None if the recipe is valid
        """
        if not recipe.title.strip():
            return "Title is required"
        if not recipe.ingredients:
            return "At least one ingredient is required"
        if not recipe.instructions:
            return "At least one instruction step is required"
        if recipe.servings <= 0:
            return "Servings must be greater than 0"
        return None

    def is_valid(self, recipe: Recipe) -> bool:
        """Check whether a recipe can be saved."""
        return self.validation_error(recipe) is None

    def validate_or_raise(self, recipe: Recipe) -> None:
        """Raise if the recipe cannot be saved.

        Raises:
            ValidationError: With the first problem found
        """
        error = self.validation_error(recipe)
        if error:
            raise ValidationError(error, recipe_title=recipe.title)

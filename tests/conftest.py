"""Pytest configuration and fixtures for recipe_index tests.

Fixtures follow pytest conventions:
- Use monkeypatch for environment manipulation
- Use tmp_path for file operations
"""

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all RECIPE_INDEX_* environment variables."""
    import os

    for key in list(os.environ.keys()):
        if key.startswith("RECIPE_INDEX_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Provide a helper to set RECIPE_INDEX_* environment variables.

    Example:
        def test_env_loading(mock_env):
            mock_env["DEFAULT_SERVINGS"] = "2"
            # RECIPE_INDEX_DEFAULT_SERVINGS is now set
    """

    class EnvSetter(dict[str, str]):
        def __setitem__(self, key: str, value: str) -> None:
            super().__setitem__(key, value)
            monkeypatch.setenv(f"RECIPE_INDEX_{key}", value)

    return EnvSetter()


@pytest.fixture
def default_config():
    """Create a default ExtractionConfig instance."""
    from recipe_index.config import ExtractionConfig

    return ExtractionConfig()


@pytest.fixture
def factory(default_config):
    """Create a ServiceFactory over the default configuration."""
    from recipe_index.services import ServiceFactory

    return ServiceFactory(config=default_config)


# ============================================================================
# HTML Fixtures
# ============================================================================


def wrap_jsonld(*blocks: Any, body: str = "", head: str = "") -> str:
    """Build an HTML page with the given JSON-LD blocks.

    Strings are embedded verbatim (for malformed-block tests); anything else
    is serialized with json.dumps.
    """
    scripts = "\n".join(
        '<script type="application/ld+json">'
        + (block if isinstance(block, str) else json.dumps(block))
        + "</script>"
        for block in blocks
    )
    return f"<html><head>{head}{scripts}</head><body>{body}</body></html>"


@pytest.fixture
def jsonld_page():
    """Provide the wrap_jsonld page builder."""
    return wrap_jsonld


@pytest.fixture
def recipe_jsonld() -> dict[str, Any]:
    """A complete schema.org Recipe object."""
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Chocolate Cake",
        "description": "A rich &amp; moist cake.",
        "image": ["https://example.com/cake.jpg", {"url": "https://example.com/cake-2.jpg"}],
        "recipeYield": "8 servings",
        "prepTime": "PT15M",
        "cookTime": "PT1H",
        "totalTime": "PT1H15M",
        "recipeCategory": "Dessert",
        "recipeCuisine": "American",
        "keywords": "chocolate, cake, Homemade",
        "recipeIngredient": ["2 cups flour", "1 cup sugar", "3 eggs"],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Preheat oven to 350°F."},
            {"@type": "HowToStep", "text": "Mix everything together."},
            {"@type": "HowToStep", "text": "Bake for 30 minutes."},
        ],
        "nutrition": {"@type": "NutritionInformation", "servingSize": "1 slice"},
    }


@pytest.fixture
def recipe_html(recipe_jsonld) -> str:
    """A page carrying one JSON-LD recipe plus OpenGraph tags."""
    head = (
        '<meta property="og:title" content="OG Cake Title">'
        '<meta property="og:image" content="https://example.com/og.jpg">'
    )
    return wrap_jsonld(recipe_jsonld, head=head)


@pytest.fixture
def scraped_html() -> str:
    """A page with recipe lists but no structured data."""
    return """
    <html><head>
      <meta property="og:title" content="Weeknight Chili">
      <meta property="og:description" content="Fast and filling.">
      <meta property="og:image" content="https://example.com/chili.jpg">
    </head><body>
      <h1>Weeknight Chili</h1>
      <ul class="recipe-ingredients">
        <li>1 lb ground beef</li>
        <li>1 onion, diced</li>
        <li>2 cans kidney beans</li>
      </ul>
      <ol class="recipe-instructions">
        <li>Brown the beef in a large pot.</li>
        <li>Add onion and cook until soft.</li>
        <li>Stir in beans and simmer for 20 minutes.</li>
      </ol>
      <a rel="category tag" href="/c/mains">Main Dish</a>
      <a rel="tag" href="/t/beef">Beef Recipe</a>
    </body></html>
    """


# ============================================================================
# Plain Text Fixtures
# ============================================================================


@pytest.fixture
def chocolate_cake_text() -> str:
    """The minimal text recipe used across plain-text tests."""
    return (
        "Chocolate Cake\n"
        "Ingredients:\n"
        "2 cups flour\n"
        "1 cup sugar\n"
        "Instructions:\n"
        "1. Mix dry ingredients.\n"
        "2. Bake at 350F for 30 minutes."
    )


@pytest.fixture
def noisy_pdf_text() -> str:
    """Text printed from a recipe web page, with site chrome left in."""
    return "\n".join(
        [
            "Lemon Garlic Salmon",
            "Prep Time: 10 minutes",
            "Cook Time: 1 hour 5 min",
            "Servings: 6",
            "Tags: Seafood, Quick Recipe, dinner",
            "Ingredients",
            "• 4 salmon fillets",
            "• 2 tablespoons olive oil",
            "• 3 cloves garlic, minced",
            "Save this recipe for later!",
            "Instructions",
            "Step 1: Preheat oven to 400°F.",
            "Step 2: Place salmon on a baking sheet and season well.",
            "Follow us on social media",
            "Step 3: Bake for 12 minutes until flaky.",
            "Leave a rating and comment below!",
            "Privacy Policy",
            "S H O P",
        ]
    )


@pytest.fixture
def sample_recipe_dict() -> dict[str, Any]:
    """Provide a sample recipe as a dictionary for testing."""
    return {
        "title": "Test Recipe",
        "ingredients": ["1 cup flour", "2 eggs", "1/2 cup milk"],
        "instructions": ["Mix all ingredients.", "Cook until done."],
        "servings": 4,
        "tags": ["breakfast"],
        "source": "MANUAL",
    }

"""Tag and cuisine normalization.

Imported tags are messy: mixed case, marketing words, "italian food" next to
"Italian". ``standardize_tags`` folds them into a small, lower-case,
de-duplicated vocabulary. Running it on its own output changes nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

STANDARD_MAPPINGS: dict[str, str] = {
    # Cuisines
    "italian food": "italian",
    "italian cuisine": "italian",
    "mexican food": "mexican",
    "mexican cuisine": "mexican",
    "chinese food": "chinese",
    "chinese cuisine": "chinese",
    "japanese food": "japanese",
    "japanese cuisine": "japanese",
    "thai food": "thai",
    "thai cuisine": "thai",
    "indian food": "indian",
    "indian cuisine": "indian",
    "mediterranean food": "mediterranean",
    "mediterranean cuisine": "mediterranean",
    # Meal types
    "breakfast recipe": "breakfast",
    "breakfast meal": "breakfast",
    "lunch recipe": "lunch",
    "lunch meal": "lunch",
    "dinner recipe": "dinner",
    "dinner meal": "dinner",
    "supper": "dinner",
    "dessert recipe": "dessert",
    "snack recipe": "snack",
    # Cook methods
    "oven baked": "baked",
    "oven-baked": "baked",
    "pan fried": "fried",
    "pan-fried": "fried",
    "deep fried": "fried",
    "deep-fried": "fried",
    "slow cooker": "slow-cook",
    "crockpot": "slow-cook",
    "crock pot": "slow-cook",
    "pressure cooker": "instant pot",
    "stovetop": "stove-top",
    # Speed/difficulty
    "quick recipe": "quick",
    "fast recipe": "quick",
    "easy recipe": "easy",
    "simple recipe": "easy",
    "30 minute": "quick",
    "30-minute": "quick",
    "30 min": "quick",
    # Dietary
    "vegetarian recipe": "vegetarian",
    "vegan recipe": "vegan",
    "gluten free": "gluten-free",
    "dairy free": "dairy-free",
    "low carb": "low-carb",
    "keto diet": "keto",
    "paleo diet": "paleo",
    # Proteins
    "chicken recipe": "chicken",
    "beef recipe": "beef",
    "pork recipe": "pork",
    "fish recipe": "fish",
    "seafood recipe": "seafood",
    "shrimp recipe": "shrimp",
    "salmon recipe": "salmon",
    # Common foods
    "pasta recipe": "pasta",
    "rice recipe": "rice",
    "potato recipe": "potato",
    "salad recipe": "salad",
    "soup recipe": "soup",
    "sandwich recipe": "sandwich",
    "pizza recipe": "pizza",
}

NOISE_WORDS = frozenset(
    {
        "recipe",
        "food",
        "meal",
        "dish",
        "cuisine",
        "cooking",
        "cook",
        "homemade",
        "delicious",
        "tasty",
        "yummy",
        "perfect",
        "best",
        "traditional",
        "authentic",
        "classic",
        "modern",
        "new",
    }
)

CUISINES: tuple[str, ...] = (
    "American",
    "Italian",
    "Mexican",
    "Chinese",
    "Japanese",
    "Thai",
    "Indian",
    "Korean",
    "Vietnamese",
    "French",
    "Greek",
    "Mediterranean",
    "Middle Eastern",
    "Spanish",
    "Caribbean",
    "Brazilian",
    "Moroccan",
    "Ethiopian",
    "German",
    "British",
    "Irish",
    "Southern",
    "Cajun",
    "Tex-Mex",
    "Fusion",
)

MIN_TAG_LENGTH = 2

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_CUISINE_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(c) for c in sorted(CUISINES, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)


def standardize_tags(tags: Iterable[str]) -> list[str]:
    """Clean, map and de-duplicate a list of raw tags.

    Args:
        tags: Raw tags from any extraction tier

    Returns:
        Lower-case tags in first-seen order with duplicates removed

    Example:
        >>> standardize_tags(["Italian Food", "italian", "Chicken Recipe!"])
        ['italian', 'chicken']
    """
    result: list[str] = []
    for raw in tags:
        tag = raw.strip().lower()
        if len(tag) < MIN_TAG_LENGTH:
            continue
        tag = _normalize(tag)
        tag = STANDARD_MAPPINGS.get(tag, tag)
        tag = _remove_noise_words(tag)
        tag = STANDARD_MAPPINGS.get(tag, tag)
        if len(tag) >= MIN_TAG_LENGTH and tag not in result:
            result.append(tag)
    return result


def is_valid_tag(tag: str) -> bool:
    """Check whether a tag is worth keeping.

    Rejects tags shorter than two characters, tags made only of noise words
    and purely numeric tags.
    """
    normalized = tag.strip().lower()
    if len(normalized) < MIN_TAG_LENGTH:
        return False
    if all(word in NOISE_WORDS for word in normalized.split()):
        return False
    return not normalized.isdigit()


def cuisine_from_title(title: str | None) -> str | None:
    """Find a known cuisine named in a recipe title.

    The leftmost cuisine in the title wins.

    Returns:
        Lower-case cuisine name, or None
    """
    if not title:
        return None
    match = _CUISINE_PATTERN.search(title)
    return match.group(1).lower() if match else None


def resolve_cuisine(declared: str | None, title: str | None) -> str | None:
    """Choose between a declared cuisine and one named in the title.

    A declared "American" is often a site-wide default, so a cuisine named in
    the title takes precedence over it. Otherwise the declared cuisine wins,
    then the title-derived one.
    """
    declared = declared.strip().lower() if declared and declared.strip() else None
    from_title = cuisine_from_title(title)

    if declared == "american" and from_title:
        return from_title
    return declared or from_title


def _normalize(tag: str) -> str:
    tag = _WHITESPACE.sub(" ", tag)
    tag = _DISALLOWED.sub("", tag)
    return _WHITESPACE.sub(" ", tag).strip()


def _remove_noise_words(tag: str) -> str:
    words = tag.split(" ")
    filtered = [word for word in words if word not in NOISE_WORDS]
    # keep the original if every word is noise
    return " ".join(filtered) if filtered else tag

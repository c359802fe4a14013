"""Heuristic recipe extraction from unstructured text.

Text from PDF extraction or OCR has no markup, only lines. The extractor
finds section headers ("Ingredients", "Directions", "Serves 4", ...), takes
the lines between consecutive headers as that section's content, and filters
each candidate line through keyword heuristics that reject the navigation,
call-to-action and legal text web pages leave behind in printed PDFs.

The heuristics favour recall: keeping a stray line is cheaper than dropping
a real ingredient, since a person reviews every import.
"""

from __future__ import annotations

import logging
import re

from ..exceptions import NoTextFoundError
from ..models import ParsedRecipeData, Recipe, RecipeSource
from ..normalizers import first_integer, parse_time_text
from ..tags import resolve_cuisine, standardize_tags

logger = logging.getLogger(__name__)

FRACTIONS = "½¼¾⅓⅔⅛⅜⅝⅞"

# Section headers, checked in this order; a line records at most one label
SECTION_TRIGGERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("ingredients", re.compile(r"\bingredients?\b")),
    ("instructions", re.compile(r"\binstructions?\b|\bdirections?\b|\bsteps?\b|\bmethod\b")),
    ("servings", re.compile(r"\bservings?\b|\byield\b|\bserves\b")),
    ("prep_time", re.compile(r"\bprep\s*time\b")),
    ("cook_time", re.compile(r"\bcook\s*time\b")),
    ("total_time", re.compile(r"\btotal\s*time\b")),
    ("tags", re.compile(r"\btags?\b|\bcategories\b|\bcuisine\b")),
)

_CTA_VERB = re.compile(r"\b(save|shop|get|view|see|more|click)\b")
_INGREDIENT_WORD = re.compile(r"\bingredients?\b")

NOISE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # calls to action
    re.compile(
        r"\b(save|shop|get|view|see|click|subscribe|sign\s*up|log\s*in|create|download)\b"
        r".*\b(recipes?|ingredients?|meals?|plans?|lists?|shopping)"
    ),
    # rating and comment prompts
    re.compile(r"\b(rating|comment|review|feedback)\b.*\b(let|know|help|business|thrive)"),
    re.compile(r"\blast\s*step\b.*\b(rating|comment|review)"),
    re.compile(r"\b(leave|please)\b.*\b(rating|comment|review)"),
    # marketing; "free" inside "gluten-free" is an ingredient, not marketing
    re.compile(r"(?<![\w-])free\b|\bhigh[\s-]quality\b|\bproviding\b"),
    re.compile(r"\b(business|thrive|continue\s+providing)\b"),
    # app promotion
    re.compile(r"\b(meal\s*plans?)\b.*\b(and\s+more|create)"),
    re.compile(r"\bshopping\s+lists?\b"),
    # letter-spaced headers like "S H O P"
    re.compile(r"^\s*[a-z]\s+[a-z]\s+[a-z]"),
    re.compile(r"\b(newsletter|social|follow|share|pin|tweet)\b"),
    re.compile(r"\b(privacy|policy|terms|conditions|copyright)\b"),
    re.compile(r"^(home|about|contact|blog|search)$"),
)

_QUANTITY_UNIT = re.compile(
    rf"(\d+|[{FRACTIONS}])\s*(cups?|tablespoons?|teaspoons?|tbsp|tsp|oz|ounces?|pounds?|lbs?"
    r"|grams?|g|ml|liters?|l|inch|inches|cloves?|slices?|pieces?|cans?|jars?|bunche?s?"
    r"|stalks?|heads?|sprigs?)\b"
)
_PREPARATION_WORDS = re.compile(
    r"\b(cups?|teaspoons?|tablespoons?|ounces?|pounds?|sliced?|diced?|chopped?|minced?"
    r"|fresh|dried|whole|large|medium|small|thin|thick|boneless|skinless|shredded)"
)
_FOOD_WORDS = re.compile(
    r"\b(chicken|beef|pork|fish|salmon|shrimp|egg|eggs|milk|cream|cheese|butter|oil|olive"
    r"|flour|sugar|salt|pepper|onion|garlic|tomato|potato|rice|pasta|noodle|bread|lemon"
    r"|lime|cilantro|parsley|basil|oregano|thyme|rosemary|cumin|paprika|cayenne|chili"
    r"|jalapeño|bell|carrot|celery|broccoli|spinach|lettuce|cabbage|mushroom|zucchini"
    r"|squash|corn|bean|pea|chickpea|lentil|avocado|cucumber|apple|banana|berry|orange"
    r"|ginger|soy|vinegar|wine|broth|stock|honey|maple|vanilla|cinnamon|nutmeg|cherry"
    r"|jarred|canned|drained|rinsed)s?"
)
_LEADING_FRACTION = re.compile(rf"^[{FRACTIONS}]")
_LEADING_MEASURE = re.compile(
    r"^(cups?|tablespoons?|teaspoons?|tbsp|tsp|oz|ounces?|pounds?|lbs?|grams?|g|ml"
    r"|cloves?|slices?|pieces?|cans?|jars?)\s"
)

_COOKING_VERB = re.compile(
    r"\b(preheat|heat|cook|bake|boil|simmer|fry|saute|stir|mix|combine|add|remove|place"
    r"|transfer|turn|flip|season|serve)"
    r"|\b(beat|whisk|fold|pour|whip|roast|grill|chop|slice|dice|cut|knead|roll|spread|drain"
    r"|cover|let|bring|reduce|melt)\b"
)
_TEMPERATURE_OR_TIME = re.compile(r"\b(\d+\s*°?[fc]\b|\d+\s*(minute|hour|second|min|hr))")
_INSTRUCTION_FOOTER = re.compile(
    r"\b(rate|rating|comment|review|subscribe|newsletter|business|website)"
)

# Strong signals used when re-sorting lines that landed in the wrong section
_STRONG_INGREDIENT = (
    re.compile(
        rf"^(\d+[\s/]*\d*|[{FRACTIONS}])\s*(cups?|tablespoons?|teaspoons?|tbsp|tsp|oz|ounces?"
        r"|pounds?|lbs?|grams?|g|ml|cloves?|slices?|pieces?|cans?|jars?)\b",
        re.IGNORECASE,
    ),
    re.compile(r"^(cups?|tablespoons?|teaspoons?|tbsp|tsp|oz|ounces?|pounds?|lbs?)\s+\w", re.IGNORECASE),
    re.compile(r"\(from\s+\d+\s+\w+", re.IGNORECASE),
    re.compile(r",\s*(sliced|diced|chopped|minced|quartered|halved)\b", re.IGNORECASE),
    re.compile(rf"(sliced|cut)\s+[{FRACTIONS}\d]+\s*inch", re.IGNORECASE),
)
_STRONG_INSTRUCTION = (
    re.compile(
        r"^(preheat|heat|cook|bake|boil|simmer|fry|saute|stir|mix|combine|add|remove|place"
        r"|transfer|turn|flip|season|serve|let|allow|cover|uncover|drain|rinse|set|arrange"
        r"|spread|brush|drizzle|sprinkle|garnish|refrigerate|marinate|rest|cool|warm)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\buntil\b", re.IGNORECASE),
    re.compile(r"\b(\d+\s*°?[fc]|\d+\s*(minutes?|mins?|hours?|hrs?|seconds?))\b", re.IGNORECASE),
    re.compile(r"\b(oven|pan|skillet|pot|bowl|baking sheet|sheet pan|grill|microwave)\b", re.IGNORECASE),
)

_BULLET = re.compile(r"^[•·\-*]\s*")
_LIST_NUMBER = re.compile(r"^\d+[.)]\s+")
_STEP_PREFIX = re.compile(r"^step\s*\d+\s*[:.)]?\s*", re.IGNORECASE)
_STEP_NUMBER = re.compile(r"^\d+(?:[.)]\s*|\s+(?=[A-Z]))")
_TAG_LABEL = re.compile(r"^(tags?|categories?|cuisine)\s*:?\s*", re.IGNORECASE)


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-blank lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def is_website_noise(line: str) -> bool:
    """True for navigation, call-to-action, social and legal lines."""
    lower = line.lower().strip()
    return any(pattern.search(lower) for pattern in NOISE_PATTERNS)


def looks_like_ingredient(line: str, min_length: int = 3) -> bool:
    """Keyword check for an ingredient line.

    Any one of a quantity with a unit, a preparation word, a food name, a
    leading unicode fraction or a leading measurement word is enough.
    """
    if len(line) < min_length:
        return False
    lower = line.lower()
    return bool(
        _QUANTITY_UNIT.search(lower)
        or _PREPARATION_WORDS.search(lower)
        or _FOOD_WORDS.search(lower)
        or _LEADING_FRACTION.search(line)
        or _LEADING_MEASURE.search(lower)
    )


def looks_like_instruction(line: str, min_length: int = 10) -> bool:
    """Keyword check for an instruction line.

    Needs a cooking verb or a temperature/time, and must not read like a
    footer ("rate this recipe", "visit our website").
    """
    if len(line) < min_length:
        return False
    lower = line.lower()
    has_signal = _COOKING_VERB.search(lower) or _TEMPERATURE_OR_TIME.search(lower)
    return bool(has_signal) and not _INSTRUCTION_FOOTER.search(lower)


def clean_ingredient(line: str) -> str:
    """Drop bullets and list numbering, keeping the quantity text."""
    line = _BULLET.sub("", line)
    line = _LIST_NUMBER.sub("", line)
    return line.strip()


def clean_instruction(line: str) -> str:
    """Drop a leading "Step N:" or step number."""
    line = _BULLET.sub("", line)
    line = _STEP_PREFIX.sub("", line)
    line = _STEP_NUMBER.sub("", line)
    return line.strip()


def detect_sections(lines: list[str]) -> dict[str, int]:
    """Map each section label to the index of its first header line.

    Later headers for an already-seen label are ignored. A line that would
    repeat a seen label can still record a different, unseen one.
    """
    sections: dict[str, int] = {}
    for index, line in enumerate(lines):
        label = _section_label(line, sections)
        if label is not None:
            sections[label] = index
    return sections


def _section_label(line: str, seen: dict[str, int]) -> str | None:
    normalized = " ".join(line.lower().split())
    is_cta = bool(_CTA_VERB.search(normalized) and _INGREDIENT_WORD.search(normalized))

    for label, pattern in SECTION_TRIGGERS:
        if label in seen:
            continue
        if label == "ingredients" and is_cta:
            continue
        if pattern.search(normalized):
            return label
    return None


def section_content(lines: list[str], sections: dict[str, int], label: str) -> list[str]:
    """Lines strictly between a section's header and the next header."""
    start = sections.get(label)
    if start is None:
        return []
    end = min((index for index in sections.values() if index > start), default=len(lines))
    return lines[start + 1 : end]


def recover_misplaced_ingredients(
    instructions: list[str],
    min_ingredient_length: int = 3,
    min_instruction_length: int = 10,
) -> tuple[list[str], list[str]]:
    """Separate ingredient lines that ended up under the instructions header.

    Multi-column PDF layouts often come out with the ingredient column after
    the "Instructions" header. Lines matching only strong ingredient patterns
    move to ingredients; lines matching strong instruction patterns (alone or
    together with ingredient ones) stay. Lines matching neither fall back to
    the general keyword checks.

    Returns:
        Tuple of (recovered ingredients, remaining instructions)
    """
    ingredients: list[str] = []
    remaining: list[str] = []

    for line in instructions:
        ingredient_like = any(p.search(line) for p in _STRONG_INGREDIENT)
        instruction_like = any(p.search(line) for p in _STRONG_INSTRUCTION)

        if instruction_like:
            remaining.append(line)
        elif ingredient_like:
            ingredients.append(line)
        elif looks_like_ingredient(line, min_ingredient_length) and not looks_like_instruction(
            line, min_instruction_length
        ):
            ingredients.append(line)
        else:
            remaining.append(line)

    return ingredients, remaining


class PlainTextRecipeExtractor:
    """Builds a recipe from raw PDF or OCR text.

    Never fails on sparse or malformed text; the only failure is text with no
    content at all.

    Example:
        >>> extractor = PlainTextRecipeExtractor()
        >>> recipe = extractor.extract(text, RecipeSource.PDF, "cake.pdf")
        >>> recipe.title
        'Chocolate Cake'
    """

    def __init__(
        self,
        default_title: str = "Imported Recipe",
        default_servings: int = 4,
        min_title_length: int = 4,
        min_ingredient_length: int = 3,
        min_instruction_length: int = 10,
        recover_misplaced: bool = True,
        standardize: bool = True,
    ) -> None:
        self.default_title = default_title
        self.default_servings = default_servings
        self.min_title_length = min_title_length
        self.min_ingredient_length = min_ingredient_length
        self.min_instruction_length = min_instruction_length
        self.recover_misplaced = recover_misplaced
        self.standardize = standardize

    def extract(
        self,
        raw_text: str,
        source: RecipeSource,
        source_identifier: str | None = None,
    ) -> Recipe:
        """Parse text into a best-effort recipe.

        Args:
            raw_text: Text produced by PDF extraction or OCR
            source: RecipeSource.PDF or RecipeSource.PHOTO
            source_identifier: File path or other identifier of the input

        Returns:
            Recipe, possibly with empty ingredient or instruction lists

        Raises:
            NoTextFoundError: If the text has no non-blank lines
        """
        lines = split_lines(raw_text or "")
        if not lines:
            raise NoTextFoundError("No text found to parse", source=source.value)

        logger.debug(f"Parsing {len(lines)} lines of {source.value} text")
        data = self.parse_lines(lines)
        logger.info(
            f"Parsed '{data.title}': {len(data.ingredients)} ingredients, "
            f"{len(data.instructions)} instructions"
        )
        return Recipe.from_parsed(
            data,
            source=source,
            source_url=source_identifier,
            default_title=self.default_title,
            default_servings=self.default_servings,
        )

    def parse_lines(self, lines: list[str]) -> ParsedRecipeData:
        """Segment non-blank lines and extract every field."""
        sections = detect_sections(lines)
        logger.debug(f"Detected sections: {sections}")

        ingredient_lines = [
            line
            for line in section_content(lines, sections, "ingredients")
            if not is_website_noise(line)
            and looks_like_ingredient(line, self.min_ingredient_length)
        ]
        instruction_lines = [
            line
            for line in section_content(lines, sections, "instructions")
            if not is_website_noise(line)
        ]

        if self.recover_misplaced and not ingredient_lines and instruction_lines:
            recovered, remaining = recover_misplaced_ingredients(
                [clean_ingredient(line) for line in instruction_lines],
                self.min_ingredient_length,
                self.min_instruction_length,
            )
            if recovered:
                logger.debug(f"Recovered {len(recovered)} misplaced ingredients")
                ingredient_lines = recovered
                instruction_lines = remaining

        ingredients = [clean_ingredient(line) for line in ingredient_lines]
        instructions = [
            clean_instruction(line)
            for line in instruction_lines
            if looks_like_instruction(line, self.min_instruction_length)
        ]

        title = self._title(lines, sections)
        tags, declared_cuisine = self._tags(lines, sections)

        return ParsedRecipeData(
            title=title,
            ingredients=ingredients,
            instructions=instructions,
            servings=self._servings(lines, sections),
            prep_time_minutes=self._time(lines, sections, "prep_time"),
            cook_time_minutes=self._time(lines, sections, "cook_time"),
            total_time_minutes=self._time(lines, sections, "total_time"),
            tags=tags,
            cuisine=resolve_cuisine(declared_cuisine, title),
        )

    def _title(self, lines: list[str], sections: dict[str, int]) -> str:
        ingredients_index = sections.get("ingredients")
        if ingredients_index:
            for line in lines[:ingredients_index]:
                if len(line) >= self.min_title_length:
                    return line
        return lines[0] if lines else self.default_title

    def _servings(self, lines: list[str], sections: dict[str, int]) -> int:
        index = sections.get("servings")
        if index is None:
            return self.default_servings
        return first_integer(lines[index]) or self.default_servings

    @staticmethod
    def _time(lines: list[str], sections: dict[str, int], label: str) -> int | None:
        index = sections.get(label)
        return parse_time_text(lines[index]) if index is not None else None

    def _tags(self, lines: list[str], sections: dict[str, int]) -> tuple[list[str], str | None]:
        index = sections.get("tags")
        if index is None:
            return [], None

        line = lines[index]
        label = _TAG_LABEL.match(line)
        tags = [tag.strip() for tag in _TAG_LABEL.sub("", line).split(",") if tag.strip()]

        declared = None
        if label and label.group(1).lower() == "cuisine" and tags:
            declared = tags[0]

        if self.standardize:
            tags = standardize_tags(tags)
        return tags, declared

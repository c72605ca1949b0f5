"""Free-text blocks <-> ordered instruction and ingredient records.

One entry per line. Ingredient lines may carry a quantity after the first
``:``, e.g. ``Flour: 2 cups``. Parsing never raises; anything it cannot use
is skipped.
"""

from typing import Iterable, List, Optional

from .schemas import ParsedIngredient, ParsedInstruction

LINE_DELIMITER = "\n"
QUANTITY_SEPARATOR = ":"


def _lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_instructions(text: Optional[str]) -> List[ParsedInstruction]:
    return [
        ParsedInstruction(index=i, text=line)
        for i, line in enumerate(_lines(text))
    ]


def parse_ingredient_line(line: str) -> Optional[ParsedIngredient]:
    """Split one line into name and quantity, or None if it has no name."""
    name, sep, quantity = line.partition(QUANTITY_SEPARATOR)
    name = name.strip()
    if not name:
        return None
    quantity = quantity.strip() if sep else ""
    return ParsedIngredient(name=name, quantity=quantity or None)


def parse_ingredients(text: Optional[str]) -> List[ParsedIngredient]:
    parsed = []
    seen = set()
    for line in _lines(text):
        ingredient = parse_ingredient_line(line)
        # names are unique within a recipe; the first line wins
        if ingredient is None or ingredient.name in seen:
            continue
        seen.add(ingredient.name)
        parsed.append(ingredient)
    return parsed


def instructions_as_string(instructions: Iterable) -> str:
    """Join instruction texts in the order given; callers sort by index."""
    return LINE_DELIMITER.join(i.text for i in instructions)


def format_ingredient(ingredient) -> str:
    if ingredient.quantity:
        return f"{ingredient.name}{QUANTITY_SEPARATOR} {ingredient.quantity}"
    return ingredient.name


def ingredients_as_string(ingredients: Iterable) -> str:
    """Join ingredient lines in the order given; callers sort by name."""
    return LINE_DELIMITER.join(format_ingredient(i) for i in ingredients)
